"""Rating endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from codeqna.api.deps import get_current_active_user, get_db
from codeqna.crud import crud_rating
from codeqna.models.user import User
from codeqna.schemas.rating import RatingCreate, RatingResponse, RatingTallyEntry, TargetType

router = APIRouter(
    prefix="/ratings",
    tags=["Ratings"],
)


@router.post(
    "",
    response_model=RatingResponse,
    status_code=status.HTTP_200_OK,
    summary="Rate a channel, message or reply",
    description="""
    Upvote or downvote a target. Each user holds at most one rating per
    target; rating again replaces the earlier vote.

    **Access:** Logged-in users
    """,
)
def rate(
    rating_in: RatingCreate,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> RatingResponse:
    """Create or replace the caller's rating on a target."""
    try:
        rating = crud_rating.upsert_rating(
            db,
            user_id=current_user.id,
            target_type=rating_in.target_type,
            target_id=rating_in.target_id,
            is_upvote=rating_in.is_upvote,
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )

    tally = crud_rating.get_tally(db, target_type=rating.target_type, target_id=rating.target_id)
    return RatingResponse(
        target_type=rating.target_type,
        target_id=rating.target_id,
        is_upvote=rating.is_upvote,
        upvotes=tally.upvotes,
        downvotes=tally.downvotes,
        message="Upvote recorded." if rating.is_upvote else "Downvote recorded.",
    )


@router.get(
    "/{target_type}/{target_id}",
    response_model=RatingTallyEntry,
    status_code=status.HTTP_200_OK,
    summary="Get rating tally",
    description="""
    Up and down vote counts of one target. Unrated targets report zero.

    **Access:** Public
    """,
)
def get_tally(
    target_type: TargetType,
    target_id: int,
    db: Session = Depends(get_db),
) -> RatingTallyEntry:
    """Get the tally of a target."""
    tally = crud_rating.get_tally(db, target_type=target_type, target_id=target_id)
    return RatingTallyEntry(
        target_type=target_type,
        target_id=target_id,
        upvotes=tally.upvotes,
        downvotes=tally.downvotes,
    )
