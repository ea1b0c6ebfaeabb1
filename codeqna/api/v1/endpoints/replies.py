"""Reply endpoints (direct replies to messages and nested replies)."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from codeqna.api.deps import get_current_active_user, get_db, require_role
from codeqna.crud import crud_reply
from codeqna.models.user import User
from codeqna.schemas.reply import ReplyCreate, ReplyResponse

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/replies",
    tags=["Replies"],
)


@router.post(
    "",
    response_model=ReplyResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Post reply",
    description="""
    Reply to a message (`message_id`) or to another reply (`parent_reply_id`).
    Exactly one of the two must be given.

    **Access:** Logged-in users
    """,
)
def create_reply(
    reply_in: ReplyCreate,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> ReplyResponse:
    """Create a reply."""
    try:
        reply = crud_reply.create_reply(
            db,
            author_user_id=current_user.id,
            content=reply_in.content,
            message_id=reply_in.message_id,
            parent_reply_id=reply_in.parent_reply_id,
            screenshot=reply_in.screenshot,
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )

    return ReplyResponse.model_validate(reply)


@router.delete(
    "/{reply_id}",
    status_code=status.HTTP_200_OK,
    summary="Delete reply",
    description="""
    Delete a reply together with its nested replies and ratings.

    **Access:** Admin only
    """,
)
def delete_reply(
    reply_id: int,
    current_user: User = Depends(require_role("admin")),
    db: Session = Depends(get_db),
) -> dict:
    """Delete a reply."""
    if not crud_reply.remove(db, id=reply_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Reply not found."
        )

    logger.info(f"Reply id={reply_id} deleted by admin id={current_user.id}")
    return {"message": "Reply deleted successfully."}
