"""Message endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from codeqna.api.deps import get_current_active_user, get_db, require_role
from codeqna.crud import crud_message
from codeqna.models.user import User
from codeqna.schemas.message import MessageCreate, MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/messages",
    tags=["Messages"],
)


@router.post(
    "",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Post message to a channel",
    description="""
    Post a message to an existing channel.

    **Access:** Logged-in users
    """,
)
def create_message(
    message_in: MessageCreate,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> MessageResponse:
    """Post a message."""
    try:
        message = crud_message.create_message(
            db,
            channel_id=message_in.channel_id,
            author_user_id=current_user.id,
            content=message_in.content,
            screenshot=message_in.screenshot,
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )

    return MessageResponse.model_validate(message)


@router.delete(
    "/{message_id}",
    status_code=status.HTTP_200_OK,
    summary="Delete message",
    description="""
    Delete a message together with its replies and ratings.

    **Access:** Admin only
    """,
)
def delete_message(
    message_id: int,
    current_user: User = Depends(require_role("admin")),
    db: Session = Depends(get_db),
) -> dict:
    """Delete a message."""
    if not crud_message.remove(db, id=message_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Message not found."
        )

    logger.info(f"Message id={message_id} deleted by admin id={current_user.id}")
    return {"message": "Message deleted successfully."}
