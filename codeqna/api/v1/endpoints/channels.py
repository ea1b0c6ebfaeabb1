"""Channel endpoints."""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from codeqna.api.deps import get_current_active_user, get_db, require_role
from codeqna.config import settings
from codeqna.core.exceptions import ChannelNotFoundException
from codeqna.crud import crud_channel
from codeqna.models.user import User
from codeqna.schemas.channel import ChannelCreate, ChannelResponse
from codeqna.schemas.thread import ChannelThreadResponse
from codeqna.services.thread_reconstructor import ChannelNotFoundError, ThreadReconstructor

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/channels",
    tags=["Channels"],
)


@router.get(
    "",
    response_model=List[ChannelResponse],
    status_code=status.HTTP_200_OK,
    summary="List channels",
    description="""
    Get all channels, newest first.

    **Access:** Public
    """,
)
def list_channels(
    skip: int = Query(0, ge=0, description="Number of channels to skip"),
    limit: int = Query(100, ge=1, le=500, description="Maximum number of channels to return"),
    db: Session = Depends(get_db),
) -> List[ChannelResponse]:
    """List channels."""
    channels = crud_channel.get_all(db, skip=skip, limit=limit)
    return [ChannelResponse.model_validate(channel) for channel in channels]


@router.post(
    "",
    response_model=ChannelResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create channel",
    description="""
    Create a new discussion channel.

    **Access:** Logged-in users
    """,
)
def create_channel(
    channel_in: ChannelCreate,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> ChannelResponse:
    """Create a new channel."""
    channel = crud_channel.create_channel(
        db,
        author_user_id=current_user.id,
        topic=channel_in.topic,
        content=channel_in.content,
        screenshot=channel_in.screenshot,
    )
    return ChannelResponse.model_validate(channel)


@router.get(
    "/{channel_id}",
    response_model=ChannelThreadResponse,
    status_code=status.HTTP_200_OK,
    summary="Get channel thread",
    description="""
    Get a channel with its messages, the nested reply tree under each
    message and the up/down vote tally of every channel, message and reply.

    **Access:** Public
    """,
)
def get_channel_thread(
    channel_id: int,
    db: Session = Depends(get_db),
) -> ChannelThreadResponse:
    """Get the threaded view of a channel."""
    rows = crud_channel.get_rows(db, channel_id=channel_id)

    try:
        thread = ThreadReconstructor(max_depth=settings.MAX_REPLY_DEPTH).reconstruct(rows, channel_id)
    except ChannelNotFoundError:
        raise ChannelNotFoundException()

    if thread.dropped_reply_ids:
        logger.warning(
            f"Dropped unreachable replies from channel id={channel_id}: {thread.dropped_reply_ids}"
        )

    return thread.to_response()


@router.delete(
    "/{channel_id}",
    status_code=status.HTTP_200_OK,
    summary="Delete channel",
    description="""
    Delete a channel together with its messages, replies and ratings.

    **Access:** Admin only
    """,
)
def delete_channel(
    channel_id: int,
    current_user: User = Depends(require_role("admin")),
    db: Session = Depends(get_db),
) -> dict:
    """Delete a channel."""
    if not crud_channel.remove(db, id=channel_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Channel not found."
        )

    logger.info(f"Channel id={channel_id} deleted by admin id={current_user.id}")
    return {"message": "Channel deleted successfully."}
