"""Pydantic schemas for the flat forum rows and the threaded channel view."""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field

from .rating import RatingTally, RatingTallyEntry


class ForumRow(BaseModel):
    """One denormalized channel x message x reply x rating row."""
    channel_id: int
    topic: Optional[str] = None
    channel_content: Optional[str] = None
    channel_time: Optional[datetime] = None
    channel_screenshot: Optional[str] = None
    channel_author: Optional[str] = None
    message_id: Optional[int] = None
    message_content: Optional[str] = None
    message_time: Optional[datetime] = None
    message_screenshot: Optional[str] = None
    message_author: Optional[str] = None
    reply_id: Optional[int] = None
    reply_content: Optional[str] = None
    reply_time: Optional[datetime] = None
    parent_reply_id: Optional[int] = None
    reply_message_id: Optional[int] = None
    reply_screenshot: Optional[str] = None
    reply_author: Optional[str] = None
    rating_channel_id: Optional[int] = None
    rating_message_id: Optional[int] = None
    rating_reply_id: Optional[int] = None
    is_upvote: Optional[bool] = None
    rating_user_id: Optional[int] = None


class ForumRowListResponse(BaseModel):
    """Response for the raw row listing."""
    data: List[ForumRow]


class ChannelNode(BaseModel):
    """Channel summary at the root of a thread."""
    id: int
    topic: Optional[str] = None
    content: Optional[str] = None
    timestamp: Optional[datetime] = None
    screenshot: Optional[str] = None
    author: Optional[str] = None
    rating: RatingTally = Field(default_factory=RatingTally)


class ReplyNode(BaseModel):
    """Reply with its nested replies."""
    id: int
    content: Optional[str] = None
    timestamp: Optional[datetime] = None
    screenshot: Optional[str] = None
    author: Optional[str] = None
    rating: RatingTally = Field(default_factory=RatingTally)
    replies: List["ReplyNode"] = Field(default_factory=list)


ReplyNode.model_rebuild()


class MessageNode(BaseModel):
    """Top-level message with its reply tree."""
    id: int
    content: Optional[str] = None
    timestamp: Optional[datetime] = None
    screenshot: Optional[str] = None
    author: Optional[str] = None
    rating: RatingTally = Field(default_factory=RatingTally)
    replies: List[ReplyNode] = Field(default_factory=list)


class ChannelThreadResponse(BaseModel):
    """Threaded view of one channel."""
    channel: ChannelNode
    messages: List[MessageNode]
    ratings: List[RatingTallyEntry]
