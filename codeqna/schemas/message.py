"""Pydantic schemas for Message."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class MessageCreate(BaseModel):
    """Schema for posting a message to a channel."""
    channel_id: int = Field(..., gt=0, description="Channel the message belongs to")
    content: str = Field(..., min_length=1, description="Message content")
    screenshot: Optional[str] = Field(None, max_length=500)


class MessageResponse(BaseModel):
    """Schema for Message response."""
    id: int
    channel_id: int
    author_user_id: Optional[int] = None
    author_name: Optional[str] = None
    content: str
    screenshot: Optional[str] = None
    timestamp: datetime

    class Config:
        from_attributes = True
