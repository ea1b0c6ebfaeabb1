"""Pydantic schemas for Reply."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, model_validator


class ReplyCreate(BaseModel):
    """Schema for creating a reply.

    Exactly one of ``message_id`` (direct reply) and ``parent_reply_id``
    (nested reply) must be given.
    """
    message_id: Optional[int] = Field(None, gt=0)
    parent_reply_id: Optional[int] = Field(None, gt=0)
    content: str = Field(..., min_length=1, description="Reply content")
    screenshot: Optional[str] = Field(None, max_length=500)

    @model_validator(mode="after")
    def check_single_parent(self) -> "ReplyCreate":
        if (self.message_id is None) == (self.parent_reply_id is None):
            raise ValueError("Provide either message_id or parent_reply_id, but not both")
        return self


class ReplyResponse(BaseModel):
    """Schema for Reply response."""
    id: int
    message_id: Optional[int] = None
    parent_reply_id: Optional[int] = None
    author_user_id: Optional[int] = None
    author_name: Optional[str] = None
    content: str
    screenshot: Optional[str] = None
    timestamp: datetime

    class Config:
        from_attributes = True
