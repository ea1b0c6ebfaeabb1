"""Pydantic schemas for Channel."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class ChannelBase(BaseModel):
    """Base schema for Channel."""
    topic: str = Field(..., min_length=1, max_length=255, description="Channel topic")
    content: str = Field(..., min_length=1, description="Opening post of the channel")
    screenshot: Optional[str] = Field(None, max_length=500, description="Screenshot URL")


class ChannelCreate(ChannelBase):
    """Schema for creating a new channel."""
    pass


class ChannelResponse(ChannelBase):
    """Schema for Channel response."""
    id: int
    author_user_id: Optional[int] = None
    author_name: Optional[str] = None  # Will be populated from user relationship
    timestamp: datetime

    class Config:
        from_attributes = True
