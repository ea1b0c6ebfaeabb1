"""Pydantic schemas for ratings and rating tallies."""

from enum import Enum

from pydantic import BaseModel, Field


class TargetType(str, Enum):
    """Kinds of content a rating can point at."""
    CHANNEL = "channel"
    MESSAGE = "message"
    REPLY = "reply"


class RatingCreate(BaseModel):
    """Schema for rating a channel, message or reply."""
    target_type: TargetType
    target_id: int = Field(..., gt=0)
    is_upvote: bool = Field(..., description="True for an upvote, False for a downvote")


class RatingTally(BaseModel):
    """Vote counts for one target."""
    upvotes: int = 0
    downvotes: int = 0


class RatingTallyEntry(RatingTally):
    """Tally tagged with the target it belongs to."""
    target_type: TargetType
    target_id: int


class RatingResponse(RatingTallyEntry):
    """Response for a rating upsert."""
    is_upvote: bool
    message: str
