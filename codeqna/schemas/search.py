"""Pydantic schemas for search results."""

from typing import List
from pydantic import BaseModel

from .channel import ChannelResponse
from .message import MessageResponse
from .reply import ReplyResponse


class SearchResponse(BaseModel):
    """Channels, messages and replies matching a query."""
    query: str
    channels: List[ChannelResponse]
    messages: List[MessageResponse]
    replies: List[ReplyResponse]
