"""
SQLAlchemy Models for CodeQnA
"""

from ..database import Base
from .user import User
from .channel import Channel
from .message import Message
from .reply import Reply
from .rating import Rating, TargetType

# Export all models
__all__ = [
    "Base",
    "User",
    "Channel",
    "Message",
    "Reply",
    "Rating",
    "TargetType",
]
