"""CRUD operations package - exports singleton instances for all models."""

from .base import CRUDBase
from .user import crud_user
from .channel import crud_channel
from .message import crud_message
from .reply import crud_reply
from .rating import crud_rating


__all__ = [
    # Base
    "CRUDBase",
    # CRUD instances
    "crud_user",
    "crud_channel",
    "crud_message",
    "crud_reply",
    "crud_rating",
]
