from .user import (
    UserBase,
    UserCreate,
    UserUpdate,
    UserResponse,
    UserLogin,
    AuthStatus,
    LoginResponse,
)
from .channel import (
    ChannelBase,
    ChannelCreate,
    ChannelResponse,
)
from .message import (
    MessageCreate,
    MessageResponse,
)
from .reply import (
    ReplyCreate,
    ReplyResponse,
)
from .rating import (
    TargetType,
    RatingCreate,
    RatingTally,
    RatingTallyEntry,
    RatingResponse,
)
from .thread import (
    ForumRow,
    ForumRowListResponse,
    ChannelNode,
    MessageNode,
    ReplyNode,
    ChannelThreadResponse,
)
from .search import SearchResponse


__all__ = [
    # User
    "UserBase",
    "UserCreate",
    "UserUpdate",
    "UserResponse",
    "UserLogin",
    "AuthStatus",
    "LoginResponse",
    # Channel
    "ChannelBase",
    "ChannelCreate",
    "ChannelResponse",
    # Message
    "MessageCreate",
    "MessageResponse",
    # Reply
    "ReplyCreate",
    "ReplyResponse",
    # Rating
    "TargetType",
    "RatingCreate",
    "RatingTally",
    "RatingTallyEntry",
    "RatingResponse",
    # Thread
    "ForumRow",
    "ForumRowListResponse",
    "ChannelNode",
    "MessageNode",
    "ReplyNode",
    "ChannelThreadResponse",
    # Search
    "SearchResponse",
]
