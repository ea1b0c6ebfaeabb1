"""Services package."""

from .thread_reconstructor import (
    ChannelNotFoundError,
    ChannelThread,
    RatingTarget,
    ThreadReconstructor,
)

__all__ = [
    "ChannelNotFoundError",
    "ChannelThread",
    "RatingTarget",
    "ThreadReconstructor",
]
