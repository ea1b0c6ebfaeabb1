"""Row builders for reconstructor tests

Each builder returns one flat forum row as the data-access layer would
produce it: channel columns always present, other columns only when the
row carries a message, reply or rating.
"""

from datetime import datetime, timedelta
from typing import Any, Dict, Optional

BASE_TIME = datetime(2025, 3, 1, 9, 0, 0)


def channel_row(channel_id: int = 1, topic: str = "Python questions", **extra: Any) -> Dict[str, Any]:
    """Row for a channel with no message"""
    row = {
        "channel_id": channel_id,
        "topic": topic,
        "channel_content": f"Ask anything about {topic.lower()}",
        "channel_time": BASE_TIME,
        "channel_screenshot": None,
        "channel_author": "Grace Hopper",
    }
    row.update(extra)
    return row


def message_row(message_id: int, channel_id: int = 1, content: Optional[str] = None, **extra: Any) -> Dict[str, Any]:
    """Row for a message with no reply"""
    row = channel_row(channel_id)
    row.update({
        "message_id": message_id,
        "message_content": content or f"Message {message_id}",
        "message_time": BASE_TIME + timedelta(minutes=message_id),
        "message_screenshot": None,
        "message_author": "Alan Turing",
    })
    row.update(extra)
    return row


def reply_row(
    reply_id: int,
    message_id: int,
    parent_reply_id: Optional[int] = None,
    direct: bool = True,
    channel_id: int = 1,
    **extra: Any,
) -> Dict[str, Any]:
    """Row for a reply; nested replies pass parent_reply_id and direct=False"""
    row = message_row(message_id, channel_id)
    row.update({
        "reply_id": reply_id,
        "reply_content": f"Reply {reply_id}",
        "reply_time": BASE_TIME + timedelta(hours=1, minutes=reply_id),
        "parent_reply_id": parent_reply_id,
        "reply_message_id": message_id if direct else None,
        "reply_screenshot": None,
        "reply_author": "Ada Lovelace",
    })
    row.update(extra)
    return row


def rating_row(
    target_type: str,
    target_id: int,
    is_upvote: bool = True,
    user_id: Optional[int] = 1,
    channel_id: int = 1,
) -> Dict[str, Any]:
    """Row carrying only channel columns plus one rating"""
    row = channel_row(channel_id)
    row.update({
        "rating_channel_id": target_id if target_type == "channel" else None,
        "rating_message_id": target_id if target_type == "message" else None,
        "rating_reply_id": target_id if target_type == "reply" else None,
        "is_upvote": is_upvote,
        "rating_user_id": user_id,
    })
    return row


def example_rows():
    """Channel 1, message 10 with reply 100 and nested reply 101, one upvote on 100"""
    return [
        reply_row(100, message_id=10),
        reply_row(101, message_id=10, parent_reply_id=100, direct=False),
        rating_row("reply", 100, is_upvote=True, user_id=7),
    ]
