"""CRUD operations for Channel and the flat forum row source."""

from typing import Any, Dict, List, Optional

from sqlalchemy import Integer, func, literal, or_, select
from sqlalchemy.orm import Session, aliased

from codeqna.config import settings
from codeqna.crud.base import CRUDBase
from codeqna.models.channel import Channel
from codeqna.models.message import Message
from codeqna.models.rating import Rating
from codeqna.models.reply import Reply
from codeqna.models.user import User
from codeqna.schemas.channel import ChannelCreate
from codeqna.schemas.thread import ForumRow

ROW_FIELDS = list(ForumRow.model_fields)
CHANNEL_FIELDS = ["channel_id", "topic", "channel_content", "channel_time", "channel_screenshot", "channel_author"]


class CRUDChannel(CRUDBase[Channel, ChannelCreate, ChannelCreate]):
    """CRUD operations for Channel."""

    def create_channel(
        self,
        db: Session,
        *,
        author_user_id: Optional[int],
        topic: str,
        content: str,
        screenshot: Optional[str] = None
    ) -> Channel:
        """Create a new channel."""
        channel = Channel(
            author_user_id=author_user_id,
            topic=topic,
            content=content,
            screenshot=screenshot or None,
        )
        return self._save(db, channel)

    def get_all(
        self,
        db: Session,
        *,
        skip: int = 0,
        limit: int = 100
    ) -> List[Channel]:
        """Get channels, newest first."""
        stmt = (
            select(Channel)
            .order_by(Channel.timestamp.desc(), Channel.id.desc())
            .offset(skip)
            .limit(limit)
        )
        return list(db.scalars(stmt).all())

    def search(self, db: Session, *, query: str, limit: int = 50) -> List[Channel]:
        """Channels whose topic or content contains ``query`` (case-insensitive)."""
        needle = query.lower()
        stmt = (
            select(Channel)
            .where(
                or_(
                    func.lower(Channel.topic).contains(needle, autoescape=True),
                    func.lower(Channel.content).contains(needle, autoescape=True),
                )
            )
            .order_by(Channel.timestamp.desc(), Channel.id.desc())
            .limit(limit)
        )
        return list(db.scalars(stmt).all())

    def get_rows(self, db: Session, *, channel_id: Optional[int] = None) -> List[Dict[str, Any]]:
        """
        Flat forum rows: channel x message x reply, then one row per rating.

        Nested replies are attributed to the message at the root of their
        parent chain. Content rows are ordered by channel (newest first),
        message (newest first) and reply (oldest first); rating rows follow.

        Args:
            db: Database session
            channel_id: Restrict to one channel (all channels when None)

        Returns:
            List of dicts keyed by ForumRow field names
        """
        channel_author = aliased(User)
        message_author = aliased(User)
        reply_author = aliased(User)

        # Every reply shallower than MAX_REPLY_DEPTH paired with the message at the root of its chain
        reply_tree = (
            select(
                Reply.id.label("reply_id"),
                Reply.message_id.label("root_message_id"),
                literal(0, Integer).label("depth"),
            )
            .where(Reply.message_id.is_not(None))
            .cte("reply_tree", recursive=True)
        )
        tree_alias = reply_tree.alias()
        nested = aliased(Reply)
        reply_tree = reply_tree.union_all(
            select(nested.id, tree_alias.c.root_message_id, tree_alias.c.depth + 1)
            .where(nested.parent_reply_id == tree_alias.c.reply_id)
            .where(tree_alias.c.depth + 1 < settings.MAX_REPLY_DEPTH)
        )

        stmt = (
            select(
                Channel.id.label("channel_id"),
                Channel.topic.label("topic"),
                Channel.content.label("channel_content"),
                Channel.timestamp.label("channel_time"),
                Channel.screenshot.label("channel_screenshot"),
                channel_author.name.label("channel_author"),
                Message.id.label("message_id"),
                Message.content.label("message_content"),
                Message.timestamp.label("message_time"),
                Message.screenshot.label("message_screenshot"),
                message_author.name.label("message_author"),
                Reply.id.label("reply_id"),
                Reply.content.label("reply_content"),
                Reply.timestamp.label("reply_time"),
                Reply.parent_reply_id.label("parent_reply_id"),
                Reply.message_id.label("reply_message_id"),
                Reply.screenshot.label("reply_screenshot"),
                reply_author.name.label("reply_author"),
            )
            .select_from(Channel)
            .outerjoin(channel_author, Channel.author_user_id == channel_author.id)
            .outerjoin(Message, Message.channel_id == Channel.id)
            .outerjoin(message_author, Message.author_user_id == message_author.id)
            .outerjoin(reply_tree, reply_tree.c.root_message_id == Message.id)
            .outerjoin(Reply, Reply.id == reply_tree.c.reply_id)
            .outerjoin(reply_author, Reply.author_user_id == reply_author.id)
            .order_by(
                Channel.timestamp.desc(),
                Channel.id.desc(),
                Message.timestamp.desc(),
                Message.id.desc(),
                Reply.timestamp.asc(),
                Reply.id.asc(),
            )
        )
        if channel_id is not None:
            stmt = stmt.where(Channel.id == channel_id)

        rows: List[Dict[str, Any]] = []
        channel_columns: Dict[int, Dict[str, Any]] = {}
        message_channel: Dict[int, int] = {}
        reply_channel: Dict[int, int] = {}

        for result in db.execute(stmt):
            row = dict.fromkeys(ROW_FIELDS)
            row.update(result._mapping)
            rows.append(row)

            cid = row["channel_id"]
            channel_columns.setdefault(cid, {key: row[key] for key in CHANNEL_FIELDS})
            if row["message_id"] is not None:
                message_channel[row["message_id"]] = cid
            if row["reply_id"] is not None:
                reply_channel[row["reply_id"]] = cid

        if not channel_columns:
            return rows

        rating_stmt = (
            select(Rating)
            .where(
                or_(
                    Rating.channel_id.in_(list(channel_columns)),
                    Rating.message_id.in_(list(message_channel)),
                    Rating.reply_id.in_(list(reply_channel)),
                )
            )
            .order_by(Rating.id)
        )
        for rating in db.scalars(rating_stmt):
            if rating.channel_id is not None:
                cid = rating.channel_id
            elif rating.message_id is not None:
                cid = message_channel[rating.message_id]
            else:
                cid = reply_channel[rating.reply_id]

            row = dict.fromkeys(ROW_FIELDS)
            row.update(channel_columns[cid])
            row.update(
                rating_channel_id=rating.channel_id,
                rating_message_id=rating.message_id,
                rating_reply_id=rating.reply_id,
                is_upvote=rating.is_upvote,
                rating_user_id=rating.user_id,
            )
            rows.append(row)

        return rows


# Singleton instance
crud_channel = CRUDChannel(Channel)
