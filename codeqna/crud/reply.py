"""CRUD operations for Reply."""

from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from codeqna.config import settings
from codeqna.crud.base import CRUDBase
from codeqna.models.message import Message
from codeqna.models.reply import Reply
from codeqna.schemas.reply import ReplyCreate


class CRUDReply(CRUDBase[Reply, ReplyCreate, ReplyCreate]):
    """CRUD operations for Reply."""

    def create_reply(
        self,
        db: Session,
        *,
        author_user_id: Optional[int],
        content: str,
        message_id: Optional[int] = None,
        parent_reply_id: Optional[int] = None,
        screenshot: Optional[str] = None
    ) -> Reply:
        """Create a direct reply to a message or a nested reply to another reply."""
        if (message_id is None) == (parent_reply_id is None):
            raise ValueError("Provide either a message ID or a parent reply ID, but not both.")

        # Verify the parent exists
        if parent_reply_id is not None:
            parent = db.get(Reply, parent_reply_id)
            if parent is None:
                raise ValueError("Invalid message or parent reply ID.")
            if self.get_depth(db, parent) + 1 >= settings.MAX_REPLY_DEPTH:
                raise ValueError(
                    f"Replies cannot be nested more than {settings.MAX_REPLY_DEPTH} levels deep."
                )
        elif db.get(Message, message_id) is None:
            raise ValueError("Invalid message or parent reply ID.")

        reply = Reply(
            message_id=message_id,
            parent_reply_id=parent_reply_id,
            author_user_id=author_user_id,
            content=content,
            screenshot=screenshot or None,
        )
        return self._save(db, reply)

    def get_depth(self, db: Session, reply: Reply) -> int:
        """Nesting level of a reply; direct replies to a message are level 0."""
        depth = 0
        while reply.parent_reply_id is not None and depth <= settings.MAX_REPLY_DEPTH:
            parent = db.get(Reply, reply.parent_reply_id)
            if parent is None:
                break
            reply = parent
            depth += 1
        return depth

    def search(self, db: Session, *, query: str, limit: int = 50) -> List[Reply]:
        """Replies whose content contains ``query`` (case-insensitive)."""
        stmt = (
            select(Reply)
            .where(func.lower(Reply.content).contains(query.lower(), autoescape=True))
            .order_by(Reply.timestamp.desc(), Reply.id.desc())
            .limit(limit)
        )
        return list(db.scalars(stmt).all())


# Singleton instance
crud_reply = CRUDReply(Reply)
