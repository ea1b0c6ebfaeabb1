"""CRUD operations for Message."""

from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from codeqna.crud.base import CRUDBase
from codeqna.models.channel import Channel
from codeqna.models.message import Message
from codeqna.schemas.message import MessageCreate


class CRUDMessage(CRUDBase[Message, MessageCreate, MessageCreate]):
    """CRUD operations for Message."""

    def create_message(
        self,
        db: Session,
        *,
        channel_id: int,
        author_user_id: Optional[int],
        content: str,
        screenshot: Optional[str] = None
    ) -> Message:
        """Post a message to an existing channel."""
        if db.get(Channel, channel_id) is None:
            raise ValueError("Invalid channel ID.")

        message = Message(
            channel_id=channel_id,
            author_user_id=author_user_id,
            content=content,
            screenshot=screenshot or None,
        )
        return self._save(db, message)

    def search(self, db: Session, *, query: str, limit: int = 50) -> List[Message]:
        """Messages whose content contains ``query`` (case-insensitive)."""
        stmt = (
            select(Message)
            .where(func.lower(Message.content).contains(query.lower(), autoescape=True))
            .order_by(Message.timestamp.desc(), Message.id.desc())
            .limit(limit)
        )
        return list(db.scalars(stmt).all())


# Singleton instance
crud_message = CRUDMessage(Message)
