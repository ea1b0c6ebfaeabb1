"""Reply model: a response to a message or to another reply."""

from sqlalchemy import Column, Integer, String, Text, TIMESTAMP, ForeignKey, Index, CheckConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from ..database import Base


class Reply(Base):
    """Reply to a message (direct) or to another reply (nested).

    Exactly one of ``message_id`` and ``parent_reply_id`` is set.
    """

    __tablename__ = "replies"

    id = Column(Integer, primary_key=True, index=True)

    # Foreign Keys
    message_id = Column(
        Integer,
        ForeignKey("messages.id", ondelete="CASCADE"),
        nullable=True,
        index=True
    )
    parent_reply_id = Column(
        Integer,
        ForeignKey("replies.id", ondelete="CASCADE"),
        nullable=True,
        index=True
    )
    author_user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )

    # Reply Content
    content = Column(Text, nullable=False)
    screenshot = Column(String(500), nullable=True)

    # Timestamps
    timestamp = Column(TIMESTAMP, server_default=func.now(), index=True)

    __table_args__ = (
        CheckConstraint(
            "(message_id IS NULL) <> (parent_reply_id IS NULL)",
            name="check_reply_single_parent"
        ),
        Index('idx_reply_message_time', 'message_id', 'timestamp'),
        Index('idx_reply_parent_time', 'parent_reply_id', 'timestamp'),
    )

    # Relationships
    message = relationship("Message", back_populates="replies")
    author = relationship("User", foreign_keys=[author_user_id], back_populates="replies")
    parent_reply = relationship(
        "Reply",
        remote_side=[id],
        back_populates="child_replies"
    )
    child_replies = relationship(
        "Reply",
        back_populates="parent_reply",
        cascade="all, delete-orphan",
        order_by="Reply.timestamp.asc()"
    )
    ratings = relationship(
        "Rating",
        back_populates="reply",
        cascade="all, delete-orphan"
    )

    @property
    def author_name(self):
        return self.author.name if self.author else None
