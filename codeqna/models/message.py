"""Message model: a post within a channel."""

from sqlalchemy import Column, Integer, String, Text, TIMESTAMP, ForeignKey, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from ..database import Base


class Message(Base):
    """Message posted to a channel."""

    __tablename__ = "messages"

    id = Column(Integer, primary_key=True, index=True)

    # Foreign Keys
    channel_id = Column(
        Integer,
        ForeignKey("channels.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    author_user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )

    # Message Content
    content = Column(Text, nullable=False)
    screenshot = Column(String(500), nullable=True)

    # Timestamps
    timestamp = Column(TIMESTAMP, server_default=func.now(), index=True)

    __table_args__ = (
        # Messages of a channel, newest first
        Index('idx_message_channel_time', 'channel_id', 'timestamp'),
    )

    # Relationships
    channel = relationship("Channel", back_populates="messages")
    author = relationship("User", foreign_keys=[author_user_id], back_populates="messages")
    replies = relationship(
        "Reply",
        back_populates="message",
        cascade="all, delete-orphan",
        order_by="Reply.timestamp.asc()"
    )
    ratings = relationship(
        "Rating",
        back_populates="message",
        cascade="all, delete-orphan"
    )

    @property
    def author_name(self):
        return self.author.name if self.author else None
