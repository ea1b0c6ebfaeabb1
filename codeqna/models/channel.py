"""Channel model: a top-level discussion topic."""

from sqlalchemy import Column, Integer, String, Text, TIMESTAMP, ForeignKey, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from ..database import Base


class Channel(Base):
    """Discussion channel created by a user."""

    __tablename__ = "channels"

    id = Column(Integer, primary_key=True, index=True)

    # Foreign Keys
    author_user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )

    # Channel Content
    topic = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    screenshot = Column(String(500), nullable=True)

    # Timestamps
    timestamp = Column(TIMESTAMP, server_default=func.now(), index=True)

    __table_args__ = (
        Index('idx_channel_topic', 'topic'),
    )

    # Relationships
    author = relationship("User", foreign_keys=[author_user_id], back_populates="channels")
    messages = relationship(
        "Message",
        back_populates="channel",
        cascade="all, delete-orphan",
        order_by="Message.timestamp.desc()"
    )
    ratings = relationship(
        "Rating",
        back_populates="channel",
        cascade="all, delete-orphan"
    )

    @property
    def author_name(self):
        return self.author.name if self.author else None
