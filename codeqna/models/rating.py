"""Rating model: a per-user up/down vote on a channel, message or reply."""

from sqlalchemy import Column, Integer, Boolean, TIMESTAMP, ForeignKey, UniqueConstraint, CheckConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from ..database import Base
from ..schemas.rating import TargetType


class Rating(Base):
    """Vote cast by one user on exactly one target."""

    __tablename__ = "ratings"

    id = Column(Integer, primary_key=True, index=True)

    # Foreign Keys (exactly one target is set)
    channel_id = Column(
        Integer,
        ForeignKey("channels.id", ondelete="CASCADE"),
        nullable=True,
        index=True
    )
    message_id = Column(
        Integer,
        ForeignKey("messages.id", ondelete="CASCADE"),
        nullable=True,
        index=True
    )
    reply_id = Column(
        Integer,
        ForeignKey("replies.id", ondelete="CASCADE"),
        nullable=True,
        index=True
    )
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    is_upvote = Column(Boolean, nullable=False)

    # Timestamps
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        CheckConstraint(
            "(CASE WHEN channel_id IS NULL THEN 0 ELSE 1 END"
            " + CASE WHEN message_id IS NULL THEN 0 ELSE 1 END"
            " + CASE WHEN reply_id IS NULL THEN 0 ELSE 1 END) = 1",
            name="check_rating_single_target"
        ),
        # One rating per user per target
        UniqueConstraint('user_id', 'channel_id', name='uq_rating_user_channel'),
        UniqueConstraint('user_id', 'message_id', name='uq_rating_user_message'),
        UniqueConstraint('user_id', 'reply_id', name='uq_rating_user_reply'),
    )

    # Relationships
    channel = relationship("Channel", back_populates="ratings")
    message = relationship("Message", back_populates="ratings")
    reply = relationship("Reply", back_populates="ratings")
    user = relationship("User", foreign_keys=[user_id], back_populates="ratings")

    @property
    def target_type(self) -> TargetType:
        if self.channel_id is not None:
            return TargetType.CHANNEL
        if self.message_id is not None:
            return TargetType.MESSAGE
        return TargetType.REPLY

    @property
    def target_id(self) -> int:
        return self.channel_id or self.message_id or self.reply_id
