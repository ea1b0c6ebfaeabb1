from sqlalchemy import Column, Integer, String, Boolean, TIMESTAMP, CheckConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from ..database import Base


class User(Base):
    __tablename__ = "users"

    # Primary Key
    id = Column(Integer, primary_key=True, index=True)

    # Authentication & Profile
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)

    # Role & Authorization
    role = Column(String(20), nullable=False, default="user", index=True)

    # Account Status
    is_active = Column(Boolean, default=True, index=True)

    # Timestamps
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    # Constraints
    __table_args__ = (
        CheckConstraint(
            "role IN ('user', 'admin')",
            name="check_user_role"
        ),
    )

    # Relationships
    # Authored content outlives its author; the ORM clears author_user_id on delete
    channels = relationship("Channel", back_populates="author", foreign_keys="Channel.author_user_id")
    messages = relationship("Message", back_populates="author", foreign_keys="Message.author_user_id")
    replies = relationship("Reply", back_populates="author", foreign_keys="Reply.author_user_id")
    ratings = relationship(
        "Rating",
        back_populates="user",
        cascade="all, delete-orphan"
    )
