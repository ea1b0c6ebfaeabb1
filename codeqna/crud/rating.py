"""CRUD operations for Rating."""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from codeqna.crud.base import CRUDBase
from codeqna.models.channel import Channel
from codeqna.models.message import Message
from codeqna.models.rating import Rating
from codeqna.models.reply import Reply
from codeqna.schemas.rating import RatingCreate, RatingTally, TargetType

TARGET_MODELS = {
    TargetType.CHANNEL: Channel,
    TargetType.MESSAGE: Message,
    TargetType.REPLY: Reply,
}

TARGET_COLUMNS = {
    TargetType.CHANNEL: Rating.channel_id,
    TargetType.MESSAGE: Rating.message_id,
    TargetType.REPLY: Rating.reply_id,
}


class CRUDRating(CRUDBase[Rating, RatingCreate, RatingCreate]):
    """CRUD operations for Rating."""

    def get_rating(
        self,
        db: Session,
        *,
        user_id: int,
        target_type: TargetType,
        target_id: int
    ) -> Optional[Rating]:
        """Get a user's rating on a target if it exists."""
        stmt = select(Rating).where(
            Rating.user_id == user_id,
            TARGET_COLUMNS[target_type] == target_id,
        )
        return db.scalars(stmt).first()

    def upsert_rating(
        self,
        db: Session,
        *,
        user_id: int,
        target_type: TargetType,
        target_id: int,
        is_upvote: bool
    ) -> Rating:
        """
        Rate a target; a later rating by the same user replaces the earlier one.

        Raises:
            ValueError: if the target does not exist
        """
        if db.get(TARGET_MODELS[target_type], target_id) is None:
            raise ValueError(f"{target_type.value.capitalize()} not found.")

        existing = self.get_rating(db, user_id=user_id, target_type=target_type, target_id=target_id)
        if existing:
            existing.is_upvote = is_upvote
            return self._save(db, existing)

        rating = Rating(user_id=user_id, is_upvote=is_upvote)
        setattr(rating, TARGET_COLUMNS[target_type].key, target_id)
        try:
            return self._save(db, rating)
        except IntegrityError:
            # Lost a race with a concurrent insert for the same user and target
            existing = self.get_rating(db, user_id=user_id, target_type=target_type, target_id=target_id)
            if existing is None:
                raise
            existing.is_upvote = is_upvote
            return self._save(db, existing)

    def get_tally(self, db: Session, *, target_type: TargetType, target_id: int) -> RatingTally:
        """Count up and down votes on a target."""
        stmt = (
            select(Rating.is_upvote, func.count(Rating.id))
            .where(TARGET_COLUMNS[target_type] == target_id)
            .group_by(Rating.is_upvote)
        )
        counts = {bool(is_upvote): count for is_upvote, count in db.execute(stmt)}
        return RatingTally(upvotes=counts.get(True, 0), downvotes=counts.get(False, 0))


# Singleton instance
crud_rating = CRUDRating(Rating)
