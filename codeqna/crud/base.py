"""Generic CRUD base class for SQLAlchemy models."""

from __future__ import annotations

from typing import Any, Dict, Generic, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.orm import Session

from codeqna.database import Base


ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


class CRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """Reusable CRUD helper for SQLAlchemy models.

    All methods operate on model instances and return database objects, not schemas.
    Writes commit immediately and roll back on failure.
    """

    def __init__(self, model: Type[ModelType]):
        self.model = model

    # ----- Read -----
    def get(self, db: Session, id: Any) -> Optional[ModelType]:
        """Get one record by primary key."""
        return db.get(self.model, id)

    def get_multi(self, db: Session, *, skip: int = 0, limit: int = 100) -> List[ModelType]:
        """Get records with pagination, oldest id first."""
        stmt = select(self.model).order_by(self.model.id).offset(skip).limit(limit)
        return list(db.scalars(stmt).all())

    # ----- Update -----
    def update(
        self,
        db: Session,
        *,
        db_obj: ModelType,
        obj_in: Union[UpdateSchemaType, Dict[str, Any]],
    ) -> ModelType:
        """Update a record with fields from a Pydantic schema or dict."""
        update_data = obj_in.model_dump(exclude_unset=True) if isinstance(obj_in, BaseModel) else dict(obj_in)

        for field, value in update_data.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)

        return self._save(db, db_obj)

    # ----- Delete -----
    def remove(self, db: Session, *, id: Any) -> Optional[ModelType]:
        """Hard delete a record; ORM cascades remove dependent rows.

        Returns the deleted object (or None if not found).
        """
        db_obj = self.get(db, id)
        if not db_obj:
            return None

        try:
            db.delete(db_obj)
            db.commit()
        except Exception:
            db.rollback()
            raise
        return db_obj

    def _save(self, db: Session, db_obj: ModelType) -> ModelType:
        try:
            db.add(db_obj)
            db.commit()
            db.refresh(db_obj)
        except Exception:
            db.rollback()
            raise
        return db_obj
