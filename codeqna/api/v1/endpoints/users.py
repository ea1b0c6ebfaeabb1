"""User administration endpoints."""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from codeqna.api.deps import get_db, require_role
from codeqna.crud import crud_user
from codeqna.models.user import User
from codeqna.schemas.user import UserResponse

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/users",
    tags=["Users"],
)


@router.get(
    "",
    response_model=List[UserResponse],
    status_code=status.HTTP_200_OK,
    summary="List all users",
)
async def list_users(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    current_user: User = Depends(require_role("admin")),
    db: Session = Depends(get_db),
) -> List[User]:
    """
    Get list of all users (admin only).

    Args:
        skip: Number of records to skip (pagination)
        limit: Maximum records to return
        current_user: Current admin user (injected via require_role)
        db: Database session

    Returns:
        List[User]: List of user data
    """
    return crud_user.get_multi(db, skip=skip, limit=limit)


@router.delete(
    "/{user_id}",
    response_model=dict,
    status_code=status.HTTP_200_OK,
    summary="Delete user",
)
async def delete_user(
    user_id: int,
    current_user: User = Depends(require_role("admin")),
    db: Session = Depends(get_db),
) -> dict:
    """
    Permanently delete a user (admin only).

    The user's ratings are removed with it; their channels, messages and
    replies stay and lose their author.

    Raises:
        HTTPException: 404 if user not found
    """
    deleted = crud_user.remove(db, id=user_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found.",
        )

    logger.info(f"User id={user_id} deleted by admin id={current_user.id}")
    return {"message": "User deleted successfully."}


__all__ = ["router"]
