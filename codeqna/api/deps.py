"""FastAPI dependency injection functions for authentication and database access."""

import logging
from typing import Callable, Generator, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from codeqna.core.security import get_token_subject
from codeqna.crud import crud_user
from codeqna.database import SessionLocal
from codeqna.models.user import User

logger = logging.getLogger(__name__)

# OAuth2 Bearer token scheme
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/token", auto_error=False)


def get_db() -> Generator[Session, None, None]:
    """
    Dependency to get database session.

    Yields:
        Session: SQLAlchemy database session
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db)
) -> User:
    """
    Dependency to get current authenticated user from JWT token.

    The returned user is the request's principal; its ``role`` drives
    authorization checks downstream.

    Args:
        token: JWT token from Authorization header
        db: Database session

    Returns:
        User: Authenticated user model

    Raises:
        HTTPException: 401 if token is missing or invalid or user not found
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized. Please log in.",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if not token:
        raise credentials_exception

    user_id = get_token_subject(token)
    if user_id is None:
        logger.warning("[AUTH] Token decode failed or subject missing")
        raise credentials_exception

    user = crud_user.get(db, user_id)
    if user is None:
        logger.warning(f"[AUTH] User not found for id: {user_id}")
        raise credentials_exception

    logger.debug(f"[AUTH] User authenticated: id={user.id}, role={user.role}")
    return user


def get_current_active_user(
    current_user: User = Depends(get_current_user)
) -> User:
    """
    Dependency to verify current user is active.

    Args:
        current_user: Current authenticated user

    Returns:
        User: Active user model

    Raises:
        HTTPException: 403 if user is inactive
    """
    if not current_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Inactive user"
        )
    return current_user


def get_optional_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db)
) -> Optional[User]:
    """
    Dependency to optionally get current authenticated user.
    Returns None if no valid token provided.

    Useful for endpoints that allow both authenticated and unauthenticated access.
    """
    if not token:
        return None

    user_id = get_token_subject(token)
    if user_id is None:
        return None

    user = crud_user.get(db, user_id)
    if user is None or not user.is_active:
        return None

    return user


def require_role(*allowed_roles: str) -> Callable:
    """
    Factory function to create role-based access control dependency.

    Args:
        *allowed_roles: User roles allowed to access the endpoint

    Returns:
        Callable: Dependency function that checks user role

    Example:
        @router.delete("/channels/{channel_id}")
        def delete_channel(current_user: User = Depends(require_role("admin"))):
            ...
    """
    def role_checker(
        current_user: User = Depends(get_current_active_user)
    ) -> User:
        if current_user.role not in allowed_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Forbidden. Admins only." if allowed_roles == ("admin",)
                else f"Not enough permissions. Required role(s): {', '.join(allowed_roles)}"
            )
        return current_user

    return role_checker


__all__ = [
    "oauth2_scheme",
    "get_db",
    "get_current_user",
    "get_current_active_user",
    "get_optional_current_user",
    "require_role",
]
