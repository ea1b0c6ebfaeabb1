"""Authentication endpoints."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from codeqna.api.deps import (
    get_current_active_user,
    get_db,
    get_optional_current_user,
)
from codeqna.core.exceptions import (
    AccountInactiveException,
    EmailAlreadyRegisteredException,
    InvalidCredentialsException,
)
from codeqna.core.security import create_access_token
from codeqna.crud import crud_user
from codeqna.models.user import User
from codeqna.schemas.user import (
    AuthStatus,
    LoginResponse,
    UserCreate,
    UserLogin,
    UserResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/auth",
    tags=["Authentication"],
)


def _issue_token(user: User) -> LoginResponse:
    access_token = create_access_token(data={"sub": str(user.id), "role": user.role})
    return LoginResponse(access_token=access_token, id=user.id, role=user.role)


def _authenticate(db: Session, email: str, password: str) -> User:
    user = crud_user.authenticate(db, email=email, password=password)
    if not user:
        raise InvalidCredentialsException()
    if not user.is_active:
        raise AccountInactiveException()
    return user


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register new user",
)
async def register(
    user_in: UserCreate,
    db: Session = Depends(get_db),
) -> User:
    """
    Register a new user account.

    Args:
        user_in: Name, email and password
        db: Database session

    Returns:
        User: Created user

    Raises:
        HTTPException: 400 if email already registered
    """
    if crud_user.get_by_email(db, user_in.email):
        raise EmailAlreadyRegisteredException()

    db_user = crud_user.create_user(db, user_in=user_in)
    logger.info(f"Registered user id={db_user.id}")
    return db_user


@router.post(
    "/login",
    response_model=LoginResponse,
    status_code=status.HTTP_200_OK,
    summary="Login user",
)
async def login(
    login_data: UserLogin,
    db: Session = Depends(get_db),
) -> LoginResponse:
    """
    Login with email and password.

    Raises:
        HTTPException: 401 if credentials invalid, 403 if account inactive
    """
    user = _authenticate(db, login_data.email, login_data.password)
    return _issue_token(user)


@router.post(
    "/token",
    response_model=LoginResponse,
    status_code=status.HTTP_200_OK,
    summary="OAuth2 token (username = email)",
)
async def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
) -> LoginResponse:
    """OAuth2 compatible login used by the interactive docs."""
    user = _authenticate(db, form_data.username.strip().lower(), form_data.password)
    return _issue_token(user)


@router.get(
    "/me",
    response_model=UserResponse,
    status_code=status.HTTP_200_OK,
    summary="Get current user info",
)
async def get_me(
    current_user: User = Depends(get_current_active_user),
) -> User:
    """
    Get current authenticated user information.

    Args:
        current_user: Current active user (injected via JWT token)

    Returns:
        User: Current user data
    """
    return current_user


@router.get(
    "/status",
    response_model=AuthStatus,
    status_code=status.HTTP_200_OK,
    summary="Check whether the caller is logged in",
)
async def get_status(
    current_user: Optional[User] = Depends(get_optional_current_user),
) -> AuthStatus:
    """Never fails; reports ``logged_in: false`` for anonymous callers."""
    if current_user is None:
        return AuthStatus(logged_in=False)
    return AuthStatus(logged_in=True, id=current_user.id, role=current_user.role)


__all__ = ["router"]
