"""Custom HTTP exceptions for the CodeQnA API."""

from fastapi import HTTPException, status


class InvalidCredentialsException(HTTPException):
    """Raised when email or password is wrong."""

    def __init__(self, detail: str = "Wrong email or password. Please try again or register for an account."):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class EmailAlreadyRegisteredException(HTTPException):
    """Raised when registering with an email that already has an account."""

    def __init__(self, detail: str = "Email already registered."):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
        )


class AccountInactiveException(HTTPException):
    """Raised when a deactivated account tries to log in."""

    def __init__(self, detail: str = "Account is inactive. Please contact an administrator."):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
        )


class ChannelNotFoundException(HTTPException):
    """
    Raised when a channel id matches nothing.

    Status Code: 404 Not Found

    Response Body:
        {
            "detail": "Channel not found."
        }
    """

    def __init__(self, detail: str = "Channel not found."):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
        )


__all__ = [
    "InvalidCredentialsException",
    "EmailAlreadyRegisteredException",
    "AccountInactiveException",
    "ChannelNotFoundException",
]
