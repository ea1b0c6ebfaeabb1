"""Pydantic schemas for `User` domain objects."""

import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


ALLOWED_ROLES = {"user", "admin"}
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _validate_email(v: str) -> str:
    v = v.strip().lower()
    if not EMAIL_PATTERN.match(v):
        raise ValueError("Invalid email address")
    return v


class UserBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: str

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return _validate_email(v)

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "name": "Ada Lovelace",
            "email": "ada@example.com",
        }
    })


class UserCreate(UserBase):
    password: str = Field(..., min_length=1)

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "name": "Ada Lovelace",
            "email": "ada@example.com",
            "password": "StrongPass!234",
        }
    })


class UserUpdate(BaseModel):
    name: Optional[str] = None
    role: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("role")
    @classmethod
    def validate_role(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        if v not in ALLOWED_ROLES:
            raise ValueError(f"Role must be one of {sorted(ALLOWED_ROLES)}")
        return v


class UserResponse(UserBase):
    id: int
    role: str
    is_active: bool
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True, json_schema_extra={
        "example": {
            "id": 1,
            "name": "Ada Lovelace",
            "email": "ada@example.com",
            "role": "user",
            "is_active": True,
            "created_at": "2025-01-01T10:00:00Z",
        }
    })


class UserLogin(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return _validate_email(v)

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "email": "ada@example.com",
            "password": "StrongPass!234",
        }
    })


class AuthStatus(BaseModel):
    logged_in: bool
    id: Optional[int] = None
    role: Optional[str] = None


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    id: int
    role: str
    message: str = "Login successful."
