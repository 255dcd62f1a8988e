"""Authentication and user schemas."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field

from expense_tracker.schemas.common import CamelModel


class UserRegister(BaseModel):
    """User registration request."""

    username: str = Field(..., min_length=1, max_length=255)
    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class UserLogin(BaseModel):
    """User login request."""

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class UserUpdate(CamelModel):
    """Fields an admin may change on a user."""

    username: str | None = Field(None, min_length=1, max_length=255)
    email: EmailStr | None = Field(None, max_length=255)
    is_admin: bool | None = None


class UserRecord(CamelModel):
    """A user as stored, including the password hash."""

    id: str
    username: str
    email: str
    password_hash: str = Field(..., alias="password")
    is_admin: bool = False
    created_at: datetime | None = None


class UserResponse(CamelModel):
    """User information response. Never carries the password hash."""

    id: str
    username: str
    email: str
    is_admin: bool = False
    created_at: datetime | None = None


class TokenIdentity(BaseModel):
    """Identity carried inside a bearer token."""

    id: str
    username: str
    email: str


class AuthResponse(BaseModel):
    """Authentication response with token and user info."""

    token: str
    user: UserResponse


class VerifyResponse(BaseModel):
    """Token verification response."""

    user: UserResponse
