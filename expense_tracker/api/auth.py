"""Authentication API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from expense_tracker.api.dependencies import get_current_user, get_storage
from expense_tracker.config import get_settings
from expense_tracker.schemas.auth import (
    AuthResponse,
    UserLogin,
    UserRecord,
    UserRegister,
    VerifyResponse,
)
from expense_tracker.services.auth import (
    authenticate_user,
    create_access_token,
    create_user,
    to_user_response,
)
from expense_tracker.storage import Storage

logger = logging.getLogger(__name__)

settings = get_settings()

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserRegister,
    storage: Annotated[Storage, Depends(get_storage)],
):
    """Register a new user."""
    if len(user_data.password) < settings.password_min_length:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Password must be at least {settings.password_min_length} characters",
        )

    if storage.get_user_by_email(user_data.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User with this email already exists",
        )

    if storage.get_user_by_username(user_data.username):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username already taken",
        )

    user = create_user(storage, user_data.username, user_data.email, user_data.password)

    return AuthResponse(
        token=create_access_token(user),
        user=to_user_response(user),
    )


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: UserLogin,
    storage: Annotated[Storage, Depends(get_storage)],
):
    """Login with email and password."""
    user = authenticate_user(storage, credentials.email, credentials.password)

    if not user:
        logger.info("Failed login attempt")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return AuthResponse(
        token=create_access_token(user),
        user=to_user_response(user),
    )


@router.get("/verify", response_model=VerifyResponse)
def verify(
    current_user: Annotated[UserRecord, Depends(get_current_user)],
):
    """Check the bearer token and return the user behind it."""
    return VerifyResponse(user=to_user_response(current_user))
