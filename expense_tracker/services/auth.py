"""Authentication service for JWT and password handling."""

import logging
from collections.abc import Iterable
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext

from expense_tracker.config import get_settings
from expense_tracker.schemas.auth import TokenIdentity, UserRecord, UserResponse
from expense_tracker.storage.base import Storage

logger = logging.getLogger(__name__)

settings = get_settings()

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def create_access_token(user: UserRecord) -> str:
    """Create a JWT access token.

    The token carries the identity only. Admin status is looked up on every
    request that needs it.
    """
    expire = datetime.now(UTC) + timedelta(minutes=settings.jwt_expiration_minutes)
    to_encode = {
        "sub": user.id,
        "id": user.id,
        "username": user.username,
        "email": user.email,
        "exp": expire,
    }
    encoded_jwt = jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    return encoded_jwt


def decode_access_token(token: str) -> dict | None:
    """Decode and validate a JWT token."""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
        return payload
    except JWTError:
        return None


def identity_from_payload(payload: dict) -> TokenIdentity | None:
    """Extract the caller identity from a decoded token payload."""
    user_id = payload.get("sub") or payload.get("id")
    if user_id is None:
        return None
    return TokenIdentity(
        id=str(user_id),
        username=payload.get("username", ""),
        email=payload.get("email", ""),
    )


def is_admin(user: UserRecord, admin_emails: Iterable[str]) -> bool:
    """Whether the user has admin rights via the stored flag or the allow-list."""
    allowed = {email.strip().lower() for email in admin_emails}
    return user.is_admin or user.email.lower() in allowed


def to_user_response(user: UserRecord) -> UserResponse:
    """Public view of a user with the admin flag derived at response time."""
    return UserResponse(
        id=user.id,
        username=user.username,
        email=user.email,
        is_admin=is_admin(user, settings.admin_email_list),
        created_at=user.created_at,
    )


def authenticate_user(storage: Storage, email: str, password: str) -> UserRecord | None:
    """Authenticate a user by email and password."""
    user = storage.get_user_by_email(email)
    if not user:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def create_user(storage: Storage, username: str, email: str, password: str) -> UserRecord:
    """Create a new user, flagging them as admin if their email is allow-listed."""
    hashed_password = get_password_hash(password)
    admin = email.lower() in settings.admin_email_list
    user = storage.create_user(username, email, hashed_password, is_admin=admin)
    logger.info(f"Registered user {user.id} ({username}){' as admin' if admin else ''}")
    return user
