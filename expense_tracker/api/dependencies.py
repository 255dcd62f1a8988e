"""FastAPI dependencies for authentication and storage."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from expense_tracker.config import get_settings
from expense_tracker.database import get_db
from expense_tracker.schemas.auth import TokenIdentity, UserRecord
from expense_tracker.services.auth import decode_access_token, identity_from_payload, is_admin
from expense_tracker.storage import JsonFileStorage, SqlStorage, Storage

settings = get_settings()

# Missing credentials are reported as 401 below rather than by HTTPBearer
security = HTTPBearer(auto_error=False)


def get_storage(db: Annotated[Session, Depends(get_db)]) -> Storage:
    """Storage backend selected by STORAGE_BACKEND."""
    if settings.storage_backend == "file":
        return JsonFileStorage(settings.data_dir)
    return SqlStorage(db)


def get_current_identity(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> TokenIdentity:
    """Get the caller identity from the JWT token without touching storage."""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access denied. No token provided.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = decode_access_token(credentials.credentials)
    identity = identity_from_payload(payload) if payload is not None else None
    if identity is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return identity


def get_current_user(
    identity: Annotated[TokenIdentity, Depends(get_current_identity)],
    storage: Annotated[Storage, Depends(get_storage)],
) -> UserRecord:
    """Load the stored user behind the token."""
    user = storage.get_user(identity.id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def get_admin_user(
    current_user: Annotated[UserRecord, Depends(get_current_user)],
) -> UserRecord:
    """Require the caller to be an admin."""
    if not is_admin(current_user, settings.admin_email_list):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied. Admin privileges required.",
        )
    return current_user
