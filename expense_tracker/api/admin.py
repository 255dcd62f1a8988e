"""Admin API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from expense_tracker.api.dependencies import get_admin_user, get_storage
from expense_tracker.schemas.auth import UserRecord, UserResponse, UserUpdate
from expense_tracker.schemas.expense import ExpenseRecord
from expense_tracker.schemas.stats import StatsResponse
from expense_tracker.services.auth import to_user_response
from expense_tracker.services.stats import build_stats
from expense_tracker.storage import Storage

router = APIRouter(
    prefix="/api/admin",
    tags=["admin"],
    dependencies=[Depends(get_admin_user)],
)


@router.get("/users", response_model=list[UserResponse])
def get_users(storage: Annotated[Storage, Depends(get_storage)]):
    """Get all users without their password hashes."""
    return [to_user_response(user) for user in storage.list_users()]


@router.patch("/users/{user_id}", response_model=UserResponse)
def update_user(
    user_id: str,
    user_data: UserUpdate,
    storage: Annotated[Storage, Depends(get_storage)],
):
    """Change a user's username, email or admin flag."""
    user = storage.get_user(user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    if user_data.email is not None and user_data.email.lower() != user.email.lower():
        if storage.get_user_by_email(user_data.email):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="User with this email already exists",
            )

    if user_data.username is not None and user_data.username != user.username:
        if storage.get_user_by_username(user_data.username):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Username already taken",
            )

    updated: UserRecord | None = storage.update_user(user_id, user_data)
    if not updated:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return to_user_response(updated)


@router.get("/expenses", response_model=list[ExpenseRecord])
def get_all_expenses(storage: Annotated[Storage, Depends(get_storage)]):
    """Get every expense from every user, newest first."""
    return storage.list_expenses()


@router.get("/stats", response_model=StatsResponse)
def get_stats(storage: Annotated[Storage, Depends(get_storage)]):
    """Aggregate statistics over all expenses."""
    return build_stats(storage.list_expenses())
