"""Expense API endpoints. Every route is scoped to the token's owner."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from expense_tracker.api.dependencies import get_current_identity, get_storage
from expense_tracker.schemas.auth import TokenIdentity
from expense_tracker.schemas.expense import ExpenseCreate, ExpenseRecord, ExpenseUpdate
from expense_tracker.storage import Storage

router = APIRouter(prefix="/api/expenses", tags=["expenses"])


def get_owned_expense(storage: Storage, expense_id: str, identity: TokenIdentity) -> ExpenseRecord:
    """Get an expense and check that the caller owns it."""
    expense = storage.get_expense(expense_id)
    if not expense:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Expense not found")

    if expense.user_id != identity.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only modify your own expenses",
        )

    return expense


@router.get("", response_model=list[ExpenseRecord])
def get_expenses(
    identity: Annotated[TokenIdentity, Depends(get_current_identity)],
    storage: Annotated[Storage, Depends(get_storage)],
):
    """Get the caller's expenses, newest first."""
    return storage.list_expenses(user_id=identity.id)


@router.post("", response_model=ExpenseRecord, status_code=status.HTTP_201_CREATED)
def create_expense(
    expense_data: ExpenseCreate,
    identity: Annotated[TokenIdentity, Depends(get_current_identity)],
    storage: Annotated[Storage, Depends(get_storage)],
):
    """Create a new expense owned by the caller."""
    return storage.create_expense(identity.id, expense_data)


@router.put("/{expense_id}", response_model=ExpenseRecord)
def update_expense(
    expense_id: str,
    expense_data: ExpenseUpdate,
    identity: Annotated[TokenIdentity, Depends(get_current_identity)],
    storage: Annotated[Storage, Depends(get_storage)],
):
    """Update description, amount, category or date of an expense.

    Omitted or null fields are left as they are; `"category": null` clears the
    category.
    """
    get_owned_expense(storage, expense_id, identity)

    expense = storage.update_expense(expense_id, expense_data)
    if not expense:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Expense not found")
    return expense


@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_expense(
    expense_id: str,
    identity: Annotated[TokenIdentity, Depends(get_current_identity)],
    storage: Annotated[Storage, Depends(get_storage)],
):
    """Delete an expense."""
    get_owned_expense(storage, expense_id, identity)
    storage.delete_expense(expense_id)
