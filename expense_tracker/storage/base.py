"""Storage interface shared by the relational and JSON file backends."""

import threading
import time
from abc import ABC, abstractmethod
from datetime import UTC

from expense_tracker.schemas.auth import UserRecord, UserUpdate
from expense_tracker.schemas.expense import ExpenseCreate, ExpenseRecord, ExpenseUpdate

_id_lock = threading.Lock()
_last_id = 0


def generate_id() -> str:
    """Return a new time-derived id.

    Ids are nanosecond timestamps, bumped when needed so that each call in
    this process returns a strictly larger value than the previous one.
    """
    global _last_id
    with _id_lock:
        candidate = max(time.time_ns(), _last_id + 1)
        _last_id = candidate
    return str(candidate)


def newest_first_key(record: UserRecord | ExpenseRecord) -> tuple[float, str]:
    """Sort key for ordering records newest first (use with reverse=True)."""
    created_at = record.created_at
    if created_at is None:
        return (float("-inf"), record.id)
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=UTC)
    return (created_at.timestamp(), record.id)


class Storage(ABC):
    """Get/list/create/update/delete operations for users and expenses.

    Lookups return None for unknown ids. Uniqueness and ownership rules are
    enforced by the callers.
    """

    # Users

    @abstractmethod
    def get_user(self, user_id: str) -> UserRecord | None: ...

    @abstractmethod
    def get_user_by_email(self, email: str) -> UserRecord | None:
        """Look up a user by email, ignoring case."""

    @abstractmethod
    def get_user_by_username(self, username: str) -> UserRecord | None: ...

    @abstractmethod
    def list_users(self) -> list[UserRecord]:
        """All users, newest first."""

    @abstractmethod
    def create_user(
        self, username: str, email: str, password_hash: str, is_admin: bool = False
    ) -> UserRecord: ...

    @abstractmethod
    def update_user(self, user_id: str, patch: UserUpdate) -> UserRecord | None: ...

    # Expenses

    @abstractmethod
    def get_expense(self, expense_id: str) -> ExpenseRecord | None: ...

    @abstractmethod
    def list_expenses(self, user_id: str | None = None) -> list[ExpenseRecord]:
        """Expenses newest first, optionally restricted to one owner."""

    @abstractmethod
    def create_expense(self, user_id: str, data: ExpenseCreate) -> ExpenseRecord: ...

    @abstractmethod
    def update_expense(self, expense_id: str, patch: ExpenseUpdate) -> ExpenseRecord | None:
        """Apply the non-null fields of the patch and stamp updated_at."""

    @abstractmethod
    def delete_expense(self, expense_id: str) -> bool: ...
