"""Storage kept in two JSON documents on disk.

`expenses.json` holds `{"expenses": [...]}` and `users.json` holds
`{"users": [...]}`. Each call reads the whole document and, for mutations,
writes it back. Concurrent writers can lose updates.
"""

import json
import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from expense_tracker.schemas.auth import UserRecord, UserUpdate
from expense_tracker.schemas.expense import ExpenseCreate, ExpenseRecord, ExpenseUpdate
from expense_tracker.storage.base import Storage, generate_id, newest_first_key

logger = logging.getLogger(__name__)

EXPENSES_KEY = "expenses"
USERS_KEY = "users"


class JsonFileStorage(Storage):
    """Storage backed by `expenses.json` and `users.json` in a directory."""

    def __init__(self, data_dir: str | Path):
        self.data_dir = Path(data_dir)
        self.expenses_file = self.data_dir / "expenses.json"
        self.users_file = self.data_dir / "users.json"

    def ensure_files(self) -> None:
        """Create the data directory and empty documents if missing."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        for path, key in ((self.expenses_file, EXPENSES_KEY), (self.users_file, USERS_KEY)):
            if not path.exists():
                logger.info(f"{path} does not exist, creating it")
                self._write(path, key, [])

    def _read(self, path: Path, key: str) -> list[dict[str, Any]]:
        self.ensure_files()
        try:
            document = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            logger.warning(f"Could not parse {path}, treating it as empty: {e}")
            return []

        entries = document.get(key) if isinstance(document, dict) else None
        if not isinstance(entries, list):
            logger.warning(f"{path} has no '{key}' list, treating it as empty")
            return []
        return [entry for entry in entries if isinstance(entry, dict)]

    def _write(self, path: Path, key: str, entries: list[dict[str, Any]]) -> None:
        path.write_text(json.dumps({key: entries}, indent=2), encoding="utf-8")

    # Users

    def _users(self) -> list[UserRecord]:
        users = []
        for entry in self._read(self.users_file, USERS_KEY):
            try:
                users.append(UserRecord.model_validate(entry))
            except ValidationError as e:
                logger.warning(f"Skipping malformed user entry {entry.get('id')!r}: {e}")
        return users

    def get_user(self, user_id: str) -> UserRecord | None:
        return next((u for u in self._users() if u.id == str(user_id)), None)

    def get_user_by_email(self, email: str) -> UserRecord | None:
        email = email.lower()
        return next((u for u in self._users() if u.email.lower() == email), None)

    def get_user_by_username(self, username: str) -> UserRecord | None:
        return next((u for u in self._users() if u.username == username), None)

    def list_users(self) -> list[UserRecord]:
        return sorted(self._users(), key=newest_first_key, reverse=True)

    def create_user(
        self, username: str, email: str, password_hash: str, is_admin: bool = False
    ) -> UserRecord:
        user = UserRecord(
            id=generate_id(),
            username=username,
            email=email,
            password_hash=password_hash,
            is_admin=is_admin,
            created_at=datetime.now(UTC),
        )
        entries = self._read(self.users_file, USERS_KEY)
        entries.append(user.model_dump(mode="json", by_alias=True))
        self._write(self.users_file, USERS_KEY, entries)
        return user

    def update_user(self, user_id: str, patch: UserUpdate) -> UserRecord | None:
        entries = self._read(self.users_file, USERS_KEY)
        for entry in entries:
            if str(entry.get("id")) == str(user_id):
                entry.update(patch.model_dump(mode="json", by_alias=True, exclude_none=True))
                self._write(self.users_file, USERS_KEY, entries)
                return UserRecord.model_validate(entry)
        return None

    # Expenses

    def _expenses(self) -> list[ExpenseRecord]:
        expenses = []
        for entry in self._read(self.expenses_file, EXPENSES_KEY):
            try:
                expenses.append(ExpenseRecord.model_validate(entry))
            except ValidationError as e:
                logger.warning(f"Skipping malformed expense entry {entry.get('id')!r}: {e}")
        return expenses

    def get_expense(self, expense_id: str) -> ExpenseRecord | None:
        return next((e for e in self._expenses() if e.id == str(expense_id)), None)

    def list_expenses(self, user_id: str | None = None) -> list[ExpenseRecord]:
        expenses = self._expenses()
        if user_id is not None:
            expenses = [e for e in expenses if e.user_id == user_id]
        return sorted(expenses, key=newest_first_key, reverse=True)

    def create_expense(self, user_id: str, data: ExpenseCreate) -> ExpenseRecord:
        expense = ExpenseRecord(
            id=generate_id(),
            user_id=user_id,
            description=data.description,
            amount=data.amount,
            category=data.category,
            date=data.date.isoformat(),
            created_at=datetime.now(UTC),
        )
        entries = self._read(self.expenses_file, EXPENSES_KEY)
        entries.append(expense.model_dump(mode="json", by_alias=True))
        self._write(self.expenses_file, EXPENSES_KEY, entries)
        return expense

    def update_expense(self, expense_id: str, patch: ExpenseUpdate) -> ExpenseRecord | None:
        entries = self._read(self.expenses_file, EXPENSES_KEY)
        for entry in entries:
            if str(entry.get("id")) == str(expense_id):
                changes = patch.model_dump(mode="json", by_alias=True, include=patch.changes())
                entry.update(changes)
                entry["updatedAt"] = datetime.now(UTC).isoformat()
                self._write(self.expenses_file, EXPENSES_KEY, entries)
                return ExpenseRecord.model_validate(entry)
        return None

    def delete_expense(self, expense_id: str) -> bool:
        entries = self._read(self.expenses_file, EXPENSES_KEY)
        remaining = [entry for entry in entries if str(entry.get("id")) != str(expense_id)]
        if len(remaining) == len(entries):
            return False
        self._write(self.expenses_file, EXPENSES_KEY, remaining)
        return True
