"""Relational storage backed by SQLAlchemy."""

from datetime import UTC, datetime

from sqlalchemy import func
from sqlalchemy.orm import Session

from expense_tracker.models.expense import Expense
from expense_tracker.models.mixins import utcnow
from expense_tracker.models.user import User
from expense_tracker.schemas.auth import UserRecord, UserUpdate
from expense_tracker.schemas.expense import ExpenseCreate, ExpenseRecord, ExpenseUpdate
from expense_tracker.storage.base import Storage, generate_id


def _aware(value: datetime | None) -> datetime | None:
    # SQLite hands back naive datetimes even for timezone-aware columns
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _user_record(user: User) -> UserRecord:
    return UserRecord(
        id=user.id,
        username=user.username,
        email=user.email,
        password_hash=user.password_hash,
        is_admin=bool(user.is_admin),
        created_at=_aware(user.created_at),
    )


def _expense_record(expense: Expense) -> ExpenseRecord:
    return ExpenseRecord(
        id=expense.id,
        user_id=expense.user_id,
        description=expense.description,
        amount=expense.amount,
        category=expense.category,
        date=expense.date,
        created_at=_aware(expense.created_at),
        updated_at=_aware(expense.updated_at),
    )


class SqlStorage(Storage):
    """Storage using the `users` and `expenses` tables.

    Every mutating call commits on its own; there are no multi-statement
    transactions.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: str) -> UserRecord | None:
        user = self.db.query(User).filter(User.id == user_id).first()
        return _user_record(user) if user else None

    def get_user_by_email(self, email: str) -> UserRecord | None:
        user = self.db.query(User).filter(func.lower(User.email) == email.lower()).first()
        return _user_record(user) if user else None

    def get_user_by_username(self, username: str) -> UserRecord | None:
        user = self.db.query(User).filter(User.username == username).first()
        return _user_record(user) if user else None

    def list_users(self) -> list[UserRecord]:
        users = self.db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()
        return [_user_record(user) for user in users]

    def create_user(
        self, username: str, email: str, password_hash: str, is_admin: bool = False
    ) -> UserRecord:
        user = User(
            id=generate_id(),
            username=username,
            email=email,
            password_hash=password_hash,
            is_admin=is_admin,
        )
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return _user_record(user)

    def update_user(self, user_id: str, patch: UserUpdate) -> UserRecord | None:
        user = self.db.query(User).filter(User.id == user_id).first()
        if not user:
            return None

        if patch.username is not None:
            user.username = patch.username
        if patch.email is not None:
            user.email = patch.email
        if patch.is_admin is not None:
            user.is_admin = patch.is_admin

        self.db.commit()
        self.db.refresh(user)
        return _user_record(user)

    def get_expense(self, expense_id: str) -> ExpenseRecord | None:
        expense = self.db.query(Expense).filter(Expense.id == expense_id).first()
        return _expense_record(expense) if expense else None

    def list_expenses(self, user_id: str | None = None) -> list[ExpenseRecord]:
        query = self.db.query(Expense)
        if user_id is not None:
            query = query.filter(Expense.user_id == user_id)
        expenses = query.order_by(Expense.created_at.desc(), Expense.id.desc()).all()
        return [_expense_record(expense) for expense in expenses]

    def create_expense(self, user_id: str, data: ExpenseCreate) -> ExpenseRecord:
        expense = Expense(
            id=generate_id(),
            user_id=user_id,
            description=data.description,
            amount=data.amount,
            category=data.category,
            date=data.date.isoformat(),
        )
        self.db.add(expense)
        self.db.commit()
        self.db.refresh(expense)
        return _expense_record(expense)

    def update_expense(self, expense_id: str, patch: ExpenseUpdate) -> ExpenseRecord | None:
        expense = self.db.query(Expense).filter(Expense.id == expense_id).first()
        if not expense:
            return None

        fields = patch.changes()
        if "description" in fields:
            expense.description = patch.description
        if "amount" in fields:
            expense.amount = patch.amount
        if "category" in fields:
            expense.category = patch.category
        if "date" in fields:
            expense.date = patch.date.isoformat()
        expense.updated_at = utcnow()

        self.db.commit()
        self.db.refresh(expense)
        return _expense_record(expense)

    def delete_expense(self, expense_id: str) -> bool:
        expense = self.db.query(Expense).filter(Expense.id == expense_id).first()
        if not expense:
            return False
        self.db.delete(expense)
        self.db.commit()
        return True
