#!/usr/bin/env python3
"""Seed demo data.

Creates a demo user, an admin and a month of sample expenses through the
configured storage backend, so the admin dashboard and leaderboard have
something to show.

Usage:
    # Relational storage (DATABASE_URL, defaults to ./expenses.db):
    python scripts/seed_demo_data.py

    # JSON documents:
    STORAGE_BACKEND=file DATA_DIR=data python scripts/seed_demo_data.py
"""

import logging
import os
import sys
from datetime import UTC, datetime, timedelta
from decimal import Decimal

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from expense_tracker.config import get_settings
from expense_tracker.database import SessionLocal, init_db
from expense_tracker.schemas.expense import ExpenseCreate
from expense_tracker.services.auth import get_password_hash
from expense_tracker.storage import JsonFileStorage, SqlStorage, Storage

logger = logging.getLogger(__name__)

# Demo user credentials
DEMO_USERNAME = "demo"
DEMO_EMAIL = "demo@example.com"
DEMO_PASSWORD = "demopass123"

ADMIN_USERNAME = "admin"
ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "adminpass123"

SAMPLE_EXPENSES = [
    ("Groceries", "24.90", "Food"),
    ("Bus pass", "45.00", "Transport"),
    ("Coffee", "4.50", "Food"),
    ("Cinema", "12.00", "Entertainment"),
    ("Electricity bill", "61.35", "Utilities"),
    ("Lunch", "11.20", "Food"),
    ("Books", "18.99", "Education"),
]


def get_or_create_user(
    storage: Storage, username: str, email: str, password: str, is_admin: bool = False
):
    """Return the existing user with this email, or create it."""
    user = storage.get_user_by_email(email)
    if user:
        logger.info(f"User {email} already exists, skipping")
        return user
    return storage.create_user(username, email, get_password_hash(password), is_admin=is_admin)


def seed_demo_data(storage: Storage) -> None:
    """Seed the storage with representative data."""
    demo = get_or_create_user(storage, DEMO_USERNAME, DEMO_EMAIL, DEMO_PASSWORD)
    admin = get_or_create_user(
        storage, ADMIN_USERNAME, ADMIN_EMAIL, ADMIN_PASSWORD, is_admin=True
    )

    if storage.list_expenses(user_id=demo.id):
        logger.info("Demo expenses already present, nothing to do")
        return

    today = datetime.now(UTC).date()
    for days_ago in range(30):
        description, amount, category = SAMPLE_EXPENSES[days_ago % len(SAMPLE_EXPENSES)]
        storage.create_expense(
            demo.id,
            ExpenseCreate(
                description=description,
                amount=Decimal(amount),
                category=category,
                date=today - timedelta(days=days_ago),
            ),
        )

    storage.create_expense(
        admin.id,
        ExpenseCreate(
            description="Team lunch",
            amount=Decimal("86.40"),
            category="Food",
            date=today,
        ),
    )

    logger.info(f"Seeded 31 expenses for {DEMO_EMAIL} and {ADMIN_EMAIL}")


def main() -> None:
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)

    if settings.storage_backend == "file":
        seed_demo_data(JsonFileStorage(settings.data_dir))
        return

    init_db()
    db = SessionLocal()
    try:
        seed_demo_data(SqlStorage(db))
    finally:
        db.close()


if __name__ == "__main__":
    main()
