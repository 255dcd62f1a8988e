"""Pydantic schemas for API requests, responses and stored records."""

from expense_tracker.schemas.auth import (
    AuthResponse,
    TokenIdentity,
    UserLogin,
    UserRecord,
    UserRegister,
    UserResponse,
    UserUpdate,
    VerifyResponse,
)
from expense_tracker.schemas.expense import ExpenseCreate, ExpenseRecord, ExpenseUpdate
from expense_tracker.schemas.stats import LeaderboardEntry, StatsResponse, UserTotals

__all__ = [
    "AuthResponse",
    "ExpenseCreate",
    "ExpenseRecord",
    "ExpenseUpdate",
    "LeaderboardEntry",
    "StatsResponse",
    "TokenIdentity",
    "UserLogin",
    "UserRecord",
    "UserRegister",
    "UserResponse",
    "UserTotals",
    "UserUpdate",
    "VerifyResponse",
]
