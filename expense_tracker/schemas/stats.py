"""Leaderboard and statistics schemas."""

from decimal import Decimal

from expense_tracker.schemas.common import CamelModel, StoredAmount
from expense_tracker.schemas.expense import ExpenseRecord


class LeaderboardEntry(CamelModel):
    """One ranked user on the leaderboard."""

    user_id: str
    username: str
    count: int
    total_amount: StoredAmount


class UserTotals(CamelModel):
    count: int = 0
    total: StoredAmount = Decimal(0)


class StatsResponse(CamelModel):
    """Aggregate statistics over every expense."""

    total_expenses: int
    total_amount: StoredAmount
    average_amount: StoredAmount
    by_category: dict[str, StoredAmount]
    by_user: dict[str, UserTotals]
    recent_expenses: list[ExpenseRecord]
