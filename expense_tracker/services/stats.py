"""Leaderboard and statistics computed over all expenses.

Everything here is recomputed from scratch on each call.
"""

from collections.abc import Iterable
from decimal import Decimal

from expense_tracker.schemas.auth import UserRecord
from expense_tracker.schemas.expense import ExpenseRecord
from expense_tracker.schemas.stats import LeaderboardEntry, StatsResponse, UserTotals
from expense_tracker.storage.base import newest_first_key

LEADERBOARD_SIZE = 5
RECENT_EXPENSES_LIMIT = 50
DEFAULT_CATEGORY = "Other"


def fallback_username(user_id: str) -> str:
    """Display name for a user id with no matching user record."""
    return f"User {str(user_id)[-6:]}"


def build_leaderboard(
    expenses: Iterable[ExpenseRecord],
    users: Iterable[UserRecord],
    limit: int = LEADERBOARD_SIZE,
) -> list[LeaderboardEntry]:
    """Rank users by the sum of their expense amounts, highest first."""
    totals: dict[str, UserTotals] = {}
    for expense in expenses:
        entry = totals.setdefault(expense.user_id, UserTotals())
        entry.count += 1
        entry.total += expense.amount

    usernames = {user.id: user.username for user in users}

    leaderboard = [
        LeaderboardEntry(
            user_id=user_id,
            username=usernames.get(user_id) or fallback_username(user_id),
            count=entry.count,
            total_amount=entry.total,
        )
        for user_id, entry in totals.items()
    ]
    leaderboard.sort(key=lambda e: e.total_amount, reverse=True)
    return leaderboard[:limit]


def build_stats(
    expenses: Iterable[ExpenseRecord], recent_limit: int = RECENT_EXPENSES_LIMIT
) -> StatsResponse:
    """Totals, averages and breakdowns by category and by user."""
    expenses = list(expenses)

    total_amount = sum((e.amount for e in expenses), Decimal(0))
    average_amount = total_amount / len(expenses) if expenses else Decimal(0)

    by_category: dict[str, Decimal] = {}
    by_user: dict[str, UserTotals] = {}
    for expense in expenses:
        category = expense.category or DEFAULT_CATEGORY
        by_category[category] = by_category.get(category, Decimal(0)) + expense.amount

        totals = by_user.setdefault(expense.user_id, UserTotals())
        totals.count += 1
        totals.total += expense.amount

    recent = sorted(expenses, key=newest_first_key, reverse=True)[:recent_limit]

    return StatsResponse(
        total_expenses=len(expenses),
        total_amount=total_amount,
        average_amount=average_amount,
        by_category=by_category,
        by_user=by_user,
        recent_expenses=recent,
    )
