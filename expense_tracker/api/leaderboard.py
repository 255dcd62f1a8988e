"""Leaderboard API endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends

from expense_tracker.api.dependencies import get_current_identity, get_storage
from expense_tracker.schemas.stats import LeaderboardEntry
from expense_tracker.services.stats import build_leaderboard
from expense_tracker.storage import Storage

router = APIRouter(
    prefix="/api/leaderboard",
    tags=["leaderboard"],
    dependencies=[Depends(get_current_identity)],
)


@router.get("", response_model=list[LeaderboardEntry])
def get_leaderboard(storage: Annotated[Storage, Depends(get_storage)]):
    """Top spenders across all users."""
    return build_leaderboard(storage.list_expenses(), storage.list_users())
