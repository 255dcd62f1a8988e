"""Expense schemas."""

import datetime as dt
from decimal import Decimal
from typing import Any

from pydantic import Field, field_validator

from expense_tracker.schemas.common import Amount, CamelModel, StoredAmount

ANONYMOUS_USER_ID = "anonymous"
CLEARABLE_FIELDS = {"category"}


class ExpenseCreate(CamelModel):
    """Create a new expense. The owner always comes from the token."""

    description: str = Field(..., min_length=1, max_length=1000)
    amount: Amount
    category: str | None = Field(None, max_length=255)
    date: dt.date


class ExpenseUpdate(CamelModel):
    """Patch an expense. Only these fields can ever change."""

    description: str | None = Field(None, min_length=1, max_length=1000)
    amount: Amount | None = None
    category: str | None = Field(None, max_length=255)
    date: dt.date | None = None

    def changes(self) -> set[str]:
        """Names of the fields to apply.

        Fields left out or sent as null stay unchanged, except category, which
        an explicit null clears.
        """
        return {
            name
            for name in self.model_fields_set
            if getattr(self, name) is not None or name in CLEARABLE_FIELDS
        }


class ExpenseRecord(CamelModel):
    """An expense as stored and returned to clients."""

    id: str
    user_id: str = ANONYMOUS_USER_ID
    description: str = ""
    amount: StoredAmount = Decimal(0)
    category: str | None = None
    date: str | None = None
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, value: Any) -> Any:
        # Older documents may hold numeric ids
        return str(value) if isinstance(value, int) else value

    @field_validator("user_id", mode="before")
    @classmethod
    def default_owner(cls, value: Any) -> Any:
        if value is None or value == "":
            return ANONYMOUS_USER_ID
        return str(value) if isinstance(value, int) else value
