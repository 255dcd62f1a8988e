"""Shared schema building blocks."""

from decimal import Decimal, InvalidOperation
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel


def parse_amount(value: Any) -> Decimal:
    """Parse a stored amount, falling back to zero when it is malformed.

    Stored documents may carry amounts as numbers or strings. Anything that is
    not a finite, non-negative decimal counts as 0.
    """
    if value is None or isinstance(value, bool):
        return Decimal(0)
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return Decimal(0)
    if not amount.is_finite() or amount < 0:
        return Decimal(0)
    return amount


_as_number = PlainSerializer(float, return_type=float, when_used="json")

# Amount supplied by a client: validated strictly
Amount = Annotated[Decimal, Field(ge=0, max_digits=10, decimal_places=2), _as_number]

# Amount read back from storage or computed by aggregation: never rejected
StoredAmount = Annotated[Decimal, BeforeValidator(parse_amount), _as_number]


class CamelModel(BaseModel):
    """Base model exposing camelCase keys on the wire and in JSON documents."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
