"""Mixins for SQLAlchemy models."""

from datetime import UTC, datetime

from sqlalchemy import Column, DateTime


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


class CreatedAtMixin:
    """Mixin to add a created_at timestamp column."""

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)


class TimestampMixin(CreatedAtMixin):
    """Mixin to add created_at and an edit-only updated_at column."""

    # Stays NULL until the first edit
    updated_at = Column(DateTime(timezone=True), nullable=True, onupdate=utcnow)
