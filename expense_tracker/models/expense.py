"""Expense model."""

from sqlalchemy import Column, ForeignKey, Index, Numeric, String, Text
from sqlalchemy.orm import relationship

from expense_tracker.database import Base
from expense_tracker.models.mixins import TimestampMixin


class Expense(Base, TimestampMixin):
    """A single expense entry owned by one user."""

    __tablename__ = "expenses"
    __table_args__ = (
        Index("idx_expenses_user_id", "user_id"),
        Index("idx_expenses_created_at", "created_at"),
    )

    id = Column(String(64), primary_key=True)
    user_id = Column(String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    description = Column(Text, nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    category = Column(String(255), nullable=True)
    date = Column(String(10), nullable=True)  # YYYY-MM-DD as entered by the user

    # Relationships
    user = relationship("User", back_populates="expenses")
