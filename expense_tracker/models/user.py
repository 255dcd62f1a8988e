"""User model."""

from sqlalchemy import Boolean, Column, String
from sqlalchemy.orm import relationship

from expense_tracker.database import Base
from expense_tracker.models.mixins import CreatedAtMixin


class User(Base, CreatedAtMixin):
    """User model for authentication and ownership."""

    __tablename__ = "users"

    id = Column(String(64), primary_key=True)
    username = Column(String(255), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    is_admin = Column(Boolean, default=False, nullable=False)

    # Relationships
    expenses = relationship("Expense", back_populates="user", cascade="all, delete-orphan")
