"""SQLAlchemy models."""

from tracker.models.enums import Category
from tracker.models.expense import Expense
from tracker.models.user import User

__all__ = [
    "User",
    "Expense",
    "Category",
]
