"""Expense model."""

from sqlalchemy import CheckConstraint, Column, Date, Enum, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from tracker.database import Base
from tracker.models.enums import Category
from tracker.models.mixins import TimestampMixin


class Expense(Base, TimestampMixin):
    """A single expense owned by one user."""

    __tablename__ = "expenses"
    __table_args__ = (CheckConstraint("amount >= 0.01", name="ck_expenses_amount_positive"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    description = Column(String(500), nullable=True)
    amount = Column(Numeric(17, 2), nullable=False)
    date = Column(Date, nullable=False, index=True)
    # Stored by name ("PERSONAL_CARE"), never by ordinal
    category = Column(
        Enum(Category, native_enum=False, length=32, validate_strings=True),
        nullable=False,
        index=True,
    )

    # Relationships
    user = relationship("User", back_populates="expenses")

    @property
    def category_label(self) -> str:
        """Human-readable category name."""
        return Category(self.category).label
