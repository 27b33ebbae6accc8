"""Expense schemas."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import ConfigDict, Field

from tracker.models.enums import Category
from tracker.schemas.common import CamelModel


class ExpenseBase(CamelModel):
    """Fields a client supplies for an expense."""

    description: str | None = Field(None, max_length=500)
    amount: Decimal = Field(..., ge=Decimal("0.01"), max_digits=17, decimal_places=2)
    date: date
    category: Category


class ExpenseCreate(ExpenseBase):
    """Create an expense."""


class ExpenseUpdate(ExpenseBase):
    """Replace the editable fields of an expense."""


class ExpenseResponse(ExpenseBase):
    """Expense response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    category_label: str
    created_at: datetime
    updated_at: datetime


class CategoryResponse(CamelModel):
    """A selectable expense category."""

    value: Category
    label: str
