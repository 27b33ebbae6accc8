"""Enums for model fields."""

from enum import Enum


class Category(str, Enum):
    """Closed set of expense categories, stored and sent by name."""

    FOOD = "FOOD"
    HOUSING = "HOUSING"
    TRANSPORTATION = "TRANSPORTATION"
    UTILITIES = "UTILITIES"
    ENTERTAINMENT = "ENTERTAINMENT"
    HEALTHCARE = "HEALTHCARE"
    EDUCATION = "EDUCATION"
    PERSONAL_CARE = "PERSONAL_CARE"
    MISCELLANEOUS = "MISCELLANEOUS"

    @property
    def label(self) -> str:
        """Human-readable name, e.g. "Personal Care"."""
        return self.value.replace("_", " ").title()
