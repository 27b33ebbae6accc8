"""Pydantic schemas for API requests and responses."""

from tracker.schemas.auth import (
    AuthResponse,
    UserLogin,
    UserProfile,
    UserProfileUpdate,
    UserRegister,
)
from tracker.schemas.common import PagedResponse
from tracker.schemas.expense import CategoryResponse, ExpenseCreate, ExpenseResponse, ExpenseUpdate

__all__ = [
    "UserRegister",
    "UserLogin",
    "UserProfile",
    "UserProfileUpdate",
    "AuthResponse",
    "ExpenseCreate",
    "ExpenseUpdate",
    "ExpenseResponse",
    "CategoryResponse",
    "PagedResponse",
]
