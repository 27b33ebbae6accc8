"""Authentication and user profile schemas."""

import re
from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, ConfigDict, EmailStr, Field, field_validator

from tracker.schemas.common import CamelModel

PASSWORD_RULES = (
    (re.compile(r"[a-z]"), "a lowercase letter"),
    (re.compile(r"[A-Z]"), "an uppercase letter"),
    (re.compile(r"\d"), "a digit"),
    (re.compile(r"[^A-Za-z0-9]"), "a symbol"),
)

# Emails are matched case-insensitively by storing them lower-cased
NormalizedEmail = Annotated[EmailStr, AfterValidator(str.lower)]


class UserRegister(CamelModel):
    """User registration request."""

    email: NormalizedEmail = Field(..., max_length=255)
    password: str = Field(..., min_length=6, max_length=128)
    username: str = Field(..., min_length=3, max_length=50, pattern=r"^[A-Za-z0-9._-]+$")
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    terms_accepted: bool
    privacy_policy_accepted: bool

    @field_validator("password")
    @classmethod
    def check_password_strength(cls, value: str) -> str:
        missing = [name for pattern, name in PASSWORD_RULES if not pattern.search(value)]
        if missing:
            raise ValueError(f"Password must contain {', '.join(missing)}")
        return value

    @field_validator("terms_accepted", "privacy_policy_accepted")
    @classmethod
    def check_accepted(cls, value: bool) -> bool:
        if not value:
            raise ValueError("Must be accepted to register")
        return value


class UserLogin(CamelModel):
    """User login request."""

    email: NormalizedEmail = Field(..., max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class UserProfileUpdate(CamelModel):
    """Partial update of the non-security profile fields."""

    model_config = ConfigDict(extra="forbid")

    first_name: str | None = Field(None, min_length=1, max_length=100)
    last_name: str | None = Field(None, min_length=1, max_length=100)
    phone: str | None = Field(None, max_length=30)
    profile_picture_url: str | None = Field(None, max_length=500)
    locale: str | None = Field(None, max_length=20)
    timezone: str | None = Field(None, max_length=50)

    @field_validator("first_name", "last_name")
    @classmethod
    def check_not_null(cls, value: str | None) -> str:
        if value is None:
            raise ValueError("Cannot be cleared")
        return value


class UserProfile(CamelModel):
    """User information response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    username: str
    first_name: str
    last_name: str
    phone: str | None = None
    profile_picture_url: str | None = None
    locale: str | None = None
    timezone: str | None = None
    email_verified: bool
    last_login_at: datetime | None = None
    created_at: datetime
    updated_at: datetime


class AuthResponse(CamelModel):
    """Authentication response with token and user info."""

    access_token: str
    token_type: str = "Bearer"  # noqa: S105
    expires_in: int
    user: UserProfile
