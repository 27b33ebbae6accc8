"""User model."""

from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from tracker.database import Base
from tracker.models.mixins import TimestampMixin, as_utc


class User(Base, TimestampMixin):
    """User model for authentication and expense ownership."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    username = Column(String(50), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    password_changed_at = Column(DateTime(timezone=True), nullable=True)

    # Profile
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    phone = Column(String(30), nullable=True)
    profile_picture_url = Column(String(500), nullable=True)
    locale = Column(String(20), nullable=True)
    timezone = Column(String(50), nullable=True)

    # Account state
    account_enabled = Column(Boolean, nullable=False, default=True)
    email_verified = Column(Boolean, nullable=False, default=False)
    account_locked = Column(Boolean, nullable=False, default=False)
    failed_login_attempts = Column(Integer, nullable=False, default=0)
    locked_until = Column(DateTime(timezone=True), nullable=True)
    last_login_at = Column(DateTime(timezone=True), nullable=True)

    # Consent
    terms_accepted_at = Column(DateTime(timezone=True), nullable=True)
    privacy_policy_accepted_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    expenses = relationship("Expense", back_populates="user", cascade="all, delete-orphan")

    def is_locked_at(self, now: datetime) -> bool:
        """Check whether the lock is still in force at the given time.

        A lock without an expiry only ends through an explicit unlock.
        """
        if not self.account_locked:
            return False
        locked_until = as_utc(self.locked_until)
        return locked_until is None or locked_until > now
