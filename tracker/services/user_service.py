"""User registration, login, and profile management."""

import logging
from datetime import datetime, timedelta
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from tracker.config import Settings, get_settings
from tracker.exceptions import (
    AccountLockedError,
    DuplicateEmailError,
    DuplicateUsernameError,
    InvalidCredentialsError,
    UserNotFoundError,
)
from tracker.models.mixins import utc_now
from tracker.models.user import User
from tracker.schemas.auth import AuthResponse, UserProfile, UserProfileUpdate, UserRegister
from tracker.services.auth import (
    create_access_token,
    get_expiration_time,
    get_password_hash,
    verify_password,
)

logger = logging.getLogger(__name__)


class UserService:
    """Service for account lifecycle and authentication.

    Lockout policy: each wrong password increments ``failed_login_attempts``.
    Reaching ``settings.lockout_threshold`` locks the account until
    ``now + settings.lockout_duration_minutes``. While the lock is in force
    every login fails without touching the counter. The first attempt after
    the lock expires clears it and is then evaluated normally. A successful
    login always resets the counter.
    """

    def __init__(self, db: Session, settings: Settings | None = None):
        self.db = db
        self.settings = settings or get_settings()

    def get_user_by_email(self, email: str) -> User | None:
        """Get a user by email."""
        return self.db.query(User).filter(User.email == email).first()

    def get_user(self, user_id: int) -> User:
        """Get a user by id or raise UserNotFoundError."""
        user = self.db.query(User).filter(User.id == user_id).first()
        if user is None:
            raise UserNotFoundError()
        return user

    def _check_available(self, email: str, username: str) -> None:
        if self.db.query(User.id).filter(User.email == email).first() is not None:
            logger.info(f"Registration rejected, email in use: {email}")
            raise DuplicateEmailError()
        if self.db.query(User.id).filter(User.username == username).first() is not None:
            logger.info(f"Registration rejected, username in use: {username}")
            raise DuplicateUsernameError()

    def register_user(self, data: UserRegister) -> UserProfile:
        """Create a new enabled, unverified, unlocked account."""
        self._check_available(data.email, data.username)

        now = utc_now()
        user = User(
            email=data.email,
            username=data.username,
            password_hash=get_password_hash(data.password),
            password_changed_at=now,
            first_name=data.first_name,
            last_name=data.last_name,
            account_enabled=True,
            email_verified=False,
            account_locked=False,
            failed_login_attempts=0,
            terms_accepted_at=now,
            privacy_policy_accepted_at=now,
        )
        user.touch(now)
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration
            self.db.rollback()
            self._check_available(data.email, data.username)
            raise
        self.db.refresh(user)

        logger.info(f"Registered user {user.id} ({user.email})")
        return UserProfile.model_validate(user)

    def authenticate_user(self, email: str, password: str) -> AuthResponse:
        """Check credentials, apply the lockout policy, and issue a token.

        Raises:
            InvalidCredentialsError: Unknown email, disabled account, or wrong password.
            AccountLockedError: The account is inside its lock window.
        """
        user = self.db.query(User).filter(User.email == email).with_for_update().first()
        if user is None:
            logger.info("Login failed: unknown email")
            raise InvalidCredentialsError()
        if not user.account_enabled:
            logger.info(f"Login failed: user {user.id} is disabled")
            raise InvalidCredentialsError()

        now = utc_now()
        if user.account_locked:
            if user.is_locked_at(now):
                logger.info(f"Login refused: user {user.id} is locked until {user.locked_until}")
                self.db.rollback()
                raise AccountLockedError()
            logger.info(f"Lock on user {user.id} expired, clearing")
            self._clear_lock(user)

        if not verify_password(password, user.password_hash):
            self._record_failed_attempt(user, now)
            raise InvalidCredentialsError()

        user.failed_login_attempts = 0
        user.last_login_at = now
        user.touch(now)
        self.db.commit()
        self.db.refresh(user)

        logger.info(f"User {user.id} logged in")
        return AuthResponse(
            access_token=create_access_token(user.email),
            expires_in=get_expiration_time(),
            user=UserProfile.model_validate(user),
        )

    def _record_failed_attempt(self, user: User, now: datetime) -> None:
        user.failed_login_attempts = (user.failed_login_attempts or 0) + 1
        if user.failed_login_attempts >= self.settings.lockout_threshold:
            user.account_locked = True
            user.locked_until = now + timedelta(minutes=self.settings.lockout_duration_minutes)
            logger.warning(
                f"User {user.id} locked after {user.failed_login_attempts} failed attempts "
                f"until {user.locked_until.isoformat()}"
            )
        else:
            logger.info(
                f"Login failed for user {user.id} "
                f"({user.failed_login_attempts}/{self.settings.lockout_threshold})"
            )
        user.touch(now)
        self.db.commit()

    @staticmethod
    def _clear_lock(user: User) -> None:
        user.account_locked = False
        user.locked_until = None
        user.failed_login_attempts = 0

    def unlock_user(self, user_id: int) -> UserProfile:
        """Administrative unlock: clear the lock and the failure counter."""
        user = self.get_user(user_id)
        self._clear_lock(user)
        user.touch()
        self.db.commit()
        self.db.refresh(user)
        logger.info(f"User {user.id} unlocked")
        return UserProfile.model_validate(user)

    def get_current_user_id(self, subject: str) -> int:
        """Resolve the id of the user named by a validated token subject."""
        user = self.get_user_by_email(subject)
        if user is None:
            logger.error(f"Valid token for missing user: {subject}")
            raise UserNotFoundError()
        return user.id

    def get_user_profile(self, user_id: int) -> UserProfile:
        """Get a user's profile."""
        return UserProfile.model_validate(self.get_user(user_id))

    def update_user_profile(self, user_id: int, data: UserProfileUpdate) -> UserProfile:
        """Apply a partial update to the non-security profile fields."""
        user = self.get_user(user_id)
        changes: dict[str, Any] = data.model_dump(exclude_unset=True)
        for field, value in changes.items():
            setattr(user, field, value)
        user.touch()
        self.db.commit()
        self.db.refresh(user)
        logger.info(f"Updated profile of user {user.id}: {sorted(changes)}")
        return UserProfile.model_validate(user)
