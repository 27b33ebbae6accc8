"""Password hashing and session token handling."""

import logging
from datetime import UTC, datetime, timedelta

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from tracker.config import get_settings
from tracker.exceptions import ExpiredTokenError, InvalidTokenError

logger = logging.getLogger(__name__)

settings = get_settings()

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def get_expiration_time() -> int:
    """Token lifetime in milliseconds."""
    return settings.jwt_expiration_minutes * 60 * 1000


def create_access_token(subject: str, expires_delta: timedelta | None = None) -> str:
    """Create a signed JWT whose subject is the user's email."""
    issued_at = datetime.now(UTC)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.jwt_expiration_minutes)
    to_encode = {
        "sub": subject,
        "iat": issued_at,
        "exp": issued_at + expires_delta,
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict:
    """Decode and validate a JWT token.

    Raises:
        ExpiredTokenError: If the token is past its expiry.
        InvalidTokenError: If the signature or payload is bad.
    """
    if not token:
        raise InvalidTokenError()
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except ExpiredSignatureError as e:
        raise ExpiredTokenError() from e
    except JWTError as e:
        raise InvalidTokenError(f"Invalid authentication token: {e}") from e


def extract_subject(token: str) -> str:
    """Return the subject embedded in a valid token."""
    subject = decode_access_token(token).get("sub")
    if not isinstance(subject, str) or not subject:
        raise InvalidTokenError("Token has no subject")
    return subject


def is_token_valid(token: str, expected_subject: str) -> bool:
    """Check signature, expiry, and that the token was issued for expected_subject."""
    try:
        return extract_subject(token) == expected_subject
    except InvalidTokenError as e:
        logger.debug(f"Token rejected: {e.message}")
        return False
