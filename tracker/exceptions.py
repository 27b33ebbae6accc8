"""
Exception hierarchy for the expense tracker.

Services raise these; the API routers translate them into HTTP responses.
"""


class TrackerError(Exception):
    """Base exception for all tracker errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class DuplicateEmailError(TrackerError):
    """Raised when registering an email that already has an account."""

    def __init__(self, message: str = "Email already registered"):
        super().__init__(message)


class DuplicateUsernameError(TrackerError):
    """Raised when registering a username that is already in use."""

    def __init__(self, message: str = "Username already taken"):
        super().__init__(message)


class InvalidCredentialsError(TrackerError):
    """Raised for any failed login.

    Unknown email, wrong password, and disabled or locked accounts all
    share this message so callers cannot probe which accounts exist.
    """

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message)


class AccountLockedError(InvalidCredentialsError):
    """Raised when a login targets an account inside its lock window."""


class UserNotFoundError(TrackerError):
    """Raised when a user record does not exist."""

    def __init__(self, message: str = "User not found"):
        super().__init__(message)


class ExpenseNotFoundError(TrackerError):
    """Raised when an expense does not exist or belongs to another user."""

    def __init__(self, expense_id: int):
        super().__init__(f"Expense not found with id: {expense_id}")


class InvalidTokenError(TrackerError):
    """Raised when a session token is malformed or its signature is wrong."""

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message)


class ExpiredTokenError(InvalidTokenError):
    """Raised when a session token is past its expiry."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message)


class ValidationFailureError(TrackerError):
    """Raised when input passes schema checks but is still unusable."""
