"""FastAPI dependencies for authentication and services."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from tracker.database import get_db
from tracker.exceptions import InvalidTokenError, UserNotFoundError
from tracker.services.auth import extract_subject
from tracker.services.expense_service import ExpenseService
from tracker.services.user_service import UserService

security = HTTPBearer(auto_error=False)


def unauthorized(detail: str) -> HTTPException:
    """Build a 401 carrying the bearer challenge header."""
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_user_service(
    db: Annotated[Session, Depends(get_db)],
) -> UserService:
    """Get user service with dependencies."""
    return UserService(db)


def get_expense_service(
    db: Annotated[Session, Depends(get_db)],
) -> ExpenseService:
    """Get expense service with dependencies."""
    return ExpenseService(db)


def get_current_user_id(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    user_service: Annotated[UserService, Depends(get_user_service)],
) -> int:
    """Get the id of the authenticated caller from the bearer token."""
    if credentials is None:
        raise unauthorized("Not authenticated")

    try:
        subject = extract_subject(credentials.credentials)
        return user_service.get_current_user_id(subject)
    except InvalidTokenError as e:
        raise unauthorized(e.message) from e
    except UserNotFoundError as e:
        raise unauthorized(e.message) from e
