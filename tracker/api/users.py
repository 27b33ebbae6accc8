"""User registration, login and profile endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from tracker.api.dependencies import get_current_user_id, get_user_service, unauthorized
from tracker.exceptions import (
    DuplicateEmailError,
    DuplicateUsernameError,
    InvalidCredentialsError,
    UserNotFoundError,
)
from tracker.schemas.auth import (
    AuthResponse,
    UserLogin,
    UserProfile,
    UserProfileUpdate,
    UserRegister,
)
from tracker.services.user_service import UserService

router = APIRouter(prefix="/api/users", tags=["users"])


def check_own_profile(user_id: int, current_user_id: int) -> None:
    """Only the owner may address a profile; anyone else sees a 404."""
    if user_id != current_user_id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")


@router.post("/register", response_model=UserProfile, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserRegister,
    user_service: Annotated[UserService, Depends(get_user_service)],
):
    """Register a new user."""
    try:
        return user_service.register_user(user_data)
    except (DuplicateEmailError, DuplicateUsernameError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: UserLogin,
    user_service: Annotated[UserService, Depends(get_user_service)],
):
    """Login with email and password."""
    try:
        return user_service.authenticate_user(credentials.email, credentials.password)
    except InvalidCredentialsError as e:
        raise unauthorized(e.message) from e


@router.get("/me", response_model=UserProfile)
def get_me(
    current_user_id: Annotated[int, Depends(get_current_user_id)],
    user_service: Annotated[UserService, Depends(get_user_service)],
):
    """Get current user information."""
    return user_service.get_user_profile(current_user_id)


@router.get("/{user_id}/profile", response_model=UserProfile)
def get_profile(
    user_id: int,
    current_user_id: Annotated[int, Depends(get_current_user_id)],
    user_service: Annotated[UserService, Depends(get_user_service)],
):
    """Get a user's profile."""
    check_own_profile(user_id, current_user_id)
    try:
        return user_service.get_user_profile(user_id)
    except UserNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e


@router.put("/{user_id}/profile", response_model=UserProfile)
def update_profile(
    user_id: int,
    profile_data: UserProfileUpdate,
    current_user_id: Annotated[int, Depends(get_current_user_id)],
    user_service: Annotated[UserService, Depends(get_user_service)],
):
    """Update the non-security fields of a user's profile."""
    check_own_profile(user_id, current_user_id)
    try:
        return user_service.update_user_profile(user_id, profile_data)
    except UserNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
