"""Expense API endpoints."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from tracker.api.dependencies import get_current_user_id, get_expense_service
from tracker.config import get_settings
from tracker.exceptions import ExpenseNotFoundError, ValidationFailureError
from tracker.models.enums import Category
from tracker.schemas.common import PagedResponse
from tracker.schemas.expense import CategoryResponse, ExpenseCreate, ExpenseResponse, ExpenseUpdate
from tracker.services.expense_service import ExpenseService

settings = get_settings()

router = APIRouter(prefix="/api/expenses", tags=["expenses"])


def not_found(e: ExpenseNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)


@router.get("", response_model=PagedResponse[ExpenseResponse])
def list_expenses(
    current_user_id: Annotated[int, Depends(get_current_user_id)],
    expense_service: Annotated[ExpenseService, Depends(get_expense_service)],
    page: int = Query(default=0, ge=0, description="Zero-based page index"),
    size: int = Query(default=settings.default_page_size, ge=1, le=settings.max_page_size),
    sort_by: str = Query(default="date", alias="sortBy"),
    sort_dir: str = Query(default="desc", alias="sortDir"),
    category: Category | None = Query(default=None),
    start_date: date | None = Query(default=None, alias="startDate"),
    end_date: date | None = Query(default=None, alias="endDate"),
):
    """Get a page of the current user's expenses."""
    try:
        return expense_service.list_expenses(
            current_user_id,
            page=page,
            size=size,
            sort_by=sort_by,
            sort_dir=sort_dir,
            category=category,
            start_date=start_date,
            end_date=end_date,
        )
    except ValidationFailureError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e


@router.get("/categories", response_model=list[CategoryResponse])
def get_categories():
    """List the selectable expense categories."""
    return [CategoryResponse(value=category, label=category.label) for category in Category]


@router.post("", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
def create_expense(
    expense_data: ExpenseCreate,
    current_user_id: Annotated[int, Depends(get_current_user_id)],
    expense_service: Annotated[ExpenseService, Depends(get_expense_service)],
):
    """Create a new expense."""
    return expense_service.create_expense(current_user_id, expense_data)


@router.get("/{expense_id}", response_model=ExpenseResponse)
def get_expense(
    expense_id: int,
    current_user_id: Annotated[int, Depends(get_current_user_id)],
    expense_service: Annotated[ExpenseService, Depends(get_expense_service)],
):
    """Get a specific expense."""
    try:
        return expense_service.get_expense(expense_id, current_user_id)
    except ExpenseNotFoundError as e:
        raise not_found(e) from e


@router.put("/{expense_id}", response_model=ExpenseResponse)
def update_expense(
    expense_id: int,
    expense_data: ExpenseUpdate,
    current_user_id: Annotated[int, Depends(get_current_user_id)],
    expense_service: Annotated[ExpenseService, Depends(get_expense_service)],
):
    """Update an expense."""
    try:
        return expense_service.update_expense(expense_id, current_user_id, expense_data)
    except ExpenseNotFoundError as e:
        raise not_found(e) from e


@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_expense(
    expense_id: int,
    current_user_id: Annotated[int, Depends(get_current_user_id)],
    expense_service: Annotated[ExpenseService, Depends(get_expense_service)],
):
    """Delete an expense."""
    try:
        expense_service.delete_expense(expense_id, current_user_id)
    except ExpenseNotFoundError as e:
        raise not_found(e) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)
