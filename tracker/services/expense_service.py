"""Owner-scoped expense storage and listing."""

import logging
import math
from datetime import date

from sqlalchemy.orm import Session

from tracker.exceptions import ExpenseNotFoundError, ValidationFailureError
from tracker.models.enums import Category
from tracker.models.expense import Expense
from tracker.models.mixins import utc_now
from tracker.schemas.common import PagedResponse
from tracker.schemas.expense import ExpenseCreate, ExpenseResponse, ExpenseUpdate

logger = logging.getLogger(__name__)

# Client-facing sort keys mapped to columns
SORT_FIELDS = {
    "id": Expense.id,
    "description": Expense.description,
    "amount": Expense.amount,
    "date": Expense.date,
    "category": Expense.category,
    "createdAt": Expense.created_at,
    "updatedAt": Expense.updated_at,
}


class ExpenseService:
    """Service for expense CRUD. Every call is scoped to one owner."""

    def __init__(self, db: Session):
        self.db = db

    def _get_owned(self, expense_id: int, user_id: int) -> Expense:
        expense = (
            self.db.query(Expense)
            .filter(Expense.id == expense_id, Expense.user_id == user_id)
            .first()
        )
        if expense is None:
            raise ExpenseNotFoundError(expense_id)
        return expense

    def create_expense(self, user_id: int, data: ExpenseCreate) -> ExpenseResponse:
        """Create an expense owned by user_id."""
        expense = Expense(
            user_id=user_id,
            description=data.description,
            amount=data.amount,
            date=data.date,
            category=data.category,
        )
        expense.touch()
        self.db.add(expense)
        self.db.commit()
        self.db.refresh(expense)
        logger.info(f"User {user_id} created expense {expense.id}")
        return ExpenseResponse.model_validate(expense)

    def get_expense(self, expense_id: int, user_id: int) -> ExpenseResponse:
        """Get one of the user's expenses."""
        return ExpenseResponse.model_validate(self._get_owned(expense_id, user_id))

    def update_expense(self, expense_id: int, user_id: int, data: ExpenseUpdate) -> ExpenseResponse:
        """Replace description, amount, date and category. Id, owner and created_at are kept."""
        expense = self._get_owned(expense_id, user_id)
        expense.description = data.description
        expense.amount = data.amount
        expense.date = data.date
        expense.category = data.category
        expense.touch()
        self.db.commit()
        self.db.refresh(expense)
        logger.info(f"User {user_id} updated expense {expense.id}")
        return ExpenseResponse.model_validate(expense)

    def delete_expense(self, expense_id: int, user_id: int) -> None:
        """Delete one of the user's expenses."""
        expense = self._get_owned(expense_id, user_id)
        self.db.delete(expense)
        self.db.commit()
        logger.info(f"User {user_id} deleted expense {expense_id}")

    def list_expenses(
        self,
        user_id: int,
        page: int = 0,
        size: int = 10,
        sort_by: str = "date",
        sort_dir: str = "desc",
        category: Category | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> PagedResponse[ExpenseResponse]:
        """List the user's expenses one page at a time.

        Args:
            page: Zero-based page index.
            size: Page size.
            sort_by: One of SORT_FIELDS.
            sort_dir: "asc" or "desc" (case-insensitive).
            category: Only this category when given.
            start_date: Inclusive lower bound on date when given.
            end_date: Inclusive upper bound on date when given.

        Raises:
            ValidationFailureError: Bad paging, sort or date-range arguments.
        """
        if page < 0:
            raise ValidationFailureError("Page index must not be negative")
        if size < 1:
            raise ValidationFailureError("Page size must be at least 1")
        column = SORT_FIELDS.get(sort_by)
        if column is None:
            raise ValidationFailureError(
                f"Cannot sort by '{sort_by}', expected one of {', '.join(SORT_FIELDS)}"
            )
        direction = sort_dir.lower()
        if direction not in ("asc", "desc"):
            raise ValidationFailureError("Sort direction must be 'asc' or 'desc'")
        if start_date and end_date and start_date > end_date:
            raise ValidationFailureError("startDate must not be after endDate")

        query = self.db.query(Expense).filter(Expense.user_id == user_id)
        if category is not None:
            query = query.filter(Expense.category == category)
        if start_date is not None:
            query = query.filter(Expense.date >= start_date)
        if end_date is not None:
            query = query.filter(Expense.date <= end_date)

        total_elements = query.count()
        order = column.desc() if direction == "desc" else column.asc()
        tiebreak = Expense.id.desc() if direction == "desc" else Expense.id.asc()
        rows = query.order_by(order, tiebreak).offset(page * size).limit(size).all()

        total_pages = math.ceil(total_elements / size)
        return PagedResponse[ExpenseResponse](
            content=[ExpenseResponse.model_validate(row) for row in rows],
            current_page=page,
            total_pages=total_pages,
            total_elements=total_elements,
            size=size,
            first=page == 0,
            last=page + 1 >= total_pages,
        )
