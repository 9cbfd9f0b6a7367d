from datetime import date as date_type

from budget_manager.database.budget_dao import BudgetDAO
from budget_manager.database.category_dao import CategoryDAO
from budget_manager.database.transaction_dao import ExpenseDAO
from budget_manager.models.budget import Budget
from budget_manager.models.category import Category
from budget_manager.services.errors import ValidationError
from budget_manager.utils.constants import BUDGET_PERIODS, KIND_EXPENSE
from budget_manager.utils.currency import parse_amount
from budget_manager.utils.date_helpers import (
    format_date, parse_date, period_end_date, require_date, today,
)


class BudgetService:
    def __init__(
        self,
        budget_dao: BudgetDAO,
        expense_dao: ExpenseDAO,
        category_dao: CategoryDAO,
    ):
        self._budget_dao = budget_dao
        self._expense_dao = expense_dao
        self._category_dao = category_dao

    def get_budget_status(self) -> list[Budget]:
        """Return all budgets with spent amounts filled in."""
        return [self._with_spent(b) for b in self._budget_dao.get_all()]

    def get_active_budget_status(self, on: date_type | None = None) -> list[Budget]:
        """Budgets whose window contains `on` (default today), with spent filled in."""
        day = format_date(on or today())
        return [self._with_spent(b) for b in self._budget_dao.get_active(day)]

    def get_by_id(self, budget_id: int) -> Budget | None:
        budget = self._budget_dao.get_by_id(budget_id)
        return self._with_spent(budget) if budget else None

    def create(self, category_id, amount, period: str, start_date) -> Budget:
        category_id, amount, period, start, end = self._validate(
            category_id, amount, period, start_date
        )
        return self._with_spent(
            self._budget_dao.create(category_id, amount, period, start, end)
        )

    def update(self, budget_id: int, category_id, amount, period: str, start_date) -> Budget:
        if self._budget_dao.get_by_id(budget_id) is None:
            raise ValidationError(f"Budget {budget_id} does not exist.")
        category_id, amount, period, start, end = self._validate(
            category_id, amount, period, start_date
        )
        return self._with_spent(
            self._budget_dao.update(budget_id, category_id, amount, period, start, end)
        )

    def delete(self, budget_id: int) -> bool:
        return self._budget_dao.delete(budget_id)

    def get_expense_categories(self) -> list[Category]:
        """Return categories valid for budgeting."""
        return self._category_dao.get_by_kind(KIND_EXPENSE)

    # ── Helpers ──────────────────────────────────────────────────────────────

    def _with_spent(self, budget: Budget) -> Budget:
        budget.spent_amount = self._expense_dao.get_total(
            budget.start_date, budget.end_date, budget.category_id
        )
        return budget

    def _validate(self, category_id, amount, period: str, start_date):
        amount = parse_amount(amount)
        if period is not None and not isinstance(period, str):
            raise ValidationError(f"Invalid period {period!r}.")
        period = (period or "").strip().lower()
        if period not in BUDGET_PERIODS:
            raise ValidationError(
                f"Invalid period '{period}'. Must be one of: {', '.join(BUDGET_PERIODS)}."
            )
        start = require_date(start_date, "start date")
        end = format_date(period_end_date(parse_date(start), period))
        try:
            category_id = int(category_id)
        except (TypeError, ValueError):
            raise ValidationError("Please select a category.") from None
        category = self._category_dao.get_by_id(category_id)
        if category is None:
            raise ValidationError(f"Category {category_id} does not exist.")
        if category.kind != KIND_EXPENSE:
            raise ValidationError(
                f"Budgets need an expense category; '{category.name}' is {category.kind}."
            )
        return category_id, amount, period, start, end
