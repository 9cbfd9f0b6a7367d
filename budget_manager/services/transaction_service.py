from budget_manager.database.category_dao import CategoryDAO
from budget_manager.database.transaction_dao import ExpenseDAO, IncomeDAO, TransactionDAO
from budget_manager.models.transaction import Transaction
from budget_manager.services.errors import ValidationError
from budget_manager.services.transaction_filter import TransactionFilter
from budget_manager.utils.constants import KIND_EXPENSE, KIND_INCOME
from budget_manager.utils.currency import parse_amount
from budget_manager.utils.date_helpers import require_date


class TransactionService:
    def __init__(
        self,
        expense_dao: ExpenseDAO,
        income_dao: IncomeDAO,
        category_dao: CategoryDAO,
    ):
        self._daos: dict[str, TransactionDAO] = {
            KIND_EXPENSE: expense_dao,
            KIND_INCOME: income_dao,
        }
        self._category_dao = category_dao

    def get_all(self, kind: str | None = None) -> list[Transaction]:
        """Expenses and/or income, newest first."""
        if kind:
            return self._dao(kind).get_all()
        combined = self._daos[KIND_EXPENSE].get_all() + self._daos[KIND_INCOME].get_all()
        combined.sort(key=lambda tx: tx.date, reverse=True)
        return combined

    def get_by_id(self, kind: str, tx_id: int) -> Transaction | None:
        return self._dao(kind).get_by_id(tx_id)

    def get_recent(self, limit: int = 10) -> list[Transaction]:
        combined = (
            self._daos[KIND_EXPENSE].get_recent(limit)
            + self._daos[KIND_INCOME].get_recent(limit)
        )
        combined.sort(key=lambda tx: (tx.date, tx.created_at), reverse=True)
        return combined[:limit]

    def search(self, tx_filter: TransactionFilter) -> list[Transaction]:
        return tx_filter.apply(self.get_all(tx_filter.kind or None))

    def create(
        self,
        kind: str,
        category_id,
        amount,
        date,
        description: str,
    ) -> Transaction:
        dao = self._dao(kind)
        category_id, amount, date, description = self._validate(
            kind, category_id, amount, date, description
        )
        return dao.create(category_id, amount, date, description)

    def update(
        self,
        kind: str,
        tx_id: int,
        category_id,
        amount,
        date,
        description: str,
    ) -> Transaction:
        dao = self._dao(kind)
        if dao.get_by_id(tx_id) is None:
            raise ValidationError(f"{kind.title()} {tx_id} does not exist.")
        category_id, amount, date, description = self._validate(
            kind, category_id, amount, date, description
        )
        return dao.update(tx_id, category_id, amount, date, description)

    def delete(self, kind: str, tx_id: int) -> bool:
        return self._dao(kind).delete(tx_id)

    # ── Helpers ──────────────────────────────────────────────────────────────

    def _dao(self, kind: str) -> TransactionDAO:
        try:
            return self._daos[kind]
        except KeyError:
            raise ValidationError(f"Invalid transaction type: {kind!r}.") from None

    def _validate(self, kind: str, category_id, amount, date, description):
        amount = parse_amount(amount)
        date = require_date(date)
        if description is not None and not isinstance(description, str):
            raise ValidationError("Description must be text.")
        description = (description or "").strip()
        if not description:
            raise ValidationError("Description cannot be empty.")
        try:
            category_id = int(category_id)
        except (TypeError, ValueError):
            raise ValidationError("Please select a category.") from None
        category = self._category_dao.get_by_id(category_id)
        if category is None:
            raise ValidationError(f"Category {category_id} does not exist.")
        if category.kind != kind:
            raise ValidationError(
                f"Category '{category.name}' is an {category.kind} category "
                f"and cannot be used for {kind}."
            )
        return category_id, amount, date, description
