from datetime import date as date_type
from decimal import Decimal

from budget_manager.database.transaction_dao import ExpenseDAO, IncomeDAO, TransactionDAO
from budget_manager.models.summary import Summary
from budget_manager.services.errors import ValidationError
from budget_manager.services.transaction_filter import TransactionFilter
from budget_manager.services.transaction_service import TransactionService
from budget_manager.utils.constants import (
    ALL_TIME_END, ALL_TIME_START, KIND_EXPENSE, KIND_INCOME, MAX_TREND_MONTHS, ZERO,
)
from budget_manager.utils.date_helpers import last_n_months, month_range, require_date


class ReportService:
    def __init__(
        self,
        expense_dao: ExpenseDAO,
        income_dao: IncomeDAO,
        tx_service: TransactionService,
    ):
        self._daos: dict[str, TransactionDAO] = {
            KIND_EXPENSE: expense_dao,
            KIND_INCOME: income_dao,
        }
        self._tx_svc = tx_service

    def get_total(
        self,
        kind: str,
        start: str | None = None,
        end: str | None = None,
        category_id: int | None = None,
    ) -> Decimal:
        start, end = self._range(start, end)
        return self._dao(kind).get_total(start, end, category_id)

    def get_totals_by_category(
        self, kind: str, start: str | None = None, end: str | None = None
    ) -> dict[str, Decimal]:
        """{category name: total} for positive totals, largest first."""
        start, end = self._range(start, end)
        rows = self._dao(kind).get_totals_by_category(start, end)
        return {r["category"]: r["total"] for r in rows}

    def get_category_breakdown(
        self, start: str | None = None, end: str | None = None
    ) -> list[dict]:
        """Return [{category, color_hex, total}, ...] of expenses for pie chart."""
        start, end = self._range(start, end)
        return self._daos[KIND_EXPENSE].get_totals_by_category(start, end)

    def get_chart_data(self, start: str | None = None, end: str | None = None) -> dict:
        totals = self.get_totals_by_category(KIND_EXPENSE, start, end)
        return {
            "labels": list(totals.keys()),
            "values": [float(v) for v in totals.values()],
        }

    def get_summary(self, start: str | None = None, end: str | None = None) -> Summary:
        start, end = self._range(start, end)
        return Summary(
            total_income=self._daos[KIND_INCOME].get_total(start, end),
            total_expenses=self._daos[KIND_EXPENSE].get_total(start, end),
        )

    def get_monthly_trend(self, months: int = 6, today: date_type | None = None) -> list[dict]:
        """Return [{month, income, expense, net}] for the last N months, oldest first."""
        if not 1 <= months <= MAX_TREND_MONTHS:
            raise ValidationError(f"Months must be between 1 and {MAX_TREND_MONTHS}.")
        month_keys = last_n_months(months, today)
        start = month_range(month_keys[0])[0]
        end = month_range(month_keys[-1])[1]
        income = self._daos[KIND_INCOME].get_monthly_totals(start, end)
        expense = self._daos[KIND_EXPENSE].get_monthly_totals(start, end)
        rows = []
        for m in month_keys:
            inc = income.get(m, ZERO)
            exp = expense.get(m, ZERO)
            rows.append({"month": m, "income": inc, "expense": exp, "net": inc - exp})
        return rows

    def export_csv(self, tx_filter: TransactionFilter | None = None) -> list[list[str]]:
        """Return rows suitable for CSV export."""
        transactions = self._tx_svc.search(tx_filter or TransactionFilter())
        header = ["Date", "Type", "Category", "Description", "Amount"]
        rows = [header]
        for tx in transactions:
            rows.append([
                tx.date,
                tx.kind,
                tx.category_name,
                tx.description,
                f"{tx.amount:.2f}",
            ])
        return rows

    # ── Helpers ──────────────────────────────────────────────────────────────

    def _dao(self, kind: str) -> TransactionDAO:
        try:
            return self._daos[kind]
        except KeyError:
            raise ValidationError(f"Invalid transaction type: {kind!r}.") from None

    @staticmethod
    def _range(start: str | None, end: str | None) -> tuple[str, str]:
        start = require_date(start, "start date") if start else ALL_TIME_START
        end = require_date(end, "end date") if end else ALL_TIME_END
        if start > end:
            raise ValidationError("Start date must not be after end date.")
        return start, end
