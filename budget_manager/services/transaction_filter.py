"""In-memory filtering of the combined expense + income list."""
from dataclasses import dataclass
from typing import Iterable

from budget_manager.models.transaction import Transaction
from budget_manager.services.errors import ValidationError
from budget_manager.utils.constants import CATEGORY_KINDS
from budget_manager.utils.date_helpers import require_date


@dataclass
class TransactionFilter:
    """Every field left empty means "no constraint" for that dimension."""
    search: str = ""
    category_id: int | None = None
    date_from: str = ""
    date_to: str = ""
    kind: str = ""      # 'expense' | 'income' | '' for both

    @classmethod
    def from_params(cls, params) -> "TransactionFilter":
        """Build from raw string parameters (query string or form fields)."""
        category = (params.get("category") or "").strip()
        if category:
            try:
                category_id = int(category)
            except ValueError:
                raise ValidationError(f"Invalid category id: {category!r}.") from None
        else:
            category_id = None

        kind = (params.get("type") or "").strip().lower()
        if kind in ("all", "both"):
            kind = ""
        if kind and kind not in CATEGORY_KINDS:
            raise ValidationError(f"Invalid transaction type: {kind!r}.")

        date_from = (params.get("dateFrom") or "").strip()
        date_to = (params.get("dateTo") or "").strip()
        return cls(
            search=(params.get("search") or "").strip(),
            category_id=category_id,
            date_from=require_date(date_from, "start date") if date_from else "",
            date_to=require_date(date_to, "end date") if date_to else "",
            kind=kind,
        )

    def matches(self, tx: Transaction) -> bool:
        if self.kind and tx.kind != self.kind:
            return False
        if self.search and self.search.lower() not in (tx.description or "").lower():
            return False
        if self.category_id is not None and tx.category_id != self.category_id:
            return False
        if self.date_from and tx.date < self.date_from:
            return False
        if self.date_to and tx.date > self.date_to:
            return False
        return True

    def apply(self, transactions: Iterable[Transaction]) -> list[Transaction]:
        """Matching transactions, newest date first; ties keep their input order."""
        matched = [tx for tx in transactions if self.matches(tx)]
        matched.sort(key=lambda tx: tx.date, reverse=True)
        return matched
