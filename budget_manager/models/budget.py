from dataclasses import dataclass
from decimal import Decimal

from budget_manager.utils.constants import (
    NEAR_LIMIT_PERCENT, OVER_BUDGET_PERCENT,
    STATUS_ON_TRACK, STATUS_NEAR_LIMIT, STATUS_OVER_BUDGET,
)

_HUNDRED = Decimal("100")


def status_for_percentage(percentage: Decimal) -> str:
    if percentage >= OVER_BUDGET_PERCENT:
        return STATUS_OVER_BUDGET
    if percentage >= NEAR_LIMIT_PERCENT:
        return STATUS_NEAR_LIMIT
    return STATUS_ON_TRACK


@dataclass
class Budget:
    id: int
    category_id: int
    category_name: str
    amount: Decimal
    period: str         # 'weekly' | 'monthly' | 'yearly'
    start_date: str     # 'YYYY-MM-DD'
    end_date: str       # 'YYYY-MM-DD', derived from start_date + period
    spent_amount: Decimal = Decimal("0.00")
    color_hex: str = "#3498db"
    created_at: str = ""

    @property
    def percentage(self) -> Decimal:
        """Spent as a percentage of the budget amount (unclamped)."""
        if self.amount <= 0:
            return Decimal("0")
        return self.spent_amount / self.amount * _HUNDRED

    @property
    def remaining(self) -> Decimal:
        return self.amount - self.spent_amount

    @property
    def status(self) -> str:
        return status_for_percentage(self.percentage)

    @property
    def progress(self) -> Decimal:
        """Percentage clamped to 100 for progress bars."""
        return min(_HUNDRED, self.percentage)

    def is_active(self, on: str) -> bool:
        return self.start_date <= on <= self.end_date

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "categoryId": self.category_id,
            "category": self.category_name,
            "amount": float(self.amount),
            "period": self.period,
            "startDate": self.start_date,
            "endDate": self.end_date,
            "spent": float(self.spent_amount),
            "remaining": float(self.remaining),
            "percentage": round(float(self.percentage), 1),
            "status": self.status,
        }
