from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP


@dataclass
class Summary:
    total_income: Decimal
    total_expenses: Decimal

    @property
    def net_balance(self) -> Decimal:
        return self.total_income - self.total_expenses

    @property
    def savings_rate(self) -> Decimal:
        """Net as a percentage of income; 0 when there is no income."""
        if self.total_income <= 0:
            return Decimal("0")
        return self.net_balance / self.total_income * Decimal("100")

    def to_dict(self) -> dict:
        cents = Decimal("0.01")
        return {
            "totalIncome": float(self.total_income.quantize(cents, ROUND_HALF_UP)),
            "totalExpenses": float(self.total_expenses.quantize(cents, ROUND_HALF_UP)),
            "netBalance": float(self.net_balance.quantize(cents, ROUND_HALF_UP)),
            "savingsRate": float(self.savings_rate.quantize(Decimal("0.1"), ROUND_HALF_UP)),
        }
