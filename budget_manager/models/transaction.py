from dataclasses import dataclass
from decimal import Decimal


@dataclass
class Transaction:
    """An Expense or Income row; kind tells which table it came from."""
    id: int
    kind: str               # 'expense' | 'income'
    category_id: int
    category_name: str
    amount: Decimal
    description: str
    date: str               # 'YYYY-MM-DD'
    created_at: str = ""
    color_hex: str = "#3498db"

    @property
    def signed_amount(self) -> Decimal:
        return self.amount if self.kind == "income" else -self.amount

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.kind,
            "categoryId": self.category_id,
            "category": self.category_name,
            "amount": float(self.amount),
            "description": self.description,
            "date": self.date,
            "createdAt": self.created_at,
        }
