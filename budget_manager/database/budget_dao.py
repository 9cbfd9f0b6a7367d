import logging
from decimal import Decimal
from typing import Optional

from budget_manager.database.db_manager import DatabaseManager
from budget_manager.models.budget import Budget
from budget_manager.utils.currency import from_cents, to_cents

logger = logging.getLogger(__name__)


class BudgetDAO:
    def __init__(self, db: DatabaseManager):
        self._db = db

    def _row_to_model(self, row) -> Budget:
        return Budget(
            id=row["id"],
            category_id=row["category_id"],
            category_name=row["category_name"],
            amount=from_cents(row["amount_cents"]),
            period=row["period"],
            start_date=row["start_date"],
            end_date=row["end_date"],
            color_hex=row["color_hex"],
            created_at=row["created_at"],
        )

    def _select(self) -> str:
        return """
            SELECT b.*, c.name AS category_name, c.color_hex
            FROM budgets b
            JOIN categories c ON b.category_id = c.id
        """

    def get_all(self) -> list[Budget]:
        conn = self._db.get_connection()
        rows = conn.execute(
            self._select() + " ORDER BY b.start_date DESC, c.name"
        ).fetchall()
        return [self._row_to_model(r) for r in rows]

    def get_active(self, on: str) -> list[Budget]:
        """Budgets whose [start_date, end_date] window contains the given day."""
        conn = self._db.get_connection()
        rows = conn.execute(
            self._select() + """
            WHERE ? BETWEEN b.start_date AND b.end_date
            ORDER BY b.start_date DESC, c.name""",
            (on,),
        ).fetchall()
        return [self._row_to_model(r) for r in rows]

    def get_by_id(self, budget_id: int) -> Optional[Budget]:
        conn = self._db.get_connection()
        row = conn.execute(
            self._select() + " WHERE b.id = ?", (budget_id,)
        ).fetchone()
        return self._row_to_model(row) if row else None

    def create(
        self,
        category_id: int,
        amount: Decimal,
        period: str,
        start_date: str,
        end_date: str,
    ) -> Budget:
        with self._db.write() as conn:
            cursor = conn.execute(
                """INSERT INTO budgets(category_id, amount_cents, period, start_date, end_date)
                   VALUES (?, ?, ?, ?, ?)""",
                (category_id, to_cents(amount), period, start_date, end_date),
            )
        logger.info(
            "Created %s budget id=%s for category %s (%s..%s)",
            period, cursor.lastrowid, category_id, start_date, end_date,
        )
        return self.get_by_id(cursor.lastrowid)

    def update(
        self,
        budget_id: int,
        category_id: int,
        amount: Decimal,
        period: str,
        start_date: str,
        end_date: str,
    ) -> Optional[Budget]:
        with self._db.write() as conn:
            conn.execute(
                """UPDATE budgets
                   SET category_id=?, amount_cents=?, period=?, start_date=?, end_date=?
                   WHERE id=?""",
                (category_id, to_cents(amount), period, start_date, end_date, budget_id),
            )
        return self.get_by_id(budget_id)

    def delete(self, budget_id: int) -> bool:
        with self._db.write() as conn:
            cursor = conn.execute("DELETE FROM budgets WHERE id = ?", (budget_id,))
        if cursor.rowcount:
            logger.info("Deleted budget id=%s", budget_id)
        return cursor.rowcount > 0
