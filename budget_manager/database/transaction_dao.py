import logging
from decimal import Decimal
from typing import Optional

from budget_manager.database.db_manager import DatabaseManager
from budget_manager.models.transaction import Transaction
from budget_manager.utils.constants import KIND_EXPENSE, KIND_INCOME
from budget_manager.utils.currency import from_cents, to_cents

logger = logging.getLogger(__name__)


class TransactionDAO:
    """Shared CRUD and aggregates for the expenses and income tables.

    Subclasses only pick the table; both tables have the same columns.
    """

    TABLE = ""
    KIND = ""

    def __init__(self, db: DatabaseManager):
        self._db = db

    def _row_to_model(self, row) -> Transaction:
        return Transaction(
            id=row["id"],
            kind=self.KIND,
            category_id=row["category_id"],
            category_name=row["category_name"] if "category_name" in row.keys() else "",
            amount=from_cents(row["amount_cents"]),
            description=row["description"],
            date=row["date"],
            created_at=row["created_at"],
            color_hex=row["color_hex"] if "color_hex" in row.keys() else "#3498db",
        )

    def _select(self) -> str:
        return f"""
            SELECT t.*, c.name AS category_name, c.color_hex
            FROM {self.TABLE} t
            JOIN categories c ON t.category_id = c.id
        """

    def get_all(self) -> list[Transaction]:
        conn = self._db.get_connection()
        rows = conn.execute(
            self._select() + " ORDER BY t.date DESC, t.id DESC"
        ).fetchall()
        return [self._row_to_model(r) for r in rows]

    def get_by_id(self, tx_id: int) -> Optional[Transaction]:
        conn = self._db.get_connection()
        row = conn.execute(
            self._select() + " WHERE t.id = ?", (tx_id,)
        ).fetchone()
        return self._row_to_model(row) if row else None

    def get_recent(self, limit: int = 10) -> list[Transaction]:
        conn = self._db.get_connection()
        rows = conn.execute(
            self._select() + " ORDER BY t.date DESC, t.id DESC LIMIT ?", (limit,)
        ).fetchall()
        return [self._row_to_model(r) for r in rows]

    def get_total(self, start: str, end: str, category_id: int | None = None) -> Decimal:
        """Sum over [start, end] inclusive; 0.00 when nothing matches."""
        conn = self._db.get_connection()
        sql = f"SELECT COALESCE(SUM(amount_cents), 0) AS total FROM {self.TABLE} WHERE date BETWEEN ? AND ?"
        params: list = [start, end]
        if category_id is not None:
            sql += " AND category_id = ?"
            params.append(category_id)
        row = conn.execute(sql, params).fetchone()
        return from_cents(row["total"])

    def get_totals_by_category(self, start: str, end: str) -> list[dict]:
        """[{category_id, category, color_hex, total}] with positive totals, largest first."""
        conn = self._db.get_connection()
        rows = conn.execute(
            f"""SELECT c.id AS category_id, c.name AS category, c.color_hex,
                       SUM(t.amount_cents) AS total
                FROM {self.TABLE} t
                JOIN categories c ON t.category_id = c.id
                WHERE t.date BETWEEN ? AND ?
                GROUP BY c.id, c.name, c.color_hex
                HAVING SUM(t.amount_cents) > 0
                ORDER BY total DESC, c.name ASC""",
            (start, end),
        ).fetchall()
        return [
            {
                "category_id": r["category_id"],
                "category": r["category"],
                "color_hex": r["color_hex"],
                "total": from_cents(r["total"]),
            }
            for r in rows
        ]

    def get_monthly_totals(self, start: str, end: str) -> dict[str, Decimal]:
        """{'YYYY-MM': total} for months in [start, end] that have rows."""
        conn = self._db.get_connection()
        rows = conn.execute(
            f"""SELECT strftime('%Y-%m', date) AS month, SUM(amount_cents) AS total
                FROM {self.TABLE}
                WHERE date BETWEEN ? AND ?
                GROUP BY month""",
            (start, end),
        ).fetchall()
        return {r["month"]: from_cents(r["total"]) for r in rows}

    def create(
        self,
        category_id: int,
        amount: Decimal,
        date: str,
        description: str,
    ) -> Transaction:
        with self._db.write() as conn:
            cursor = conn.execute(
                f"""INSERT INTO {self.TABLE} (category_id, amount_cents, description, date)
                    VALUES (?, ?, ?, ?)""",
                (category_id, to_cents(amount), description, date),
            )
        logger.info("Created %s id=%s amount=%s", self.KIND, cursor.lastrowid, amount)
        return self.get_by_id(cursor.lastrowid)

    def update(
        self,
        tx_id: int,
        category_id: int,
        amount: Decimal,
        date: str,
        description: str,
    ) -> Optional[Transaction]:
        with self._db.write() as conn:
            conn.execute(
                f"""UPDATE {self.TABLE}
                    SET category_id=?, amount_cents=?, description=?, date=?
                    WHERE id=?""",
                (category_id, to_cents(amount), description, date, tx_id),
            )
        logger.debug("Updated %s id=%s", self.KIND, tx_id)
        return self.get_by_id(tx_id)

    def delete(self, tx_id: int) -> bool:
        with self._db.write() as conn:
            cursor = conn.execute(f"DELETE FROM {self.TABLE} WHERE id = ?", (tx_id,))
        if cursor.rowcount:
            logger.info("Deleted %s id=%s", self.KIND, tx_id)
        return cursor.rowcount > 0


class ExpenseDAO(TransactionDAO):
    TABLE = "expenses"
    KIND = KIND_EXPENSE


class IncomeDAO(TransactionDAO):
    TABLE = "income"
    KIND = KIND_INCOME
