import logging
from typing import Optional

from budget_manager.database.db_manager import DatabaseManager
from budget_manager.models.category import Category

logger = logging.getLogger(__name__)


class CategoryDAO:
    def __init__(self, db: DatabaseManager):
        self._db = db
        self._all_cache: list | None = None

    def _invalidate_cache(self):
        self._all_cache = None

    def _row_to_model(self, row) -> Category:
        return Category(
            id=row["id"],
            name=row["name"],
            kind=row["kind"],
            color_hex=row["color_hex"],
            created_at=row["created_at"],
        )

    def get_all(self) -> list[Category]:
        if self._all_cache is None:
            conn = self._db.get_connection()
            rows = conn.execute(
                "SELECT * FROM categories ORDER BY kind, name"
            ).fetchall()
            self._all_cache = [self._row_to_model(r) for r in rows]
        return list(self._all_cache)

    def get_by_id(self, category_id: int) -> Optional[Category]:
        conn = self._db.get_connection()
        row = conn.execute(
            "SELECT * FROM categories WHERE id = ?", (category_id,)
        ).fetchone()
        return self._row_to_model(row) if row else None

    def get_by_name(self, name: str) -> Optional[Category]:
        """Case-insensitive lookup."""
        conn = self._db.get_connection()
        row = conn.execute(
            "SELECT * FROM categories WHERE name = ? COLLATE NOCASE", (name,)
        ).fetchone()
        return self._row_to_model(row) if row else None

    def get_by_kind(self, kind: str) -> list[Category]:
        """kind: 'expense' or 'income'."""
        conn = self._db.get_connection()
        rows = conn.execute(
            "SELECT * FROM categories WHERE kind = ? ORDER BY name",
            (kind,),
        ).fetchall()
        return [self._row_to_model(r) for r in rows]

    def is_referenced(self, category_id: int) -> bool:
        """True when any expense, income or budget row points at the category."""
        conn = self._db.get_connection()
        row = conn.execute(
            """SELECT EXISTS(SELECT 1 FROM expenses WHERE category_id = ?)
                   OR EXISTS(SELECT 1 FROM income   WHERE category_id = ?)
                   OR EXISTS(SELECT 1 FROM budgets  WHERE category_id = ?) AS used""",
            (category_id, category_id, category_id),
        ).fetchone()
        return bool(row["used"])

    def create(self, name: str, kind: str, color_hex: str = "#3498db") -> Category:
        with self._db.write() as conn:
            cursor = conn.execute(
                "INSERT INTO categories(name, kind, color_hex) VALUES (?, ?, ?)",
                (name, kind, color_hex),
            )
        self._invalidate_cache()
        logger.info("Created %s category %r (id=%s)", kind, name, cursor.lastrowid)
        return self.get_by_id(cursor.lastrowid)

    def update(self, category_id: int, name: str, kind: str, color_hex: str) -> Optional[Category]:
        with self._db.write() as conn:
            conn.execute(
                "UPDATE categories SET name=?, kind=?, color_hex=? WHERE id=?",
                (name, kind, color_hex, category_id),
            )
        self._invalidate_cache()
        return self.get_by_id(category_id)

    def delete(self, category_id: int) -> bool:
        with self._db.write() as conn:
            cursor = conn.execute("DELETE FROM categories WHERE id = ?", (category_id,))
        self._invalidate_cache()
        if cursor.rowcount:
            logger.info("Deleted category id=%s (dependents cascaded)", category_id)
        return cursor.rowcount > 0
