import logging
import os
import sqlite3
from contextlib import contextmanager
from typing import Iterator

from budget_manager.services.errors import StorageError
from budget_manager.utils.constants import DB_FILE, DEFAULT_CATEGORIES, DEFAULT_SETTINGS

logger = logging.getLogger(__name__)


class DatabaseManager:
    def __init__(self, db_path: str | None = None):
        self.db_path = db_path or DB_FILE
        self._conn: sqlite3.Connection | None = None

    def get_connection(self) -> sqlite3.Connection:
        if self._conn is None:
            folder = os.path.dirname(self.db_path)
            if folder:
                os.makedirs(folder, exist_ok=True)
            try:
                self._conn = sqlite3.connect(self.db_path, check_same_thread=False)
            except sqlite3.Error as e:
                logger.exception("Could not open database %s", self.db_path)
                raise StorageError(f"Could not open database: {e}") from e
            self._conn.row_factory = sqlite3.Row
            self._conn.execute("PRAGMA foreign_keys = ON")
            self._conn.execute("PRAGMA journal_mode = WAL")
            logger.info("Opened database %s", self.db_path)
        return self._conn

    @contextmanager
    def write(self) -> Iterator[sqlite3.Connection]:
        """Run a block of writes atomically: commit on success, roll back on error.

        sqlite3 failures surface as StorageError; anything else is re-raised as-is.
        """
        conn = self.get_connection()
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            logger.exception("Database write failed")
            raise StorageError(str(e)) from e
        except Exception:
            conn.rollback()
            raise

    def initialize(self):
        """Create schema and seed defaults."""
        with self.write() as conn:
            self._create_schema(conn)
            self._seed_defaults(conn)

    def _create_schema(self, conn: sqlite3.Connection):
        conn.executescript("""
            CREATE TABLE IF NOT EXISTS categories (
                id          INTEGER PRIMARY KEY AUTOINCREMENT,
                name        TEXT NOT NULL UNIQUE,
                kind        TEXT NOT NULL CHECK(kind IN ('expense','income')),
                color_hex   TEXT NOT NULL DEFAULT '#3498db',
                created_at  TEXT NOT NULL DEFAULT (datetime('now'))
            );

            CREATE TABLE IF NOT EXISTS expenses (
                id            INTEGER PRIMARY KEY AUTOINCREMENT,
                category_id   INTEGER NOT NULL REFERENCES categories(id) ON DELETE CASCADE,
                amount_cents  INTEGER NOT NULL CHECK(amount_cents > 0),
                description   TEXT NOT NULL,
                date          TEXT NOT NULL,
                created_at    TEXT NOT NULL DEFAULT (datetime('now'))
            );

            CREATE TABLE IF NOT EXISTS income (
                id            INTEGER PRIMARY KEY AUTOINCREMENT,
                category_id   INTEGER NOT NULL REFERENCES categories(id) ON DELETE CASCADE,
                amount_cents  INTEGER NOT NULL CHECK(amount_cents > 0),
                description   TEXT NOT NULL,
                date          TEXT NOT NULL,
                created_at    TEXT NOT NULL DEFAULT (datetime('now'))
            );

            CREATE TABLE IF NOT EXISTS budgets (
                id            INTEGER PRIMARY KEY AUTOINCREMENT,
                category_id   INTEGER NOT NULL REFERENCES categories(id) ON DELETE CASCADE,
                amount_cents  INTEGER NOT NULL CHECK(amount_cents > 0),
                period        TEXT NOT NULL CHECK(period IN ('weekly','monthly','yearly')),
                start_date    TEXT NOT NULL,
                end_date      TEXT NOT NULL,
                created_at    TEXT NOT NULL DEFAULT (datetime('now'))
            );

            CREATE TABLE IF NOT EXISTS app_settings (
                key   TEXT PRIMARY KEY,
                value TEXT NOT NULL
            );

            CREATE INDEX IF NOT EXISTS idx_expenses_date        ON expenses(date);
            CREATE INDEX IF NOT EXISTS idx_expenses_category_id ON expenses(category_id);
            CREATE INDEX IF NOT EXISTS idx_income_date          ON income(date);
            CREATE INDEX IF NOT EXISTS idx_income_category_id   ON income(category_id);
            CREATE INDEX IF NOT EXISTS idx_budgets_category_id  ON budgets(category_id);
        """)

    def _seed_defaults(self, conn: sqlite3.Connection):
        for key, value in DEFAULT_SETTINGS:
            conn.execute(
                "INSERT OR IGNORE INTO app_settings(key, value) VALUES (?, ?)",
                (key, value),
            )

        for cat in DEFAULT_CATEGORIES:
            conn.execute(
                """INSERT OR IGNORE INTO categories(name, kind, color_hex)
                   VALUES (?, ?, ?)""",
                (cat["name"], cat["kind"], cat["color_hex"]),
            )

    def get_setting(self, key: str, default: str = "") -> str:
        conn = self.get_connection()
        row = conn.execute(
            "SELECT value FROM app_settings WHERE key = ?", (key,)
        ).fetchone()
        return row["value"] if row else default

    def set_setting(self, key: str, value: str):
        with self.write() as conn:
            conn.execute(
                "INSERT OR REPLACE INTO app_settings(key, value) VALUES (?, ?)",
                (key, value),
            )

    def close(self):
        if self._conn:
            self._conn.close()
            self._conn = None
