"""
SQLite access for the curator planner.

Rows come back as plain dicts so agents and the dashboard never touch
sqlite3.Row directly.

Usage:
    db = get_database()          # $MUSEUM_PLANNER_DB, then settings.json
    rows = db.execute("SELECT * FROM tasks WHERE status = ?", ("pending",))
"""

import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import List, Dict, Any, Optional, Tuple

from .config import Config
from .schema import TABLE_NAMES


class SQLiteDatabase:
    """One SQLite file; every call opens and closes its own connection."""

    def __init__(self, db_path: Optional[Path] = None):
        if db_path is None:
            db_path = Config().get_database_path()

        self.db_path = Path(db_path)

        if not self.db_path.exists():
            raise FileNotFoundError(
                f"Database not found at {self.db_path}. "
                "Run 'python scripts/init_db.py' (or 'planner.py init-db') to create it."
            )

    @contextmanager
    def get_connection(self):
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        # Off by default in SQLite; task and budget rows cascade with projects
        conn.execute("PRAGMA foreign_keys = ON;")
        try:
            yield conn
        finally:
            conn.close()

    def execute(self, query: str, params: Tuple = ()) -> List[Dict[str, Any]]:
        """Run a SELECT and return every row."""
        with self.get_connection() as conn:
            return [dict(row) for row in conn.execute(query, params).fetchall()]

    def execute_one(self, query: str, params: Tuple = ()) -> Optional[Dict[str, Any]]:
        """Run a SELECT and return the first row, or None."""
        with self.get_connection() as conn:
            row = conn.execute(query, params).fetchone()
            return dict(row) if row else None

    def execute_write(self, query: str, params: Tuple = ()) -> int:
        """
        Run an INSERT, UPDATE or DELETE and commit.

        Returns:
            The new row id for INSERT, otherwise the number of affected rows
        """
        with self.get_connection() as conn:
            cursor = conn.execute(query, params)
            conn.commit()
            if query.lstrip().upper().startswith("INSERT"):
                return cursor.lastrowid
            return cursor.rowcount

    def execute_many(self, query: str, params_list: List[Tuple]) -> int:
        """Run one statement per parameter tuple in a single commit."""
        with self.get_connection() as conn:
            cursor = conn.executemany(query, params_list)
            conn.commit()
            return cursor.rowcount

    @contextmanager
    def transaction(self):
        """Yield a connection that commits on success and rolls back on error."""
        with self.get_connection() as conn:
            try:
                yield conn
                conn.commit()
            except Exception:
                conn.rollback()
                raise

    def table_exists(self, table_name: str) -> bool:
        row = self.execute_one(
            "SELECT name FROM sqlite_master WHERE type = 'table' AND name = ?",
            (table_name,)
        )
        return row is not None

    def missing_tables(self) -> List[str]:
        """Planner tables absent from this file (empty when the schema is complete)."""
        return [name for name in TABLE_NAMES if not self.table_exists(name)]

    def count(self, table_name: str, where_clause: str = "", params: Tuple = ()) -> int:
        if table_name not in TABLE_NAMES:
            raise ValueError(f"Unknown table: {table_name}")
        query = f"SELECT COUNT(*) AS count FROM {table_name}"
        if where_clause:
            query += f" WHERE {where_clause}"
        row = self.execute_one(query, params)
        return row["count"] if row else 0

    def row_to_dict(self, row: Any) -> Optional[Dict[str, Any]]:
        if row is None:
            return None
        return row if isinstance(row, dict) else dict(row)

    def rows_to_dicts(self, rows: List[Any]) -> List[Dict[str, Any]]:
        return [self.row_to_dict(row) for row in rows if row is not None]


Database = SQLiteDatabase


def get_database(config: Optional[Config] = None) -> SQLiteDatabase:
    """
    Open the planner database.

    $MUSEUM_PLANNER_DB wins over the configured database_path.
    """
    env_path = os.environ.get("MUSEUM_PLANNER_DB")
    if env_path:
        return SQLiteDatabase(Path(env_path))
    config = config or Config()
    return SQLiteDatabase(config.get_database_path())
