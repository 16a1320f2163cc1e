# Area: Registry
"""
scrimflow._registry.database — Player registry storage
======================================================

SQLite bootstrap plus the statement helpers every repository uses.
Each statement gets its own connection, so the poll loop and the
distribution worker never share one.
"""

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional

logger = logging.getLogger("scrimflow.registry.database")

SCHEMA_PATH = Path(__file__).parent / "schema.sql"

# Seconds to wait on a write lock held by another thread
BUSY_TIMEOUT_SECONDS = 5.0


def get_connection(db_path: str = "scrimflow.db") -> sqlite3.Connection:
    """Open ``db_path`` with rows readable by column name."""
    conn = sqlite3.connect(db_path, timeout=BUSY_TIMEOUT_SECONDS)
    conn.row_factory = sqlite3.Row
    return conn


def init_database(db_path: str = "scrimflow.db") -> None:
    """
    Create the registry tables if they do not exist yet.

    Args:
        db_path: Path to the SQLite database file
    """
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    schema = SCHEMA_PATH.read_text(encoding="utf-8")
    conn = get_connection(db_path)
    try:
        conn.executescript(schema)
        conn.commit()
    finally:
        conn.close()
    logger.info(f"Player registry ready at {db_path}")


class BaseRepository:
    """Shared statement helpers over one SQLite file."""

    def __init__(self, db_path: str = "scrimflow.db"):
        self.db_path = db_path

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        # Commit on success, roll back on any error
        conn = get_connection(self.db_path)
        try:
            yield conn
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            logger.exception(f"Registry statement failed on {self.db_path}")
            raise
        finally:
            conn.close()

    def _execute(
        self, query: str, params: tuple = (), fetch: bool = False
    ) -> Optional[List[dict]]:
        """Run one statement; with ``fetch`` return its rows as dicts."""
        with self._connection() as conn:
            cursor = conn.execute(query, params)
            if fetch:
                return [dict(row) for row in cursor.fetchall()]
        return None

    def _execute_one(self, query: str, params: tuple = ()) -> Optional[dict]:
        rows = self._execute(query, params, fetch=True)
        return rows[0] if rows else None

    def _execute_rowcount(self, query: str, params: tuple = ()) -> int:
        """Run a write and report how many rows it touched."""
        with self._connection() as conn:
            return conn.execute(query, params).rowcount
