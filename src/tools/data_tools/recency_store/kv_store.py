"""Key-value substrates for the recency store."""

import os
import sqlite3
from pathlib import Path
from typing import Protocol

from .models import SCHEMA_SQL


class KeyValueStore(Protocol):
    """String-keyed store of string values."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class InMemoryKeyValueStore:
    """Dict-backed store. Contents are lost with the instance."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


def get_db_path() -> str:
    """Get the database file path."""
    db_dir = Path(os.getenv('WEATHER_DB_DIR', './data'))
    db_dir.mkdir(parents=True, exist_ok=True)
    return str(db_dir / 'weather.db')


class SqliteKeyValueStore:
    """Key-value pairs persisted in a local SQLite file.

    Every write is committed before returning. sqlite3 errors are not
    caught here; a broken local database is fatal to the caller.
    """

    def __init__(self, db_path: str | None = None):
        self.db_path = db_path or get_db_path()
        self.init_db()

    def get_connection(self) -> sqlite3.Connection:
        """Get a database connection."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def init_db(self) -> None:
        """Initialize the database with required tables."""
        conn = self.get_connection()
        try:
            conn.executescript(SCHEMA_SQL)
            conn.commit()
        finally:
            conn.close()

    def get(self, key: str) -> str | None:
        conn = self.get_connection()
        try:
            row = conn.execute(
                'SELECT value FROM kv_store WHERE key = ?',
                (key,),
            ).fetchone()
            return row['value'] if row else None
        finally:
            conn.close()

    def set(self, key: str, value: str) -> None:
        conn = self.get_connection()
        try:
            conn.execute(
                """
                INSERT OR REPLACE INTO kv_store (key, value, updated_at)
                VALUES (?, ?, CURRENT_TIMESTAMP)
                """,
                (key, value),
            )
            conn.commit()
        finally:
            conn.close()

    def delete(self, key: str) -> None:
        conn = self.get_connection()
        try:
            conn.execute('DELETE FROM kv_store WHERE key = ?', (key,))
            conn.commit()
        finally:
            conn.close()
