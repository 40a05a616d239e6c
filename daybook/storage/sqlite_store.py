"""
Tool: SQLite Entity Store
Purpose: Durable keyed storage for schedule days and habits

Entities are stored as JSON documents in one table, namespaced by
collection and keyed by the entity's key (ISO date for days, id for
habits). save() replaces the previous document with the same key.

Usage:
    from daybook.storage import SQLiteStore
    from daybook.habits.models import Habit

    store = SQLiteStore(DB_PATH, "habits", Habit.from_dict)
    await store.save(habit)
    habits = await store.load_all()

Dependencies:
    - sqlite3 (stdlib)
"""

from __future__ import annotations

import json
import logging
import sqlite3
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Any, TypeVar

from daybook.errors import StorageFailure
from daybook.providers.base import Persistable, PersistentStore

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Persistable)


def get_connection(db_path: Path) -> sqlite3.Connection:
    """Get database connection, creating tables if needed."""
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row

    conn.execute("""
        CREATE TABLE IF NOT EXISTS entities (
            collection TEXT NOT NULL,
            key TEXT NOT NULL,
            data TEXT NOT NULL,
            updated_at DATETIME DEFAULT CURRENT_TIMESTAMP,
            PRIMARY KEY (collection, key)
        )
    """)
    conn.commit()
    return conn


class SQLiteStore(PersistentStore[T]):
    def __init__(self, db_path: Path | str, collection: str, from_dict: Callable[[dict[str, Any]], T]):
        self.db_path = Path(db_path)
        self.collection = collection
        self._from_dict = from_dict

    async def save(self, entity: T) -> None:
        try:
            conn = get_connection(self.db_path)
            try:
                conn.execute(
                    """
                    INSERT OR REPLACE INTO entities (collection, key, data, updated_at)
                    VALUES (?, ?, ?, ?)
                    """,
                    (self.collection, entity.key, json.dumps(entity.to_dict()), datetime.now().isoformat()),
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.error(f"Failed to save {self.collection}/{entity.key}: {e}")
            raise StorageFailure(f"Failed to save {self.collection}/{entity.key}: {e}") from e

    async def load_all(self) -> list[T]:
        try:
            conn = get_connection(self.db_path)
            try:
                rows = conn.execute(
                    "SELECT data FROM entities WHERE collection = ? ORDER BY key",
                    (self.collection,),
                ).fetchall()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StorageFailure(f"Failed to load {self.collection}: {e}") from e

        return [self._from_dict(json.loads(row["data"])) for row in rows]
