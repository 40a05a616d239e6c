"""
Tool: Reminder Queue
Purpose: Queue reminders for delivery by the notification channel

Reminders are written to the scheduled_notifications table with status
'pending'. Delivery (push, local notification) happens elsewhere and is not
this module's concern. Scheduling the same notification id again replaces
the pending entry.

Usage:
    from daybook.notifications import QueuedNotificationScheduler

    scheduler = QueuedNotificationScheduler(DB_PATH)
    await scheduler.schedule("habit-123", "Time for your habit: Meditate", "", time(7, 30), True)
    pending = scheduler.list_pending()

Dependencies:
    - sqlite3 (stdlib)
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime, time
from pathlib import Path
from typing import Any

from daybook.errors import StorageFailure
from daybook.providers.base import NotificationScheduler

logger = logging.getLogger(__name__)


def get_connection(db_path: Path) -> sqlite3.Connection:
    """Get database connection, creating tables if needed."""
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row

    conn.execute("""
        CREATE TABLE IF NOT EXISTS scheduled_notifications (
            id TEXT PRIMARY KEY,
            title TEXT NOT NULL,
            body TEXT,
            trigger_type TEXT NOT NULL,
            trigger_value TEXT NOT NULL,
            repeats INTEGER DEFAULT 0,
            status TEXT DEFAULT 'pending',
            created_at DATETIME DEFAULT CURRENT_TIMESTAMP
        )
    """)
    conn.execute(
        "CREATE INDEX IF NOT EXISTS idx_notifications_status ON scheduled_notifications(status)"
    )
    conn.commit()
    return conn


class QueuedNotificationScheduler(NotificationScheduler):
    def __init__(self, db_path: Path | str):
        self.db_path = Path(db_path)

    async def schedule(
        self,
        notification_id: str,
        title: str,
        body: str,
        trigger: datetime | time,
        repeats: bool = False,
    ) -> None:
        trigger_type = "datetime" if isinstance(trigger, datetime) else "time_of_day"

        try:
            conn = get_connection(self.db_path)
            try:
                conn.execute(
                    """
                    INSERT OR REPLACE INTO scheduled_notifications
                        (id, title, body, trigger_type, trigger_value, repeats, status, created_at)
                    VALUES (?, ?, ?, ?, ?, ?, 'pending', ?)
                    """,
                    (
                        notification_id,
                        title,
                        body,
                        trigger_type,
                        trigger.isoformat(),
                        int(repeats),
                        datetime.now().isoformat(),
                    ),
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StorageFailure(f"Failed to queue notification {notification_id}: {e}") from e

        logger.debug(f"Queued notification {notification_id} ({trigger_type} {trigger.isoformat()})")

    def list_pending(self) -> list[dict[str, Any]]:
        conn = get_connection(self.db_path)
        try:
            rows = conn.execute(
                "SELECT * FROM scheduled_notifications WHERE status = 'pending' ORDER BY trigger_value"
            ).fetchall()
        finally:
            conn.close()

        result = []
        for row in rows:
            item = dict(row)
            item["repeats"] = bool(item["repeats"])
            result.append(item)
        return result
