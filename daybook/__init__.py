"""Daybook - context-aware daily schedule builder and habit tracker

Philosophy:
    A plan that ignores travel time and rain is a wish list.
    The schedule folds routing ETAs and forecasts into every placement,
    and the habit ledger turns a growing completion log into streaks
    and patterns the user can act on.

Components:
    schedule/: Interval algebra, per-day event store, travel buffers,
               weather-aware rescheduling
    habits/: Completion ledger, streak rules, location clustering,
             weather histograms
    providers/: Routing, weather, location collaborators
    storage/: Durable keyed storage (SQLite)
    notifications.py: Reminder queue

Usage:
    from daybook.services import build_services

    services = build_services()
    await services.load()
    await services.schedule.add_event(event, date(2026, 10, 19))
"""

from pathlib import Path

__version__ = "0.1.0"

# Path constants
PROJECT_ROOT = Path(__file__).parent.parent
ARGS_DIR = PROJECT_ROOT / "args"
DATA_DIR = PROJECT_ROOT / "data"
CONFIG_PATH = ARGS_DIR / "daybook.yaml"
DB_PATH = DATA_DIR / "daybook.db"

__all__ = [
    "__version__",
    "PROJECT_ROOT",
    "ARGS_DIR",
    "DATA_DIR",
    "CONFIG_PATH",
    "DB_PATH",
]
