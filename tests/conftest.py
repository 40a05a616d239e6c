"""Shared test fixtures for Daybook tests.

This module provides common fixtures used across all test modules:
- Database isolation with temporary files
- Fake routing, weather, location and notification collaborators
- Schedule and habit services wired to the fakes

Usage:
    def test_something(temp_db):
        # temp_db lives under pytest's tmp_path and is cleaned up with it
        ...
"""

from datetime import datetime
from pathlib import Path

import pytest

from daybook.habits import Habit, HabitLedger
from daybook.schedule import RouteAugmenter, ScheduleDay, ScheduleStore

from tests.fakes import (
    HOME,
    FakeLocationProvider,
    FakeRouteProvider,
    FakeWeatherProvider,
    InMemoryStore,
    RecordingNotifier,
)


# ─────────────────────────────────────────────────────────────────────────────
# Database Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def temp_db(tmp_path: Path) -> Path:
    """Path to a not-yet-created SQLite database file."""
    return tmp_path / "data" / "daybook.db"


# ─────────────────────────────────────────────────────────────────────────────
# Collaborator Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def locations() -> FakeLocationProvider:
    return FakeLocationProvider(HOME)


@pytest.fixture
def routes() -> FakeRouteProvider:
    return FakeRouteProvider(duration_seconds=600)


@pytest.fixture
def weather() -> FakeWeatherProvider:
    return FakeWeatherProvider("Clear")


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


# ─────────────────────────────────────────────────────────────────────────────
# Service Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def day_persistence() -> InMemoryStore:
    return InMemoryStore(ScheduleDay.from_dict)


@pytest.fixture
def schedule_store(day_persistence, locations, routes, notifier) -> ScheduleStore:
    """Schedule store whose clock sits well before DAY, so reminders are in the future."""
    return ScheduleStore(
        day_persistence,
        RouteAugmenter(locations, routes),
        notifications=notifier,
        clock=lambda: datetime(2026, 10, 1, 8, 0),
    )


@pytest.fixture
def habit_persistence() -> InMemoryStore:
    return InMemoryStore(Habit.from_dict)


@pytest.fixture
def ledger(habit_persistence, locations, weather, notifier) -> HabitLedger:
    return HabitLedger(
        habit_persistence,
        locations,
        weather,
        notifications=notifier,
        clock=lambda: datetime(2026, 10, 19, 12, 0),
    )
