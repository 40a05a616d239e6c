"""
Error taxonomy for the schedule and habit services.

Structural violations (conflicts, unknown keys, invalid intervals) always
surface to the caller. Collaborator failures are wrapped in RoutingFailure,
WeatherFailure or StorageFailure so the API layer can translate them without
knowing which backend raised.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from daybook.schedule.models import ScheduledEvent


class DaybookError(Exception):
    """Base class for every error raised by daybook."""


# =============================================================================
# Schedule errors
# =============================================================================


class ScheduleError(DaybookError):
    pass


class ScheduleNotFound(ScheduleError):
    def __init__(self, day: date):
        self.date = day
        super().__init__(f"Schedule not found: {day.isoformat()}")


class TimeSlotConflict(ScheduleError):
    """Raised when an event's interval overlaps one already stored for the day."""

    def __init__(self, event: ScheduledEvent):
        self.event = event
        super().__init__(f"Time slot conflicts with event: {event.title}")


ScheduleConflict = TimeSlotConflict


class InvalidTimeSlot(ScheduleError):
    def __init__(self, start: datetime, end: datetime):
        self.start = start
        self.end = end
        super().__init__(
            f"Invalid time slot: end {end.isoformat()} is not after start {start.isoformat()}"
        )


# =============================================================================
# Habit errors
# =============================================================================


class HabitError(DaybookError):
    pass


class HabitNotFound(HabitError):
    def __init__(self, habit_id: str):
        self.habit_id = habit_id
        super().__init__(f"Habit not found: {habit_id}")


class InvalidFrequency(HabitError):
    def __init__(self, detail: Any):
        self.detail = detail
        super().__init__(f"Invalid habit frequency: {detail}")


class InvalidDate(HabitError):
    def __init__(self, value: date | datetime, reason: str = ""):
        self.value = value
        message = f"Invalid date: {value.isoformat()}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


# =============================================================================
# Collaborator errors
# =============================================================================


class CollaboratorError(DaybookError):
    """A routing, weather or storage backend failed.

    Attributes:
        status_code: HTTP status when the failure came from a response
    """

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class RoutingFailure(CollaboratorError):
    pass


class WeatherFailure(CollaboratorError):
    pass


class StorageFailure(CollaboratorError):
    pass


__all__ = [
    "DaybookError",
    "ScheduleError",
    "ScheduleNotFound",
    "TimeSlotConflict",
    "ScheduleConflict",
    "InvalidTimeSlot",
    "HabitError",
    "HabitNotFound",
    "InvalidFrequency",
    "InvalidDate",
    "CollaboratorError",
    "RoutingFailure",
    "WeatherFailure",
    "StorageFailure",
]
