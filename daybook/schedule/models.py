"""
Schedule data structures.

Usage:
    from daybook.schedule.models import Interval, ScheduledEvent

    event = ScheduledEvent(
        title="Dentist",
        interval=Interval(datetime(2026, 10, 19, 9), datetime(2026, 10, 19, 10)),
    )
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, tzinfo
from enum import Enum
from typing import Any

from daybook.errors import InvalidTimeSlot
from daybook.geo import Coordinate


def match_tz(instant: datetime, reference: datetime, tz: tzinfo | None = None) -> datetime:
    """Express instant in the same naive or aware form as reference.

    Naive datetimes are wall-clock times in tz, or system local time when tz
    is None. An aware instant is read on that wall clock and stripped of its
    zone; a naive one is given the zone before comparison.
    """
    if reference.tzinfo is None and instant.tzinfo is not None:
        return instant.astimezone(tz).replace(tzinfo=None)
    if reference.tzinfo is not None and instant.tzinfo is None:
        if tz is not None:
            return instant.replace(tzinfo=tz)
        return instant.astimezone(reference.tzinfo)
    return instant


@dataclass
class Interval:
    """A [start, end) time range with start < end."""

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.end <= self.start:
            raise InvalidTimeSlot(self.start, self.end)

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def overlaps(self, other: Interval) -> bool:
        return self.start < other.end and self.end > other.start

    def contains(self, instant: datetime) -> bool:
        """Inclusive of both bounds."""
        return self.start <= instant <= self.end

    def to_dict(self) -> dict[str, str]:
        return {"start": self.start.isoformat(), "end": self.end.isoformat()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Interval:
        return cls(
            start=datetime.fromisoformat(data["start"]),
            end=datetime.fromisoformat(data["end"]),
        )


@dataclass
class Location:
    coordinate: Coordinate
    address: str = ""
    radius: float = 100.0  # meters

    def to_dict(self) -> dict[str, Any]:
        return {
            "coordinate": self.coordinate.to_dict(),
            "address": self.address,
            "radius": self.radius,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Location:
        return cls(
            coordinate=Coordinate.from_dict(data["coordinate"]),
            address=data.get("address", ""),
            radius=data.get("radius", 100.0),
        )


@dataclass
class RouteInfo:
    estimated_duration_seconds: float
    start_location: Location | None = None
    end_location: Location | None = None
    transport_mode: str = "driving"
    alternative_routes: bool = True

    @property
    def estimated_duration(self) -> timedelta:
        return timedelta(seconds=self.estimated_duration_seconds)

    def to_dict(self) -> dict[str, Any]:
        return {
            "estimated_duration_seconds": self.estimated_duration_seconds,
            "start_location": self.start_location.to_dict() if self.start_location else None,
            "end_location": self.end_location.to_dict() if self.end_location else None,
            "transport_mode": self.transport_mode,
            "alternative_routes": self.alternative_routes,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RouteInfo:
        start = data.get("start_location")
        end = data.get("end_location")
        return cls(
            estimated_duration_seconds=data["estimated_duration_seconds"],
            start_location=Location.from_dict(start) if start else None,
            end_location=Location.from_dict(end) if end else None,
            transport_mode=data.get("transport_mode", "driving"),
            alternative_routes=data.get("alternative_routes", True),
        )


class EventPriority(int, Enum):
    LOW = 1
    MEDIUM = 2
    HIGH = 3
    URGENT = 4


class ReschedulingReason(str, Enum):
    WEATHER = "weather"
    TRAFFIC = "traffic"
    CONFLICT = "conflict"
    OPTIMIZATION = "optimization"


@dataclass
class ScheduledEvent:
    title: str
    interval: Interval
    description: str = ""
    location: Location | None = None
    route_info: RouteInfo | None = None
    is_outdoor: bool = False
    priority: EventPriority = EventPriority.MEDIUM
    needs_rescheduling: bool = False
    linked_task_ids: set[str] = field(default_factory=set)
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "interval": self.interval.to_dict(),
            "location": self.location.to_dict() if self.location else None,
            "route_info": self.route_info.to_dict() if self.route_info else None,
            "is_outdoor": self.is_outdoor,
            "priority": self.priority.value,
            "needs_rescheduling": self.needs_rescheduling,
            "linked_task_ids": sorted(self.linked_task_ids),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ScheduledEvent:
        location = data.get("location")
        route_info = data.get("route_info")
        return cls(
            id=data["id"],
            title=data["title"],
            description=data.get("description", ""),
            interval=Interval.from_dict(data["interval"]),
            location=Location.from_dict(location) if location else None,
            route_info=RouteInfo.from_dict(route_info) if route_info else None,
            is_outdoor=bool(data.get("is_outdoor", False)),
            priority=EventPriority(data.get("priority", EventPriority.MEDIUM.value)),
            needs_rescheduling=bool(data.get("needs_rescheduling", False)),
            linked_task_ids=set(data.get("linked_task_ids", [])),
        )


@dataclass
class ScheduleDay:
    """Events for one calendar day, kept ascending by interval start."""

    date: date
    events: list[ScheduledEvent] = field(default_factory=list)
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @property
    def key(self) -> str:
        return self.date.isoformat()

    def conflicting_event(self, interval: Interval) -> ScheduledEvent | None:
        """First stored event whose interval overlaps the given one."""
        return next((e for e in self.events if e.interval.overlaps(interval)), None)

    def sort_events(self) -> None:
        # list.sort is stable: equal starts keep insertion order
        self.events.sort(key=lambda e: e.interval.start)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "events": [e.to_dict() for e in self.events],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ScheduleDay:
        return cls(
            id=data["id"],
            date=date.fromisoformat(data["date"]),
            events=[ScheduledEvent.from_dict(e) for e in data.get("events", [])],
        )


@dataclass
class ScheduleSuggestion:
    event: ScheduledEvent
    slot: Interval
    reason: ReschedulingReason = ReschedulingReason.WEATHER

    def to_dict(self) -> dict[str, Any]:
        return {
            "event_id": self.event.id,
            "title": self.event.title,
            "slot": self.slot.to_dict(),
            "reason": self.reason.value,
        }


__all__ = [
    "EventPriority",
    "Interval",
    "Location",
    "ReschedulingReason",
    "RouteInfo",
    "ScheduleDay",
    "ScheduleSuggestion",
    "ScheduledEvent",
    "match_tz",
]
