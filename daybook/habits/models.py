"""
Habit data structures.

Usage:
    from daybook.habits.models import Habit, HabitFrequency

    habit = Habit(title="Meditate", frequency=HabitFrequency.daily())
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import Enum
from typing import Any

from daybook.errors import InvalidFrequency
from daybook.geo import Coordinate


class FrequencyKind(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    CUSTOM = "custom"


@dataclass(frozen=True)
class HabitFrequency:
    """How often a habit is due. interval_days only applies to CUSTOM."""

    kind: FrequencyKind
    interval_days: int | None = None

    def __post_init__(self) -> None:
        if self.kind == FrequencyKind.CUSTOM:
            if self.interval_days is None or self.interval_days < 1:
                raise InvalidFrequency(f"custom interval must be >= 1 day, got {self.interval_days}")
        elif self.interval_days is not None:
            raise InvalidFrequency(f"{self.kind.value} frequency takes no interval")

    @classmethod
    def daily(cls) -> HabitFrequency:
        return cls(FrequencyKind.DAILY)

    @classmethod
    def weekly(cls) -> HabitFrequency:
        return cls(FrequencyKind.WEEKLY)

    @classmethod
    def monthly(cls) -> HabitFrequency:
        return cls(FrequencyKind.MONTHLY)

    @classmethod
    def custom(cls, interval_days: int) -> HabitFrequency:
        return cls(FrequencyKind.CUSTOM, interval_days)

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "interval_days": self.interval_days}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HabitFrequency:
        try:
            kind = FrequencyKind(data["kind"])
        except (KeyError, ValueError) as e:
            raise InvalidFrequency(data) from e
        return cls(kind, data.get("interval_days"))


@dataclass
class HabitAnalyticsData:
    completion_locations: list[Coordinate] = field(default_factory=list)
    weather_conditions: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "completion_locations": [c.to_dict() for c in self.completion_locations],
            "weather_conditions": list(self.weather_conditions),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HabitAnalyticsData:
        return cls(
            completion_locations=[Coordinate.from_dict(c) for c in data.get("completion_locations", [])],
            weather_conditions=list(data.get("weather_conditions", [])),
        )


@dataclass
class Habit:
    """
    A tracked habit.

    current_streak, best_streak, last_completion_date and analytics are
    derived on each completion by HabitLedger.complete_habit and are not
    meant to be edited directly. completed_dates may hold several entries
    for the same day; each counts.
    """

    title: str
    frequency: HabitFrequency = field(default_factory=HabitFrequency.daily)
    description: str = ""
    start_date: date | None = None
    completed_dates: list[datetime] = field(default_factory=list)
    current_streak: int = 0
    best_streak: int = 0
    last_completion_date: datetime | None = None
    weather_dependent: bool = False
    reminder_time: time | None = None
    linked_task_ids: set[str] = field(default_factory=set)
    analytics: HabitAnalyticsData = field(default_factory=HabitAnalyticsData)
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @property
    def key(self) -> str:
        return self.id

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "frequency": self.frequency.to_dict(),
            "start_date": self.start_date.isoformat() if self.start_date else None,
            "completed_dates": [d.isoformat() for d in self.completed_dates],
            "current_streak": self.current_streak,
            "best_streak": self.best_streak,
            "last_completion_date": (
                self.last_completion_date.isoformat() if self.last_completion_date else None
            ),
            "weather_dependent": self.weather_dependent,
            "reminder_time": self.reminder_time.isoformat() if self.reminder_time else None,
            "linked_task_ids": sorted(self.linked_task_ids),
            "analytics": self.analytics.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Habit:
        start_date = data.get("start_date")
        last = data.get("last_completion_date")
        reminder = data.get("reminder_time")
        return cls(
            id=data["id"],
            title=data["title"],
            description=data.get("description", ""),
            frequency=HabitFrequency.from_dict(data.get("frequency", {"kind": "daily"})),
            start_date=date.fromisoformat(start_date) if start_date else None,
            completed_dates=[datetime.fromisoformat(d) for d in data.get("completed_dates", [])],
            current_streak=data.get("current_streak", 0),
            best_streak=data.get("best_streak", 0),
            last_completion_date=datetime.fromisoformat(last) if last else None,
            weather_dependent=bool(data.get("weather_dependent", False)),
            reminder_time=time.fromisoformat(reminder) if reminder else None,
            linked_task_ids=set(data.get("linked_task_ids", [])),
            analytics=HabitAnalyticsData.from_dict(data.get("analytics", {})),
        )


@dataclass(frozen=True)
class CompletionTime:
    hour: int
    minute: int

    def as_time(self) -> time:
        return time(self.hour, self.minute)


@dataclass
class WeatherPattern:
    condition: str
    count: int


@dataclass
class HabitAnalytics:
    total_completions: int
    current_streak: int
    best_streak: int
    completion_rate: float
    common_completion_times: list[CompletionTime]
    common_locations: list[Coordinate]
    weather_patterns: list[WeatherPattern]

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_completions": self.total_completions,
            "current_streak": self.current_streak,
            "best_streak": self.best_streak,
            "completion_rate": self.completion_rate,
            "common_completion_times": [
                {"hour": t.hour, "minute": t.minute} for t in self.common_completion_times
            ],
            "common_locations": [c.to_dict() for c in self.common_locations],
            "weather_patterns": [
                {"condition": p.condition, "count": p.count} for p in self.weather_patterns
            ],
        }


__all__ = [
    "CompletionTime",
    "FrequencyKind",
    "Habit",
    "HabitAnalytics",
    "HabitAnalyticsData",
    "HabitFrequency",
    "WeatherPattern",
]
