"""
Collaborator Base Classes

Abstract interfaces and data structures for the external services the
schedule and habit engines consume. Concrete backends (Google Directions,
OpenWeather, SQLite, a static home location) implement these interfaces;
tests substitute fakes.

Design Principles:
- Async-first: every collaborator may suspend on I/O
- Failures raise; whether a failure is fatal is decided at the call site
  (see daybook.providers.calls)
- Provider-agnostic data structures so backends can be swapped
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, time
from typing import Any, Generic, Protocol, TypeVar

from daybook.errors import RoutingFailure
from daybook.geo import Coordinate


# =============================================================================
# Routing
# =============================================================================


@dataclass
class RouteLeg:
    duration_seconds: int
    distance_meters: int | None = None
    start_address: str = ""
    end_address: str = ""


@dataclass
class Route:
    legs: list[RouteLeg] = field(default_factory=list)
    summary: str = ""


@dataclass
class Directions:
    """Directions between two coordinates, routes ordered best-first."""

    routes: list[Route] = field(default_factory=list)
    status: str = "OK"

    def first_leg_duration(self) -> int:
        """Duration in seconds of the first leg of the first route.

        Raises:
            RoutingFailure: If the response carries no route or no leg
        """
        if not self.routes or not self.routes[0].legs:
            raise RoutingFailure(f"Directions response has no route legs (status={self.status})")
        return self.routes[0].legs[0].duration_seconds


# =============================================================================
# Weather
# =============================================================================


@dataclass
class WeatherCondition:
    main: str
    description: str = ""

    def mentions(self, keyword: str) -> bool:
        """Case-insensitive substring match on the primary label."""
        return keyword.lower() in self.main.lower()


@dataclass
class HourlyForecast:
    timestamp: datetime
    condition: WeatherCondition
    temperature: float | None = None


@dataclass
class WeatherReport:
    condition: WeatherCondition
    hourly: list[HourlyForecast] = field(default_factory=list)
    temperature: float | None = None


# =============================================================================
# Interfaces
# =============================================================================


class LocationProvider(ABC):
    @abstractmethod
    async def current(self) -> Coordinate | None:
        """Current device location, or None when unknown."""


class RouteProvider(ABC):
    @abstractmethod
    async def directions(self, origin: Coordinate, destination: Coordinate) -> Directions:
        """Directions from origin to destination.

        Raises:
            RoutingFailure: On transport, quota or server errors
        """


class WeatherProvider(ABC):
    @abstractmethod
    async def current(self, latitude: float, longitude: float) -> WeatherReport:
        """Current conditions plus the hourly forecast.

        Raises:
            WeatherFailure: On transport, quota or server errors
        """


class NotificationScheduler(ABC):
    """Fire-and-forget reminder scheduling.

    trigger is either an absolute datetime (one-shot) or a time of day
    (repeating daily when repeats is True).
    """

    @abstractmethod
    async def schedule(
        self,
        notification_id: str,
        title: str,
        body: str,
        trigger: datetime | time,
        repeats: bool = False,
    ) -> None:
        ...


class Persistable(Protocol):
    @property
    def key(self) -> str: ...

    def to_dict(self) -> dict[str, Any]: ...


T = TypeVar("T", bound=Persistable)


class PersistentStore(ABC, Generic[T]):
    """Durable keyed storage. save() replaces any entity with the same key."""

    @abstractmethod
    async def save(self, entity: T) -> None:
        ...

    @abstractmethod
    async def load_all(self) -> list[T]:
        ...


__all__ = [
    "Directions",
    "HourlyForecast",
    "LocationProvider",
    "NotificationScheduler",
    "Persistable",
    "PersistentStore",
    "Route",
    "RouteLeg",
    "RouteProvider",
    "WeatherCondition",
    "WeatherProvider",
    "WeatherReport",
]
