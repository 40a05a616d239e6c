"""Coordinates and great-circle distance."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

# Mean Earth radius (meters)
EARTH_RADIUS_METERS = 6_371_000.0


@dataclass(frozen=True)
class Coordinate:
    latitude: float
    longitude: float

    def distance_to(self, other: Coordinate) -> float:
        """Haversine distance in meters."""
        return haversine_meters(self, other)

    def to_dict(self) -> dict[str, float]:
        return {"latitude": self.latitude, "longitude": self.longitude}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Coordinate:
        return cls(latitude=float(data["latitude"]), longitude=float(data["longitude"]))

    def as_query(self) -> str:
        """Format as 'lat,lon' for routing APIs."""
        return f"{self.latitude},{self.longitude}"


def haversine_meters(a: Coordinate, b: Coordinate) -> float:
    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    dlat = lat2 - lat1
    dlon = math.radians(b.longitude - a.longitude)

    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    return 2 * EARTH_RADIUS_METERS * math.asin(min(1.0, math.sqrt(h)))


__all__ = ["Coordinate", "EARTH_RADIUS_METERS", "haversine_meters"]
