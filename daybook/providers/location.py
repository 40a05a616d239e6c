"""Location provider backed by a configured home coordinate.

Device positioning is platform code; this stands in for it wherever the
services run server-side.
"""

from __future__ import annotations

from daybook.config import LocationConfig
from daybook.geo import Coordinate

from .base import LocationProvider


class StaticLocationProvider(LocationProvider):
    def __init__(self, coordinate: Coordinate | None = None):
        self.coordinate = coordinate

    @classmethod
    def from_config(cls, config: LocationConfig) -> StaticLocationProvider:
        if config.latitude is None or config.longitude is None:
            return cls(None)
        return cls(Coordinate(config.latitude, config.longitude))

    async def current(self) -> Coordinate | None:
        return self.coordinate
