"""
Google Directions route provider.

Fetches driving directions over httpx, caching each origin/destination pair
for the configured TTL (one hour by default).

Usage:
    from daybook.providers.google_maps import GoogleDirectionsProvider

    provider = GoogleDirectionsProvider(config.routing)
    directions = await provider.directions(origin, destination)
    travel_seconds = directions.first_leg_duration()
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from daybook.config import RoutingConfig
from daybook.errors import RoutingFailure
from daybook.geo import Coordinate

from .base import Directions, Route, RouteLeg, RouteProvider
from .cache import TTLCache
from .http import get_json

logger = logging.getLogger(__name__)

# Directions API statuses that carry a usable (possibly empty) body
OK_STATUSES = {"OK", "ZERO_RESULTS"}


def parse_directions(data: dict[str, Any]) -> Directions:
    status = data.get("status", "OK")
    if status not in OK_STATUSES:
        message = data.get("error_message") or status
        raise RoutingFailure(f"Directions request rejected: {message}")

    try:
        routes = [
            Route(
                legs=[
                    RouteLeg(
                        duration_seconds=int(leg["duration"]["value"]),
                        distance_meters=(leg.get("distance") or {}).get("value"),
                        start_address=leg.get("start_address", ""),
                        end_address=leg.get("end_address", ""),
                    )
                    for leg in route.get("legs", [])
                ],
                summary=route.get("summary", ""),
            )
            for route in data.get("routes", [])
        ]
    except (KeyError, TypeError, ValueError) as e:
        raise RoutingFailure(f"Decoding error: {e}") from e

    return Directions(routes=routes, status=status)


class GoogleDirectionsProvider(RouteProvider):
    def __init__(
        self,
        config: RoutingConfig | None = None,
        client: httpx.AsyncClient | None = None,
        cache: TTLCache | None = None,
        mode: str = "driving",
    ):
        self.config = config or RoutingConfig()
        self.mode = mode
        self._client = client
        self._cache = cache if cache is not None else TTLCache(ttl_seconds=self.config.cache_ttl_seconds)

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.config.timeout_seconds)
        return self._client

    async def close(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()

    @staticmethod
    def cache_key(origin: Coordinate, destination: Coordinate) -> str:
        return (
            f"directions_{origin.latitude}_{origin.longitude}"
            f"_{destination.latitude}_{destination.longitude}"
        )

    async def directions(self, origin: Coordinate, destination: Coordinate) -> Directions:
        api_key = self.config.api_key
        if not api_key:
            raise RoutingFailure(f"Missing API key: set {self.config.api_key_env}")

        key = self.cache_key(origin, destination)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        client = await self._get_client()
        data = await get_json(
            client,
            self.config.api_base,
            params={
                "origin": origin.as_query(),
                "destination": destination.as_query(),
                "mode": self.mode,
                "alternatives": "true",
                "key": api_key,
            },
            failure=RoutingFailure,
            max_retries=self.config.max_retries,
            base_delay=self.config.retry_delay_seconds,
        )
        directions = parse_directions(data)
        self._cache.set(key, directions)
        logger.debug(f"Fetched directions {key}: {len(directions.routes)} route(s)")
        return directions
