"""
OpenWeather One Call weather provider.

Usage:
    from daybook.providers.openweather import OpenWeatherProvider

    provider = OpenWeatherProvider(config.weather)
    report = await provider.current(51.5074, -0.1278)
    report.condition.main  # "Rain"
"""

from __future__ import annotations

import logging
from datetime import datetime, tzinfo
from typing import Any

import httpx

from daybook.config import WeatherConfig
from daybook.errors import WeatherFailure

from .base import HourlyForecast, WeatherCondition, WeatherProvider, WeatherReport
from .http import get_json

logger = logging.getLogger(__name__)

UNKNOWN_CONDITION = "Unknown"


def _condition(block: dict[str, Any]) -> WeatherCondition:
    weather = block.get("weather") or []
    if not weather:
        return WeatherCondition(main=UNKNOWN_CONDITION)
    first = weather[0]
    return WeatherCondition(main=first.get("main", UNKNOWN_CONDITION), description=first.get("description", ""))


def parse_weather(data: dict[str, Any], tz: tzinfo | None = None) -> WeatherReport:
    """Convert a One Call payload. Hourly timestamps are localized to tz
    (naive local time when tz is None)."""
    try:
        current = data["current"]
        hourly = [
            HourlyForecast(
                timestamp=datetime.fromtimestamp(entry["dt"], tz),
                condition=_condition(entry),
                temperature=entry.get("temp"),
            )
            for entry in data.get("hourly", [])
        ]
    except (KeyError, TypeError, ValueError, OSError) as e:
        raise WeatherFailure(f"Decoding error: {e}") from e

    return WeatherReport(
        condition=_condition(current),
        hourly=hourly,
        temperature=current.get("temp"),
    )


class OpenWeatherProvider(WeatherProvider):
    def __init__(
        self,
        config: WeatherConfig | None = None,
        client: httpx.AsyncClient | None = None,
        tz: tzinfo | None = None,
    ):
        self.config = config or WeatherConfig()
        self.tz = tz
        self._client = client

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.config.timeout_seconds)
        return self._client

    async def close(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()

    async def current(self, latitude: float, longitude: float) -> WeatherReport:
        api_key = self.config.api_key
        if not api_key:
            raise WeatherFailure(f"Missing API key: set {self.config.api_key_env}")

        client = await self._get_client()
        data = await get_json(
            client,
            self.config.api_base,
            params={
                "lat": str(latitude),
                "lon": str(longitude),
                "units": self.config.units,
                "appid": api_key,
            },
            failure=WeatherFailure,
            max_retries=self.config.max_retries,
            base_delay=self.config.retry_delay_seconds,
        )
        return parse_weather(data, self.tz)
