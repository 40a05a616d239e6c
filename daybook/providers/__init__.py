"""
Collaborator providers: routing, weather, location.

Usage:
    from daybook.providers import get_route_provider, get_weather_provider

    routes = get_route_provider("google", config.routing)
    weather = get_weather_provider("openweather", config.weather)
"""

from __future__ import annotations

from datetime import tzinfo
from typing import Any

from .base import (
    Directions,
    HourlyForecast,
    LocationProvider,
    NotificationScheduler,
    PersistentStore,
    Route,
    RouteLeg,
    RouteProvider,
    WeatherCondition,
    WeatherProvider,
    WeatherReport,
)
from .calls import best_effort, required
from .google_maps import GoogleDirectionsProvider
from .location import StaticLocationProvider
from .openweather import OpenWeatherProvider

ROUTE_PROVIDERS = {"google": GoogleDirectionsProvider}
WEATHER_PROVIDERS = {"openweather": OpenWeatherProvider}


def get_route_provider(name: str = "google", config: Any = None) -> RouteProvider:
    provider_cls = ROUTE_PROVIDERS.get(name)
    if provider_cls is None:
        raise ValueError(f"Unknown provider: {name}. Available: {list(ROUTE_PROVIDERS)}")
    return provider_cls(config)


def get_weather_provider(
    name: str = "openweather", config: Any = None, tz: tzinfo | None = None
) -> WeatherProvider:
    provider_cls = WEATHER_PROVIDERS.get(name)
    if provider_cls is None:
        raise ValueError(f"Unknown provider: {name}. Available: {list(WEATHER_PROVIDERS)}")
    return provider_cls(config, tz=tz)


__all__ = [
    "Directions",
    "GoogleDirectionsProvider",
    "HourlyForecast",
    "LocationProvider",
    "NotificationScheduler",
    "OpenWeatherProvider",
    "PersistentStore",
    "Route",
    "RouteLeg",
    "RouteProvider",
    "StaticLocationProvider",
    "WeatherCondition",
    "WeatherProvider",
    "WeatherReport",
    "best_effort",
    "get_route_provider",
    "get_weather_provider",
    "required",
]
