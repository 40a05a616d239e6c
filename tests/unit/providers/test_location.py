"""Tests for daybook/providers/location.py and provider factories"""

import pytest

from daybook.config import LocationConfig
from daybook.geo import Coordinate
from daybook.providers import (
    GoogleDirectionsProvider,
    OpenWeatherProvider,
    StaticLocationProvider,
    get_route_provider,
    get_weather_provider,
)


@pytest.mark.asyncio
async def test_configured_home_location():
    provider = StaticLocationProvider.from_config(LocationConfig(latitude=51.5, longitude=-0.12))
    assert await provider.current() == Coordinate(51.5, -0.12)


@pytest.mark.asyncio
async def test_unconfigured_location_is_unknown():
    provider = StaticLocationProvider.from_config(LocationConfig(latitude=51.5))
    assert await provider.current() is None


def test_factories_return_default_backends():
    assert isinstance(get_route_provider(), GoogleDirectionsProvider)
    assert isinstance(get_weather_provider(), OpenWeatherProvider)


def test_unknown_provider_name():
    with pytest.raises(ValueError, match="Unknown provider"):
        get_route_provider("mapbox")
