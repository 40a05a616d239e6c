"""Tests for daybook/config.py"""

import pytest

from daybook.config import DaybookConfig, RoutingConfig, load_config


def test_defaults_when_file_missing(tmp_path):
    config = load_config(tmp_path / "missing.yaml")

    assert config.routing.cache_ttl_seconds == 3600
    assert config.routing.travel_buffer_factor == 1.2
    assert config.schedule.reminder_lead_minutes == 15
    assert config.habits.cluster_radius_meters == 100
    assert config.location.latitude is None


def test_yaml_overrides(tmp_path):
    path = tmp_path / "daybook.yaml"
    path.write_text(
        "routing:\n"
        "  travel_buffer_factor: 1.5\n"
        "location:\n"
        "  latitude: 51.5\n"
        "  longitude: -0.12\n"
        "schedule:\n"
        "  timezone: Europe/London\n"
    )

    config = load_config(path)

    assert config.routing.travel_buffer_factor == 1.5
    assert config.routing.max_retries == 3
    assert config.location.latitude == 51.5
    assert config.schedule.timezone == "Europe/London"


def test_invalid_values_fall_back_to_defaults(tmp_path):
    path = tmp_path / "daybook.yaml"
    path.write_text("habits:\n  top_locations: 0\n")

    assert load_config(path) == DaybookConfig()


def test_empty_file(tmp_path):
    path = tmp_path / "daybook.yaml"
    path.write_text("")

    assert load_config(path) == DaybookConfig()


def test_api_key_read_from_environment(monkeypatch):
    monkeypatch.setenv("GOOGLE_MAPS_API_KEY", "abc")
    assert RoutingConfig().api_key == "abc"

    monkeypatch.delenv("GOOGLE_MAPS_API_KEY")
    assert RoutingConfig().api_key == ""


def test_buffer_factor_below_one_rejected():
    with pytest.raises(ValueError):
        RoutingConfig(travel_buffer_factor=0.5)
