from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from daybook import CONFIG_PATH, DB_PATH

logger = logging.getLogger(__name__)


# =============================================================================
# Collaborators
# =============================================================================

class RoutingConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    api_base: str = Field(default="https://maps.googleapis.com/maps/api/directions/json")
    api_key_env: str = Field(default="GOOGLE_MAPS_API_KEY")
    timeout_seconds: float = Field(default=10.0, gt=0)
    cache_ttl_seconds: int = Field(default=3600, ge=0)
    max_retries: int = Field(default=3, ge=0)
    retry_delay_seconds: float = Field(default=1.0, ge=0)
    travel_buffer_factor: float = Field(default=1.2, ge=1.0)

    @property
    def api_key(self) -> str:
        return os.environ.get(self.api_key_env, "")


class WeatherConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    api_base: str = Field(default="https://api.openweathermap.org/data/3.0/onecall")
    api_key_env: str = Field(default="OPENWEATHER_API_KEY")
    units: str = Field(default="metric", pattern="^(standard|metric|imperial)$")
    timeout_seconds: float = Field(default=10.0, gt=0)
    max_retries: int = Field(default=3, ge=0)
    retry_delay_seconds: float = Field(default=1.0, ge=0)
    rain_keyword: str = Field(default="rain", min_length=1)

    @property
    def api_key(self) -> str:
        return os.environ.get(self.api_key_env, "")


class LocationConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)


# =============================================================================
# Services
# =============================================================================

class ScheduleConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    timezone: Optional[str] = None
    reminder_lead_minutes: int = Field(default=15, ge=0)


class HabitsConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    cluster_radius_meters: float = Field(default=100.0, gt=0)
    top_locations: int = Field(default=3, ge=1)
    top_times: int = Field(default=3, ge=1)


class StorageConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    database_path: str = Field(default=str(DB_PATH))


class LoggingConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    json_output: bool = Field(default=False)


class DaybookConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    routing: RoutingConfig = Field(default_factory=RoutingConfig)
    weather: WeatherConfig = Field(default_factory=WeatherConfig)
    location: LocationConfig = Field(default_factory=LocationConfig)
    schedule: ScheduleConfig = Field(default_factory=ScheduleConfig)
    habits: HabitsConfig = Field(default_factory=HabitsConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(path: Path | None = None) -> DaybookConfig:
    """Load args/daybook.yaml, falling back to defaults on a missing or invalid file.

    API keys never live in the YAML file; they are read from the environment
    (optionally populated from a .env file) when a provider is built.
    """
    load_dotenv()
    yaml_path = path or CONFIG_PATH

    try:
        if yaml_path.exists():
            with open(yaml_path) as f:
                raw = yaml.safe_load(f) or {}
        else:
            raw = {}

        return DaybookConfig.model_validate(raw)
    except Exception as e:
        logger.warning(f"Config validation failed for {yaml_path}: {e}, using defaults")
        return DaybookConfig()


__all__ = [
    "DaybookConfig",
    "HabitsConfig",
    "LocationConfig",
    "LoggingConfig",
    "RoutingConfig",
    "ScheduleConfig",
    "StorageConfig",
    "WeatherConfig",
    "load_config",
]
