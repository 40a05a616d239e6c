"""
Service wiring.

Builds the schedule and habit services from configuration. Collaborators can
be overridden, which is how tests and the API layer inject their own.

Usage:
    from daybook.services import build_services

    services = build_services()
    await services.load()
    await services.schedule.add_event(event, day)
    await services.close()
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

from daybook.config import DaybookConfig, load_config
from daybook.habits import AnalyticsAggregator, Habit, HabitLedger, LocationClusterer
from daybook.logging_config import get_logger, setup_logging
from daybook.notifications import QueuedNotificationScheduler
from daybook.providers import (
    LocationProvider,
    NotificationScheduler,
    RouteProvider,
    StaticLocationProvider,
    WeatherProvider,
    get_route_provider,
    get_weather_provider,
)
from daybook.schedule import (
    RescheduleAdvisor,
    RouteAugmenter,
    ScheduleDay,
    ScheduleOptimizer,
    ScheduleStore,
)
from daybook.storage import SQLiteStore

logger = get_logger(__name__)


@dataclass
class Services:
    config: DaybookConfig
    locations: LocationProvider
    routes: RouteProvider
    weather: WeatherProvider
    notifications: NotificationScheduler
    schedule: ScheduleStore
    optimizer: ScheduleOptimizer
    advisor: RescheduleAdvisor
    habits: HabitLedger

    async def load(self) -> None:
        """Rehydrate in-memory state from storage."""
        await self.schedule.load()
        await self.habits.load()

    async def close(self) -> None:
        for provider in (self.routes, self.weather):
            close = getattr(provider, "close", None)
            if close is not None:
                await close()


def build_services(
    config: DaybookConfig | None = None,
    locations: LocationProvider | None = None,
    routes: RouteProvider | None = None,
    weather: WeatherProvider | None = None,
    notifications: NotificationScheduler | None = None,
    configure_logging: bool = True,
) -> Services:
    config = config or load_config()
    if configure_logging:
        setup_logging(config.logging.level, config.logging.json_output)
    tz = ZoneInfo(config.schedule.timezone) if config.schedule.timezone else None
    db_path = config.storage.database_path

    locations = locations or StaticLocationProvider.from_config(config.location)
    routes = routes or get_route_provider("google", config.routing)
    weather = weather or get_weather_provider("openweather", config.weather, tz=tz)
    notifications = notifications or QueuedNotificationScheduler(db_path)

    schedule = ScheduleStore(
        SQLiteStore(db_path, "schedule_days", ScheduleDay.from_dict),
        RouteAugmenter(locations, routes),
        notifications=notifications,
        reminder_lead=timedelta(minutes=config.schedule.reminder_lead_minutes),
        tz=tz,
    )
    optimizer = ScheduleOptimizer(
        schedule,
        locations,
        routes,
        weather,
        buffer_factor=config.routing.travel_buffer_factor,
        rain_keyword=config.weather.rain_keyword,
    )
    advisor = RescheduleAdvisor(schedule, weather, rain_keyword=config.weather.rain_keyword)

    aggregator = AnalyticsAggregator(
        clusterer=LocationClusterer(
            radius_meters=config.habits.cluster_radius_meters,
            top_n=config.habits.top_locations,
        ),
        top_times=config.habits.top_times,
    )
    habits = HabitLedger(
        SQLiteStore(db_path, "habits", Habit.from_dict),
        locations,
        weather,
        notifications=notifications,
        aggregator=aggregator,
        clock=lambda: datetime.now(tz),
    )

    logger.debug(f"Built services (db={db_path}, tz={config.schedule.timezone})")
    return Services(
        config=config,
        locations=locations,
        routes=routes,
        weather=weather,
        notifications=notifications,
        schedule=schedule,
        optimizer=optimizer,
        advisor=advisor,
        habits=habits,
    )
