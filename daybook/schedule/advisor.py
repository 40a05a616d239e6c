"""
Reschedule Advisor

Proposes replacement slots for events flagged needs_rescheduling.

Gap finding walks the day's events in start order with a cursor starting at
midnight. Each gap at least as long as the requested duration yields exactly
one slot, anchored at the gap's start; a long gap is not split into several
slots. The gap between the last event and the end of the day is treated the
same way.

Outdoor events with a location additionally drop any slot containing an
hourly forecast entry that mentions rain. If that forecast lookup fails the
event gets no suggestion rather than an unchecked one.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, tzinfo

from daybook.errors import WeatherFailure
from daybook.logging_config import get_logger
from daybook.providers.base import HourlyForecast, WeatherProvider
from daybook.providers.calls import required

from .models import Interval, ReschedulingReason, ScheduledEvent, ScheduleSuggestion, match_tz
from .store import ScheduleStore

logger = get_logger(__name__)


def find_available_time_slots(
    events: list[ScheduledEvent],
    day_start: datetime,
    day_end: datetime,
    duration: timedelta,
    tz: tzinfo | None = None,
) -> list[Interval]:
    """Slots come back in the naive or aware form of the events' times."""
    if events:
        reference = events[0].interval.start
        day_start = match_tz(day_start, reference, tz)
        day_end = match_tz(day_end, reference, tz)

    slots: list[Interval] = []
    cursor = day_start

    for event in sorted(events, key=lambda e: match_tz(e.interval.start, day_start, tz)):
        start = match_tz(event.interval.start, day_start, tz)
        if start - cursor >= duration:
            slots.append(Interval(cursor, cursor + duration))
        cursor = match_tz(event.interval.end, day_start, tz)

    if day_end - cursor >= duration:
        slots.append(Interval(cursor, cursor + duration))

    return slots


def is_dry(
    slot: Interval, hourly: list[HourlyForecast], rain_keyword: str = "rain", tz: tzinfo | None = None
) -> bool:
    return not any(
        slot.contains(match_tz(forecast.timestamp, slot.start, tz))
        and forecast.condition.mentions(rain_keyword)
        for forecast in hourly
    )


class RescheduleAdvisor:
    def __init__(self, store: ScheduleStore, weather: WeatherProvider, rain_keyword: str = "rain"):
        self.store = store
        self.weather = weather
        self.rain_keyword = rain_keyword

    async def suggest_rescheduling(self, day: date) -> list[ScheduleSuggestion]:
        """
        One suggestion per flagged event that has a suitable slot.

        Raises:
            ScheduleNotFound: If the day was never created
        """
        suggestions: list[ScheduleSuggestion] = []
        day_start, day_end = self.store.day_bounds(day)

        async with self.store.locked_day(day) as schedule_day:
            for event in schedule_day.events:
                if not event.needs_rescheduling:
                    continue

                candidates = find_available_time_slots(
                    schedule_day.events, day_start, day_end, event.interval.duration, self.store.tz
                )

                if event.is_outdoor and event.location is not None:
                    coordinate = event.location.coordinate
                    try:
                        report = await required(
                            lambda: self.weather.current(coordinate.latitude, coordinate.longitude),
                            WeatherFailure,
                            "forecast lookup",
                        )
                    except WeatherFailure as e:
                        logger.warning(f"No suggestion for event {event.id}: {e}")
                        continue
                    candidates = [
                        s for s in candidates if is_dry(s, report.hourly, self.rain_keyword, self.store.tz)
                    ]

                if candidates:
                    suggestions.append(
                        ScheduleSuggestion(event=event, slot=candidates[0], reason=ReschedulingReason.WEATHER)
                    )

        logger.info(f"{len(suggestions)} rescheduling suggestion(s) for {day.isoformat()}")
        return suggestions
