"""
Schedule Optimizer

Maintenance pass over one stored day:

    A. Weather flagging - one current-conditions lookup at the user's
       location; outdoor events are flagged for rescheduling when the
       primary condition mentions rain.
    B. Buffer cascade - for each adjacent pair where both events have a
       location, the later event is pushed back so it starts no earlier
       than the first one's end plus routed travel time with a 20% margin.
       Its duration is kept.

The cascade is a single forward pass: a shift at i+1 feeds the comparison
with i+2, but earlier pairs are never re-checked, and pairs where either
side lacks a location are skipped.

Flags set in step A stay set if step B then fails on a routing error;
interval shifts from step B are only committed once every lookup succeeded.
"""

from __future__ import annotations

from datetime import date, timedelta

from daybook.errors import RoutingFailure, WeatherFailure
from daybook.logging_config import get_logger
from daybook.providers.base import LocationProvider, RouteProvider, WeatherProvider
from daybook.providers.calls import best_effort, required

from .models import Interval, ScheduleDay
from .store import ScheduleStore

logger = get_logger(__name__)


class ScheduleOptimizer:
    def __init__(
        self,
        store: ScheduleStore,
        locations: LocationProvider,
        routes: RouteProvider,
        weather: WeatherProvider,
        buffer_factor: float = 1.2,
        rain_keyword: str = "rain",
    ):
        self.store = store
        self.locations = locations
        self.routes = routes
        self.weather = weather
        self.buffer_factor = buffer_factor
        self.rain_keyword = rain_keyword

    async def optimize_schedule(self, day: date) -> ScheduleDay:
        """
        Flag rained-out outdoor events and rebalance travel buffers.

        Raises:
            ScheduleNotFound: If the day was never created
            WeatherFailure: If the weather lookup fails (nothing changed)
            RoutingFailure: If a directions lookup fails (flags from the
                weather step remain, intervals unchanged)
        """
        async with self.store.locked_day(day) as schedule_day:
            flagged = await self._flag_weather(schedule_day)
            shifted = await self._cascade_buffers(schedule_day)
            await self.store.persist(schedule_day)

        logger.info(
            f"Optimized {day.isoformat()}: {flagged} event(s) flagged, {shifted} event(s) shifted"
        )
        return schedule_day

    async def _flag_weather(self, schedule_day: ScheduleDay) -> int:
        location = await best_effort(self.locations.current, "current location lookup")
        if location is None:
            logger.info("No current location, skipping weather flagging")
            return 0

        report = await required(
            lambda: self.weather.current(location.latitude, location.longitude),
            WeatherFailure,
            "weather lookup",
        )
        if not report.condition.mentions(self.rain_keyword):
            return 0

        flagged = 0
        for event in schedule_day.events:
            if event.is_outdoor:
                event.needs_rescheduling = True
                flagged += 1
        return flagged

    async def _cascade_buffers(self, schedule_day: ScheduleDay) -> int:
        events = schedule_day.events
        # Working copies; mutated in place so a shift is seen by the next pair
        intervals = [Interval(e.interval.start, e.interval.end) for e in events]
        shifted: set[int] = set()

        for i in range(len(events) - 1):
            current, following = events[i], events[i + 1]
            if current.location is None or following.location is None:
                continue

            origin, destination = current.location.coordinate, following.location.coordinate
            directions = await required(
                lambda: self.routes.directions(origin, destination),
                RoutingFailure,
                "directions lookup",
            )
            buffer = timedelta(seconds=directions.first_leg_duration() * self.buffer_factor)

            earliest_start = intervals[i].end + buffer
            nxt = intervals[i + 1]
            if nxt.start < earliest_start:
                duration = nxt.duration
                nxt.start = earliest_start
                nxt.end = earliest_start + duration
                shifted.add(i + 1)

        for index in shifted:
            events[index].interval = intervals[index]
        return len(shifted)
