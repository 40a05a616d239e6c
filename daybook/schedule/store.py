"""
Schedule Store

Per-date ordered event lists with non-overlap enforced on insert.

Every operation on a date runs under that date's asyncio.Lock, so two inserts
into the same day never interleave their read-modify-write; different days
proceed concurrently. The optimizer and rescheduling advisor take the same
lock through locked_day().

Usage:
    store = ScheduleStore(persistence, RouteAugmenter(locations, routes))
    await store.load()
    stored = await store.add_event(event, date(2026, 10, 19))
"""

from __future__ import annotations

import asyncio
import copy
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from datetime import date, datetime, time, timedelta, tzinfo

from daybook.errors import ScheduleNotFound, TimeSlotConflict
from daybook.logging_config import get_logger
from daybook.providers.base import NotificationScheduler, PersistentStore
from daybook.providers.calls import best_effort

from .models import ScheduleDay, ScheduledEvent, match_tz
from .routing import RouteAugmenter

logger = get_logger(__name__)


class ScheduleStore:
    def __init__(
        self,
        persistence: PersistentStore[ScheduleDay],
        route_augmenter: RouteAugmenter,
        notifications: NotificationScheduler | None = None,
        reminder_lead: timedelta = timedelta(minutes=15),
        tz: tzinfo | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self.persistence = persistence
        self.route_augmenter = route_augmenter
        self.notifications = notifications
        self.reminder_lead = reminder_lead
        self.tz = tz
        self._clock = clock or (lambda: datetime.now(self.tz))
        self._days: dict[date, ScheduleDay] = {}
        self._day_locks: dict[date, asyncio.Lock] = {}

    def _get_day_lock(self, day: date) -> asyncio.Lock:
        if day not in self._day_locks:
            self._day_locks[day] = asyncio.Lock()
        return self._day_locks[day]

    async def load(self) -> int:
        """Rehydrate in-memory days from persistence. Returns the day count."""
        days = await self.persistence.load_all()
        for schedule_day in days:
            schedule_day.sort_events()
            self._days[schedule_day.date] = schedule_day
        logger.info(f"Loaded {len(days)} schedule day(s)")
        return len(days)

    def day_bounds(self, day: date) -> tuple[datetime, datetime]:
        start = datetime.combine(day, time.min, tzinfo=self.tz)
        return start, start + timedelta(days=1)

    def get_day(self, day: date) -> ScheduleDay:
        try:
            return self._days[day]
        except KeyError:
            raise ScheduleNotFound(day) from None

    @property
    def dates(self) -> list[date]:
        return sorted(self._days)

    @asynccontextmanager
    async def locked_day(self, day: date) -> AsyncIterator[ScheduleDay]:
        """Hold the date's lock for a maintenance pass over an existing day.

        Raises:
            ScheduleNotFound: If the day was never created
        """
        async with self._get_day_lock(day):
            yield self.get_day(day)

    async def persist(self, schedule_day: ScheduleDay) -> None:
        await self.persistence.save(schedule_day)

    async def create_day(self, day: date) -> ScheduleDay:
        """Return the day's schedule, creating an empty one if needed."""
        async with self._get_day_lock(day):
            return await self._ensure_day(day)

    async def _ensure_day(self, day: date) -> ScheduleDay:
        existing = self._days.get(day)
        if existing is not None:
            return existing
        schedule_day = ScheduleDay(date=day)
        await self.persistence.save(schedule_day)
        self._days[day] = schedule_day
        logger.debug(f"Created schedule for {day.isoformat()}")
        return schedule_day

    async def add_event(self, event: ScheduledEvent, day: date) -> ScheduledEvent:
        """Insert an event into the day's schedule.

        The conflict check runs on the event as given. Location-bound events
        are then routed and stored with a start moved earlier by the travel
        time, which the check above has not seen.

        Returns:
            The stored (possibly travel-adjusted) event

        Raises:
            TimeSlotConflict: If the interval overlaps a stored event
            RoutingFailure: If the travel time lookup fails; nothing is stored
        """
        async with self._get_day_lock(day):
            schedule_day = self._days.get(day) or ScheduleDay(date=day)

            conflict = schedule_day.conflicting_event(event.interval)
            if conflict is not None:
                logger.info(f"Rejected event {event.id} on {day.isoformat()}: conflicts with {conflict.id}")
                raise TimeSlotConflict(conflict)

            # The day owns its events
            stored = await self.route_augmenter.augment(copy.deepcopy(event))

            candidate = ScheduleDay(date=day, events=[*schedule_day.events, stored], id=schedule_day.id)
            candidate.sort_events()
            await self.persistence.save(candidate)

            schedule_day.events = candidate.events
            self._days[day] = schedule_day

        await self._schedule_reminders(event, stored)
        return stored

    async def _schedule_reminders(self, requested: ScheduledEvent, stored: ScheduledEvent) -> None:
        if self.notifications is None:
            return

        # Naive event times are wall-clock times in the store's timezone
        now = match_tz(self._clock(), requested.interval.start, self.tz)
        reminder_at = requested.interval.start - self.reminder_lead
        if reminder_at > now:
            await best_effort(
                lambda: self.notifications.schedule(
                    f"event-{stored.id}", stored.title, stored.description, reminder_at, False
                ),
                "event reminder",
            )

        if stored.route_info is not None:
            leave_at = requested.interval.start - (stored.route_info.estimated_duration + self.reminder_lead)
            if leave_at > now:
                minutes = int(stored.route_info.estimated_duration_seconds // 60)
                await best_effort(
                    lambda: self.notifications.schedule(
                        f"travel-{stored.id}",
                        f"Time to leave for: {stored.title}",
                        f"Estimated travel time: {minutes} minutes",
                        leave_at,
                        False,
                    ),
                    "travel reminder",
                )
