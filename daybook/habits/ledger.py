"""
Habit Ledger

Registry of habits and their completion logs. Each habit id has its own
asyncio.Lock, so concurrent completions of the same habit run one after
another while different habits proceed in parallel.

complete_habit updates the streak synchronously, then enriches analytics
with the current location and (for weather-dependent habits) the current
weather on a best-effort basis: a failed lookup leaves that field out and
the completion still counts.

Usage:
    ledger = HabitLedger(persistence, locations, weather, notifications)
    await ledger.load()
    habit = await ledger.create_habit(Habit(title="Meditate"))
    await ledger.complete_habit(habit.id)
    report = await ledger.get_habit_analytics(habit.id)
"""

from __future__ import annotations

import asyncio
import copy
from collections.abc import Callable
from datetime import date, datetime, time

from daybook.errors import HabitNotFound, InvalidDate
from daybook.logging_config import get_logger
from daybook.providers.base import (
    LocationProvider,
    NotificationScheduler,
    PersistentStore,
    WeatherProvider,
)
from daybook.providers.calls import best_effort

from .analytics import AnalyticsAggregator
from .models import CompletionTime, Habit, HabitAnalytics
from .streaks import StreakCalculator

logger = get_logger(__name__)


class HabitLedger:
    def __init__(
        self,
        persistence: PersistentStore[Habit],
        locations: LocationProvider,
        weather: WeatherProvider,
        notifications: NotificationScheduler | None = None,
        aggregator: AnalyticsAggregator | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.persistence = persistence
        self.locations = locations
        self.weather = weather
        self.notifications = notifications
        self.aggregator = aggregator or AnalyticsAggregator()
        self._clock = clock
        self._habits: dict[str, Habit] = {}
        self._habit_locks: dict[str, asyncio.Lock] = {}

    def _get_habit_lock(self, habit_id: str) -> asyncio.Lock:
        if habit_id not in self._habit_locks:
            self._habit_locks[habit_id] = asyncio.Lock()
        return self._habit_locks[habit_id]

    def _get_habit(self, habit_id: str) -> Habit:
        try:
            return self._habits[habit_id]
        except KeyError:
            raise HabitNotFound(habit_id) from None

    async def load(self) -> int:
        habits = await self.persistence.load_all()
        for habit in habits:
            self._habits[habit.id] = habit
        logger.info(f"Loaded {len(habits)} habit(s)")
        return len(habits)

    def get_habit(self, habit_id: str) -> Habit:
        return self._get_habit(habit_id)

    def list_habits(self) -> list[Habit]:
        return list(self._habits.values())

    async def create_habit(self, habit: Habit) -> Habit:
        habit = copy.deepcopy(habit)
        async with self._get_habit_lock(habit.id):
            await self.persistence.save(habit)
            self._habits[habit.id] = habit
        logger.info(f"Created habit {habit.id} ({habit.title})")

        if habit.reminder_time is not None and self.notifications is not None:
            reminder_time = habit.reminder_time
            await best_effort(
                lambda: self.notifications.schedule(
                    f"habit-{habit.id}",
                    f"Time for your habit: {habit.title}",
                    habit.description,
                    reminder_time,
                    True,
                ),
                "habit reminder",
            )
        return habit

    async def complete_habit(self, habit_id: str, when: date | datetime | None = None) -> Habit:
        """
        Record a completion and update streaks.

        Args:
            habit_id: Habit to complete
            when: Completion time (defaults to now); a bare date means midnight

        Returns:
            The updated habit

        Raises:
            HabitNotFound: If the habit is unknown
            InvalidDate: If the completion falls before the habit's start date
        """
        if when is None:
            when = self._clock()
        elif not isinstance(when, datetime):
            when = datetime.combine(when, time.min)

        async with self._get_habit_lock(habit_id):
            habit = copy.deepcopy(self._get_habit(habit_id))

            if habit.start_date is not None and when.date() < habit.start_date:
                raise InvalidDate(when, f"before habit start {habit.start_date.isoformat()}")

            if StreakCalculator.is_streak(habit.last_completion_date, when, habit.frequency):
                habit.current_streak += 1
                habit.best_streak = max(habit.best_streak, habit.current_streak)
            else:
                habit.current_streak = 1

            habit.completed_dates.append(when)
            habit.last_completion_date = when

            await self._enrich(habit)

            # Committed in memory before the save: a storage failure surfaces
            # to the caller but the completion is kept for this process.
            self._habits[habit_id] = habit
            await self.persistence.save(habit)

        logger.info(
            f"Completed habit {habit_id}: streak {habit.current_streak} (best {habit.best_streak})"
        )
        return habit

    async def _enrich(self, habit: Habit) -> None:
        location = await best_effort(self.locations.current, "completion location lookup")
        if location is None:
            return
        habit.analytics.completion_locations.append(location)

        if habit.weather_dependent:
            report = await best_effort(
                lambda: self.weather.current(location.latitude, location.longitude),
                "completion weather lookup",
            )
            if report is not None:
                habit.analytics.weather_conditions.append(report.condition.main)

    async def get_habit_analytics(self, habit_id: str) -> HabitAnalytics:
        async with self._get_habit_lock(habit_id):
            habit = self._get_habit(habit_id)
            return self.aggregator.build(habit, today=self._clock().date())

    async def suggest_optimal_time(self, habit_id: str) -> list[CompletionTime]:
        """Most common completion times; the reminder time when there is no history."""
        async with self._get_habit_lock(habit_id):
            habit = self._get_habit(habit_id)
            analytics = self.aggregator.build(habit, today=self._clock().date())

        if analytics.common_completion_times:
            return analytics.common_completion_times
        if habit.reminder_time is not None:
            return [CompletionTime(habit.reminder_time.hour, habit.reminder_time.minute)]
        return []
