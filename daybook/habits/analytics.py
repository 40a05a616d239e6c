"""
Habit analytics: read-only folds over a habit's completion log.

Usage:
    aggregator = AnalyticsAggregator()
    report = aggregator.build(habit, today=date.today())
    report.to_dict()
"""

from __future__ import annotations

from collections import Counter
from datetime import date, datetime

from .clustering import LocationClusterer
from .models import CompletionTime, Habit, HabitAnalytics, WeatherPattern
from .streaks import days_between


class WeatherPatternAnalyzer:
    """Histogram of primary weather labels, most frequent first."""

    def analyze(self, conditions: list[str]) -> list[WeatherPattern]:
        # most_common keeps first-seen order among equal counts
        return [WeatherPattern(condition=c, count=n) for c, n in Counter(conditions).most_common()]


def common_completion_times(completed: list[datetime], top_n: int = 3) -> list[CompletionTime]:
    """The most frequent exact (hour, minute) pairs; ties go to the first seen."""
    counts = Counter(CompletionTime(d.hour, d.minute) for d in completed)
    return [t for t, _ in counts.most_common(top_n)]


def completion_rate(habit: Habit, today: date) -> float:
    if habit.start_date is None:
        return 0.0
    total_days = days_between(habit.start_date, today)
    if total_days <= 0:
        return 0.0
    return len(habit.completed_dates) / total_days


class AnalyticsAggregator:
    def __init__(
        self,
        clusterer: LocationClusterer | None = None,
        weather_analyzer: WeatherPatternAnalyzer | None = None,
        top_times: int = 3,
    ):
        self.clusterer = clusterer or LocationClusterer()
        self.weather_analyzer = weather_analyzer or WeatherPatternAnalyzer()
        self.top_times = top_times

    def build(self, habit: Habit, today: date) -> HabitAnalytics:
        return HabitAnalytics(
            total_completions=len(habit.completed_dates),
            current_streak=habit.current_streak,
            best_streak=habit.best_streak,
            completion_rate=completion_rate(habit, today),
            common_completion_times=common_completion_times(habit.completed_dates, self.top_times),
            common_locations=self.clusterer.common_locations(habit.analytics.completion_locations),
            weather_patterns=self.weather_analyzer.analyze(habit.analytics.weather_conditions),
        )
