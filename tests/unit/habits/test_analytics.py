"""Tests for daybook/habits/analytics.py"""

from datetime import date, datetime

import pytest

from daybook.geo import Coordinate
from daybook.habits import (
    AnalyticsAggregator,
    CompletionTime,
    Habit,
    WeatherPattern,
    WeatherPatternAnalyzer,
    common_completion_times,
    completion_rate,
)


class TestWeatherPatternAnalyzer:
    def test_most_frequent_first(self):
        patterns = WeatherPatternAnalyzer().analyze(["Clear", "Rain", "Clear", "Clouds", "Clear", "Rain"])

        assert patterns == [
            WeatherPattern("Clear", 3),
            WeatherPattern("Rain", 2),
            WeatherPattern("Clouds", 1),
        ]

    def test_ties_keep_first_seen_order(self):
        patterns = WeatherPatternAnalyzer().analyze(["Snow", "Clear"])
        assert [p.condition for p in patterns] == ["Snow", "Clear"]


class TestCommonCompletionTimes:
    def test_exact_minute_buckets(self):
        completed = [
            datetime(2026, 10, 1, 7, 30),
            datetime(2026, 10, 2, 7, 30),
            datetime(2026, 10, 3, 7, 31),
            datetime(2026, 10, 4, 21, 0),
            datetime(2026, 10, 5, 21, 0),
            datetime(2026, 10, 6, 12, 15),
        ]

        assert common_completion_times(completed, top_n=3) == [
            CompletionTime(7, 30),
            CompletionTime(21, 0),
            CompletionTime(7, 31),
        ]

    def test_empty_log(self):
        assert common_completion_times([]) == []


class TestCompletionRate:
    def test_completions_over_elapsed_days(self):
        habit = Habit(
            title="Read",
            start_date=date(2026, 10, 9),
            completed_dates=[datetime(2026, 10, 9), datetime(2026, 10, 12)],
        )

        assert completion_rate(habit, date(2026, 10, 19)) == pytest.approx(0.2)

    def test_no_start_date(self):
        assert completion_rate(Habit(title="Read"), date(2026, 10, 19)) == 0.0

    def test_started_today(self):
        habit = Habit(title="Read", start_date=date(2026, 10, 19), completed_dates=[datetime(2026, 10, 19, 8)])
        assert completion_rate(habit, date(2026, 10, 19)) == 0.0


def test_aggregator_builds_full_report():
    habit = Habit(
        title="Walk",
        start_date=date(2026, 10, 15),
        completed_dates=[datetime(2026, 10, 15, 18), datetime(2026, 10, 16, 18)],
        current_streak=2,
        best_streak=4,
    )
    habit.analytics.completion_locations.extend([Coordinate(40.0, -73.0), Coordinate(40.0, -73.0)])
    habit.analytics.weather_conditions.extend(["Clear", "Clear"])

    report = AnalyticsAggregator().build(habit, today=date(2026, 10, 19))

    assert report.total_completions == 2
    assert report.current_streak == 2
    assert report.best_streak == 4
    assert report.completion_rate == pytest.approx(0.5)
    assert report.common_completion_times == [CompletionTime(18, 0)]
    assert report.common_locations == [Coordinate(40.0, -73.0)]
    assert report.to_dict()["weather_patterns"] == [{"condition": "Clear", "count": 2}]
