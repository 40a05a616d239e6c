"""Habit Engine - completion ledger, streaks, and analytics

Components:
    models.py: Habit, HabitFrequency, HabitAnalytics
    streaks.py: Frequency-aware streak continuation rule
    clustering.py: Greedy proximity clustering of completion locations
    analytics.py: Weather histograms, common times, report assembly
    ledger.py: Serialized habit registry (create, complete, analyze)
"""

from .analytics import AnalyticsAggregator, WeatherPatternAnalyzer, common_completion_times, completion_rate
from .clustering import LocationCluster, LocationClusterer
from .ledger import HabitLedger
from .models import (
    CompletionTime,
    FrequencyKind,
    Habit,
    HabitAnalytics,
    HabitAnalyticsData,
    HabitFrequency,
    WeatherPattern,
)
from .streaks import StreakCalculator, days_between

__all__ = [
    "AnalyticsAggregator",
    "CompletionTime",
    "FrequencyKind",
    "Habit",
    "HabitAnalytics",
    "HabitAnalyticsData",
    "HabitFrequency",
    "HabitLedger",
    "LocationCluster",
    "LocationClusterer",
    "StreakCalculator",
    "WeatherPattern",
    "WeatherPatternAnalyzer",
    "common_completion_times",
    "completion_rate",
    "days_between",
]
