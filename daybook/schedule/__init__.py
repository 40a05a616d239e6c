"""Schedule Engine - context-aware daily schedule builder

Components:
    models.py: Interval, ScheduledEvent, ScheduleDay, ScheduleSuggestion
    store.py: Per-date event store, non-overlap on insert
    routing.py: Folds routed travel time into location-bound events
    optimizer.py: Rain flagging and travel buffer cascade
    advisor.py: Gap finding and weather-filtered rescheduling
"""

from .advisor import RescheduleAdvisor, find_available_time_slots
from .models import (
    EventPriority,
    Interval,
    Location,
    ReschedulingReason,
    RouteInfo,
    ScheduleDay,
    ScheduledEvent,
    ScheduleSuggestion,
)
from .optimizer import ScheduleOptimizer
from .routing import RouteAugmenter
from .store import ScheduleStore

__all__ = [
    "EventPriority",
    "Interval",
    "Location",
    "RescheduleAdvisor",
    "ReschedulingReason",
    "RouteAugmenter",
    "RouteInfo",
    "ScheduleDay",
    "ScheduleOptimizer",
    "ScheduleStore",
    "ScheduleSuggestion",
    "ScheduledEvent",
    "find_available_time_slots",
]
