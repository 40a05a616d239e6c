"""
Streak continuation rules.

The grace window between two completions depends on frequency:

    daily    - at most 1 calendar day apart
    weekly   - at most 7 calendar days apart
    monthly  - same calendar month (elapsed days are irrelevant)
    custom   - at most interval_days calendar days apart

Gaps count calendar days between the two dates, ignoring time of day.
"""

from __future__ import annotations

from datetime import date, datetime

from .models import FrequencyKind, HabitFrequency


def _as_date(value: date | datetime) -> date:
    return value.date() if isinstance(value, datetime) else value


def days_between(start: date | datetime, end: date | datetime) -> int:
    return (_as_date(end) - _as_date(start)).days


class StreakCalculator:
    @staticmethod
    def is_streak(
        last_completion: date | datetime | None,
        completion: date | datetime,
        frequency: HabitFrequency,
    ) -> bool:
        if last_completion is None:
            return True

        if frequency.kind == FrequencyKind.MONTHLY:
            last, current = _as_date(last_completion), _as_date(completion)
            return (last.year, last.month) == (current.year, current.month)

        gap = days_between(last_completion, completion)
        if frequency.kind == FrequencyKind.DAILY:
            return gap <= 1
        if frequency.kind == FrequencyKind.WEEKLY:
            return gap <= 7
        return gap <= frequency.interval_days
