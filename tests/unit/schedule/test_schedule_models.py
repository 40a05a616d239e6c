"""Tests for daybook/schedule/models.py"""

from datetime import timedelta

import pytest

from daybook.errors import InvalidTimeSlot
from daybook.schedule.models import (
    EventPriority,
    Interval,
    Location,
    RouteInfo,
    ScheduleDay,
    ScheduledEvent,
)

from tests.fakes import HOME, OFFICE, at


class TestInterval:
    def test_end_before_start_rejected(self):
        with pytest.raises(InvalidTimeSlot):
            Interval(at(10), at(9))

    def test_zero_length_rejected(self):
        with pytest.raises(InvalidTimeSlot):
            Interval(at(10), at(10))

    def test_duration(self):
        assert Interval(at(9), at(10, 30)).duration == timedelta(minutes=90)

    def test_touching_intervals_do_not_overlap(self):
        assert not Interval(at(9), at(10)).overlaps(Interval(at(10), at(11)))
        assert not Interval(at(10), at(11)).overlaps(Interval(at(9), at(10)))

    def test_partial_overlap(self):
        assert Interval(at(9), at(10)).overlaps(Interval(at(9, 30), at(10, 15)))

    def test_containment_counts_as_overlap(self):
        assert Interval(at(9), at(12)).overlaps(Interval(at(10), at(11)))

    def test_contains_is_inclusive(self):
        interval = Interval(at(9), at(10))
        assert interval.contains(at(9))
        assert interval.contains(at(10))
        assert not interval.contains(at(10, 1))


class TestScheduledEvent:
    def test_defaults(self):
        event = ScheduledEvent(title="Standup", interval=Interval(at(9), at(9, 15)))
        assert event.priority == EventPriority.MEDIUM
        assert event.needs_rescheduling is False
        assert event.linked_task_ids == set()
        assert event.id

    def test_ids_are_unique(self):
        a = ScheduledEvent(title="A", interval=Interval(at(9), at(10)))
        b = ScheduledEvent(title="B", interval=Interval(at(9), at(10)))
        assert a.id != b.id

    def test_serialization_preserves_route_and_location(self):
        event = ScheduledEvent(
            title="Client visit",
            interval=Interval(at(13), at(14)),
            location=Location(OFFICE, "1 Bank St"),
            route_info=RouteInfo(900, Location(HOME, "Current Location"), Location(OFFICE, "1 Bank St")),
            is_outdoor=True,
            priority=EventPriority.HIGH,
            linked_task_ids={"t2", "t1"},
        )

        data = event.to_dict()
        assert data["priority"] == 3
        assert data["linked_task_ids"] == ["t1", "t2"]

        restored = ScheduledEvent.from_dict(data)
        assert restored == event
        assert restored.route_info.estimated_duration == timedelta(minutes=15)


class TestScheduleDay:
    def test_key_is_iso_date(self):
        assert ScheduleDay(date=at(0).date()).key == "2026-10-19"

    def test_conflicting_event_returns_first_overlap(self):
        first = ScheduledEvent(title="First", interval=Interval(at(9), at(10)))
        second = ScheduledEvent(title="Second", interval=Interval(at(11), at(12)))
        day = ScheduleDay(date=at(0).date(), events=[first, second])

        assert day.conflicting_event(Interval(at(9, 30), at(11, 30))) is first
        assert day.conflicting_event(Interval(at(10), at(11))) is None

    def test_sort_events_is_stable(self):
        early = ScheduledEvent(title="Early", interval=Interval(at(8), at(9)))
        tie_a = ScheduledEvent(title="A", interval=Interval(at(10), at(11)))
        tie_b = ScheduledEvent(title="B", interval=Interval(at(10), at(10, 30)))
        day = ScheduleDay(date=at(0).date(), events=[tie_a, early, tie_b])

        day.sort_events()

        assert [e.title for e in day.events] == ["Early", "A", "B"]
