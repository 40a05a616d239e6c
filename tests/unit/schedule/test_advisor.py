"""Tests for daybook/schedule/advisor.py"""

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from daybook.errors import ScheduleNotFound, WeatherFailure
from daybook.schedule import (
    Interval,
    Location,
    RescheduleAdvisor,
    ReschedulingReason,
    RouteAugmenter,
    ScheduleDay,
    ScheduledEvent,
    ScheduleStore,
    ScheduleSuggestion,
    find_available_time_slots,
)
from daybook.schedule.advisor import is_dry

from tests.fakes import DAY, OFFICE, FakeWeatherProvider, at, hourly

MIDNIGHT = at(0)
NEXT_MIDNIGHT = at(0, day=DAY + timedelta(days=1))
LONDON = ZoneInfo("Europe/London")


def london(dt):
    return dt.replace(tzinfo=LONDON)


def event(title, start, end, **kwargs):
    return ScheduledEvent(title=title, interval=Interval(start, end), **kwargs)


class TestFindAvailableTimeSlots:
    def test_one_slot_per_gap(self):
        slots = find_available_time_slots(
            [event("Lunch", at(12), at(13))], MIDNIGHT, NEXT_MIDNIGHT, timedelta(minutes=30)
        )

        assert slots == [Interval(at(0), at(0, 30)), Interval(at(13), at(13, 30))]

    def test_empty_day_yields_single_slot(self):
        slots = find_available_time_slots([], MIDNIGHT, NEXT_MIDNIGHT, timedelta(hours=2))

        assert slots == [Interval(at(0), at(2))]

    def test_gap_exactly_duration_is_used(self):
        events = [event("A", at(0), at(9)), event("B", at(10), at(23))]

        slots = find_available_time_slots(events, MIDNIGHT, NEXT_MIDNIGHT, timedelta(hours=1))

        assert slots == [Interval(at(9), at(10)), Interval(at(23), NEXT_MIDNIGHT)]

    def test_short_gaps_skipped(self):
        events = [event("A", at(0), at(9)), event("B", at(9, 20), at(23, 50))]

        slots = find_available_time_slots(events, MIDNIGHT, NEXT_MIDNIGHT, timedelta(minutes=30))

        assert slots == []

    def test_unsorted_input_walked_in_start_order(self):
        events = [event("B", at(14), at(15)), event("A", at(0), at(13))]

        slots = find_available_time_slots(events, MIDNIGHT, NEXT_MIDNIGHT, timedelta(minutes=30))

        assert slots == [Interval(at(13), at(13, 30)), Interval(at(15), at(15, 30))]

    def test_aware_bounds_with_naive_events(self):
        slots = find_available_time_slots(
            [event("Lunch", at(12), at(13))],
            london(MIDNIGHT),
            london(NEXT_MIDNIGHT),
            timedelta(hours=1),
            LONDON,
        )

        assert slots == [Interval(at(0), at(1)), Interval(at(13), at(14))]

    def test_naive_bounds_with_aware_events(self):
        slots = find_available_time_slots(
            [event("Lunch", london(at(12)), london(at(13)))],
            MIDNIGHT,
            NEXT_MIDNIGHT,
            timedelta(hours=1),
            LONDON,
        )

        assert slots == [
            Interval(london(at(0)), london(at(1))),
            Interval(london(at(13)), london(at(14))),
        ]


class TestIsDry:
    def test_rain_inside_slot(self):
        assert not is_dry(Interval(at(9), at(10)), [hourly(at(10), "Rain")])

    def test_rain_outside_slot(self):
        assert is_dry(Interval(at(9), at(10)), [hourly(at(11), "Rain"), hourly(at(9), "Clouds")])

    def test_aware_forecast_read_on_local_wall_clock(self):
        # 08:30 UTC is 09:30 in London during BST
        rain = hourly(at(8, 30).replace(tzinfo=timezone.utc), "Rain")

        assert not is_dry(Interval(at(9), at(10)), [rain], tz=LONDON)
        assert is_dry(Interval(at(10), at(11)), [rain], tz=LONDON)


class TestSuggestRescheduling:
    async def _seed(self, store, persistence, *events):
        await persistence.save(ScheduleDay(date=DAY, events=list(events)))
        await store.load()

    @pytest.mark.asyncio
    async def test_outdoor_event_gets_first_dry_slot(self, schedule_store, day_persistence):
        picnic = event(
            "Picnic", at(12), at(13), location=Location(OFFICE), is_outdoor=True, needs_rescheduling=True
        )
        await self._seed(schedule_store, day_persistence, picnic)
        weather = FakeWeatherProvider("Rain", hourly=[hourly(at(0, 30), "Rain"), hourly(at(13), "Clear")])

        suggestions = await RescheduleAdvisor(schedule_store, weather).suggest_rescheduling(DAY)

        assert len(suggestions) == 1
        assert suggestions[0].event.id == picnic.id
        assert suggestions[0].slot == Interval(at(13), at(14))
        assert suggestions[0].reason == ReschedulingReason.WEATHER
        assert weather.calls == [(OFFICE.latitude, OFFICE.longitude)]

    @pytest.mark.asyncio
    async def test_no_dry_slot_no_suggestion(self, schedule_store, day_persistence):
        picnic = event(
            "Picnic", at(12), at(13), location=Location(OFFICE), is_outdoor=True, needs_rescheduling=True
        )
        await self._seed(schedule_store, day_persistence, picnic)
        weather = FakeWeatherProvider("Rain", hourly=[hourly(at(0), "Rain"), hourly(at(14), "Heavy Rain")])

        assert await RescheduleAdvisor(schedule_store, weather).suggest_rescheduling(DAY) == []

    @pytest.mark.asyncio
    async def test_forecast_failure_skips_event(self, schedule_store, day_persistence):
        picnic = event(
            "Picnic", at(12), at(13), location=Location(OFFICE), is_outdoor=True, needs_rescheduling=True
        )
        await self._seed(schedule_store, day_persistence, picnic)
        weather = FakeWeatherProvider(error=WeatherFailure("Server error with code: 500", status_code=500))

        assert await RescheduleAdvisor(schedule_store, weather).suggest_rescheduling(DAY) == []

    @pytest.mark.asyncio
    async def test_flagged_indoor_event_gets_unfiltered_slot(self, schedule_store, day_persistence):
        await self._seed(schedule_store, day_persistence, event("Review", at(12), at(13), needs_rescheduling=True))
        weather = FakeWeatherProvider("Rain")

        suggestions = await RescheduleAdvisor(schedule_store, weather).suggest_rescheduling(DAY)

        assert [s.slot for s in suggestions] == [Interval(at(0), at(1))]
        assert weather.calls == []

    @pytest.mark.asyncio
    async def test_unflagged_events_ignored(self, schedule_store, day_persistence):
        await self._seed(schedule_store, day_persistence, event("Review", at(12), at(13)))

        assert await RescheduleAdvisor(schedule_store, FakeWeatherProvider()).suggest_rescheduling(DAY) == []

    @pytest.mark.asyncio
    async def test_timezone_store_with_naive_events(self, day_persistence, locations, routes):
        store = ScheduleStore(
            day_persistence,
            RouteAugmenter(locations, routes),
            tz=LONDON,
            clock=lambda: datetime(2026, 10, 1, 8, 0, tzinfo=LONDON),
        )
        picnic = event(
            "Picnic", at(12), at(13), location=Location(OFFICE), is_outdoor=True, needs_rescheduling=True
        )
        await self._seed(store, day_persistence, picnic)
        weather = FakeWeatherProvider(
            "Rain", hourly=[hourly(london(at(0, 30)), "Rain"), hourly(london(at(13)), "Clear")]
        )

        suggestions = await RescheduleAdvisor(store, weather).suggest_rescheduling(DAY)

        assert [s.slot for s in suggestions] == [Interval(at(13), at(14))]

    @pytest.mark.asyncio
    async def test_aware_events_in_store_without_timezone(self, schedule_store, day_persistence):
        review = event("Review", london(at(12)), london(at(13)), needs_rescheduling=True)
        await self._seed(schedule_store, day_persistence, review)

        suggestions = await RescheduleAdvisor(schedule_store, FakeWeatherProvider()).suggest_rescheduling(DAY)

        assert len(suggestions) == 1
        assert suggestions[0].slot.start.tzinfo is not None

    @pytest.mark.asyncio
    async def test_unknown_day_raises(self, schedule_store):
        with pytest.raises(ScheduleNotFound):
            await RescheduleAdvisor(schedule_store, FakeWeatherProvider()).suggest_rescheduling(DAY)

    def test_suggestion_to_dict(self):
        review = event("Review", at(12), at(13))
        data = ScheduleSuggestion(review, Interval(at(14), at(15))).to_dict()

        assert data == {
            "event_id": review.id,
            "title": "Review",
            "slot": {"start": at(14).isoformat(), "end": at(15).isoformat()},
            "reason": "weather",
        }
