"""
Route Augmenter

Folds travel time into location-bound events: the event's start moves
earlier by the routed travel duration while its end stays put, so the
stored interval covers the trip plus the activity.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import timedelta

from daybook.errors import RoutingFailure
from daybook.logging_config import get_logger
from daybook.providers.base import LocationProvider, RouteProvider
from daybook.providers.calls import best_effort, required

from .models import Interval, Location, RouteInfo, ScheduledEvent

logger = get_logger(__name__)

CURRENT_LOCATION_ADDRESS = "Current Location"


class RouteAugmenter:
    def __init__(self, locations: LocationProvider, routes: RouteProvider):
        self.locations = locations
        self.routes = routes

    async def augment(self, event: ScheduledEvent) -> ScheduledEvent:
        """Return a copy of event with route info and a travel-adjusted start.

        The event is returned unchanged when it has no location or the
        current location is unknown.

        Raises:
            RoutingFailure: If the directions lookup fails
        """
        if event.location is None:
            return event

        origin = await best_effort(self.locations.current, "current location lookup")
        if origin is None:
            logger.info(f"No current location, skipping travel time for event {event.id}")
            return event

        destination = event.location
        directions = await required(
            lambda: self.routes.directions(origin, destination.coordinate),
            RoutingFailure,
            "directions lookup",
        )
        travel_seconds = directions.first_leg_duration()

        route_info = RouteInfo(
            estimated_duration_seconds=travel_seconds,
            start_location=Location(coordinate=origin, address=CURRENT_LOCATION_ADDRESS, radius=100),
            end_location=destination,
        )
        interval = Interval(
            start=event.interval.start - timedelta(seconds=travel_seconds),
            end=event.interval.end,
        )
        logger.debug(f"Event {event.id}: {travel_seconds}s travel folded into start")
        return replace(event, route_info=route_info, interval=interval)
