"""
Location Clusterer

Single-pass greedy clustering of completion coordinates. Each point joins
the first existing cluster holding any member within the radius (haversine
distance), otherwise it starts a new cluster. The result depends on
insertion order.

Centroids are the plain mean of member latitudes and longitudes, which is
fine at city scale but wrong near the poles or across the antimeridian.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from daybook.geo import Coordinate


@dataclass
class LocationCluster:
    members: list[Coordinate] = field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.members)

    @property
    def centroid(self) -> Coordinate:
        count = len(self.members)
        return Coordinate(
            latitude=sum(m.latitude for m in self.members) / count,
            longitude=sum(m.longitude for m in self.members) / count,
        )

    def is_near(self, point: Coordinate, radius_meters: float) -> bool:
        return any(m.distance_to(point) < radius_meters for m in self.members)


class LocationClusterer:
    def __init__(self, radius_meters: float = 100.0, top_n: int = 3):
        self.radius_meters = radius_meters
        self.top_n = top_n

    def cluster(self, locations: list[Coordinate]) -> list[LocationCluster]:
        """All clusters, largest first; equal sizes keep creation order."""
        clusters: list[LocationCluster] = []
        for point in locations:
            home = next((c for c in clusters if c.is_near(point, self.radius_meters)), None)
            if home is None:
                clusters.append(LocationCluster([point]))
            else:
                home.members.append(point)
        return sorted(clusters, key=lambda c: c.size, reverse=True)

    def common_locations(self, locations: list[Coordinate]) -> list[Coordinate]:
        return [c.centroid for c in self.cluster(locations)[: self.top_n]]
