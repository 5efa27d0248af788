"""
Movement routes inferred from consecutive sightings.

A route starts at a sighting and follows later sightings at other cameras as
long as each hop happens within the time window and stays inside the
distance cap. Each hop is one transition. Routes are reported next to the
zones, never merged into them.

Usage:

    from bucktrax.prediction.routes import identify_movement_routes

    routes = identify_movement_routes(sightings_df, time_window_minutes=60)
    total_transitions = sum(r.transition_count for r in routes)
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any

import pandas as pd

from bucktrax.prediction.segments import segment_for_hour

logger = logging.getLogger(__name__)

EARTH_RADIUS_M = 6_371_000.0


def haversine_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points in metres."""
    lat1_r, lat2_r = math.radians(lat1), math.radians(lat2)
    dlat, dlon = math.radians(lat2 - lat1), math.radians(lon2 - lon1)
    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(lat1_r) * math.cos(lat2_r) * math.sin(dlon / 2) ** 2
    )
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


@dataclass(frozen=True)
class RoutePoint:
    order: int
    camera_id: int
    location_name: str
    latitude: float
    longitude: float
    visit_time: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "order": int(self.order),
            "cameraId": int(self.camera_id),
            "locationName": self.location_name,
            "latitude": float(self.latitude),
            "longitude": float(self.longitude),
            "visitTime": self.visit_time.isoformat(),
        }


@dataclass(frozen=True)
class MovementRoute:
    route_id: str
    points: tuple[RoutePoint, ...]

    @property
    def transition_count(self) -> int:
        return len(self.points) - 1

    @property
    def name(self) -> str:
        return " → ".join(p.location_name for p in self.points)

    @property
    def distance_meters(self) -> float:
        """Summed hop distances along the route."""
        return sum(
            haversine_m(a.latitude, a.longitude, b.latitude, b.longitude)
            for a, b in zip(self.points, self.points[1:])
        )

    @property
    def time_span_hours(self) -> float:
        return (self.points[-1].visit_time - self.points[0].visit_time).total_seconds() / 3600

    @property
    def time_segment(self) -> str:
        """Name of the time segment the route starts in."""
        return segment_for_hour(self.points[0].visit_time.hour).name

    def to_dict(self) -> dict[str, Any]:
        return {
            "routeId": self.route_id,
            "name": self.name,
            "transitionCount": self.transition_count,
            "distanceMeters": round(self.distance_meters, 1),
            "timeSpanHours": round(self.time_span_hours, 3),
            "timeSegment": self.time_segment,
            "points": [p.to_dict() for p in self.points],
        }


def identify_movement_routes(
    sightings: pd.DataFrame,
    time_window_minutes: float = 60,
    max_distance_m: float = 2000,
) -> list[MovementRoute]:
    """
    Chain time-ordered sightings into movement routes.

    Starting from each sighting not already on a route, later sightings are
    appended while the gap to the route's last point is at most
    time_window_minutes. A candidate further than max_distance_m from the
    last point, or at the same camera, is skipped without ending the route.

    Args:
        sightings: Sightings DataFrame (SIGHTING_COLUMNS) in capture order.
        time_window_minutes: Largest gap between two points of one route.
        max_distance_m: Largest hop distance between two points of one route.

    Returns:
        Routes with at least one transition, in order of their first sighting.
    """
    rows = list(sightings.itertuples(index=False))
    times = [pd.Timestamp(t).to_pydatetime() for t in sightings["date_taken"]]
    window_s = time_window_minutes * 60

    routes: list[MovementRoute] = []
    i = 0
    while i < len(rows):
        points = [_route_point(1, rows[i], times[i])]
        next_start = i + 1

        for j in range(i + 1, len(rows)):
            last = points[-1]
            if (times[j] - last.visit_time).total_seconds() > window_s:
                break
            row = rows[j]
            if int(row.camera_id) == last.camera_id:
                continue
            if haversine_m(last.latitude, last.longitude, row.latitude, row.longitude) > max_distance_m:
                continue
            points.append(_route_point(len(points) + 1, row, times[j]))
            next_start = j + 1

        if len(points) > 1:
            routes.append(MovementRoute(route_id=f"route-{len(routes) + 1}", points=tuple(points)))
        i = next_start

    logger.debug("%d sightings → %d movement routes", len(rows), len(routes))
    return routes


def _route_point(order: int, row: Any, visit_time: datetime) -> RoutePoint:
    return RoutePoint(
        order=order,
        camera_id=int(row.camera_id),
        location_name=str(row.camera_name),
        latitude=float(row.latitude),
        longitude=float(row.longitude),
        visit_time=visit_time,
    )
