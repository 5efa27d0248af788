"""
Result types produced by the movement-prediction pipeline.

The dataclasses use snake_case attributes; to_dict() / to_json() emit the
camelCase document shape consumers rely on. Key names and ordering are
stable, so serializing the same result twice gives identical bytes.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from bucktrax.prediction.routes import MovementRoute


@dataclass(frozen=True)
class Profile:
    """An animal profile: one tag on one property."""

    profile_id: int
    name: str
    property_id: int
    property_name: str
    tag_id: int


@dataclass(frozen=True)
class PredictionZone:
    location_name: str
    latitude: float
    longitude: float
    probability: float
    sighting_count: int
    radius_meters: int
    is_corridor_prediction: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "locationName": self.location_name,
            "latitude": float(self.latitude),
            "longitude": float(self.longitude),
            "probability": float(self.probability),
            "sightingCount": int(self.sighting_count),
            "radiusMeters": int(self.radius_meters),
            "isCorridorPrediction": bool(self.is_corridor_prediction),
        }


@dataclass(frozen=True)
class TimeSegmentPrediction:
    segment_name: str
    start_hour: int
    end_hour: int
    sighting_count: int
    zones: list[PredictionZone] = field(default_factory=list)
    confidence_score: float = 0.0

    @property
    def sighting_zones(self) -> list[PredictionZone]:
        """Zones backed by sightings (corridor zones excluded)."""
        return [z for z in self.zones if not z.is_corridor_prediction]

    @property
    def corridor_zones(self) -> list[PredictionZone]:
        return [z for z in self.zones if z.is_corridor_prediction]

    def to_dict(self) -> dict[str, Any]:
        return {
            "segmentName": self.segment_name,
            "startHour": int(self.start_hour),
            "endHour": int(self.end_hour),
            "sightingCount": int(self.sighting_count),
            "zones": [z.to_dict() for z in self.zones],
            "confidenceScore": float(self.confidence_score),
        }


@dataclass(frozen=True)
class PredictionResult:
    profile_id: int
    profile_name: str
    property_name: str
    total_sightings: int
    prediction_date: datetime
    time_segments: list[TimeSegmentPrediction]
    is_limited_data: bool = False
    limited_data_message: str | None = None
    movement_routes: list[MovementRoute] = field(default_factory=list)

    @property
    def total_transitions(self) -> int:
        return sum(r.transition_count for r in self.movement_routes)

    def segment(self, name: str) -> TimeSegmentPrediction:
        """Look up a segment prediction by its display name."""
        for seg in self.time_segments:
            if seg.segment_name == name:
                return seg
        raise KeyError(f"No time segment named {name!r}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "profileId": int(self.profile_id),
            "profileName": self.profile_name,
            "propertyName": self.property_name,
            "totalSightings": int(self.total_sightings),
            "predictionDate": self.prediction_date.isoformat(),
            "isLimitedData": bool(self.is_limited_data),
            "limitedDataMessage": self.limited_data_message,
            "timeSegments": [s.to_dict() for s in self.time_segments],
            "totalTransitions": self.total_transitions,
            "movementRoutes": [r.to_dict() for r in self.movement_routes],
        }

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)
