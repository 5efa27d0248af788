"""
Movement prediction for one animal profile.

The pipeline is a pure function of an already-fetched snapshot:

  1. Sightings are split into the six fixed time segments.
  2. Each segment's sightings are grouped into location zones and scored.
  3. Corridor zones from the property's terrain features are appended to
     every segment, and each segment's zones are ordered by probability.
  4. Consecutive sightings at nearby cameras are chained into movement
     routes, reported beside the segments.
  5. The six segment predictions are wrapped with profile metadata.

Segment computations don't depend on each other; with parallel_segments
enabled they run on a thread pool, and the output is always reassembled in
the fixed segment order.

Usage:

    from bucktrax.prediction.assembler import predict_for_profile

    result = predict_for_profile(snapshot, profile_id=12)
    print(result.to_json())
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone

import pandas as pd

from bucktrax.config import LIMITED_DATA_MESSAGE, BuckTraxSettings
from bucktrax.data.sightings import validate_sightings
from bucktrax.data.snapshot import PropertySnapshot
from bucktrax.prediction.confidence import confidence_score
from bucktrax.prediction.models import (
    PredictionResult,
    PredictionZone,
    Profile,
    TimeSegmentPrediction,
)
from bucktrax.prediction.routes import identify_movement_routes
from bucktrax.prediction.segments import TIME_SEGMENTS, TimeSegment, bucket_sightings
from bucktrax.prediction.zones import aggregate_zones
from bucktrax.terrain.classification import TerrainFeature
from bucktrax.terrain.corridors import select_corridor_zones

logger = logging.getLogger(__name__)


def predict_segment(
    segment: TimeSegment,
    segment_sightings: pd.DataFrame,
    total_sightings: int,
    corridor_zones: Sequence[PredictionZone],
    settings: BuckTraxSettings,
) -> TimeSegmentPrediction:
    """Zones, corridor zones and confidence for a single time segment."""
    segment_count = len(segment_sightings)
    zones = aggregate_zones(segment_sightings, settings) + list(corridor_zones)
    # sorted() is stable, so equal probabilities keep sightings ahead of corridors
    zones = sorted(zones, key=lambda z: z.probability, reverse=True)

    return TimeSegmentPrediction(
        segment_name=segment.name,
        start_hour=segment.start_hour,
        end_hour=segment.end_hour,
        sighting_count=segment_count,
        zones=zones,
        confidence_score=confidence_score(segment_count, total_sightings, settings),
    )


def predict_movement(
    profile: Profile,
    sightings: pd.DataFrame,
    features: Sequence[TerrainFeature],
    settings: BuckTraxSettings | None = None,
    generated_at: datetime | None = None,
) -> PredictionResult:
    """
    Build the per-time-of-day prediction for a profile.

    Args:
        profile: Profile metadata (name, property name) for the result header.
        sightings: The profile's sightings (SIGHTING_COLUMNS), in capture order.
        features: The property's terrain features, in stored order.
        settings: Pipeline tunables. Defaults reproduce the fixed heuristic.
        generated_at: Timestamp recorded as the prediction date. Defaults to
            the current UTC time; pass a fixed value for reproducible output.

    Returns:
        A PredictionResult with exactly one TimeSegmentPrediction per catalog
        segment, in catalog order, even when there are no sightings.

    Raises:
        InvalidSightingError: If any sighting has unusable coordinates or time.
    """
    settings = settings or BuckTraxSettings()
    generated_at = generated_at or datetime.now(timezone.utc)

    validate_sightings(sightings)
    total = len(sightings)

    corridor_zones = select_corridor_zones(
        features,
        max_features=settings.max_corridor_features,
        baseline_probability=settings.corridor_baseline_probability,
        radius_m=settings.corridor_radius_m,
    )
    buckets = bucket_sightings(sightings, TIME_SEGMENTS)

    def _predict(args: tuple[TimeSegment, pd.DataFrame]) -> TimeSegmentPrediction:
        segment, subset = args
        return predict_segment(segment, subset, total, corridor_zones, settings)

    work = list(zip(TIME_SEGMENTS, buckets))
    if settings.parallel_segments:
        with ThreadPoolExecutor(max_workers=len(work)) as pool:
            # map() yields in submission order, i.e. catalog order
            segment_predictions = list(pool.map(_predict, work))
    else:
        segment_predictions = [_predict(item) for item in work]

    routes = identify_movement_routes(
        sightings,
        time_window_minutes=settings.movement_time_window_minutes,
        max_distance_m=settings.max_movement_distance_m,
    )

    is_limited = (
        total < settings.minimum_sightings_threshold
        or len(routes) < settings.minimum_transitions_threshold
    )
    logger.info(
        "Profile %s (%s): %d sightings, %d routes, %d corridor zones%s",
        profile.profile_id,
        profile.name,
        total,
        len(routes),
        len(corridor_zones),
        " [limited data]" if is_limited else "",
    )

    return PredictionResult(
        profile_id=profile.profile_id,
        profile_name=profile.name,
        property_name=profile.property_name,
        total_sightings=total,
        prediction_date=generated_at,
        time_segments=segment_predictions,
        is_limited_data=is_limited,
        limited_data_message=(
            LIMITED_DATA_MESSAGE if is_limited and settings.show_limited_data_warning else None
        ),
        movement_routes=routes,
    )


def predict_for_profile(
    snapshot: PropertySnapshot,
    profile_id: int,
    settings: BuckTraxSettings | None = None,
    generated_at: datetime | None = None,
) -> PredictionResult:
    """
    Fetch a profile's sightings and terrain features from the snapshot and predict.

    Raises:
        KeyError: If the profile isn't in the snapshot.
        InvalidSightingError: If a sighting has unusable coordinates or time.
    """
    settings = settings or BuckTraxSettings()
    profile = snapshot.get_profile(profile_id)
    sightings = snapshot.get_sightings(profile_id, settings)
    features = snapshot.get_terrain_features(profile.property_id)
    return predict_movement(profile, sightings, features, settings, generated_at)
