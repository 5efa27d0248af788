"""
Per-segment location zones.

Within one time segment, every distinct camera location becomes a zone whose
probability is its share of that segment's sightings. Busier locations get a
tighter display radius since the animal is more reliably found there.
"""

from __future__ import annotations

import logging

import pandas as pd

from bucktrax.config import BuckTraxSettings
from bucktrax.prediction.models import PredictionZone

logger = logging.getLogger(__name__)

# Two sightings share a zone only if all four of these match.
LOCATION_KEY = ["camera_id", "camera_name", "latitude", "longitude"]

_DEFAULT_SETTINGS = BuckTraxSettings()


def zone_radius(probability: float, settings: BuckTraxSettings = _DEFAULT_SETTINGS) -> int:
    """Display radius in metres for a zone: >0.5 → 100, >0.25 → 200, else 300 by default."""
    if probability > settings.high_probability_threshold:
        return settings.high_probability_radius_m
    if probability > settings.medium_probability_threshold:
        return settings.medium_probability_radius_m
    return settings.low_probability_radius_m


def aggregate_zones(
    segment_sightings: pd.DataFrame,
    settings: BuckTraxSettings = _DEFAULT_SETTINGS,
) -> list[PredictionZone]:
    """
    Group one segment's sightings by camera location and score each group.

    Groups are ordered by descending sighting count. Equal counts keep the
    order in which the locations first appear in the input.

    Args:
        segment_sightings: The sightings that fall in a single time segment.
        settings: Radius tier thresholds.

    Returns:
        One non-corridor PredictionZone per location. Probabilities sum to 1.0
        and counts sum to len(segment_sightings). Empty input → empty list.
    """
    segment_count = len(segment_sightings)
    if segment_count == 0:
        return []

    groups = (
        segment_sightings.groupby(LOCATION_KEY, sort=False, dropna=False)
        .size()
        .reset_index(name="sighting_count")
    )
    groups["discovery_order"] = range(len(groups))
    groups = groups.sort_values(
        ["sighting_count", "discovery_order"], ascending=[False, True]
    )
    groups["probability"] = groups["sighting_count"] / segment_count

    zones = [
        PredictionZone(
            location_name=str(row.camera_name),
            latitude=float(row.latitude),
            longitude=float(row.longitude),
            probability=float(row.probability),
            sighting_count=int(row.sighting_count),
            radius_meters=zone_radius(float(row.probability), settings),
            is_corridor_prediction=False,
        )
        for row in groups.itertuples(index=False)
    ]
    logger.debug("%d sightings → %d zones", segment_count, len(zones))
    return zones
