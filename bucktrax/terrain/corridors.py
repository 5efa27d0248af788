"""
Movement-corridor zone selection.

Draws, creek crossings, field edges, pinch points and mapped travel corridors
channel deer movement regardless of when the animal was photographed. The
first few such features on a property become corridor zones that are added
to every time segment at a fixed baseline probability.

Usage:

    from bucktrax.terrain.corridors import select_corridor_zones

    zones = select_corridor_zones(features)
    # [PredictionZone(location_name="North Draw", probability=0.3, radius_meters=150, ...)]
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from bucktrax.prediction.models import PredictionZone
from bucktrax.terrain.classification import MOVEMENT_CORRIDOR_TYPES, TerrainFeature
from bucktrax.terrain.geometry import extract_centroid

logger = logging.getLogger(__name__)

DEFAULT_CORRIDOR_PROBABILITY = 0.3
DEFAULT_CORRIDOR_RADIUS_M = 150
DEFAULT_MAX_CORRIDOR_FEATURES = 3


def select_corridor_features(
    features: Iterable[TerrainFeature],
    max_features: int = DEFAULT_MAX_CORRIDOR_FEATURES,
) -> list[TerrainFeature]:
    """
    Return the first max_features features classified as movement corridors.

    Input order is kept; no ranking is applied.
    """
    selected: list[TerrainFeature] = []
    for feature in features:
        if len(selected) >= max_features:
            break
        if feature.classification_type in MOVEMENT_CORRIDOR_TYPES:
            selected.append(feature)
    return selected


def select_corridor_zones(
    features: Iterable[TerrainFeature],
    max_features: int = DEFAULT_MAX_CORRIDOR_FEATURES,
    baseline_probability: float = DEFAULT_CORRIDOR_PROBABILITY,
    radius_m: int = DEFAULT_CORRIDOR_RADIUS_M,
) -> list[PredictionZone]:
    """
    Build one corridor PredictionZone per selected corridor feature.

    The cutoff is applied before geometry parsing, so a selected feature whose
    geometry can't be read is dropped without a replacement being pulled in.

    Args:
        features: All terrain features of the property, in stored order.
        max_features: Maximum number of corridor features considered.
        baseline_probability: Fixed probability assigned to every corridor zone.
        radius_m: Display radius of every corridor zone.

    Returns:
        Corridor zones in feature order, each with sighting_count=0 and
        is_corridor_prediction=True.
    """
    zones: list[PredictionZone] = []
    for feature in select_corridor_features(features, max_features):
        centroid = extract_centroid(feature.geometry)
        if centroid is None:
            logger.debug(
                "Feature %s (%s): unreadable geometry %r — skipped",
                feature.feature_id,
                feature.name,
                feature.geometry,
            )
            continue

        lat, lon = centroid
        zones.append(
            PredictionZone(
                location_name=feature.name,
                latitude=lat,
                longitude=lon,
                probability=baseline_probability,
                sighting_count=0,
                radius_meters=radius_m,
                is_corridor_prediction=True,
            )
        )
    return zones
