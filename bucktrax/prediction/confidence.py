"""Confidence score for one time segment's prediction."""

from __future__ import annotations

from bucktrax.config import BuckTraxSettings

_DEFAULT_SETTINGS = BuckTraxSettings()


def confidence_score(
    segment_count: int,
    total_count: int,
    settings: BuckTraxSettings = _DEFAULT_SETTINGS,
) -> float:
    """
    Score a segment from 0 to 100, rounded to one decimal place.

    Blends absolute sample size (saturating at confidence_sample_cap
    sightings) with the segment's share of all sightings. Returns 0.0 when
    there are no sightings at all.
    """
    if total_count == 0:
        return 0.0

    data_confidence = min(segment_count / float(settings.confidence_sample_cap), 1.0)
    proportion_confidence = segment_count / total_count
    blended = (
        data_confidence * settings.confidence_data_weight
        + proportion_confidence * settings.confidence_proportion_weight
    )
    return round(blended * 100, 1)
