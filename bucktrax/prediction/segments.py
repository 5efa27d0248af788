"""
Day-part time segments.

Sightings are split into six fixed segments that together cover the whole
24-hour clock exactly once. Start hours are inclusive, end hours exclusive.
Night runs from 20:00 to 05:00 and wraps past midnight.

Usage:

    from bucktrax.prediction.segments import TIME_SEGMENTS, bucket_sightings

    buckets = bucket_sightings(sightings_df)
    for segment, subset in zip(TIME_SEGMENTS, buckets):
        print(segment.name, len(subset))
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import pandas as pd


@dataclass(frozen=True)
class TimeSegment:
    name: str
    start_hour: int
    end_hour: int

    @property
    def wraps_midnight(self) -> bool:
        return self.start_hour > self.end_hour

    def contains(self, hour: int | pd.Series) -> bool | pd.Series:
        """
        Membership test for an hour of day.

        Works on a plain int or element-wise on a pandas Series of hours.
        """
        if self.wraps_midnight:
            return (hour >= self.start_hour) | (hour < self.end_hour)
        return (hour >= self.start_hour) & (hour < self.end_hour)


TIME_SEGMENTS: tuple[TimeSegment, ...] = (
    TimeSegment("Early Morning", 5, 8),
    TimeSegment("Morning", 8, 11),
    TimeSegment("Midday", 11, 14),
    TimeSegment("Afternoon", 14, 17),
    TimeSegment("Evening", 17, 20),
    TimeSegment("Night", 20, 5),
)


def segment_for_hour(hour: int, segments: Sequence[TimeSegment] = TIME_SEGMENTS) -> TimeSegment:
    """Return the segment an hour of day falls in."""
    for segment in segments:
        if segment.contains(hour):
            return segment
    raise ValueError(f"Hour {hour} is not covered by any time segment")


def bucket_sightings(
    sightings: pd.DataFrame,
    segments: Sequence[TimeSegment] = TIME_SEGMENTS,
) -> list[pd.DataFrame]:
    """
    Split sightings into one subset per segment, in segment order.

    Args:
        sightings: Sightings DataFrame with a datetime 'date_taken' column.
        segments: The segment catalog. Must partition the 24-hour clock.

    Returns:
        One DataFrame per segment (possibly empty), each keeping the
        input row order.
    """
    hours = pd.to_datetime(sightings["date_taken"]).dt.hour
    return [sightings[segment.contains(hours)] for segment in segments]
