"""
Sighting extraction: tagged photos joined to where their camera stood.

A sighting is one tagged photo located by its camera's placement record. The
inputs are the plain tables held in a PropertySnapshot:

    photos       photo_id, camera_id, date_taken
    photo_tags   photo_id, tag_id
    cameras      camera_id, property_id, name
    placements   camera_id, location_name, latitude, longitude,
                 start_datetime, end_datetime (NaT = current placement)

Photos whose camera has no usable placement are left out rather than
reported; a sighting needs a location. Once a sighting is in the output,
its coordinates and timestamp are validated and a broken row fails the
whole extraction.

Usage:

    from bucktrax.data.sightings import extract_sightings

    df = extract_sightings(photos, photo_tags, cameras, placements, profile)
    # Columns: photo_id, date_taken, camera_id, camera_name, latitude, longitude
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import asdict, dataclass
from datetime import datetime

import numpy as np
import pandas as pd

from bucktrax.config import PLACEMENT_AT_CAPTURE, BuckTraxSettings
from bucktrax.prediction.models import Profile

logger = logging.getLogger(__name__)

SIGHTING_COLUMNS = [
    "photo_id",
    "date_taken",
    "camera_id",
    "camera_name",
    "latitude",
    "longitude",
]

_PLACEMENT_LOCATION_COLS = ["camera_id", "location_name", "latitude", "longitude"]
_INPUT_ORDER = "_input_order"


class InvalidSightingError(ValueError):
    """Raised when a sighting that would be used carries unusable data."""


@dataclass(frozen=True)
class Sighting:
    photo_id: int
    date_taken: datetime
    camera_id: int
    camera_name: str
    latitude: float
    longitude: float


def sightings_to_frame(sightings: Iterable[Sighting]) -> pd.DataFrame:
    """Convert Sighting records to the sightings DataFrame shape, keeping their order."""
    records = [asdict(s) for s in sightings]
    if not records:
        return empty_sightings()
    df = pd.DataFrame(records, columns=SIGHTING_COLUMNS)
    df["date_taken"] = pd.to_datetime(df["date_taken"])
    return df


def empty_sightings() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "photo_id": pd.Series(dtype="int64"),
            "date_taken": pd.Series(dtype="datetime64[ns]"),
            "camera_id": pd.Series(dtype="int64"),
            "camera_name": pd.Series(dtype="object"),
            "latitude": pd.Series(dtype="float64"),
            "longitude": pd.Series(dtype="float64"),
        }
    )


def extract_sightings(
    photos: pd.DataFrame,
    photo_tags: pd.DataFrame,
    cameras: pd.DataFrame,
    placements: pd.DataFrame,
    profile: Profile,
    settings: BuckTraxSettings | None = None,
) -> pd.DataFrame:
    """
    Build the sightings for one profile.

    A photo is included when it carries the profile's tag, its camera belongs
    to the profile's property, and a placement locates that camera. With the
    default "current" placement resolution the camera's open-ended placement
    locates every photo; "at_capture" uses the placement whose
    [start, end) interval contains the capture time instead.

    Args:
        photos, photo_tags, cameras, placements: Snapshot tables (see module docstring).
        profile: The profile whose tag and property scope the search.
        settings: Placement resolution and optional photo grouping window.

    Returns:
        Sightings DataFrame with SIGHTING_COLUMNS, sorted by date_taken
        ascending; ties keep the photos' input order. Empty if nothing matches.

    Raises:
        InvalidSightingError: If an included sighting has a missing timestamp
            or missing, non-finite, or out-of-range coordinates.
    """
    settings = settings or BuckTraxSettings()

    tagged_ids = photo_tags.loc[photo_tags["tag_id"] == profile.tag_id, "photo_id"]
    tagged = photos.loc[
        photos["photo_id"].isin(tagged_ids), ["photo_id", "camera_id", "date_taken"]
    ].copy()
    tagged[_INPUT_ORDER] = range(len(tagged))
    tagged["date_taken"] = pd.to_datetime(tagged["date_taken"])

    property_cameras = cameras.loc[
        cameras["property_id"] == profile.property_id, ["camera_id", "name"]
    ].rename(columns={"name": "camera_label"})
    tagged = tagged.merge(property_cameras, on="camera_id", how="inner")

    if settings.placement_resolution == PLACEMENT_AT_CAPTURE:
        located = _join_placement_at_capture(tagged, placements)
    else:
        located = _join_current_placement(tagged, placements)

    if located.empty:
        logger.info(
            "Profile %s: %d tagged photos, none with a usable camera placement",
            profile.profile_id,
            len(tagged),
        )
        return empty_sightings()

    located["camera_name"] = _camera_display_name(located)
    located = located.sort_values(["date_taken", _INPUT_ORDER]).reset_index(drop=True)
    sightings = located[SIGHTING_COLUMNS]

    validate_sightings(sightings)

    if settings.photo_grouping_minutes > 0:
        sightings = group_photos_into_sightings(sightings, settings.photo_grouping_minutes)

    logger.debug(
        "Profile %s: %d tagged photos → %d sightings",
        profile.profile_id,
        len(tagged),
        len(sightings),
    )
    return sightings


def _join_current_placement(tagged: pd.DataFrame, placements: pd.DataFrame) -> pd.DataFrame:
    current = placements.loc[placements["end_datetime"].isna(), _PLACEMENT_LOCATION_COLS]
    duplicated = current["camera_id"].duplicated(keep="first")
    if duplicated.any():
        logger.warning(
            "%d cameras have more than one open placement — using the first listed",
            current.loc[duplicated, "camera_id"].nunique(),
        )
        current = current[~duplicated]
    return tagged.merge(current, on="camera_id", how="inner")


def _join_placement_at_capture(tagged: pd.DataFrame, placements: pd.DataFrame) -> pd.DataFrame:
    cols = _PLACEMENT_LOCATION_COLS + ["start_datetime", "end_datetime"]
    candidates = tagged.merge(placements[cols], on="camera_id", how="inner")

    start = pd.to_datetime(candidates["start_datetime"])
    end = pd.to_datetime(candidates["end_datetime"])
    taken = candidates["date_taken"]
    in_window = (start.isna() | (start <= taken)) & (end.isna() | (taken < end))
    candidates = candidates[in_window].assign(start_datetime=start[in_window])

    # Overlapping placements: the most recently started one wins.
    candidates = candidates.sort_values("start_datetime", kind="stable", na_position="first")
    candidates = candidates.drop_duplicates(_INPUT_ORDER, keep="last")
    return candidates.drop(columns=["start_datetime", "end_datetime"])


def _camera_display_name(located: pd.DataFrame) -> pd.Series:
    """Placement location name, or the camera's own name when the placement has none."""
    location = located["location_name"]
    has_location = location.notna() & (location.astype(str).str.strip() != "")
    return location.where(has_location, located["camera_label"]).fillna("").astype(str)


def validate_sightings(sightings: pd.DataFrame) -> None:
    """
    Reject sightings that can't be placed on a map or a clock.

    Raises:
        InvalidSightingError: On missing columns, missing timestamps,
            non-finite coordinates, or coordinates outside
            latitude [-90, 90] / longitude [-180, 180].
    """
    missing = [c for c in SIGHTING_COLUMNS if c not in sightings.columns]
    if missing:
        raise InvalidSightingError(f"Sightings are missing required columns: {missing}")
    if sightings.empty:
        return

    bad_time = pd.to_datetime(sightings["date_taken"], errors="coerce").isna().to_numpy()
    lat = pd.to_numeric(sightings["latitude"], errors="coerce").to_numpy(dtype=float)
    lon = pd.to_numeric(sightings["longitude"], errors="coerce").to_numpy(dtype=float)

    bad_coords = ~np.isfinite(lat) | ~np.isfinite(lon)
    with np.errstate(invalid="ignore"):
        bad_coords |= (np.abs(lat) > 90.0) | (np.abs(lon) > 180.0)

    bad = bad_time | bad_coords
    if bad.any():
        offenders = sightings.loc[bad, "photo_id"].tolist()
        raise InvalidSightingError(
            f"{int(bad.sum())} sightings have a missing timestamp or invalid coordinates "
            f"(photo ids: {offenders[:10]})"
        )


def group_photos_into_sightings(sightings: pd.DataFrame, window_minutes: float) -> pd.DataFrame:
    """
    Collapse bursts of photos at one camera into single sightings.

    Photos at the same camera taken within window_minutes of the first photo
    of a run count as that one sighting; the first photo represents it.

    Args:
        sightings: Sightings DataFrame sorted by date_taken.
        window_minutes: Burst window. Values <= 0 disable grouping.

    Returns:
        The representative rows, still sorted by date_taken.
    """
    if window_minutes <= 0 or sightings.empty:
        return sightings

    window = pd.Timedelta(minutes=window_minutes)
    keep: set = set()
    for _, camera_photos in sightings.groupby("camera_id", sort=False):
        run_start = None
        for idx, taken in camera_photos["date_taken"].items():
            if run_start is None or taken - run_start > window:
                keep.add(idx)
                run_start = taken

    grouped = sightings[sightings.index.isin(keep)].reset_index(drop=True)
    logger.debug(
        "Grouped %d photos into %d sightings (%g min window)",
        len(sightings),
        len(grouped),
        window_minutes,
    )
    return grouped
