"""
Read-only property snapshot consumed by the prediction pipeline.

All data a prediction needs is fetched once into a PropertySnapshot before
any computation runs. The snapshot exposes the three lookups the pipeline
depends on:

    get_profile(profile_id)            → Profile
    get_sightings(profile_id)          → sightings DataFrame
    get_terrain_features(property_id)  → list[TerrainFeature]

load_snapshot() builds one from a directory of CSV exports, one file per table:

    properties.csv    property_id, name
    profiles.csv      profile_id, name, property_id, tag_id
    photos.csv        photo_id, camera_id, date_taken
    photo_tags.csv    photo_id, tag_id
    cameras.csv       camera_id, property_id, name
    placements.csv    camera_id, location_name, latitude, longitude,
                      start_datetime, end_datetime (blank = current)
    features.csv      feature_id, property_id, name, classification_type, geometry

Usage:

    from bucktrax.data.snapshot import load_snapshot

    snapshot = load_snapshot("data/snapshot")
    profile = snapshot.get_profile(12)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import pandas as pd

from bucktrax.config import BuckTraxSettings
from bucktrax.data.sightings import extract_sightings
from bucktrax.prediction.models import Profile
from bucktrax.terrain.classification import ClassificationType, TerrainFeature

logger = logging.getLogger(__name__)

TABLE_COLUMNS: dict[str, list[str]] = {
    "properties": ["property_id", "name"],
    "profiles": ["profile_id", "name", "property_id", "tag_id"],
    "photos": ["photo_id", "camera_id", "date_taken"],
    "photo_tags": ["photo_id", "tag_id"],
    "cameras": ["camera_id", "property_id", "name"],
    "placements": [
        "camera_id",
        "location_name",
        "latitude",
        "longitude",
        "start_datetime",
        "end_datetime",
    ],
    "features": ["feature_id", "property_id", "name", "classification_type", "geometry"],
}

_DATE_COLUMNS: dict[str, list[str]] = {
    "photos": ["date_taken"],
    "placements": ["start_datetime", "end_datetime"],
}


def _empty_table(name: str):
    return lambda: pd.DataFrame(columns=TABLE_COLUMNS[name])


@dataclass(eq=False)
class PropertySnapshot:
    """In-memory tables for one or more properties. Treated as read-only."""

    properties: pd.DataFrame = field(default_factory=_empty_table("properties"))
    profiles: pd.DataFrame = field(default_factory=_empty_table("profiles"))
    photos: pd.DataFrame = field(default_factory=_empty_table("photos"))
    photo_tags: pd.DataFrame = field(default_factory=_empty_table("photo_tags"))
    cameras: pd.DataFrame = field(default_factory=_empty_table("cameras"))
    placements: pd.DataFrame = field(default_factory=_empty_table("placements"))
    features: pd.DataFrame = field(default_factory=_empty_table("features"))

    def get_profile(self, profile_id: int) -> Profile:
        """
        Look up a profile together with its property's name.

        Raises:
            KeyError: If the profile (or its property) isn't in the snapshot.
        """
        rows = self.profiles[self.profiles["profile_id"] == profile_id]
        if rows.empty:
            raise KeyError(f"Profile {profile_id} not found in snapshot")
        row = rows.iloc[0]

        prop = self.properties[self.properties["property_id"] == row["property_id"]]
        if prop.empty:
            raise KeyError(f"Property {row['property_id']} of profile {profile_id} not found in snapshot")

        return Profile(
            profile_id=int(row["profile_id"]),
            name=str(row["name"]),
            property_id=int(row["property_id"]),
            property_name=str(prop.iloc[0]["name"]),
            tag_id=int(row["tag_id"]),
        )

    def get_sightings(
        self, profile_id: int, settings: BuckTraxSettings | None = None
    ) -> pd.DataFrame:
        """Sightings for a profile, ordered by capture time (see extract_sightings)."""
        profile = self.get_profile(profile_id)
        return extract_sightings(
            self.photos, self.photo_tags, self.cameras, self.placements, profile, settings
        )

    def get_terrain_features(self, property_id: int) -> list[TerrainFeature]:
        """All terrain features of a property, in stored order."""
        rows = self.features[self.features["property_id"] == property_id]
        return [
            TerrainFeature(
                feature_id=int(row.feature_id),
                name="" if pd.isna(row.name) else str(row.name),
                classification_type=ClassificationType.from_code(row.classification_type),
                geometry="" if pd.isna(row.geometry) else str(row.geometry),
            )
            for row in rows.itertuples(index=False)
        ]


def load_snapshot(directory: Path | str) -> PropertySnapshot:
    """
    Load every snapshot table from CSV files in a directory.

    Args:
        directory: Folder holding properties.csv, profiles.csv, photos.csv,
            photo_tags.csv, cameras.csv, placements.csv and features.csv.

    Returns:
        A PropertySnapshot with datetime columns parsed.

    Raises:
        FileNotFoundError: If the directory or any table file is missing.
        ValueError: If a table is missing one of its required columns.
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise FileNotFoundError(f"Snapshot directory not found: {directory}")

    tables = {name: _read_table(directory, name) for name in TABLE_COLUMNS}
    logger.info(
        "Loaded snapshot from %s: %s",
        directory,
        ", ".join(f"{name}={len(df)}" for name, df in tables.items()),
    )
    return PropertySnapshot(**tables)


def _read_table(directory: Path, name: str) -> pd.DataFrame:
    path = directory / f"{name}.csv"
    if not path.exists():
        raise FileNotFoundError(f"Snapshot table not found: {path}")

    df = pd.read_csv(path)
    missing = [c for c in TABLE_COLUMNS[name] if c not in df.columns]
    if missing:
        raise ValueError(f"{path.name}: missing required columns {missing}")

    for col in _DATE_COLUMNS.get(name, []):
        df[col] = pd.to_datetime(df[col])
    return df
