"""
Tests for bucktrax.data.snapshot — snapshot lookups and the CSV loader.

Loader tests write the conftest snapshot out to tmp_path, so no exported
data files are required.
"""

from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

from bucktrax.data.snapshot import TABLE_COLUMNS, PropertySnapshot, load_snapshot
from bucktrax.terrain.classification import ClassificationType


def _write_snapshot(snapshot: PropertySnapshot, directory: Path) -> Path:
    for name in TABLE_COLUMNS:
        getattr(snapshot, name).to_csv(directory / f"{name}.csv", index=False)
    return directory


class TestLookups:
    def test_get_profile_joins_property_name(self, snapshot: PropertySnapshot) -> None:
        profile = snapshot.get_profile(7)
        assert profile.name == "Big Eight"
        assert profile.property_id == 100
        assert profile.property_name == "Home Farm"
        assert profile.tag_id == 42

    def test_missing_profile_raises(self, snapshot: PropertySnapshot) -> None:
        with pytest.raises(KeyError):
            snapshot.get_profile(404)

    def test_profile_with_missing_property_raises(self, snapshot: PropertySnapshot) -> None:
        snapshot.properties = snapshot.properties[snapshot.properties["property_id"] != 100]
        with pytest.raises(KeyError, match="Property 100"):
            snapshot.get_profile(7)

    def test_terrain_features_scoped_to_property(self, snapshot: PropertySnapshot) -> None:
        features = snapshot.get_terrain_features(100)
        assert [f.feature_id for f in features] == [1, 2]
        assert features[0].classification_type is ClassificationType.DRAW
        assert features[0].geometry == "POINT (-90.05 35.05)"

    def test_sightings_for_other_tag(self, snapshot: PropertySnapshot) -> None:
        df = snapshot.get_sightings(8)
        assert df["photo_id"].tolist() == [16]

    def test_empty_snapshot(self) -> None:
        empty = PropertySnapshot()
        assert empty.get_terrain_features(1) == []
        with pytest.raises(KeyError):
            empty.get_profile(1)

    def test_equality_is_identity(self, snapshot: PropertySnapshot) -> None:
        assert snapshot == snapshot
        assert snapshot != PropertySnapshot()


class TestLoadSnapshot:
    def test_round_trips_tables(self, snapshot: PropertySnapshot, tmp_path: Path) -> None:
        loaded = load_snapshot(_write_snapshot(snapshot, tmp_path))
        assert len(loaded.photos) == len(snapshot.photos)
        assert pd.api.types.is_datetime64_any_dtype(loaded.photos["date_taken"])
        assert pd.api.types.is_datetime64_any_dtype(loaded.placements["end_datetime"])

    def test_loaded_snapshot_extracts_same_sightings(
        self, snapshot: PropertySnapshot, tmp_path: Path
    ) -> None:
        loaded = load_snapshot(_write_snapshot(snapshot, tmp_path))
        assert loaded.get_sightings(7)["photo_id"].tolist() == [11, 12, 10, 15]
        # Blank location name reads back as NaN and still falls back to the camera name.
        names = loaded.get_sightings(7)["camera_name"].tolist()
        assert names == ["Cam B", "Oak Ridge", "Oak Ridge", "Cam B"]

    def test_missing_directory_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_snapshot(tmp_path / "nope")

    def test_missing_table_raises(self, snapshot: PropertySnapshot, tmp_path: Path) -> None:
        _write_snapshot(snapshot, tmp_path)
        (tmp_path / "placements.csv").unlink()
        with pytest.raises(FileNotFoundError, match="placements.csv"):
            load_snapshot(tmp_path)

    def test_missing_column_raises(self, snapshot: PropertySnapshot, tmp_path: Path) -> None:
        _write_snapshot(snapshot, tmp_path)
        snapshot.cameras.drop(columns=["property_id"]).to_csv(tmp_path / "cameras.csv", index=False)
        with pytest.raises(ValueError, match="property_id"):
            load_snapshot(tmp_path)
