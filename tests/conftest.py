"""
Shared pytest fixtures for the BuckTrax test suite.

All fixtures are synthetic — no exported snapshot files required. Camera
positions and capture hours are chosen so expected zones, probabilities and
segment assignments are trivial to work out by hand.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

import pandas as pd
import pytest

from bucktrax.data.snapshot import PropertySnapshot
from bucktrax.prediction.models import Profile
from bucktrax.terrain.classification import ClassificationType, TerrainFeature

# camera_id → (name, latitude, longitude)
CAMERAS = {
    1: ("Oak Ridge", 35.10, -90.10),
    2: ("Creek Bottom", 35.20, -90.20),
    3: ("Food Plot", 35.30, -90.30),
}


# ---------------------------------------------------------------------------
# Sightings DataFrame builder (extractor output shape)
# ---------------------------------------------------------------------------

@pytest.fixture()
def make_sightings() -> Callable[[list[tuple[int, int]]], pd.DataFrame]:
    """
    Return a builder: [(hour, camera_id), ...] → sightings DataFrame.

    Every sighting is on 2024-10-01 at <hour>:15 (photo ids count up from 1),
    located at the camera's position from CAMERAS.
    """
    def _build(layout: list[tuple[int, int]]) -> pd.DataFrame:
        records = []
        for i, (hour, camera_id) in enumerate(layout, start=1):
            name, lat, lon = CAMERAS[camera_id]
            records.append({
                "photo_id": i,
                "date_taken": datetime(2024, 10, 1, hour, 15),
                "camera_id": camera_id,
                "camera_name": name,
                "latitude": lat,
                "longitude": lon,
            })
        return pd.DataFrame(
            records,
            columns=["photo_id", "date_taken", "camera_id", "camera_name", "latitude", "longitude"],
        )

    return _build


@pytest.fixture()
def profile() -> Profile:
    return Profile(
        profile_id=7, name="Big Eight", property_id=100, property_name="Home Farm", tag_id=42
    )


@pytest.fixture()
def draw_feature() -> TerrainFeature:
    return TerrainFeature(
        feature_id=1,
        name="North Draw",
        classification_type=ClassificationType.DRAW,
        geometry="POINT(-90.0 35.0)",
    )


# ---------------------------------------------------------------------------
# Snapshot tables (collaborator layer shape)
# ---------------------------------------------------------------------------

@pytest.fixture()
def snapshot() -> PropertySnapshot:
    """
    One property (100) with three cameras plus a camera on another property.

    Layout:
      - camera 1: current placement "Oak Ridge"
      - camera 2: old placement "Old Creek Spot" (ended), current placement
                  with a blank location name (falls back to camera name)
      - camera 3: only an ended placement — no current location
      - camera 9: belongs to property 200

    Photos tagged 42 (the profile's tag): 10, 11, 12, 13, 14, 15.
    Photo 16 is tagged 43 (another animal).
    """
    properties = pd.DataFrame([
        {"property_id": 100, "name": "Home Farm"},
        {"property_id": 200, "name": "Neighbor Farm"},
    ])
    profiles = pd.DataFrame([
        {"profile_id": 7, "name": "Big Eight", "property_id": 100, "tag_id": 42},
        {"profile_id": 8, "name": "Drop Tine", "property_id": 100, "tag_id": 43},
    ])
    cameras = pd.DataFrame([
        {"camera_id": 1, "property_id": 100, "name": "Cam A"},
        {"camera_id": 2, "property_id": 100, "name": "Cam B"},
        {"camera_id": 3, "property_id": 100, "name": "Cam C"},
        {"camera_id": 9, "property_id": 200, "name": "Cam Z"},
    ])
    placements = pd.DataFrame([
        {"camera_id": 1, "location_name": "Oak Ridge", "latitude": 35.1, "longitude": -90.1,
         "start_datetime": datetime(2024, 1, 1), "end_datetime": pd.NaT},
        {"camera_id": 2, "location_name": "Old Creek Spot", "latitude": 35.0, "longitude": -90.0,
         "start_datetime": datetime(2024, 1, 1), "end_datetime": datetime(2024, 9, 1)},
        {"camera_id": 2, "location_name": "", "latitude": 35.2, "longitude": -90.2,
         "start_datetime": datetime(2024, 9, 1), "end_datetime": pd.NaT},
        {"camera_id": 3, "location_name": "Gone", "latitude": 35.3, "longitude": -90.3,
         "start_datetime": datetime(2024, 1, 1), "end_datetime": datetime(2024, 6, 1)},
        {"camera_id": 9, "location_name": "Far Away", "latitude": 36.0, "longitude": -91.0,
         "start_datetime": datetime(2024, 1, 1), "end_datetime": pd.NaT},
    ])
    photos = pd.DataFrame([
        {"photo_id": 10, "camera_id": 1, "date_taken": datetime(2024, 10, 2, 9, 0)},
        {"photo_id": 11, "camera_id": 2, "date_taken": datetime(2024, 8, 15, 18, 30)},
        {"photo_id": 12, "camera_id": 1, "date_taken": datetime(2024, 10, 1, 6, 45)},
        {"photo_id": 13, "camera_id": 3, "date_taken": datetime(2024, 5, 1, 7, 0)},
        {"photo_id": 14, "camera_id": 9, "date_taken": datetime(2024, 10, 3, 22, 0)},
        {"photo_id": 15, "camera_id": 2, "date_taken": datetime(2024, 10, 5, 23, 10)},
        {"photo_id": 16, "camera_id": 1, "date_taken": datetime(2024, 10, 4, 12, 0)},
    ])
    photo_tags = pd.DataFrame([
        {"photo_id": 10, "tag_id": 42},
        {"photo_id": 11, "tag_id": 42},
        {"photo_id": 12, "tag_id": 42},
        {"photo_id": 13, "tag_id": 42},
        {"photo_id": 14, "tag_id": 42},
        {"photo_id": 15, "tag_id": 42},
        {"photo_id": 16, "tag_id": 43},
    ])
    features = pd.DataFrame([
        {"feature_id": 1, "property_id": 100, "name": "North Draw",
         "classification_type": 6, "geometry": "POINT (-90.05 35.05)"},
        {"feature_id": 2, "property_id": 100, "name": "Bedding Thicket",
         "classification_type": 70, "geometry": "POINT (-90.15 35.15)"},
        {"feature_id": 3, "property_id": 200, "name": "Other Funnel",
         "classification_type": 15, "geometry": "POINT (-91.0 36.0)"},
    ])
    return PropertySnapshot(
        properties=properties,
        profiles=profiles,
        photos=photos,
        photo_tags=photo_tags,
        cameras=cameras,
        placements=placements,
        features=features,
    )
