"""
Tests for bucktrax.terrain — feature taxonomy, centroid extraction and
corridor zone selection.
"""

from __future__ import annotations

import pytest

from bucktrax.terrain.classification import (
    MOVEMENT_CORRIDOR_TYPES,
    ClassificationType,
    TerrainFeature,
)
from bucktrax.terrain.corridors import select_corridor_features, select_corridor_zones
from bucktrax.terrain.geometry import extract_centroid


def _feature(fid: int, ctype: ClassificationType, geometry: str = "POINT (-90 35)") -> TerrainFeature:
    return TerrainFeature(feature_id=fid, name=f"Feature {fid}", classification_type=ctype, geometry=geometry)


class TestClassification:
    def test_corridor_set_is_the_five_movement_types(self) -> None:
        assert {int(c) for c in MOVEMENT_CORRIDOR_TYPES} == {6, 7, 11, 15, 16}

    def test_non_corridor_types(self) -> None:
        for ctype in (ClassificationType.RIDGE, ClassificationType.CREEK, ClassificationType.OTHER):
            assert not ctype.is_movement_corridor

    def test_from_code_known(self) -> None:
        assert ClassificationType.from_code(15) is ClassificationType.PINCH_POINT_FUNNEL

    def test_from_code_unknown_becomes_other(self) -> None:
        assert ClassificationType.from_code(42) is ClassificationType.OTHER


class TestExtractCentroid:
    def test_wkt_point_is_lon_lat(self) -> None:
        assert extract_centroid("POINT(-90.0 35.0)") == (35.0, -90.0)

    def test_wkt_point_with_spaces_and_lowercase(self) -> None:
        assert extract_centroid("  point ( -91.25   36.5 ) ") == (36.5, -91.25)

    def test_bracketed_fallback(self) -> None:
        assert extract_centroid("[-90.5, 35.25]") == (35.25, -90.5)

    @pytest.mark.parametrize(
        "text",
        [
            None,
            "",
            "LINESTRING (-90 35, -91 36)",
            "POLYGON ((-90 35, -91 35, -91 36, -90 35))",
            "POINT EMPTY",
            "POINT (abc def)",
            "POINT (-90 35 100)",
            "[-90]",
            "[[-90, 35], [-91, 36]]",
            "POINT (nan 35)",
            "POINT (200 100)",
            "POINT (-90 91)",
            "[-181, 35]",
            "garbage",
        ],
    )
    def test_unreadable_geometry_is_none(self, text: str | None) -> None:
        assert extract_centroid(text) is None


class TestCorridorSelection:
    def test_filters_to_corridor_types(self) -> None:
        features = [
            _feature(1, ClassificationType.RIDGE),
            _feature(2, ClassificationType.DRAW),
            _feature(3, ClassificationType.FOOD_PLOT),
            _feature(4, ClassificationType.TRAVEL_CORRIDOR),
        ]
        assert [f.feature_id for f in select_corridor_features(features)] == [2, 4]

    def test_takes_first_three_in_input_order(self) -> None:
        features = [_feature(i, ClassificationType.FIELD_EDGE) for i in (9, 3, 7, 1, 5)]
        assert [f.feature_id for f in select_corridor_features(features)] == [9, 3, 7]

    def test_zero_cap_selects_nothing(self) -> None:
        assert select_corridor_features([_feature(1, ClassificationType.DRAW)], max_features=0) == []


class TestCorridorZones:
    def test_zone_shape(self, draw_feature: TerrainFeature) -> None:
        zones = select_corridor_zones([draw_feature])
        assert len(zones) == 1
        zone = zones[0]
        assert zone.location_name == "North Draw"
        assert (zone.latitude, zone.longitude) == (35.0, -90.0)
        assert zone.probability == 0.3
        assert zone.sighting_count == 0
        assert zone.radius_meters == 150
        assert zone.is_corridor_prediction

    def test_never_more_than_three(self) -> None:
        features = [_feature(i, ClassificationType.PINCH_POINT_FUNNEL) for i in range(10)]
        zones = select_corridor_zones(features)
        assert len(zones) == 3
        assert all(z.probability == 0.3 and z.radius_meters == 150 for z in zones)

    def test_unparseable_feature_is_dropped_not_replaced(self) -> None:
        features = [
            _feature(1, ClassificationType.DRAW),
            _feature(2, ClassificationType.DRAW, geometry="LINESTRING (-90 35, -91 36)"),
            _feature(3, ClassificationType.DRAW),
            _feature(4, ClassificationType.DRAW),
        ]
        zones = select_corridor_zones(features)
        assert [z.location_name for z in zones] == ["Feature 1", "Feature 3"]

    def test_baseline_and_radius_are_tunable(self, draw_feature: TerrainFeature) -> None:
        zone = select_corridor_zones([draw_feature], baseline_probability=0.2, radius_m=75)[0]
        assert zone.probability == 0.2
        assert zone.radius_meters == 75

    def test_out_of_range_point_is_dropped(self) -> None:
        features = [
            _feature(1, ClassificationType.DRAW, geometry="POINT (200 100)"),
            _feature(2, ClassificationType.DRAW),
        ]
        assert [z.location_name for z in select_corridor_zones(features)] == ["Feature 2"]

    def test_no_features_no_zones(self) -> None:
        assert select_corridor_zones([]) == []
