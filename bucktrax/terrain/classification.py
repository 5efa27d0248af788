"""
Terrain feature taxonomy.

Every property feature carries one ClassificationType code. Topographical
features shape how deer move across a property; resource features provide
food, water, or cover. Only the codes in MOVEMENT_CORRIDOR_TYPES are treated
as travel corridors by the prediction pipeline.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum

logger = logging.getLogger(__name__)


class ClassificationType(IntEnum):
    # Topographical (terrain) features
    RIDGE = 1
    RIDGE_POINT = 2
    RIDGE_SPUR = 3
    SADDLE = 4
    BENCH = 5
    DRAW = 6
    CREEK_CROSSING = 7
    DITCH = 8
    VALLEY = 9
    BLUFF = 10
    FIELD_EDGE = 11
    INSIDE_CORNER = 12
    PENINSULA = 13
    ISLAND = 14
    PINCH_POINT_FUNNEL = 15
    TRAVEL_CORRIDOR = 16
    SPUR = 17
    KNOB = 18

    # Resource features: food
    AG_CROP_FIELD = 31
    FOOD_PLOT = 32
    MAST_TREE_PATCH = 33
    BROWSE_PATCH = 34
    PRAIRIE_FORB_PATCH = 35

    # Resource features: water
    CREEK = 51
    POND = 52
    LAKE = 53
    SPRING = 54
    WATERHOLE = 55
    TROUGH = 56

    # Resource features: bedding and cover
    BEDDING_AREA = 70
    THICK_BRUSH = 71
    CLEARCUT = 72
    CRP = 73
    SWAMP = 74
    CEDAR_THICKET = 75
    LEEWARD_SLOPE = 76
    EDGE_COVER = 77
    ISOLATED_COVER = 78
    MAN_MADE_COVER = 79

    OTHER = 99

    @classmethod
    def from_code(cls, code: int) -> ClassificationType:
        """Map a stored integer code to a member; unknown codes become OTHER."""
        try:
            return cls(int(code))
        except ValueError:
            logger.warning("Unknown terrain classification code %s — treating as OTHER", code)
            return cls.OTHER

    @property
    def is_movement_corridor(self) -> bool:
        return self in MOVEMENT_CORRIDOR_TYPES


MOVEMENT_CORRIDOR_TYPES: frozenset[ClassificationType] = frozenset({
    ClassificationType.DRAW,
    ClassificationType.CREEK_CROSSING,
    ClassificationType.FIELD_EDGE,
    ClassificationType.PINCH_POINT_FUNNEL,
    ClassificationType.TRAVEL_CORRIDOR,
})


@dataclass(frozen=True)
class TerrainFeature:
    """A classified property feature. geometry is the stored geometry text (WKT or [lng,lat])."""

    feature_id: int
    name: str
    classification_type: ClassificationType
    geometry: str
