"""
Config loader and prediction settings for BuckTrax.

All configuration lives in the configs/ directory as YAML files. The
prediction core never reads files itself: callers load a config once and
hand the resulting BuckTraxSettings to the pipeline.

Usage:

    from bucktrax.config import load_config, load_settings

    cfg = load_config("bucktrax")
    snapshot_dir = cfg["pipeline"]["snapshot_dir"]

    settings = load_settings()
    settings.corridor_baseline_probability   # 0.3
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

# Resolve the configs/ directory relative to this file so the package works
# regardless of the working directory the caller uses.
_CONFIGS_DIR = Path(__file__).parent.parent / "configs"

PLACEMENT_CURRENT = "current"
PLACEMENT_AT_CAPTURE = "at_capture"
_PLACEMENT_MODES = (PLACEMENT_CURRENT, PLACEMENT_AT_CAPTURE)

LIMITED_DATA_MESSAGE = "Due to limited data, the predictive model is extremely limited."


def load_config(name: str) -> dict[str, Any]:
    """
    Load a named YAML config file from the configs/ directory.

    Args:
        name: Config file name without the .yaml extension, e.g. "bucktrax".

    Returns:
        The parsed YAML contents as a nested dictionary.

    Raises:
        FileNotFoundError: If configs/<name>.yaml does not exist.
        yaml.YAMLError: If the file contains invalid YAML.
    """
    path = _CONFIGS_DIR / f"{name}.yaml"
    if not path.exists():
        raise FileNotFoundError(
            f"Config file not found: {path}\n"
            f"Expected one of: {[p.stem for p in _CONFIGS_DIR.glob('*.yaml')]}"
        )
    with path.open(encoding="utf-8") as f:
        return yaml.safe_load(f)


@dataclass(frozen=True)
class BuckTraxSettings:
    """
    Tunable parameters of the movement-prediction pipeline.

    The defaults reproduce the fixed heuristic exactly; every value can be
    overridden from configs/bucktrax.yaml.

    corridor_baseline_probability is a fixed prior given to every corridor
    zone. It is not derived from sighting data.
    """

    # Sighting extraction
    placement_resolution: str = PLACEMENT_CURRENT
    photo_grouping_minutes: float = 0.0

    # Zone radius tiers (probability strictly above threshold → radius)
    high_probability_threshold: float = 0.5
    high_probability_radius_m: int = 100
    medium_probability_threshold: float = 0.25
    medium_probability_radius_m: int = 200
    low_probability_radius_m: int = 300

    # Corridor zones
    corridor_baseline_probability: float = 0.3
    corridor_radius_m: int = 150
    max_corridor_features: int = 3

    # Confidence score
    confidence_sample_cap: int = 10
    confidence_data_weight: float = 0.6
    confidence_proportion_weight: float = 0.4

    # Movement routes
    movement_time_window_minutes: float = 60.0
    max_movement_distance_m: float = 2000.0

    # Result metadata
    minimum_sightings_threshold: int = 5
    minimum_transitions_threshold: int = 2
    show_limited_data_warning: bool = True

    # Processing
    parallel_segments: bool = False

    def __post_init__(self) -> None:
        if self.placement_resolution not in _PLACEMENT_MODES:
            raise ValueError(
                f"placement_resolution must be one of {_PLACEMENT_MODES}, "
                f"got {self.placement_resolution!r}"
            )
        if self.photo_grouping_minutes < 0:
            raise ValueError("photo_grouping_minutes must be >= 0")
        if not 0.0 <= self.corridor_baseline_probability <= 1.0:
            raise ValueError(
                "corridor_baseline_probability must be in [0, 1], "
                f"got {self.corridor_baseline_probability}"
            )
        if self.medium_probability_threshold > self.high_probability_threshold:
            raise ValueError("medium_probability_threshold must not exceed high_probability_threshold")
        radii = (
            self.high_probability_radius_m,
            self.medium_probability_radius_m,
            self.low_probability_radius_m,
            self.corridor_radius_m,
        )
        if any(r <= 0 for r in radii):
            raise ValueError(f"All radii must be positive, got {radii}")
        if self.max_corridor_features < 0:
            raise ValueError("max_corridor_features must be >= 0")
        if self.confidence_sample_cap <= 0:
            raise ValueError("confidence_sample_cap must be positive")
        weight_sum = self.confidence_data_weight + self.confidence_proportion_weight
        if not math.isclose(weight_sum, 1.0, abs_tol=1e-9):
            raise ValueError(f"Confidence weights must sum to 1.0, got {weight_sum}")
        if self.movement_time_window_minutes < 0 or self.max_movement_distance_m < 0:
            raise ValueError("Movement time window and distance cap must be >= 0")
        if self.minimum_sightings_threshold < 0 or self.minimum_transitions_threshold < 0:
            raise ValueError("Limited-data thresholds must be >= 0")

    @classmethod
    def from_config(cls, cfg: dict[str, Any] | None) -> BuckTraxSettings:
        """
        Build settings from the nested dict returned by load_config("bucktrax").

        Sections or keys missing from the dict keep their defaults; an empty
        config file (None) gives the defaults.
        """
        cfg = cfg or {}
        sightings = cfg.get("sightings") or {}
        zones = cfg.get("zones") or {}
        corridors = cfg.get("corridors") or {}
        confidence = cfg.get("confidence") or {}
        routes = cfg.get("routes") or {}
        result = cfg.get("result") or {}
        processing = cfg.get("processing") or {}

        defaults = cls()
        return cls(
            placement_resolution=sightings.get("placement_resolution", defaults.placement_resolution),
            photo_grouping_minutes=float(
                sightings.get("photo_grouping_minutes", defaults.photo_grouping_minutes)
            ),
            high_probability_threshold=float(
                zones.get("high_probability_threshold", defaults.high_probability_threshold)
            ),
            high_probability_radius_m=int(
                zones.get("high_probability_radius_m", defaults.high_probability_radius_m)
            ),
            medium_probability_threshold=float(
                zones.get("medium_probability_threshold", defaults.medium_probability_threshold)
            ),
            medium_probability_radius_m=int(
                zones.get("medium_probability_radius_m", defaults.medium_probability_radius_m)
            ),
            low_probability_radius_m=int(
                zones.get("low_probability_radius_m", defaults.low_probability_radius_m)
            ),
            corridor_baseline_probability=float(
                corridors.get("baseline_probability", defaults.corridor_baseline_probability)
            ),
            corridor_radius_m=int(corridors.get("radius_m", defaults.corridor_radius_m)),
            max_corridor_features=int(corridors.get("max_features", defaults.max_corridor_features)),
            confidence_sample_cap=int(confidence.get("sample_cap", defaults.confidence_sample_cap)),
            confidence_data_weight=float(confidence.get("data_weight", defaults.confidence_data_weight)),
            confidence_proportion_weight=float(
                confidence.get("proportion_weight", defaults.confidence_proportion_weight)
            ),
            movement_time_window_minutes=float(
                routes.get("time_window_minutes", defaults.movement_time_window_minutes)
            ),
            max_movement_distance_m=float(
                routes.get("max_distance_m", defaults.max_movement_distance_m)
            ),
            minimum_sightings_threshold=int(
                result.get("minimum_sightings_threshold", defaults.minimum_sightings_threshold)
            ),
            minimum_transitions_threshold=int(
                result.get("minimum_transitions_threshold", defaults.minimum_transitions_threshold)
            ),
            show_limited_data_warning=bool(
                result.get("show_limited_data_warning", defaults.show_limited_data_warning)
            ),
            parallel_segments=bool(processing.get("parallel_segments", defaults.parallel_segments)),
        )


def load_settings(name: str = "bucktrax") -> BuckTraxSettings:
    """Load configs/<name>.yaml and return validated BuckTraxSettings."""
    return BuckTraxSettings.from_config(load_config(name))
