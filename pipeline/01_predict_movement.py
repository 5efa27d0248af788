"""
01_predict_movement.py — Write BuckTrax movement predictions for tagged profiles.

Loads the property snapshot exported to the configured snapshot directory,
runs the movement-prediction pipeline for each configured profile (or every
profile in the snapshot when none are listed), and writes one JSON document
per profile.

Usage:
    python -m pipeline.01_predict_movement

Output:
    data/predictions/profile_<id>.json
"""

from __future__ import annotations

import sys
from pathlib import Path

# Make the project root importable so bucktrax.* works from any directory.
_PROJECT_ROOT = Path(__file__).parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from bucktrax.config import BuckTraxSettings, load_config  # noqa: E402
from bucktrax.data.sightings import InvalidSightingError  # noqa: E402
from bucktrax.data.snapshot import load_snapshot  # noqa: E402
from bucktrax.logging_utils import get_logger  # noqa: E402
from bucktrax.prediction.assembler import predict_for_profile  # noqa: E402

logger = get_logger(__name__)

_cfg = load_config("bucktrax")
_pipe = _cfg["pipeline"]

SNAPSHOT_DIR = _PROJECT_ROOT / _pipe["snapshot_dir"]
OUTPUT_DIR = _PROJECT_ROOT / _pipe["output_dir"]
PROFILE_IDS: list[int] = [int(p) for p in _pipe.get("profile_ids") or []]


def main() -> None:
    settings = BuckTraxSettings.from_config(_cfg)
    snapshot = load_snapshot(SNAPSHOT_DIR)

    profile_ids = PROFILE_IDS or [int(p) for p in snapshot.profiles["profile_id"]]
    if not profile_ids:
        logger.error("No profiles found in %s", SNAPSHOT_DIR)
        return

    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    written = 0
    for profile_id in profile_ids:
        try:
            result = predict_for_profile(snapshot, profile_id, settings)
        except (KeyError, InvalidSightingError) as e:
            logger.warning("Skipping profile %d: %s", profile_id, e)
            continue

        out_path = OUTPUT_DIR / f"profile_{profile_id}.json"
        out_path.write_text(result.to_json(), encoding="utf-8")
        written += 1

        busiest = max(result.time_segments, key=lambda s: s.sighting_count)
        logger.info(
            "  %s → %d sightings, %d transitions, busiest segment %s (%d, confidence %.1f)",
            result.profile_name,
            result.total_sightings,
            result.total_transitions,
            busiest.segment_name,
            busiest.sighting_count,
            busiest.confidence_score,
        )

    logger.info("Wrote %d prediction files to %s", written, OUTPUT_DIR)


if __name__ == "__main__":
    main()
