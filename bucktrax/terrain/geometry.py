"""
Centroid extraction from stored feature geometry text.

Feature geometry arrives as text in one of two encodings:

    POINT (-90.0 35.0)     — well-known text, longitude first
    [-90.0, 35.0]          — bracketed [lng, lat] pair

extract_centroid() is the only entry point the rest of the package uses, so
the string scanning here can be replaced by a real geometry library without
touching the aggregation code.
"""

from __future__ import annotations

import math

_WKT_POINT_PREFIX = "POINT"


def extract_centroid(geometry_text: str | None) -> tuple[float, float] | None:
    """
    Return (latitude, longitude) for a point geometry, or None if it can't be read.

    The WKT POINT form is tried first, then the bracketed fallback. Anything
    else (lines, polygons, empty or garbled text, non-finite or out-of-range
    coordinates) yields None.
    """
    if not geometry_text:
        return None

    text = geometry_text.strip()
    pair = _parse_wkt_point(text)
    if pair is None:
        pair = _parse_bracketed_pair(text)
    if pair is None:
        return None

    lon, lat = pair
    if not (math.isfinite(lat) and math.isfinite(lon)):
        return None
    if abs(lat) > 90 or abs(lon) > 180:
        return None
    return lat, lon


def _parse_wkt_point(text: str) -> tuple[float, float] | None:
    if not text.upper().startswith(_WKT_POINT_PREFIX):
        return None

    start = text.find("(")
    end = text.rfind(")")
    if start == -1 or end <= start:
        return None

    return _to_pair(text[start + 1 : end].split())


def _parse_bracketed_pair(text: str) -> tuple[float, float] | None:
    start = text.find("[")
    end = text.rfind("]")
    if start == -1 or end <= start:
        return None

    return _to_pair(text[start + 1 : end].split(","))


def _to_pair(tokens: list[str]) -> tuple[float, float] | None:
    """Two numeric tokens → (first, second); anything else → None."""
    tokens = [t.strip() for t in tokens if t.strip()]
    if len(tokens) != 2:
        return None
    try:
        return float(tokens[0]), float(tokens[1])
    except ValueError:
        return None
