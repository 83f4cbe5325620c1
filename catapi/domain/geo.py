"""Geospatial helpers: bounding-box polygons and point containment."""
from __future__ import annotations

from typing import Any, Mapping

from shapely.geometry import Point, shape


def _coordinate(value: Any, name: str) -> float:
    try:
        return float(str(value).strip())
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid {name} coordinate: {value!r}") from exc


def rectangle_bounds(top_right: Mapping[str, Any], bottom_left: Mapping[str, Any]) -> dict:
    """
    Build a closed GeoJSON Polygon from two rectangle corners.

    Corners are mappings with ``lat``/``lng`` given as numbers or decimal
    strings. The ring is ``[lng, lat]`` pairs starting and ending at the
    top-right corner and running clockwise:
    top-right, bottom-right, bottom-left, top-left, top-right.

    Identical or swapped corners are not rejected; they yield a degenerate ring.
    """
    tr_lat = _coordinate(top_right.get("lat"), "lat")
    tr_lng = _coordinate(top_right.get("lng"), "lng")
    bl_lat = _coordinate(bottom_left.get("lat"), "lat")
    bl_lng = _coordinate(bottom_left.get("lng"), "lng")
    return {
        "type": "Polygon",
        "coordinates": [
            [
                [tr_lng, tr_lat],
                [tr_lng, bl_lat],
                [bl_lng, bl_lat],
                [bl_lng, tr_lat],
                [tr_lng, tr_lat],
            ]
        ],
    }


def parse_corner(value: str) -> dict[str, str]:
    """Split the ``"lat,lng"`` query form into a corner mapping."""
    parts = [p.strip() for p in (value or "").split(",")]
    if len(parts) != 2 or not all(parts):
        raise ValueError(f"Expected 'lat,lng', got {value!r}")
    lat, lng = parts
    _coordinate(lat, "lat")
    _coordinate(lng, "lng")
    return {"lat": lat, "lng": lng}


def envelope(polygon: Mapping[str, Any]) -> tuple[float, float, float, float]:
    """Return (min_lng, min_lat, max_lng, max_lat) of a GeoJSON polygon."""
    ring = polygon["coordinates"][0]
    lngs = [p[0] for p in ring]
    lats = [p[1] for p in ring]
    return min(lngs), min(lats), max(lngs), max(lats)


def within(lng: float, lat: float, polygon: Mapping[str, Any]) -> bool:
    """Point-in-polygon test; points on the boundary count as inside."""
    return shape(polygon).covers(Point(lng, lat))
