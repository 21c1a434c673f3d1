"""Representative location and category for tile features."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Final

from haloinfo.domain.model import Coordinates, FeatureCategory

from .fields import finite_float

LAYER_CATEGORIES: Final[Mapping[str, FeatureCategory]] = {
    "airports": FeatureCategory.AIRPORT,
    "airfields": FeatureCategory.AIRPORT,
    "navaids": FeatureCategory.NAVAID,
    "navigation_aids": FeatureCategory.NAVAID,
    "airspaces": FeatureCategory.AIRSPACE,
    "airspace": FeatureCategory.AIRSPACE,
    "obstacles": FeatureCategory.OBSTACLE,
    "obstructions": FeatureCategory.OBSTACLE,
}


def category_for_layer(source_layer: str | None) -> FeatureCategory:
    if not source_layer:
        return FeatureCategory.OTHER
    return LAYER_CATEGORIES.get(source_layer.strip().lower(), FeatureCategory.OTHER)


def _as_position(value: object) -> Coordinates | None:
    if not isinstance(value, (list, tuple)) or len(value) < 2:
        return None
    lon, lat = value[0], value[1]
    if isinstance(lon, bool) or isinstance(lat, bool):
        return None
    if not isinstance(lon, (int, float)) or not isinstance(lat, (int, float)):
        return None
    lon_value, lat_value = finite_float(lon), finite_float(lat)
    if lon_value is None or lat_value is None:
        return None
    return Coordinates(lon=lon_value, lat=lat_value)


def _first_position(coordinates: object, depth: int) -> Coordinates | None:
    # depth: 0 = position, 1 = line/ring, 2 = polygon, 3 = multipolygon
    current = coordinates
    for _ in range(depth):
        if not isinstance(current, (list, tuple)) or not current:
            return None
        current = current[0]
    return _as_position(current)


_DEPTH_BY_TYPE: Final = {
    "Point": 0,
    "MultiPoint": 1,
    "LineString": 1,
    "MultiLineString": 2,
    "Polygon": 2,
    "MultiPolygon": 3,
}


def representative_coordinates(geometry: object) -> Coordinates | None:
    """First vertex of the first ring or segment; ``None`` for anything malformed."""

    if not isinstance(geometry, Mapping):
        return None
    kind = geometry.get("type")
    if kind == "GeometryCollection":
        members = geometry.get("geometries")
        if isinstance(members, list) and members:
            return representative_coordinates(members[0])
        return None
    depth = _DEPTH_BY_TYPE.get(kind) if isinstance(kind, str) else None
    if depth is None:
        return None
    return _first_position(geometry.get("coordinates"), depth)
