from __future__ import annotations

import pytest

from haloinfo.domain.extraction.geometry import category_for_layer, representative_coordinates
from haloinfo.domain.model import Coordinates, FeatureCategory


@pytest.mark.parametrize(
    ("geometry", "expected"),
    [
        ({"type": "Point", "coordinates": [1.0, 2.0]}, Coordinates(1.0, 2.0)),
        ({"type": "LineString", "coordinates": [[3.0, 4.0], [5.0, 6.0]]}, Coordinates(3.0, 4.0)),
        (
            {"type": "Polygon", "coordinates": [[[7.0, 8.0], [9.0, 8.0], [7.0, 8.0]]]},
            Coordinates(7.0, 8.0),
        ),
        (
            {"type": "MultiPolygon", "coordinates": [[[[1.5, 2.5], [3.0, 2.5]]]]},
            Coordinates(1.5, 2.5),
        ),
        ({"type": "MultiPoint", "coordinates": [[0.5, 0.25]]}, Coordinates(0.5, 0.25)),
        (
            {
                "type": "GeometryCollection",
                "geometries": [{"type": "Point", "coordinates": [9, 10]}],
            },
            Coordinates(9.0, 10.0),
        ),
    ],
)
def test_representative_coordinates_uses_first_vertex(
    geometry: dict[str, object], expected: Coordinates
) -> None:
    assert representative_coordinates(geometry) == expected


@pytest.mark.parametrize(
    "geometry",
    [
        None,
        {"type": "Point"},
        {"type": "Point", "coordinates": ["a", "b"]},
        {"type": "Polygon", "coordinates": []},
        {"type": "Circle", "coordinates": [1, 2]},
        {"type": "Point", "coordinates": [True, False]},
    ],
)
def test_representative_coordinates_rejects_malformed_geometry(geometry: object) -> None:
    assert representative_coordinates(geometry) is None


@pytest.mark.parametrize(
    ("layer", "expected"),
    [
        ("airports", FeatureCategory.AIRPORT),
        ("Airfields", FeatureCategory.AIRPORT),
        ("navigation_aids", FeatureCategory.NAVAID),
        ("airspace", FeatureCategory.AIRSPACE),
        ("obstructions", FeatureCategory.OBSTACLE),
        ("reporting_points", FeatureCategory.OTHER),
        (None, FeatureCategory.OTHER),
    ],
)
def test_category_for_layer(layer: str | None, expected: FeatureCategory) -> None:
    assert category_for_layer(layer) is expected
