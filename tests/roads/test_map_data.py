"""Tests for map data acquisition helpers."""

from pathlib import Path
from typing import Any

import orjson
import pytest
from pydantic import ValidationError

from core.geo import Coordinate
from core.types import FailureKind
from roads.graph.elements import NodeElement, WayElement
from roads.io.map_data import (
    DRIVABLE_HIGHWAYS,
    BoundingBox,
    FileMapDataProvider,
    bounding_box_for,
    load_raw_elements,
)
from roads.routing.resolver import RouteResolver
from roads.routing.results import RouteFailure

RAW_ELEMENTS: list[dict[str, Any]] = [
    {"type": "node", "id": 1, "lat": 52.00, "lon": 21.00},
    {"type": "node", "id": 2, "lat": 52.01, "lon": 21.00},
    {"type": "node", "id": 3, "lat": 53.00, "lon": 22.00},
    {"type": "way", "id": 100, "nodes": [1, 2], "tags": {"highway": "residential"}},
    {"type": "way", "id": 101, "nodes": [3], "tags": {"highway": "service"}},
]


def write_json(path: Path, data: Any) -> Path:
    path.write_bytes(orjson.dumps(data))
    return path


class TestBoundingBox:
    """Test bounding box computation."""

    def test_buffer_applied_on_every_side(self) -> None:
        bbox = bounding_box_for(Coordinate(lat=52.2, lon=21.1), Coordinate(lat=52.1, lon=21.3))
        assert bbox.min_lat == pytest.approx(52.05)
        assert bbox.max_lat == pytest.approx(52.25)
        assert bbox.min_lon == pytest.approx(21.05)
        assert bbox.max_lon == pytest.approx(21.35)

    def test_custom_buffer(self) -> None:
        point = Coordinate(lat=0, lon=0)
        bbox = bounding_box_for(point, point, buffer_deg=1.0)
        assert bbox == BoundingBox(min_lat=-1, min_lon=-1, max_lat=1, max_lon=1)

    def test_contains(self) -> None:
        bbox = BoundingBox(min_lat=0, min_lon=0, max_lat=1, max_lon=1)
        assert bbox.contains(Coordinate(lat=0.5, lon=1.0))
        assert not bbox.contains(Coordinate(lat=1.5, lon=0.5))

    def test_inverted_bounds_rejected(self) -> None:
        with pytest.raises(ValidationError):
            BoundingBox(min_lat=1, min_lon=0, max_lat=0, max_lon=1)


class TestLoadRawElements:
    """Test reading Overpass dumps."""

    def test_overpass_response_object(self, tmp_path: Path) -> None:
        path = write_json(tmp_path / "map.json", {"version": 0.6, "elements": RAW_ELEMENTS})
        assert load_raw_elements(path) == RAW_ELEMENTS

    def test_bare_list(self, tmp_path: Path) -> None:
        path = write_json(tmp_path / "map.json", RAW_ELEMENTS)
        assert len(load_raw_elements(path)) == 5

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_raw_elements(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(ValueError, match="Failed to parse"):
            load_raw_elements(path)

    def test_wrong_shape(self, tmp_path: Path) -> None:
        path = write_json(tmp_path / "map.json", {"remark": "runtime error"})
        with pytest.raises(ValueError, match="no element list"):
            load_raw_elements(path)


class TestFileMapDataProvider:
    """Test the file-backed provider."""

    def test_filters_to_bounding_box(self, tmp_path: Path) -> None:
        provider = FileMapDataProvider(write_json(tmp_path / "map.json", RAW_ELEMENTS))
        bbox = bounding_box_for(Coordinate(lat=52.0, lon=21.0), Coordinate(lat=52.01, lon=21.0))

        elements = provider.fetch(bbox)

        node_ids = [e.id for e in elements if isinstance(e, NodeElement)]
        ways = [e for e in elements if isinstance(e, WayElement)]
        assert node_ids == [1, 2]
        assert [w.id for w in ways] == [100]

    def test_empty_area(self, tmp_path: Path) -> None:
        provider = FileMapDataProvider(write_json(tmp_path / "map.json", RAW_ELEMENTS))
        far_away = Coordinate(lat=-40.0, lon=-70.0)
        assert provider.fetch(bounding_box_for(far_away, far_away)) == []

    def test_non_road_ways_dropped(self, tmp_path: Path) -> None:
        """Test that only drivable highway types become edges."""
        raw = [
            *RAW_ELEMENTS[:2],
            {"type": "way", "id": 200, "nodes": [1, 2], "tags": {"building": "yes"}},
            {"type": "way", "id": 201, "nodes": [1, 2], "tags": {"highway": "footway"}},
            {"type": "way", "id": 202, "nodes": [1, 2]},
        ]
        provider = FileMapDataProvider(write_json(tmp_path / "map.json", raw))
        bbox = bounding_box_for(Coordinate(lat=52.0, lon=21.0), Coordinate(lat=52.01, lon=21.0))

        elements = provider.fetch(bbox)

        assert not [e for e in elements if isinstance(e, WayElement)]
        assert len(elements) == 2

    def test_building_outline_is_not_routable(self, tmp_path: Path) -> None:
        raw = [
            *RAW_ELEMENTS[:2],
            {"type": "way", "id": 200, "nodes": [1, 2], "tags": {"building": "yes"}},
        ]
        provider = FileMapDataProvider(write_json(tmp_path / "map.json", raw))

        result = RouteResolver().fetch_and_resolve(
            Coordinate(lat=52.0, lon=21.0), Coordinate(lat=52.01, lon=21.0), provider
        )

        assert isinstance(result, RouteFailure)
        assert result.kind is FailureKind.NO_PATH_FOUND

    def test_custom_highway_types(self, tmp_path: Path) -> None:
        assert "footway" not in DRIVABLE_HIGHWAYS
        raw = [
            *RAW_ELEMENTS[:2],
            {"type": "way", "id": 201, "nodes": [1, 2], "tags": {"highway": "footway"}},
        ]
        provider = FileMapDataProvider(
            write_json(tmp_path / "map.json", raw), highway_types=frozenset({"footway"})
        )
        bbox = bounding_box_for(Coordinate(lat=52.0, lon=21.0), Coordinate(lat=52.01, lon=21.0))

        ways = [e for e in provider.fetch(bbox) if isinstance(e, WayElement)]

        assert [w.id for w in ways] == [201]
