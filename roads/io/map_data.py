"""Map data acquisition contract and a file-backed provider."""

import logging
from pathlib import Path
from typing import Any, Protocol

import orjson
from pydantic import BaseModel, ConfigDict, model_validator

from core.geo import Coordinate
from roads.graph.elements import NodeElement, WayElement, parse_elements

logger = logging.getLogger(__name__)

DEFAULT_BUFFER_DEG = 0.05

# `highway` tag values that become road edges
DRIVABLE_HIGHWAYS = frozenset(
    {
        "motorway",
        "trunk",
        "primary",
        "secondary",
        "tertiary",
        "unclassified",
        "residential",
        "motorway_link",
        "trunk_link",
        "primary_link",
        "secondary_link",
        "tertiary_link",
        "living_street",
        "service",
    }
)


class BoundingBox(BaseModel):
    """Axis-aligned lat/lon box in degrees."""

    model_config = ConfigDict(frozen=True)

    min_lat: float
    min_lon: float
    max_lat: float
    max_lon: float

    @model_validator(mode="after")
    def validate_bounds(self) -> "BoundingBox":
        """Ensure min values do not exceed max values."""
        if self.min_lat > self.max_lat:
            raise ValueError("min_lat must be <= max_lat")
        if self.min_lon > self.max_lon:
            raise ValueError("min_lon must be <= max_lon")
        return self

    def contains(self, point: Coordinate) -> bool:
        return (
            self.min_lat <= point.lat <= self.max_lat and self.min_lon <= point.lon <= self.max_lon
        )


def bounding_box_for(
    start: Coordinate, end: Coordinate, buffer_deg: float = DEFAULT_BUFFER_DEG
) -> BoundingBox:
    """Bounding box around two points, expanded by a buffer on every side."""
    return BoundingBox(
        min_lat=min(start.lat, end.lat) - buffer_deg,
        min_lon=min(start.lon, end.lon) - buffer_deg,
        max_lat=max(start.lat, end.lat) + buffer_deg,
        max_lon=max(start.lon, end.lon) + buffer_deg,
    )


class MapDataProvider(Protocol):
    """Source of raw road elements for an area."""

    def fetch(self, bbox: BoundingBox) -> list[NodeElement | WayElement]:
        """Return node and way elements covering the bounding box."""
        ...


def load_raw_elements(path: str | Path) -> list[dict[str, Any]]:
    """Read raw element dicts from an Overpass JSON dump.

    Accepts either an Overpass response object (``{"elements": [...]}``) or
    a bare list of elements.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is not valid JSON or has an unexpected shape
    """
    filepath = Path(path)
    if not filepath.exists():
        raise FileNotFoundError(f"Map data file not found: {filepath}")

    try:
        data = orjson.loads(filepath.read_bytes())
    except orjson.JSONDecodeError as e:
        raise ValueError(f"Failed to parse map data {filepath}: {e}") from e

    if isinstance(data, dict):
        data = data.get("elements")
    if not isinstance(data, list):
        raise ValueError(f"Map data {filepath} has no element list")
    return data


class FileMapDataProvider:
    """Serves elements from a cached Overpass JSON dump.

    Nodes outside the requested box are dropped. Ways are kept when their
    ``highway`` tag is an allowed type and at least one of their nodes is
    inside the box.
    """

    def __init__(
        self, path: str | Path, highway_types: frozenset[str] = DRIVABLE_HIGHWAYS
    ) -> None:
        self.path = Path(path)
        self.highway_types = highway_types

    def fetch(self, bbox: BoundingBox) -> list[NodeElement | WayElement]:
        elements = parse_elements(load_raw_elements(self.path))

        nodes = [e for e in elements if isinstance(e, NodeElement) and bbox.contains(e.coordinate)]
        inside = {node.id for node in nodes}
        ways = [
            e
            for e in elements
            if isinstance(e, WayElement)
            and e.tags.get("highway") in self.highway_types
            and any(node_id in inside for node_id in e.nodes)
        ]

        logger.info(f"Loaded {len(nodes)} nodes and {len(ways)} ways from {self.path.name}")
        return [*nodes, *ways]
