"""Raw map element records (nodes and ways) as delivered by a map-data provider."""

import logging
from collections.abc import Iterable
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator

from core.geo import Coordinate
from core.types import NodeID, WayID

logger = logging.getLogger(__name__)


class NodeElement(BaseModel):
    """A map node with its position."""

    model_config = ConfigDict(frozen=True)

    type: Literal["node"] = "node"
    id: NodeID
    lat: float = Field(allow_inf_nan=False)
    lon: float = Field(allow_inf_nan=False)

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(lat=self.lat, lon=self.lon)


class WayElement(BaseModel):
    """An ordered chain of node references forming a road.

    ``oneway`` may be given explicitly; otherwise it is derived from the
    ``oneway=yes`` tag.
    """

    model_config = ConfigDict(frozen=True)

    type: Literal["way"] = "way"
    id: WayID | None = None
    nodes: list[NodeID] = Field(default_factory=list)
    tags: dict[str, str] = Field(default_factory=dict)
    oneway: bool = False

    @model_validator(mode="before")
    @classmethod
    def derive_oneway(cls, data: Any) -> Any:
        """Fill ``oneway`` from the tags when it is not set explicitly."""
        if isinstance(data, dict) and "oneway" not in data:
            tags = data.get("tags") or {}
            return {**data, "oneway": tags.get("oneway") == "yes"}
        return data

    def segments(self) -> list[tuple[NodeID, NodeID]]:
        """Consecutive node pairs along the way."""
        return list(zip(self.nodes, self.nodes[1:]))


MapElement = Annotated[NodeElement | WayElement, Field(discriminator="type")]

_ELEMENT_ADAPTER: TypeAdapter[NodeElement | WayElement] = TypeAdapter(MapElement)


def parse_element(raw: dict[str, Any]) -> NodeElement | WayElement:
    """Validate a single raw element dictionary.

    Raises:
        pydantic.ValidationError: If the element is malformed
    """
    return _ELEMENT_ADAPTER.validate_python(raw)


def parse_elements(raw_elements: Iterable[dict[str, Any]]) -> list[NodeElement | WayElement]:
    """Validate Overpass-style element dictionaries.

    Elements of other types (e.g. relations) are skipped.

    Args:
        raw_elements: Iterable of dicts with a ``type`` key

    Returns:
        Parsed node and way elements in input order

    Raises:
        pydantic.ValidationError: If a node or way element is malformed
    """
    elements: list[NodeElement | WayElement] = []
    skipped = 0
    for raw in raw_elements:
        if raw.get("type") not in ("node", "way"):
            skipped += 1
            continue
        elements.append(parse_element(raw))

    if skipped:
        logger.debug(f"Skipped {skipped} elements of unsupported type")
    return elements
