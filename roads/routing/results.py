"""DTOs describing the outcome of a route request."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from core.geo import Coordinate
from core.types import FailureKind, NodeID

FAILURE_MESSAGES: dict[FailureKind, str] = {
    FailureKind.NO_MAP_DATA: (
        "Could not fetch map data for the specified area. Try a different location."
    ),
    FailureKind.NO_NODE_MAPPING: "Could not map start/end points to the road network.",
    FailureKind.NO_PATH_FOUND: (
        "No valid path could be found under any turn policy. This can happen in areas "
        "with many one-way streets or where no such path exists."
    ),
    FailureKind.SEARCH_BUDGET_EXCEEDED: "Route search exceeded its expansion budget.",
}


class RouteSuccess(BaseModel):
    """A resolved route.

    Attributes:
        path: Requested start, the snapped node coordinates, then requested end
        distance_m: Penalty-weighted search cost in meters
        length_m: Plain length of the node path in meters
        node_path: Graph node IDs from the snapped start to the snapped end
        tier_label: Label of the turn policy tier that produced the route
    """

    model_config = ConfigDict(frozen=True)

    ok: Literal[True] = True
    path: list[Coordinate]
    distance_m: float = Field(ge=0)
    length_m: float = Field(ge=0)
    node_path: list[NodeID]
    tier_label: str

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class RouteFailure(BaseModel):
    """A route request that ended without a path."""

    model_config = ConfigDict(frozen=True)

    ok: Literal[False] = False
    kind: FailureKind
    message: str = ""

    @classmethod
    def of(cls, kind: FailureKind) -> "RouteFailure":
        """Create a failure with the standard message for its kind."""
        return cls(kind=kind, message=FAILURE_MESSAGES[kind])

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


RouteResult = RouteSuccess | RouteFailure
