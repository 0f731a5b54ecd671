"""Snapping free coordinates onto graph nodes."""

from collections.abc import Mapping

from core.geo import Coordinate, haversine_distance
from core.types import NodeID


def node_sort_key(node_id: NodeID) -> tuple[bool, int | str]:
    """Canonical node ordering: integers ascending, then strings ascending."""
    return isinstance(node_id, str), node_id


def find_closest_node(point: Coordinate, coordinates: Mapping[NodeID, Coordinate]) -> NodeID | None:
    """Find the node nearest to a point by linear scan.

    Candidates are visited in ascending NodeID order and only a strictly
    smaller distance replaces the current best, so ties resolve to the lowest
    identifier.

    Args:
        point: Coordinate to snap
        coordinates: Candidate nodes and their positions

    Returns:
        The closest node ID, or None if there are no candidates
    """
    closest: NodeID | None = None
    min_distance = float("inf")

    for node_id in sorted(coordinates, key=node_sort_key):
        distance = haversine_distance(point, coordinates[node_id])
        if distance < min_distance:
            min_distance = distance
            closest = node_id

    return closest
