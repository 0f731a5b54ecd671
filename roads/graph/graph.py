from collections.abc import Iterator

from core.geo import Coordinate
from core.types import NodeID


class RoadGraph:
    """Directed road network: node coordinates plus ordered adjacency lists."""

    def __init__(self) -> None:
        self.coordinates: dict[NodeID, Coordinate] = {}
        self.adjacency: dict[NodeID, list[NodeID]] = {}  # node -> successors

    def add_node(self, node_id: NodeID, coordinate: Coordinate) -> None:
        """Register a node and give it an empty adjacency list."""
        if node_id in self.coordinates:
            raise ValueError(f"Node {node_id} already exists")

        self.coordinates[node_id] = coordinate
        self.adjacency[node_id] = []

    def add_edge(self, from_node: NodeID, to_node: NodeID) -> None:
        """Add a directed edge between two registered nodes."""
        # Validate that both nodes exist
        if from_node not in self.coordinates:
            raise ValueError(f"Node {from_node} does not exist")
        if to_node not in self.coordinates:
            raise ValueError(f"Node {to_node} does not exist")

        self.adjacency[from_node].append(to_node)

    def has_node(self, node_id: NodeID) -> bool:
        return node_id in self.coordinates

    def get_coordinate(self, node_id: NodeID) -> Coordinate | None:
        """Get a node's coordinate, or None if the node is unknown."""
        return self.coordinates.get(node_id)

    def get_neighbors(self, node_id: NodeID) -> list[NodeID]:
        """Get successors of a node in insertion order (empty for unknown nodes)."""
        return self.adjacency.get(node_id, [])

    def edges(self) -> Iterator[tuple[NodeID, NodeID]]:
        """Iterate over all directed edges."""
        for from_node, successors in self.adjacency.items():
            for to_node in successors:
                yield from_node, to_node

    def get_node_count(self) -> int:
        """Get the number of nodes in the graph."""
        return len(self.coordinates)

    def get_edge_count(self) -> int:
        """Get the number of directed edges in the graph."""
        return sum(len(successors) for successors in self.adjacency.values())

    def is_empty(self) -> bool:
        return not self.coordinates

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.coordinates

    def __str__(self) -> str:
        """String representation of the graph."""
        return f"RoadGraph(nodes={self.get_node_count()}, edges={self.get_edge_count()})"

    def __repr__(self) -> str:
        """Detailed representation of the graph."""
        return f"RoadGraph(nodes={list(self.coordinates.keys())})"
