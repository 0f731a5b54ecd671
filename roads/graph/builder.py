"""Road graph construction from raw node and way elements."""

import logging
from collections.abc import Iterable

from roads.graph.elements import NodeElement, WayElement
from roads.graph.graph import RoadGraph

logger = logging.getLogger(__name__)


def build_graph(elements: Iterable[NodeElement | WayElement]) -> RoadGraph:
    """Build a directed road graph from map elements.

    Two passes: first every node record is registered with its coordinate,
    then every way contributes an edge per consecutive node pair. The reverse
    edge is added unless the way is one-way. Segments touching an
    unregistered node are skipped on that side.

    Args:
        elements: Node and way elements in any order

    Returns:
        RoadGraph whose adjacency only references registered nodes
    """
    elements = list(elements)
    graph = RoadGraph()

    # First pass: collect all node coordinates
    duplicates = 0
    for element in elements:
        if not isinstance(element, NodeElement):
            continue
        if graph.has_node(element.id):
            duplicates += 1
            continue
        graph.add_node(element.id, element.coordinate)

    # Second pass: build edges from ways
    ways = 0
    dangling = 0
    for element in elements:
        if not isinstance(element, WayElement):
            continue
        ways += 1
        for node_a, node_b in element.segments():
            if graph.has_node(node_a) and graph.has_node(node_b):
                graph.add_edge(node_a, node_b)
                if not element.oneway:
                    graph.add_edge(node_b, node_a)
            else:
                dangling += 1

    if duplicates:
        logger.debug(f"Ignored {duplicates} duplicate node records")
    if dangling:
        logger.debug(f"Skipped {dangling} way segments referencing unknown nodes")
    logger.debug(f"Built {graph} from {ways} ways")

    return graph
