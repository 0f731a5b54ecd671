"""Route resolution with progressive relaxation of the turn policy."""

import logging
from collections.abc import Iterable, Sequence

from core.geo import Coordinate, haversine_distance
from core.types import FailureKind, NodeID
from roads.config import RouterConfig
from roads.graph.builder import build_graph
from roads.graph.elements import NodeElement, WayElement
from roads.graph.graph import RoadGraph
from roads.io.map_data import MapDataProvider, bounding_box_for
from roads.routing.navigator import SearchBudgetExceeded, TurnConstrainedNavigator
from roads.routing.policy import RoutingTier
from roads.routing.results import RouteFailure, RouteResult, RouteSuccess
from roads.routing.snapping import find_closest_node

logger = logging.getLogger(__name__)


class RouteResolver:
    """Tries each routing tier in order until one produces a route.

    The resolver only holds immutable configuration; graphs and search
    tables are created per call, so one instance can serve many requests.
    """

    def __init__(
        self,
        tiers: Sequence[RoutingTier] | None = None,
        navigator: TurnConstrainedNavigator | None = None,
        config: RouterConfig | None = None,
    ) -> None:
        """Initialize resolver.

        Args:
            tiers: Policies to attempt, strictest first. Defaults to the
                config's tiers.
            navigator: Search engine. Defaults to one bounded by the config's
                ``max_expansions``.
            config: Router configuration, defaults to ``RouterConfig()``
        """
        self.config = config or RouterConfig()
        self.tiers: tuple[RoutingTier, ...] = (
            tuple(tiers) if tiers is not None else self.config.tiers()
        )
        if not self.tiers:
            raise ValueError("At least one routing tier is required")
        self.navigator = navigator or TurnConstrainedNavigator(self.config.max_expansions)

    def fetch_and_resolve(
        self, start: Coordinate, end: Coordinate, provider: MapDataProvider
    ) -> RouteResult:
        """Fetch elements around both points from a provider, then resolve."""
        bbox = bounding_box_for(start, end, self.config.bbox_buffer_deg)
        logger.info(f"Fetching map data for {bbox}")
        return self.resolve(start, end, provider.fetch(bbox))

    def resolve(
        self,
        start: Coordinate,
        end: Coordinate,
        elements: Iterable[NodeElement | WayElement],
    ) -> RouteResult:
        """Resolve a route between two free coordinates over raw map elements.

        Args:
            start: Requested start point
            end: Requested end point
            elements: Node and way records covering both points

        Returns:
            RouteSuccess, or RouteFailure with NO_MAP_DATA, NO_NODE_MAPPING,
            NO_PATH_FOUND or SEARCH_BUDGET_EXCEEDED
        """
        elements = list(elements)
        if not elements:
            logger.info("No map data supplied")
            return RouteFailure.of(FailureKind.NO_MAP_DATA)

        graph = build_graph(elements)
        logger.info(f"Built {graph}")
        return self.resolve_on_graph(start, end, graph)

    def resolve_on_graph(self, start: Coordinate, end: Coordinate, graph: RoadGraph) -> RouteResult:
        """Resolve a route over an already built graph.

        The graph is only read, so it may be shared between concurrent calls.
        """
        # Snapping does not depend on the tier, so do it once
        start_node = find_closest_node(start, graph.coordinates)
        end_node = find_closest_node(end, graph.coordinates)
        if start_node is None or end_node is None:
            logger.info("Could not map start/end points to the road network")
            return RouteFailure.of(FailureKind.NO_NODE_MAPPING)
        logger.info(f"Snapped endpoints to nodes {start_node} -> {end_node}")

        for tier in self.tiers:
            logger.info(f"Running search with tier '{tier.label}'")
            try:
                result = self.navigator.find_route(start_node, end_node, graph, tier.policy)
            except SearchBudgetExceeded as e:
                logger.warning(f"Tier '{tier.label}' aborted: {e}")
                return RouteFailure.of(FailureKind.SEARCH_BUDGET_EXCEEDED)

            if result is not None:
                logger.info(
                    f"Route found with tier '{tier.label}': "
                    f"{len(result.path)} nodes, cost {result.cost:.1f} m"
                )
                return self._to_success(start, end, graph, result.path, result.cost, tier.label)

            logger.info(f"No route under tier '{tier.label}'")

        logger.info("All routing tiers exhausted")
        return RouteFailure.of(FailureKind.NO_PATH_FOUND)

    @staticmethod
    def _to_success(
        start: Coordinate,
        end: Coordinate,
        graph: RoadGraph,
        node_path: list[NodeID],
        cost: float,
        tier_label: str,
    ) -> RouteSuccess:
        node_coords = [graph.coordinates[node_id] for node_id in node_path]
        length_m = sum(haversine_distance(a, b) for a, b in zip(node_coords, node_coords[1:]))
        return RouteSuccess(
            path=[start, *node_coords, end],
            distance_m=cost,
            length_m=length_m,
            node_path=node_path,
            tier_label=tier_label,
        )


def resolve_route(
    start: Coordinate,
    end: Coordinate,
    elements: Iterable[NodeElement | WayElement],
    config: RouterConfig | None = None,
) -> RouteResult:
    """Resolve a route with the default tiers.

    Args:
        start: Requested start point
        end: Requested end point
        elements: Node and way records covering both points
        config: Optional router configuration

    Returns:
        RouteSuccess or RouteFailure
    """
    return RouteResolver(config=config).resolve(start, end, elements)
