"""Turn-constrained A* search over (node, arrived-from) states."""

import heapq
import logging
from dataclasses import dataclass
from typing import NamedTuple

from core.geo import Coordinate, haversine_distance, turn_angle
from core.types import NodeID, TurnClass
from roads.graph.graph import RoadGraph
from roads.routing.policy import TurnPolicy
from roads.routing.turns import classify_angle, is_allowed, penalty_for

logger = logging.getLogger(__name__)


class SearchState(NamedTuple):
    """Position in the search: the current node and the node we arrived from."""

    node: NodeID
    arrived_from: NodeID | None


@dataclass(frozen=True)
class SearchResult:
    """A found route: node sequence from start to goal and its penalised cost."""

    path: list[NodeID]
    cost: float
    expanded: int = 0


class GraphInvariantError(RuntimeError):
    """The graph references a node that has no coordinate."""


class SearchBudgetExceeded(RuntimeError):
    """A search popped more states than its configured budget."""

    def __init__(self, max_expansions: int) -> None:
        super().__init__(f"Search exceeded {max_expansions} state expansions")
        self.max_expansions = max_expansions


class TurnConstrainedNavigator:
    """A* pathfinding where legality and cost depend on the turn taken at each node.

    The search space is ``SearchState`` rather than bare nodes because whether
    a neighbor may be entered depends on the edge the current node was
    reached by.
    """

    def __init__(self, max_expansions: int | None = None) -> None:
        """Initialize navigator.

        Args:
            max_expansions: Optional cap on popped states per search. None
                means unbounded.
        """
        self.max_expansions = max_expansions

    def find_route(
        self, start: NodeID, goal: NodeID, graph: RoadGraph, policy: TurnPolicy
    ) -> SearchResult | None:
        """Find the cheapest policy-compliant route from start to goal.

        Args:
            start: Starting node ID
            goal: Destination node ID
            graph: Road graph to search
            policy: Allowed turn classes and their penalties

        Returns:
            SearchResult with the node path (inclusive) and cost, or None if
            no compliant route exists.

        Raises:
            GraphInvariantError: If a reachable node has no coordinate
            SearchBudgetExceeded: If ``max_expansions`` is exceeded

        Notes:
            - Edge cost: haversine length * turn penalty
            - Heuristic: haversine distance to goal, admissible since every
              penalty is >= 1
            - The first move out of start counts as straight and is always allowed
            - A literal retrace of the arrival edge is a U-turn
        """
        # Validate nodes exist
        if start not in graph or goal not in graph:
            return None

        goal_coord = self._coordinate(graph, goal)
        start_state = SearchState(start, None)
        start_h = haversine_distance(self._coordinate(graph, start), goal_coord)

        # Priority queue: (f_score, counter, state); counter keeps first-inserted first
        counter = 0
        open_set: list[tuple[float, int, SearchState]] = [(start_h, counter, start_state)]
        counter += 1

        g_score: dict[SearchState, float] = {start_state: 0.0}
        came_from: dict[SearchState, SearchState] = {}
        expanded = 0

        while open_set:
            _, _, state = heapq.heappop(open_set)
            expanded += 1
            if self.max_expansions is not None and expanded > self.max_expansions:
                raise SearchBudgetExceeded(self.max_expansions)

            current, prev = state

            # Goal reached
            if current == goal:
                path = self._reconstruct_path(came_from, state)
                logger.debug(
                    f"Route {start}->{goal} found: {len(path)} nodes, "
                    f"cost={g_score[state]:.1f}, expanded={expanded}"
                )
                return SearchResult(path=path, cost=g_score[state], expanded=expanded)

            current_g = g_score[state]
            current_coord = self._coordinate(graph, current)

            for neighbor in graph.get_neighbors(current):
                turn = self._classify(graph, prev, current_coord, neighbor, policy)
                if not is_allowed(turn, policy):
                    continue

                neighbor_coord = self._coordinate(graph, neighbor)
                edge_cost = haversine_distance(current_coord, neighbor_coord) * penalty_for(
                    turn, policy
                )
                tentative_g = current_g + edge_cost

                next_state = SearchState(neighbor, current)
                if next_state not in g_score or tentative_g < g_score[next_state]:
                    came_from[next_state] = state
                    g_score[next_state] = tentative_g
                    f_score = tentative_g + haversine_distance(neighbor_coord, goal_coord)
                    heapq.heappush(open_set, (f_score, counter, next_state))
                    counter += 1

        logger.debug(f"No route {start}->{goal} under policy, expanded={expanded}")
        return None

    def _classify(
        self,
        graph: RoadGraph,
        prev: NodeID | None,
        current_coord: Coordinate,
        neighbor: NodeID,
        policy: TurnPolicy,
    ) -> TurnClass:
        """Turn class of moving from current to neighbor after arriving from prev."""
        if neighbor == prev:
            return TurnClass.U_TURN
        if prev is None:
            return TurnClass.STRAIGHT

        angle = turn_angle(
            self._coordinate(graph, prev), current_coord, self._coordinate(graph, neighbor)
        )
        return classify_angle(angle, policy.thresholds)

    @staticmethod
    def _coordinate(graph: RoadGraph, node_id: NodeID) -> Coordinate:
        coordinate = graph.get_coordinate(node_id)
        if coordinate is None:
            raise GraphInvariantError(f"Node {node_id} has no coordinate")
        return coordinate

    @staticmethod
    def _reconstruct_path(
        came_from: dict[SearchState, SearchState], state: SearchState
    ) -> list[NodeID]:
        path = [state.node]
        while state in came_from:
            state = came_from[state]
            path.append(state.node)
        path.reverse()
        return path
