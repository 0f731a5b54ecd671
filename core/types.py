from enum import Enum
from typing import TypeAlias

# IDs
NodeID: TypeAlias = int | str
WayID: TypeAlias = int | str


class TurnClass(str, Enum):
    """Classification of a transition between two consecutive edges."""

    LEFT = "LEFT"
    STRAIGHT = "STRAIGHT"
    RIGHT = "RIGHT"
    U_TURN = "U_TURN"
    REVERSAL = "REVERSAL"  # sharp turn onto a different edge, never allowed


class FailureKind(str, Enum):
    """Reasons a route request can end without a path."""

    NO_MAP_DATA = "NO_MAP_DATA"
    NO_NODE_MAPPING = "NO_NODE_MAPPING"
    NO_PATH_FOUND = "NO_PATH_FOUND"
    SEARCH_BUDGET_EXCEEDED = "SEARCH_BUDGET_EXCEEDED"
