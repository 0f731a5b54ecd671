"""Turn classification and policy admission."""

from core.types import TurnClass
from roads.routing.policy import TurnPolicy, TurnThresholds

_DEFAULT_THRESHOLDS = TurnThresholds()


def classify_angle(angle: float, thresholds: TurnThresholds = _DEFAULT_THRESHOLDS) -> TurnClass:
    """Classify a signed turn angle.

    Args:
        angle: Turn angle in degrees, negative meaning left
        thresholds: Class boundaries

    Returns:
        LEFT for [-turn_max, -straight_max], STRAIGHT for |angle| < straight_max,
        RIGHT for [straight_max, turn_max], REVERSAL otherwise.
    """
    if -thresholds.turn_max_deg <= angle <= -thresholds.straight_max_deg:
        return TurnClass.LEFT
    if abs(angle) < thresholds.straight_max_deg:
        return TurnClass.STRAIGHT
    if thresholds.straight_max_deg <= angle <= thresholds.turn_max_deg:
        return TurnClass.RIGHT
    return TurnClass.REVERSAL


def is_allowed(turn: TurnClass, policy: TurnPolicy) -> bool:
    """Check whether a policy admits a turn class. Reversals are never admitted."""
    if turn is TurnClass.LEFT:
        return policy.allow_left
    if turn is TurnClass.STRAIGHT:
        return policy.allow_straight
    if turn is TurnClass.RIGHT:
        return policy.allow_right
    if turn is TurnClass.U_TURN:
        return policy.allow_uturn
    return False


def penalty_for(turn: TurnClass, policy: TurnPolicy) -> float:
    """Cost multiplier for entering an edge with the given turn."""
    penalties = policy.penalties
    if turn is TurnClass.LEFT:
        return penalties.left
    if turn is TurnClass.STRAIGHT:
        return penalties.straight
    if turn is TurnClass.RIGHT:
        return penalties.right
    if turn is TurnClass.U_TURN:
        return penalties.uturn
    raise ValueError(f"Turn class {turn.value} has no penalty")
