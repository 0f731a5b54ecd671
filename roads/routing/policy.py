"""Turn policies, penalty weights and the default relaxation tiers."""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class TurnPenalties(BaseModel):
    """Multipliers applied to an edge's length depending on the turn used to enter it.

    All weights are at least 1.0 so straight-line distance stays an admissible
    heuristic.
    """

    model_config = ConfigDict(frozen=True)

    left: float = Field(default=1.0, ge=1.0, description="Penalty for a left turn")
    straight: float = Field(default=1.1, ge=1.0, description="Penalty for going straight")
    uturn: float = Field(default=2.5, ge=1.0, description="Penalty for retracing an edge")
    right: float = Field(default=5.0, ge=1.0, description="Penalty for a right turn")


class TurnThresholds(BaseModel):
    """Angle boundaries (degrees) separating the turn classes."""

    model_config = ConfigDict(frozen=True)

    straight_max_deg: float = Field(
        default=30.0, gt=0, lt=180, description="Turns with |angle| below this are straight"
    )
    turn_max_deg: float = Field(
        default=150.0, gt=0, le=180, description="Turns with |angle| above this are reversals"
    )

    @model_validator(mode="after")
    def validate_order(self) -> "TurnThresholds":
        """Ensure the straight band lies inside the turn band."""
        if self.straight_max_deg > self.turn_max_deg:
            raise ValueError("straight_max_deg must be <= turn_max_deg")
        return self


class TurnPolicy(BaseModel):
    """Which turn classes a search may use, with their penalties."""

    model_config = ConfigDict(frozen=True)

    allow_left: bool = True
    allow_straight: bool = True
    allow_right: bool = False
    allow_uturn: bool = False
    penalties: TurnPenalties = Field(default_factory=TurnPenalties)
    thresholds: TurnThresholds = Field(default_factory=TurnThresholds)


class RoutingTier(BaseModel):
    """A labelled policy attempted by the resolver."""

    model_config = ConfigDict(frozen=True)

    label: str
    policy: TurnPolicy


def default_tiers(
    penalties: TurnPenalties | None = None, thresholds: TurnThresholds | None = None
) -> tuple[RoutingTier, ...]:
    """Build the standard relaxation ladder, strictest first.

    1. left and straight only
    2. left, straight and U-turns
    3. every turn class
    """
    penalties = penalties or TurnPenalties()
    thresholds = thresholds or TurnThresholds()

    def policy(*, right: bool, uturn: bool) -> TurnPolicy:
        return TurnPolicy(
            allow_left=True,
            allow_straight=True,
            allow_right=right,
            allow_uturn=uturn,
            penalties=penalties,
            thresholds=thresholds,
        )

    return (
        RoutingTier(label="left-straight", policy=policy(right=False, uturn=False)),
        RoutingTier(label="left-straight-uturn", policy=policy(right=False, uturn=True)),
        RoutingTier(label="all-turns", policy=policy(right=True, uturn=True)),
    )


DEFAULT_TIERS = default_tiers()
