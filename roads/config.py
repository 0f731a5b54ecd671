"""Router configuration."""

from pathlib import Path

import orjson
from pydantic import BaseModel, ConfigDict, Field

from roads.routing.policy import RoutingTier, TurnPenalties, TurnThresholds, default_tiers


class RouterConfig(BaseModel):
    """Tunable parameters for route resolution.

    Every field has a default, so an empty JSON object is a valid config.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    penalties: TurnPenalties = Field(default_factory=TurnPenalties)
    thresholds: TurnThresholds = Field(default_factory=TurnThresholds)
    bbox_buffer_deg: float = Field(
        default=0.05, gt=0, description="Degrees added around the start/end bounding box"
    )
    max_expansions: int | None = Field(
        default=None, ge=1, description="Cap on popped search states per tier (None = no cap)"
    )

    def tiers(self) -> tuple[RoutingTier, ...]:
        """Relaxation tiers using this config's penalties and thresholds."""
        return default_tiers(self.penalties, self.thresholds)


def load_config(path: str | Path) -> RouterConfig:
    """Load a RouterConfig from a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not valid JSON
        pydantic.ValidationError: If a value is out of range
    """
    filepath = Path(path)
    if not filepath.exists():
        raise FileNotFoundError(f"Config file not found: {filepath}")

    try:
        data = orjson.loads(filepath.read_bytes())
    except orjson.JSONDecodeError as e:
        raise ValueError(f"Failed to parse config {filepath}: {e}") from e

    return RouterConfig.model_validate(data)
