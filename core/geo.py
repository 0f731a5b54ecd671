"""Geographic primitives: coordinates, great-circle distance and turn angles."""

import math

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

EARTH_RADIUS_M = 6_371_000.0


class Coordinate(BaseModel):
    """A latitude/longitude point in degrees.

    Immutable and hashable so it can be used as a dictionary key. ``lng`` is
    accepted as an alias for ``lon`` on input.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    lat: float = Field(description="Latitude in degrees")
    lon: float = Field(
        validation_alias=AliasChoices("lon", "lng"), description="Longitude in degrees"
    )

    @classmethod
    def parse(cls, text: str) -> "Coordinate":
        """Create a coordinate from a ``"lat,lon"`` string.

        Raises:
            ValueError: If the text is not two comma-separated numbers
        """
        parts = text.split(",")
        if len(parts) != 2:
            raise ValueError(f"Expected 'lat,lon', got {text!r}")
        return cls(lat=float(parts[0]), lon=float(parts[1]))


def haversine_distance(p1: Coordinate, p2: Coordinate) -> float:
    """Great-circle distance between two points.

    Args:
        p1: First point
        p2: Second point

    Returns:
        Distance in meters
    """
    phi1 = math.radians(p1.lat)
    phi2 = math.radians(p2.lat)
    d_phi = math.radians(p2.lat - p1.lat)
    d_lambda = math.radians(p2.lon - p1.lon)

    a = (
        math.sin(d_phi / 2) * math.sin(d_phi / 2)
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) * math.sin(d_lambda / 2)
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_M * c


def pseudo_bearing(p1: Coordinate, p2: Coordinate) -> float:
    """Planar heading of the segment p1 -> p2 in radians.

    Longitude delta is the sine component and latitude delta the cosine
    component. This is not a true geodesic bearing.
    """
    return math.atan2(p2.lon - p1.lon, p2.lat - p1.lat)


def turn_angle(prev: Coordinate, cur: Coordinate, nxt: Coordinate) -> float:
    """Signed deviation when travelling prev -> cur -> nxt.

    Args:
        prev: Point the traveller arrived from
        cur: Point where the turn happens
        nxt: Point the traveller continues to

    Returns:
        Angle in degrees within (-180, 180]. Negative values deviate left,
        positive values deviate right.
    """
    angle = math.degrees(pseudo_bearing(cur, nxt) - pseudo_bearing(prev, cur))

    if angle > 180:
        angle -= 360
    elif angle <= -180:
        angle += 360

    return angle
