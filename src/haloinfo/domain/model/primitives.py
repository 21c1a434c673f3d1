"""Domain primitives: scalar aliases + small value objects."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Final

from .enums import LengthUnit

type CountryCode = str  # ISO 3166-1 alpha-2
type RawAttributeValue = str | int | float | bool | None
type RawAttributes = dict[str, RawAttributeValue]

FEET_TO_METERS: Final[float] = 0.3048


@dataclass(frozen=True, slots=True)
class Coordinates:
    lon: float
    lat: float

    def distance_degrees(self, other: Coordinates) -> float:
        """Planar euclidean distance in degrees; no geodesic correction."""

        return math.hypot(self.lon - other.lon, self.lat - other.lat)

    def as_pair(self) -> tuple[float, float]:
        return (self.lon, self.lat)


def to_meters(value: float, unit: LengthUnit) -> int:
    """Convert a length to whole metres, rounding half away from zero."""

    meters = value * FEET_TO_METERS if unit is LengthUnit.FOOT else value
    return int(math.floor(abs(meters) + 0.5) * (1 if meters >= 0 else -1))
