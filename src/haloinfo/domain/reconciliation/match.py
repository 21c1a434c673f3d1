"""Choose the catalog candidate that denotes the clicked feature, or none.

Policy, first success wins:

1. country: the first candidate whose country equals the tile country
   (exact, case-sensitive; skipped when the tile has no country);
2. proximity: the nearest candidate with coordinates, accepted only when its
   planar distance is below ``PROXIMITY_THRESHOLD_DEGREES``;
3. otherwise no match. There is no "first candidate" fallback.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Iterable

    from haloinfo.domain.model import RemoteDetailRecord, TileIdentity

# ~55 km at the equator; degrees are treated as planar units.
PROXIMITY_THRESHOLD_DEGREES: Final = 0.5


class MatchKind(StrEnum):
    COUNTRY = "country"
    PROXIMITY = "proximity"


@dataclass(frozen=True, slots=True)
class MatchOutcome:
    record: RemoteDetailRecord
    kind: MatchKind
    distance_degrees: float | None = None


def match_by_country(
    identity: TileIdentity, candidates: Iterable[RemoteDetailRecord]
) -> RemoteDetailRecord | None:
    if identity.country is None:
        return None
    for candidate in candidates:
        if candidate.country == identity.country:
            return candidate
    return None


def match_by_proximity(
    identity: TileIdentity,
    candidates: Iterable[RemoteDetailRecord],
    *,
    threshold: float = PROXIMITY_THRESHOLD_DEGREES,
) -> tuple[RemoteDetailRecord, float] | None:
    origin = identity.coordinates
    if origin is None:
        return None
    best: tuple[RemoteDetailRecord, float] | None = None
    for candidate in candidates:
        if candidate.coordinates is None:
            continue
        distance = origin.distance_degrees(candidate.coordinates)
        if best is None or distance < best[1]:
            best = (candidate, distance)
    if best is None or best[1] >= threshold:
        return None
    return best


def select_candidate(
    identity: TileIdentity, candidates: Iterable[RemoteDetailRecord]
) -> MatchOutcome | None:
    pool = tuple(candidates)
    if not pool:
        return None
    by_country = match_by_country(identity, pool)
    if by_country is not None:
        return MatchOutcome(by_country, MatchKind.COUNTRY)
    nearest = match_by_proximity(identity, pool)
    if nearest is not None:
        record, distance = nearest
        return MatchOutcome(record, MatchKind.PROXIMITY, distance)
    return None


def resolve_match(
    identity: TileIdentity, candidates: Iterable[RemoteDetailRecord]
) -> RemoteDetailRecord | None:
    """Best candidate for ``identity``; ``None`` when no candidate is trustworthy."""

    outcome = select_candidate(identity, candidates)
    return outcome.record if outcome is not None else None
