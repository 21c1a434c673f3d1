"""Identity records on either side of the reconciliation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .attributes import FeatureAttributes
from .enums import FeatureCategory

if TYPE_CHECKING:
    from .primitives import Coordinates, CountryCode, RawAttributes


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


@dataclass(frozen=True, slots=True, kw_only=True)
class TileIdentity:
    """Canonical record extracted from one clicked tile feature."""

    identifier: str | None = None
    name: str | None = None
    country: CountryCode | None = None
    type: str | None = None
    coordinates: Coordinates | None = None
    feature_category: FeatureCategory = FeatureCategory.OTHER
    source_layer: str | None = None
    attributes: FeatureAttributes = field(default_factory=FeatureAttributes)
    raw_attributes: RawAttributes = field(default_factory=dict, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "identifier", _blank_to_none(self.identifier))
        object.__setattr__(self, "name", _blank_to_none(self.name))
        object.__setattr__(self, "country", _blank_to_none(self.country))

    @property
    def has_lookup_key(self) -> bool:
        """Reconciliation needs an identifier or a name to query the catalog."""

        return self.identifier is not None or self.name is not None

    @property
    def display_label(self) -> str:
        parts = [part for part in (self.identifier, self.name) if part]
        return " / ".join(parts) or "<unnamed feature>"


@dataclass(frozen=True, slots=True, kw_only=True)
class RemoteDetailRecord:
    """One candidate detail record returned by the catalog."""

    identifier: str | None = None
    name: str | None = None
    country: CountryCode | None = None
    type: str | None = None
    coordinates: Coordinates | None = None
    catalog_id: str | None = None
    attributes: FeatureAttributes = field(default_factory=FeatureAttributes)
