"""Output record of one reconciliation."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from .attributes import FeatureAttributes
from .enums import DataProvenance, FeatureCategory

if TYPE_CHECKING:
    from .attributes import Runway
    from .enums import TrafficRule
    from .primitives import Coordinates, CountryCode, RawAttributeValue


@dataclass(frozen=True, slots=True, kw_only=True)
class MergedRecord:
    """Tile identity merged with (optionally) matched catalog detail.

    Identity fields always come from the clicked tile. ``catalog_name`` and
    ``catalog_identifier`` keep what the matched catalog record called itself,
    for diagnostics only.
    """

    identifier: str | None
    name: str | None
    country: CountryCode | None
    type: str | None
    coordinates: Coordinates | None
    feature_category: FeatureCategory
    provenance: DataProvenance
    attributes: FeatureAttributes = field(default_factory=FeatureAttributes)
    warning: str | None = None
    catalog_id: str | None = None
    catalog_name: str | None = None
    catalog_identifier: str | None = None
    raw_attributes: Mapping[str, RawAttributeValue] = field(
        default_factory=lambda: MappingProxyType({}), compare=False
    )

    def __post_init__(self) -> None:
        if not isinstance(self.raw_attributes, MappingProxyType):
            object.__setattr__(self, "raw_attributes", MappingProxyType(dict(self.raw_attributes)))

    @property
    def is_verified(self) -> bool:
        return self.provenance is DataProvenance.HYBRID_VERIFIED

    @property
    def elevation(self) -> int | None:
        """Elevation in metres MSL."""
        return self.attributes.elevation_m

    @property
    def frequency(self) -> float | None:
        """Primary frequency in MHz."""
        return self.attributes.frequency_mhz

    @property
    def runways(self) -> tuple[Runway, ...] | None:
        return self.attributes.runways

    @property
    def traffic_rules(self) -> frozenset[TrafficRule] | None:
        return self.attributes.traffic_rules
