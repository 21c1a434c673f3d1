"""Public domain model surface."""

from __future__ import annotations

from haloinfo.domain.model.attributes import (
    FeatureAttributes,
    OperatingHours,
    OperatingPeriod,
    RadioFrequency,
    Runway,
)
from haloinfo.domain.model.enums import (
    DataProvenance,
    FeatureCategory,
    LengthUnit,
    Surface,
    TrafficRule,
)
from haloinfo.domain.model.identity import RemoteDetailRecord, TileIdentity
from haloinfo.domain.model.merged import MergedRecord
from haloinfo.domain.model.primitives import (
    FEET_TO_METERS,
    Coordinates,
    CountryCode,
    RawAttributes,
    RawAttributeValue,
    to_meters,
)

__all__ = [  # noqa: RUF022
    # identity
    "TileIdentity",
    "RemoteDetailRecord",
    "MergedRecord",
    # attributes
    "FeatureAttributes",
    "OperatingHours",
    "OperatingPeriod",
    "RadioFrequency",
    "Runway",
    # enums
    "DataProvenance",
    "FeatureCategory",
    "LengthUnit",
    "Surface",
    "TrafficRule",
    # primitives
    "FEET_TO_METERS",
    "Coordinates",
    "CountryCode",
    "RawAttributes",
    "RawAttributeValue",
    "to_meters",
]
