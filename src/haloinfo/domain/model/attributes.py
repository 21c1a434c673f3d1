"""Canonical rich attributes shared by tile-derived and catalog-derived records.

Every field is optional. ``None`` means the value could not be derived, which is
distinct from a zero or an empty string.
"""

from __future__ import annotations

from dataclasses import dataclass, fields

from .enums import Surface, TrafficRule


@dataclass(frozen=True, slots=True)
class RadioFrequency:
    label: str
    value_mhz: float
    primary: bool = False


@dataclass(frozen=True, slots=True)
class Runway:
    designator: str | None = None
    length_m: int | None = None
    width_m: int | None = None
    surface: Surface | None = None
    main: bool | None = None


@dataclass(frozen=True, slots=True)
class OperatingPeriod:
    day_of_week: int | None = None  # 0 = Sunday, as the catalog encodes it
    start: str | None = None
    end: str | None = None
    sunrise: bool = False
    sunset: bool = False
    by_notam: bool = False


@dataclass(frozen=True, slots=True)
class OperatingHours:
    periods: tuple[OperatingPeriod, ...] = ()
    h24: bool = False
    remarks: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class FeatureAttributes:
    elevation_m: int | None = None
    frequency_mhz: float | None = None
    frequencies: tuple[RadioFrequency, ...] | None = None
    channel: str | None = None
    range_nm: float | None = None
    magnetic_declination: float | None = None
    aligned_true_north: bool | None = None
    operating_hours: OperatingHours | None = None
    runways: tuple[Runway, ...] | None = None
    traffic_rules: frozenset[TrafficRule] | None = None
    airspace_class: str | None = None
    lower_limit: str | None = None
    upper_limit: str | None = None
    ppr: bool | None = None
    private: bool | None = None
    fuel_types: frozenset[str] | None = None
    remarks: str | None = None

    def known_fields(self) -> tuple[str, ...]:
        """Names of fields that carry a value."""

        return tuple(f.name for f in fields(self) if getattr(self, f.name) is not None)

    @property
    def is_empty(self) -> bool:
        return not self.known_fields()
