"""Declarative lookup of canonical fields in schema-less tile attribute bags.

Tile sources disagree on attribute names, so every canonical field maps to an
ordered tuple of known source names. ``lookup_field`` walks that tuple and
returns the first value the supplied coercer accepts.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Final

from haloinfo.domain.model import LengthUnit, to_meters


@dataclass(frozen=True, slots=True)
class FieldSource:
    name: str
    unit: LengthUnit | None = None


type Coercer[T] = Callable[[object, FieldSource], T | None]


def _sources(*names: str | FieldSource) -> tuple[FieldSource, ...]:
    return tuple(name if isinstance(name, FieldSource) else FieldSource(name) for name in names)


_FT = LengthUnit.FOOT
_M = LengthUnit.METER

FIELD_SOURCES: Final[Mapping[str, tuple[FieldSource, ...]]] = {
    "identifier": _sources(
        "icao_code",
        "icao",
        "identifier",
        "ident",
        "icao_id",
        "icao_identifier",
        "code",
        "gps_code",
        "local_code",
    ),
    "name": _sources("name", "name_en", "nam", "title", "full_name"),
    "country": _sources("country", "country_code", "iso_country", "ctry", "ctr", "cc", "iso2"),
    "type": _sources(
        "type",
        "subtype",
        "airport_type",
        "navaid_type",
        "obstacle_type",
        "facility_type",
        "category",
        "cat",
    ),
    "elevation": _sources(
        "elevation",
        FieldSource("elevation_m", _M),
        "elev",
        FieldSource("elev_m", _M),
        "field_elevation",
        "airport_elevation",
        "aerodrome_elevation",
        "apt_elev",
        "field_elev",
        "altitude",
        "alt",
        FieldSource("elevation_ft", _FT),
        FieldSource("elev_ft", _FT),
    ),
    "frequency": _sources(
        "frequency",
        "freq",
        "radio_frequency",
        "main_freq",
        "primary_freq",
        "tower_freq",
        "twr",
        "ctaf",
        "unicom",
    ),
    "runway_length": _sources(
        "runway_length",
        FieldSource("runway_length_m", _M),
        FieldSource("runway_length_ft", _FT),
        "length",
        FieldSource("length_m", _M),
        FieldSource("length_ft", _FT),
    ),
    "runway_designator": _sources("runway_designator", "runway_id", "designation", "designator"),
    "channel": _sources("channel", "tacan_channel", "dme_channel"),
    "range": _sources("range", "range_nm", "service_range"),
    "magnetic_declination": _sources(
        "magnetic_declination",
        "magneticDeclination",
        "mag_dec",
        "magdec",
        "declination",
        "magnetic_variation",
        "mag_var",
        "variation",
    ),
    "aligned_true_north": _sources("aligned_true_north", "true_north_aligned", "true_north"),
    "airspace_class": _sources("icao_class", "airspace_class", "class", "classification"),
    "lower_limit": _sources("lower_limit", "lowerLimit", "floor", "bottom", "lower_alt"),
    "upper_limit": _sources("upper_limit", "upperLimit", "ceiling", "top", "upper_alt"),
    "operating_hours": _sources(
        "operating_hours",
        "hours_of_operation",
        "hours",
        "active_hours",
        "operation_hours",
        "schedule",
    ),
    "traffic_rules": _sources("traffic_types", "flight_rules", "vfr_ifr", "rules", "traffic_type"),
    "ppr": _sources("ppr", "prior_permission", "permission_required"),
    "private": _sources("private", "is_private", "ownership_private"),
    "remarks": _sources("remarks", "comment", "notes", "description"),
}

_TRUE_WORDS: Final = frozenset({"true", "yes", "y", "1"})
_FALSE_WORDS: Final = frozenset({"false", "no", "n", "0"})
_LEADING_NUMBER = re.compile(
    r"^\s*(?P<value>[-+]?\d{1,9}(?:\.\d+)?)\s*(?P<unit>m|ft|meters?|feet)?\b",
    re.IGNORECASE,
)


def is_empty(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, float):
        return math.isnan(value)
    return False


def finite_float(value: float) -> float | None:
    """``float(value)`` when finite; integers beyond the float range yield ``None``."""

    try:
        number = float(value)
    except OverflowError:
        return None
    return number if math.isfinite(number) else None


def as_text(value: object, _source: FieldSource) -> str | None:
    if is_empty(value) or isinstance(value, bool):
        return None
    if isinstance(value, int) and finite_float(value) is None:
        return None
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (str, int, float)):
        return str(value).strip()
    return None


def as_float(value: object, _source: FieldSource) -> float | None:
    if is_empty(value) or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return finite_float(value)
    if isinstance(value, str):
        match = _LEADING_NUMBER.match(value)
        if match is not None:
            return float(match.group("value"))
    return None


def as_meters(value: object, source: FieldSource) -> int | None:
    """Coerce a length to metres using the source unit, or a unit written in the value."""

    if is_empty(value) or isinstance(value, bool):
        return None
    unit = source.unit or _M
    number: float | None = None
    if isinstance(value, (int, float)):
        number = finite_float(value)
    elif isinstance(value, str):
        match = _LEADING_NUMBER.match(value)
        if match is not None:
            number = float(match.group("value"))
            written = match.group("unit")
            if written:
                unit = _FT if written.lower().startswith("f") else _M
    if number is None:
        return None
    return to_meters(number, unit)


def as_bool(value: object, _source: FieldSource) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)) and not is_empty(value):
        return value > 0
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_WORDS:
            return True
        if lowered in _FALSE_WORDS:
            return False
    return None


def lookup_field[T](
    props: Mapping[str, object],
    canonical: str,
    coerce: Coercer[T],
    *,
    table: Mapping[str, tuple[FieldSource, ...]] = FIELD_SOURCES,
) -> T | None:
    """Return the first coercible value among the known source names for ``canonical``."""

    for source in table[canonical]:
        if source.name not in props:
            continue
        value = coerce(props[source.name], source)
        if value is not None:
            return value
    return None


def lookup_text(props: Mapping[str, object], canonical: str) -> str | None:
    return lookup_field(props, canonical, as_text)

