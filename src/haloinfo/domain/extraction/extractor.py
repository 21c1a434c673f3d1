"""Tile feature -> ``TileIdentity``.

Fields are read from the attribute bag first and recovered from label text
second. Extraction never raises: a value that cannot be derived stays ``None``
so callers can tell "unknown" apart from zero or empty.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import replace
from logging import getLogger
from typing import TYPE_CHECKING, Final

from haloinfo.domain.model import (
    FeatureAttributes,
    FeatureCategory,
    OperatingHours,
    OperatingPeriod,
    RadioFrequency,
    Runway,
    TileIdentity,
)

from .fields import FieldSource, as_bool, as_float, as_meters, lookup_field, lookup_text
from .geometry import category_for_layer, representative_coordinates
from .labels import (
    FREQUENCY_LABEL_FIELDS,
    LABEL_FIELDS,
    RUNWAY_TEXT_FIELDS,
    label_text,
    normalize_frequency_mhz,
    parse_channel_frequencies,
    parse_elevation,
    parse_frequency,
    parse_runway_designator,
    parse_runway_lengths,
    scan_fields,
)
from .services import extract_fuel_types, extract_ppr, extract_private
from .surfaces import extract_surface
from .traffic import ICAO_CLASS_CODES, classify_traffic_rules

if TYPE_CHECKING:
    from haloinfo.domain.model import RawAttributes

log = getLogger(__name__)

LAYER_KEYS: Final = ("sourceLayer", "source_layer", "layer")

# attribute name -> channel label
CHANNEL_FIELDS: Final[Mapping[str, str]] = {
    "tower_freq": "Tower",
    "twr_freq": "Tower",
    "ground_freq": "Ground",
    "gnd_freq": "Ground",
    "apron_freq": "Apron",
    "approach_freq": "Approach",
    "app_freq": "Approach",
    "atis_freq": "ATIS",
    "info_freq": "Information",
    "ctaf": "CTAF",
    "unicom": "UNICOM",
}

_H24 = re.compile(r"\b(?:h24|24/7|24h)\b", re.IGNORECASE)
_SUNRISE_SUNSET = re.compile(r"\b(?:sr\s*-\s*ss|sunrise\s*-\s*sunset)\b", re.IGNORECASE)
_BY_NOTAM = re.compile(r"\bnotam\b", re.IGNORECASE)


def extract(raw_feature: object) -> TileIdentity:
    """Build the canonical identity for one clicked tile feature."""

    feature = raw_feature if isinstance(raw_feature, Mapping) else {}
    props_value = feature.get("properties")
    props: Mapping[str, object] = props_value if isinstance(props_value, Mapping) else {}

    source_layer = _source_layer(feature)
    category = category_for_layer(source_layer)

    identity = TileIdentity(
        identifier=lookup_text(props, "identifier"),
        name=lookup_text(props, "name"),
        country=lookup_text(props, "country"),
        type=lookup_text(props, "type"),
        coordinates=representative_coordinates(feature.get("geometry")),
        feature_category=category,
        source_layer=source_layer,
        attributes=extract_attributes(props, category),
        raw_attributes=_raw_attributes(props),
    )
    log.debug(
        "Extracted %s (%s) from layer %s", identity.display_label, category, source_layer or "?"
    )
    return identity


def extract_attributes(props: Mapping[str, object], category: FeatureCategory) -> FeatureAttributes:
    frequency = extract_frequency(props)
    common = FeatureAttributes(
        elevation_m=extract_elevation(props),
        frequency_mhz=frequency,
        remarks=lookup_text(props, "remarks"),
    )

    match category:
        case FeatureCategory.AIRPORT:
            return replace(
                common,
                frequencies=extract_frequencies(props, primary=frequency),
                runways=extract_runways(props),
                traffic_rules=classify_traffic_rules(props),
                operating_hours=extract_operating_hours(props),
                ppr=extract_ppr(props),
                private=extract_private(props),
                fuel_types=extract_fuel_types(props),
            )
        case FeatureCategory.NAVAID:
            return replace(
                common,
                channel=lookup_text(props, "channel"),
                range_nm=lookup_field(props, "range", as_float),
                magnetic_declination=lookup_field(props, "magnetic_declination", as_float),
                aligned_true_north=lookup_field(props, "aligned_true_north", as_bool),
                operating_hours=extract_operating_hours(props),
            )
        case FeatureCategory.AIRSPACE:
            return replace(
                common,
                airspace_class=extract_airspace_class(props),
                lower_limit=lookup_text(props, "lower_limit"),
                upper_limit=lookup_text(props, "upper_limit"),
                operating_hours=extract_operating_hours(props),
            )
        case _:
            return common


def extract_elevation(props: Mapping[str, object]) -> int | None:
    direct = lookup_field(props, "elevation", as_meters)
    if direct is not None:
        return direct
    return scan_fields(props, LABEL_FIELDS, parse_elevation)


def extract_frequency(props: Mapping[str, object]) -> float | None:
    # Typed fields skip the band check; NDB frequencies are legitimately in kHz.
    raw = lookup_text(props, "frequency")
    if raw is not None:
        value = as_float(raw, FieldSource("frequency"))
        if value is not None and value > 0:
            return normalize_frequency_mhz(value, khz="khz" in raw.lower())
    return scan_fields(props, FREQUENCY_LABEL_FIELDS, parse_frequency)


def extract_frequencies(
    props: Mapping[str, object], *, primary: float | None = None
) -> tuple[RadioFrequency, ...] | None:
    """Per-channel frequencies from dedicated fields and ``"Tower 118.5"`` label fragments."""

    found: dict[tuple[str, float], RadioFrequency] = {}
    for field, label in CHANNEL_FIELDS.items():
        if field not in props:
            continue
        value = as_float(props[field], FieldSource(field))
        if value is None or value <= 0:
            continue
        mhz = normalize_frequency_mhz(value)
        found.setdefault((label, mhz), RadioFrequency(label, mhz, primary=mhz == primary))
    for field in FREQUENCY_LABEL_FIELDS:
        text = label_text(props, field)
        if text is None:
            continue
        for label, mhz in parse_channel_frequencies(text):
            found.setdefault((label, mhz), RadioFrequency(label, mhz, primary=mhz == primary))
    return tuple(found.values()) or None


def extract_runways(props: Mapping[str, object]) -> tuple[Runway, ...] | None:
    length = lookup_field(props, "runway_length", as_meters)
    if length is None:
        length = scan_fields(props, RUNWAY_TEXT_FIELDS, _first_runway_length)

    designator = lookup_text(props, "runway_designator")
    if designator is None:
        designator = scan_fields(props, RUNWAY_TEXT_FIELDS, parse_runway_designator)

    surface = extract_surface(props)

    if length is None and designator is None and surface is None:
        return None
    return (Runway(designator=designator, length_m=length, surface=surface, main=True),)


def _first_runway_length(text: str) -> int | None:
    lengths = parse_runway_lengths(text)
    return lengths[0].meters if lengths else None


def extract_airspace_class(props: Mapping[str, object]) -> str | None:
    raw = lookup_text(props, "airspace_class")
    if raw is None:
        return None
    return ICAO_CLASS_CODES.get(raw, raw.upper())


def parse_operating_hours(text: str) -> OperatingHours:
    """``"H24"`` sets the flag; ``"SR-SS"`` becomes a sunrise-to-sunset period."""

    periods: tuple[OperatingPeriod, ...] = ()
    if _SUNRISE_SUNSET.search(text):
        by_notam = bool(_BY_NOTAM.search(text))
        periods = (OperatingPeriod(sunrise=True, sunset=True, by_notam=by_notam),)
    elif _BY_NOTAM.search(text):
        periods = (OperatingPeriod(by_notam=True),)
    return OperatingHours(periods=periods, h24=bool(_H24.search(text)), remarks=text)


def extract_operating_hours(props: Mapping[str, object]) -> OperatingHours | None:
    text = lookup_text(props, "operating_hours")
    return parse_operating_hours(text) if text is not None else None


def _source_layer(feature: Mapping[str, object]) -> str | None:
    for key in LAYER_KEYS:
        value = feature.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def _raw_attributes(props: Mapping[str, object]) -> RawAttributes:
    return {str(key): value for key, value in props.items()}  # type: ignore[misc]
