"""Translate OpenAIP catalog payloads into ``RemoteDetailRecord`` values.

All units are normalised here: lengths to metres, frequencies to MHz and
navaid range to nautical miles.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Final

from haloinfo.domain.extraction.geometry import representative_coordinates
from haloinfo.domain.model import (
    FeatureAttributes,
    FeatureCategory,
    LengthUnit,
    OperatingHours,
    OperatingPeriod,
    RadioFrequency,
    RemoteDetailRecord,
    Runway,
    Surface,
    TrafficRule,
    to_meters,
)

if TYPE_CHECKING:
    from .schema import (
        CatalogItem,
        FrequencyPayload,
        HoursOfOperationPayload,
        MeasurePayload,
        RunwayPayload,
    )

log = getLogger(__name__)

KM_PER_NM: Final = 1.852

_LENGTH_UNITS: Final = {0: LengthUnit.METER, 1: LengthUnit.FOOT}
_FREQUENCY_KHZ: Final = 1
_RANGE_NM: Final = 1
_LIMIT_FLIGHT_LEVEL: Final = 6
_LIMIT_UNITS: Final = {0: "m", 1: "ft"}
_LIMIT_DATUMS: Final = {0: "GND", 1: "MSL", 2: "STD"}

ICAO_CLASSES: Final = {0: "A", 1: "B", 2: "C", 3: "D", 4: "E", 5: "F", 6: "G", 8: "Unclassified"}
NAVAID_TYPES: Final = {
    0: "DME",
    1: "TACAN",
    2: "NDB",
    3: "VOR",
    4: "VOR-DME",
    5: "VORTAC",
    6: "DVOR",
    7: "DVOR-DME",
    8: "DVORTAC",
}
SURFACE_COMPOSITIONS: Final = {
    0: Surface.ASPHALT,
    1: Surface.CONCRETE,
    2: Surface.GRASS,
    3: Surface.SAND,
    4: Surface.WATER,
    5: Surface.ASPHALT,  # bitumen
    8: Surface.GRAVEL,  # stone
    10: Surface.DIRT,  # clay
    12: Surface.GRAVEL,
    13: Surface.DIRT,  # earth
    14: Surface.ICE,
    15: Surface.SNOW,
}
TRAFFIC_TYPES: Final = {0: TrafficRule.VFR, 1: TrafficRule.IFR}
FREQUENCY_TYPES: Final = {
    0: "Approach",
    1: "APRON",
    2: "Arrival",
    3: "Center",
    4: "CTAF",
    5: "Delivery",
    6: "Departure",
    7: "FIS",
    8: "Gliding",
    9: "Ground",
    10: "Information",
    11: "Multicom",
    12: "Unicom",
    13: "Radar",
    14: "Tower",
    15: "ATIS",
    16: "Radio",
    17: "Other",
    18: "AIRMET",
    19: "AWOS",
    20: "Lights",
    21: "VOLMET",
}


def length_to_meters(measure: MeasurePayload | None) -> int | None:
    if measure is None:
        return None
    unit = _LENGTH_UNITS.get(measure.unit)
    if unit is None:
        log.debug("Ignoring length with unknown unit code %s", measure.unit)
        return None
    return to_meters(measure.value, unit)


def frequency_to_mhz(payload: FrequencyPayload) -> float:
    value = payload.value / 1000 if payload.unit == _FREQUENCY_KHZ else payload.value
    return round(value, 3)


def range_to_nm(measure: MeasurePayload | None) -> float | None:
    if measure is None:
        return None
    if measure.unit == _RANGE_NM:
        return measure.value
    return round(measure.value / KM_PER_NM, 1)


def format_limit(measure: MeasurePayload | None) -> str | None:
    """``{0, unit=1, datum=0}`` -> ``"GND"``; flight levels -> ``"FL 65"``."""

    if measure is None:
        return None
    value = int(measure.value) if float(measure.value).is_integer() else measure.value
    if measure.unit == _LIMIT_FLIGHT_LEVEL:
        return f"FL {value}"
    datum = _LIMIT_DATUMS.get(measure.reference_datum or 0, "MSL")
    if value == 0 and datum == "GND":
        return "GND"
    unit = _LIMIT_UNITS.get(measure.unit, "ft")
    return f"{value} {unit} {datum}"


def translate_surface(runway: RunwayPayload) -> Surface | None:
    if runway.surface is None:
        return None
    code = runway.surface.main_composite
    if code is None and runway.surface.composition:
        code = runway.surface.composition[0]
    if code is None:
        return None
    return SURFACE_COMPOSITIONS.get(code, Surface.OTHER)


def translate_runway(runway: RunwayPayload) -> Runway:
    dimension = runway.dimension
    return Runway(
        designator=runway.designator,
        length_m=length_to_meters(dimension.length) if dimension else None,
        width_m=length_to_meters(dimension.width) if dimension else None,
        surface=translate_surface(runway),
        main=runway.main_runway,
    )


def _frequency_label(payload: FrequencyPayload) -> str:
    if payload.name is not None:
        return payload.name
    if payload.type is not None:
        return FREQUENCY_TYPES.get(payload.type, "Radio")
    return "Radio"


def translate_frequencies(item: CatalogItem) -> tuple[RadioFrequency, ...] | None:
    payloads = list(item.frequencies)
    if item.frequency is not None:
        payloads.insert(0, item.frequency)
    if not payloads:
        return None
    return tuple(
        RadioFrequency(
            label=_frequency_label(payload),
            value_mhz=frequency_to_mhz(payload),
            primary=payload.primary,
        )
        for payload in payloads
    )


def primary_frequency(frequencies: tuple[RadioFrequency, ...] | None) -> float | None:
    if not frequencies:
        return None
    for frequency in frequencies:
        if frequency.primary:
            return frequency.value_mhz
    return frequencies[0].value_mhz


def translate_hours(hours: HoursOfOperationPayload | None) -> OperatingHours | None:
    if hours is None:
        return None
    periods = tuple(
        OperatingPeriod(
            day_of_week=period.day_of_week,
            start=period.start_time,
            end=period.end_time,
            sunrise=period.sunrise,
            sunset=period.sunset,
            by_notam=period.by_notam,
        )
        for period in hours.operating_hours
    )
    days = {period.day_of_week for period in periods}
    h24 = len(days) == 7 and all(
        period.start == "00:00" and period.end in {"23:59", "24:00"} for period in periods
    )
    return OperatingHours(periods=periods, h24=h24, remarks=hours.remarks)


def translate_type(item: CatalogItem, category: FeatureCategory) -> str | None:
    if item.type is None:
        return None
    if category is FeatureCategory.NAVAID:
        return NAVAID_TYPES.get(item.type, str(item.type))
    return str(item.type)


def translate_attributes(item: CatalogItem) -> FeatureAttributes:
    frequencies = translate_frequencies(item)
    traffic = frozenset(
        TRAFFIC_TYPES[code] for code in item.traffic_type if code in TRAFFIC_TYPES
    )
    return FeatureAttributes(
        elevation_m=length_to_meters(item.elevation),
        frequency_mhz=primary_frequency(frequencies),
        frequencies=frequencies,
        channel=item.channel,
        range_nm=range_to_nm(item.range),
        magnetic_declination=item.magnetic_declination,
        aligned_true_north=item.aligned_true_north,
        operating_hours=translate_hours(item.hours_of_operation),
        runways=tuple(translate_runway(runway) for runway in item.runways) or None,
        traffic_rules=traffic or None,
        airspace_class=ICAO_CLASSES.get(item.icao_class) if item.icao_class is not None else None,
        lower_limit=format_limit(item.lower_limit),
        upper_limit=format_limit(item.upper_limit),
        ppr=item.ppr,
        private=item.private,
        remarks=item.remarks,
    )


def translate_item(item: CatalogItem, category: FeatureCategory) -> RemoteDetailRecord:
    geometry = item.geometry.model_dump() if item.geometry is not None else None
    return RemoteDetailRecord(
        identifier=item.lookup_identifier,
        name=item.name,
        country=item.country,
        type=translate_type(item, category),
        coordinates=representative_coordinates(geometry),
        catalog_id=item.catalog_id,
        attributes=translate_attributes(item),
    )
