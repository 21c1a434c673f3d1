"""Structured values hidden inside free-text tile labels.

Tiles often ship a rendered label such as ``"LFEV 207 m MSL"`` or
``"EVX 115.500 MHz"`` instead of typed attributes. Each parser here is a pure
``str -> value | None`` function; ``scan_fields`` applies one to a list of
attribute names in order.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from logging import getLogger
from typing import Final

from haloinfo.domain.model import LengthUnit, to_meters

from .fields import finite_float

log = getLogger(__name__)

LABEL_FIELDS: Final = ("name_label_full", "name_label", "label", "full_name")
FREQUENCY_LABEL_FIELDS: Final = (*LABEL_FIELDS, "description", "remarks")
RUNWAY_TEXT_FIELDS: Final = (
    "runway_info",
    "runways",
    "runway_length",
    "name_label_full",
    "name_label",
    "description",
    "label",
    "full_name",
)

VHF_RANGE_MHZ: Final = (108.0, 137.0)
UHF_RANGE_MHZ: Final = (225.0, 400.0)
RUNWAY_LENGTH_BOUNDS: Final = (100, 10000)

_ELEVATION = re.compile(
    r"(?:^|(?<=\s))(?P<value>-?\d{1,6})\s*(?P<unit>m|ft)\s*A?MSL\b",
    re.IGNORECASE,
)
_FREQUENCY = re.compile(
    r"(?<![\d.])(?P<value>\d{3}\.\d{1,3}|\d{6})(?![\d.])(?:\s*(?P<unit>MHz|kHz)\b)?",
    re.IGNORECASE,
)
_KHZ_FREQUENCY = re.compile(
    r"(?<![\d.])(?P<value>\d{3,6}(?:\.\d{1,3})?)\s*kHz\b",
    re.IGNORECASE,
)
_RUNWAY_LENGTH = re.compile(
    r"(?<![\d.])(?P<value>\d{3,5})\s*(?P<unit>meters|metres|feet|m|ft)\b(?!\s*(?:A?MSL|AGL)\b)",
    re.IGNORECASE,
)
_RUNWAY_DESIGNATOR = re.compile(
    r"(?<![\d/])(?P<first>\d{2}[LRC]?)/(?P<second>\d{2}[LRC]?)(?![\d/])",
    re.IGNORECASE,
)
_CHANNEL_FREQUENCY = re.compile(
    r"\b(?P<label>apron|ground|gnd|tower|twr|atis|info)\b\D{0,12}?(?P<value>\d{3}\.\d{1,3})",
    re.IGNORECASE,
)


@dataclass(frozen=True, slots=True)
class RunwayLength:
    value: int
    unit: LengthUnit

    @property
    def meters(self) -> int:
        return to_meters(self.value, self.unit)


def parse_elevation(text: str) -> int | None:
    """``"LFEV 207 m MSL"`` -> 207; ``"680 ft MSL"`` -> 207 (metres, rounded)."""

    match = _ELEVATION.search(text)
    if match is None:
        return None
    unit = LengthUnit.FOOT if match.group("unit").lower() == "ft" else LengthUnit.METER
    return to_meters(int(match.group("value")), unit)


def in_aviation_band(value_mhz: float) -> bool:
    low_vhf, high_vhf = VHF_RANGE_MHZ
    low_uhf, high_uhf = UHF_RANGE_MHZ
    return low_vhf <= value_mhz <= high_vhf or low_uhf <= value_mhz <= high_uhf


def normalize_frequency_mhz(value: float, *, khz: bool = False) -> float:
    """Express a frequency in MHz; explicit kHz values and values above 1000 are kHz."""

    if khz or value > 1000:
        value = value / 1000
    return round(value, 3)


def parse_frequency(text: str) -> float | None:
    """First VHF/UHF aviation-band frequency in ``text``, in MHz.

    Matches outside 108-137 MHz and 225-400 MHz are discarded, so
    ``"500.000 MHz"`` yields ``None``.
    """

    for match in _iter_frequency_matches(text):
        value, khz = match
        mhz = normalize_frequency_mhz(value, khz=khz)
        if in_aviation_band(mhz):
            return mhz
        log.debug("Discarding out-of-band frequency %s MHz in %r", mhz, text)
    return None


def _iter_frequency_matches(text: str) -> Iterable[tuple[float, bool]]:
    found: list[tuple[int, float, bool]] = []
    for match in _FREQUENCY.finditer(text):
        unit = (match.group("unit") or "").lower()
        found.append((match.start(), float(match.group("value")), unit == "khz"))
    for match in _KHZ_FREQUENCY.finditer(text):
        if any(start == match.start() for start, _, _ in found):
            continue
        found.append((match.start(), float(match.group("value")), True))
    for _, value, khz in sorted(found, key=lambda item: item[0]):
        yield value, khz


def parse_runway_lengths(text: str) -> list[RunwayLength]:
    """All plausible runway lengths in ``text``; values outside [100, 10000] are dropped."""

    low, high = RUNWAY_LENGTH_BOUNDS
    lengths: list[RunwayLength] = []
    for match in _RUNWAY_LENGTH.finditer(text):
        value = int(match.group("value"))
        if not low <= value <= high:
            continue
        unit = LengthUnit.FOOT if match.group("unit").lower().startswith("f") else LengthUnit.METER
        lengths.append(RunwayLength(value=value, unit=unit))
    return lengths


def parse_runway_designator(text: str) -> str | None:
    """``"RWY 09/27 grass"`` -> ``"09/27"``; headings must lie in 01-36."""

    for match in _RUNWAY_DESIGNATOR.finditer(text):
        first, second = match.group("first").upper(), match.group("second").upper()
        if _valid_heading(first) and _valid_heading(second):
            return f"{first}/{second}"
    return None


def _valid_heading(designator: str) -> bool:
    return 1 <= int(designator[:2]) <= 36


def parse_channel_frequencies(text: str) -> list[tuple[str, float]]:
    """Frequencies announced after a channel keyword, e.g. ``"Apron 121.875"``."""

    results: list[tuple[str, float]] = []
    for match in _CHANNEL_FREQUENCY.finditer(text):
        mhz = normalize_frequency_mhz(float(match.group("value")))
        if in_aviation_band(mhz):
            results.append((_CHANNEL_LABELS[match.group("label").lower()], mhz))
    return results


_CHANNEL_LABELS: Final = {
    "apron": "Apron",
    "ground": "Ground",
    "gnd": "Ground",
    "tower": "Tower",
    "twr": "Tower",
    "atis": "ATIS",
    "info": "Information",
}


def label_text(props: Mapping[str, object], field: str) -> str | None:
    value = props.get(field)
    if isinstance(value, str):
        return value if value.strip() else None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value) if finite_float(value) is not None else None
    return None


def scan_fields[T](
    props: Mapping[str, object],
    fields: Iterable[str],
    parser: Callable[[str], T | None],
) -> T | None:
    """Apply ``parser`` to each text field in order and return the first hit."""

    for field in fields:
        text = label_text(props, field)
        if text is None:
            continue
        value = parser(text)
        if value is not None:
            log.debug("Recovered %s=%r from label field %s", parser.__name__, value, field)
            return value
    return None


def joined_text(props: Mapping[str, object], fields: Iterable[str]) -> str:
    """Lower-cased concatenation of the given text fields, for keyword scans."""

    parts = (label_text(props, field) for field in fields)
    return " ".join(part for part in parts if part).lower()
