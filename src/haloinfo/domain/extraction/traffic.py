"""Inference of VFR/IFR capability from indirect tile evidence.

Tiles rarely carry flight rules directly. IFR capability is implied by a
controlled airspace class, an IFR-capable airport type code or instrument
keywords; explicit "IFR only" phrasing removes VFR. Without any indicator the
airport is assumed VFR-only.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Final

from haloinfo.domain.model import TrafficRule

from .fields import as_text, lookup_field
from .labels import joined_text

IFR_KEYWORDS: Final = (
    "ifr",
    "instrument",
    "ils",
    "approach",
    "controlled",
    "tower",
    "radar",
    "international",
    "commercial",
    "airline",
)
VFR_ONLY_KEYWORDS: Final = (
    "ultralight",
    "microlight",
    "glider",
    "gliding",
    "balloon",
    "private",
    "recreational",
    "training",
    "uncontrolled",
)
IFR_ONLY_PHRASES: Final = ("ifr only", "instrument only")
CONTROLLED_CLASSES: Final = frozenset({"a", "b", "c", "d"})
# Catalog numeric class codes as they leak into tile attributes.
ICAO_CLASS_CODES: Final = {
    "0": "A",
    "1": "B",
    "2": "C",
    "3": "D",
    "4": "E",
    "5": "F",
    "6": "G",
    "8": "Unclassified",
}

# Tile style codes and catalog numeric codes (0 airport, 3 international,
# 5 military aerodrome, 9 IFR airfield).
IFR_CAPABLE_TYPES: Final = frozenset(
    {
        "airport",
        "apt",
        "intl_apt",
        "large_airport",
        "medium_airport",
        "reg_apt",
        "civil_apt",
        "mil_apt",
        "af_mil",
        "ifr",
        "0",
        "3",
        "5",
        "9",
    }
)

TRAFFIC_TEXT_FIELDS: Final = ("name_label_full", "name_label", "remarks", "description")
_CLASS_FIELDS: Final = ("icao_class", "airspace_class")
_TYPE_FIELDS: Final = ("type", "airport_type")
_USE_FIELDS: Final = ("use", "usage")

_DIRECT_RULE = re.compile(r"\b(VFR|IFR)\b", re.IGNORECASE)


def _keyword_pattern(words: tuple[str, ...]) -> re.Pattern[str]:
    return re.compile(r"\b(?:" + "|".join(map(re.escape, words)) + r")\b")


_IFR_PATTERN: Final = _keyword_pattern(IFR_KEYWORDS)
_VFR_ONLY_PATTERN: Final = _keyword_pattern(VFR_ONLY_KEYWORDS)


def parse_traffic_rules(text: str) -> frozenset[TrafficRule] | None:
    """``"VFR, IFR"`` -> both rules; text without either token yields ``None``."""

    rules = frozenset(TrafficRule(token.upper()) for token in _DIRECT_RULE.findall(text))
    return rules or None


def classify_traffic_rules(props: Mapping[str, object]) -> frozenset[TrafficRule]:
    direct = lookup_field(props, "traffic_rules", as_text)
    if direct is not None:
        parsed = parse_traffic_rules(direct)
        if parsed is not None:
            return parsed

    airport_type = joined_text(props, _TYPE_FIELDS)
    airspace_class = joined_text(props, _CLASS_FIELDS)
    text = " ".join(
        part
        for part in (
            airport_type,
            airspace_class,
            joined_text(props, TRAFFIC_TEXT_FIELDS),
            joined_text(props, _USE_FIELDS),
        )
        if part
    )

    has_ifr_keyword = _IFR_PATTERN.search(text) is not None
    classes = {ICAO_CLASS_CODES.get(token, token).lower() for token in airspace_class.split()}
    has_controlled_class = not classes.isdisjoint(CONTROLLED_CLASSES)
    has_ifr_type = any(token in IFR_CAPABLE_TYPES for token in airport_type.split())

    rules: set[TrafficRule] = set()
    if has_ifr_keyword or has_controlled_class or has_ifr_type:
        rules.add(TrafficRule.IFR)
    if not any(phrase in text for phrase in IFR_ONLY_PHRASES):
        rules.add(TrafficRule.VFR)

    # An IFR-capable type code alone does not outweigh VFR-only site markers.
    only_type_evidence = not has_ifr_keyword and not has_controlled_class
    if only_type_evidence and _VFR_ONLY_PATTERN.search(text) and TrafficRule.VFR in rules:
        rules.discard(TrafficRule.IFR)

    return frozenset(rules)
