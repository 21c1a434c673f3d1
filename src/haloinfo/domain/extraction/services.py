"""Service flags: prior permission, private use and available fuel."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Final

from .fields import as_bool, lookup_field
from .labels import joined_text

SERVICE_TEXT_FIELDS: Final = ("name_label_full", "name_label", "remarks", "description", "services")
FUEL_FIELDS: Final = ("fuel", "fuel_types", "fuels")

# canonical fuel -> whole-word spellings
FUEL_SYNONYMS: Final[Mapping[str, tuple[str, ...]]] = {
    "avgas": ("avgas", "100ll", "avgas 100ll"),
    "ul91": ("ul91", "ul 91"),
    "jet_a1": ("jet a1", "jet-a1", "jeta1", "jet_a1"),
    "jet_a": ("jet a", "jet-a", "jeta", "jet_a"),
    "diesel": ("diesel",),
}

_PPR = re.compile(r"\b(?:ppr|prior permission)\b")
_PRIVATE = re.compile(r"\bprivate\b")
_FUEL_PATTERNS: Final = {
    fuel: re.compile(r"\b(?:" + "|".join(map(re.escape, words)) + r")\b")
    for fuel, words in FUEL_SYNONYMS.items()
}


def extract_ppr(props: Mapping[str, object]) -> bool | None:
    direct = lookup_field(props, "ppr", as_bool)
    if direct is not None:
        return direct
    return True if _PPR.search(joined_text(props, SERVICE_TEXT_FIELDS)) else None


def extract_private(props: Mapping[str, object]) -> bool | None:
    direct = lookup_field(props, "private", as_bool)
    if direct is not None:
        return direct
    return True if _PRIVATE.search(joined_text(props, SERVICE_TEXT_FIELDS)) else None


def parse_fuel_types(text: str) -> frozenset[str]:
    lowered = text.lower()
    return frozenset(fuel for fuel, pattern in _FUEL_PATTERNS.items() if pattern.search(lowered))


def extract_fuel_types(props: Mapping[str, object]) -> frozenset[str] | None:
    """Fuel fields first, then label and remarks text; ``None`` when nothing is mentioned."""

    for text in (joined_text(props, FUEL_FIELDS), joined_text(props, SERVICE_TEXT_FIELDS)):
        if not text:
            continue
        fuels = parse_fuel_types(text)
        if fuels:
            return fuels
    return None
