"""Runway surface classification from keyword synonyms."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Final

from haloinfo.domain.model import Surface

from .labels import label_text

SURFACE_FIELDS: Final = ("surface_type", "runway_surface", "surface")
SURFACE_LABEL_FIELDS: Final = ("name_label_full", "name_label", "remarks")

# Checked in order; the first surface with a matching synonym wins.
SURFACE_SYNONYMS: Final[Mapping[Surface, tuple[str, ...]]] = {
    Surface.ASPHALT: ("asphalt", "paved", "asp", "sealed", "bitumen", "tarmac"),
    Surface.CONCRETE: ("concrete", "con", "cement"),
    Surface.GRASS: ("grass", "turf", "sod"),
    Surface.GRAVEL: ("gravel", "stone", "crushed"),
    Surface.DIRT: ("dirt", "soil", "earth", "clay"),
    Surface.SAND: ("sand", "sandy"),
    Surface.WATER: ("water", "sea", "lake"),
}

_PATTERNS: Final = {
    surface: re.compile(r"\b(?:" + "|".join(map(re.escape, words)) + r")\b", re.IGNORECASE)
    for surface, words in SURFACE_SYNONYMS.items()
}


def match_surface(text: str) -> Surface | None:
    """Whole-word synonym lookup: ``"Paved runway"`` -> ``Surface.ASPHALT``."""

    for surface, pattern in _PATTERNS.items():
        if pattern.search(text):
            return surface
    return None


def extract_surface(props: Mapping[str, object]) -> Surface | None:
    """Surface-specific attributes first, label text second."""

    for field in (*SURFACE_FIELDS, *SURFACE_LABEL_FIELDS):
        text = label_text(props, field)
        if text is None:
            continue
        surface = match_surface(text)
        if surface is not None:
            return surface
    return None
