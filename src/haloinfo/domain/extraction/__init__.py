"""Attribute extraction from sparse, inconsistently named tile features."""

from __future__ import annotations

from haloinfo.domain.extraction.extractor import extract, extract_attributes, parse_operating_hours
from haloinfo.domain.extraction.geometry import category_for_layer, representative_coordinates
from haloinfo.domain.extraction.labels import (
    parse_channel_frequencies,
    parse_elevation,
    parse_frequency,
    parse_runway_designator,
    parse_runway_lengths,
)
from haloinfo.domain.extraction.surfaces import match_surface
from haloinfo.domain.extraction.traffic import classify_traffic_rules

__all__ = [
    "category_for_layer",
    "classify_traffic_rules",
    "extract",
    "extract_attributes",
    "match_surface",
    "parse_channel_frequencies",
    "parse_elevation",
    "parse_frequency",
    "parse_operating_hours",
    "parse_runway_designator",
    "parse_runway_lengths",
    "representative_coordinates",
]
