"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class FeatureCategory(StrEnum):
    AIRPORT = "airport"
    NAVAID = "navaid"
    AIRSPACE = "airspace"
    OBSTACLE = "obstacle"
    OTHER = "other"


class DataProvenance(StrEnum):
    """How much of a merged record was corroborated by the catalog."""

    HYBRID_VERIFIED = "hybrid_verified"
    VECTOR_ONLY = "vector_only"
    ERROR_FALLBACK = "error_fallback"


class TrafficRule(StrEnum):
    VFR = "VFR"
    IFR = "IFR"


class Surface(StrEnum):
    ASPHALT = "Asphalt"
    CONCRETE = "Concrete"
    GRASS = "Grass"
    GRAVEL = "Gravel"
    DIRT = "Dirt"
    SAND = "Sand"
    WATER = "Water"
    SNOW = "Snow"
    ICE = "Ice"
    OTHER = "Other"


class LengthUnit(StrEnum):
    METER = "m"
    FOOT = "ft"
