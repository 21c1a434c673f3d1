"""Matching, merging and cached orchestration of catalog reconciliation."""

from __future__ import annotations

from .cache import NO_COUNTRY, CacheKey, ReconciliationCache
from .match import (
    PROXIMITY_THRESHOLD_DEGREES,
    MatchKind,
    MatchOutcome,
    resolve_match,
    select_candidate,
)
from .merge import WARNINGS, merge_records

__all__ = [
    "NO_COUNTRY",
    "PROXIMITY_THRESHOLD_DEGREES",
    "WARNINGS",
    "CacheKey",
    "MatchKind",
    "MatchOutcome",
    "ReconciliationCache",
    "merge_records",
    "resolve_match",
    "select_candidate",
]
