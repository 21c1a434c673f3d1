"""Domain port definitions for adapters."""

from __future__ import annotations

from .enrichment import CandidateFetcher

__all__ = ["CandidateFetcher"]
