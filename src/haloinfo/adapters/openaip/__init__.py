"""Public interface for the OpenAIP catalog adapter."""

from __future__ import annotations

from .client import ENDPOINTS, OpenAipClient, normalize_payload
from .fetcher import OpenAipCandidateFetcher, fetch_candidates
from .schema import CatalogItem
from .translator import translate_item

__all__ = [
    "ENDPOINTS",
    "CatalogItem",
    "OpenAipCandidateFetcher",
    "OpenAipClient",
    "fetch_candidates",
    "normalize_payload",
    "translate_item",
]
