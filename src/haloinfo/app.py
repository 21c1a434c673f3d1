"""Application wiring: one reconciler per session, plus a blocking lookup helper."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace
from logging import getLogger
from typing import TYPE_CHECKING

from haloinfo.adapters.http_resilience import ResilientClient
from haloinfo.adapters.openaip import OpenAipCandidateFetcher, OpenAipClient
from haloinfo.config import get_catalog_config
from haloinfo.domain.extraction import extract
from haloinfo.domain.reconciliation import ReconciliationCache

if TYPE_CHECKING:
    from haloinfo.config import CatalogConfig, ResilienceConfig
    from haloinfo.domain.model import FeatureCategory, MergedRecord, TileIdentity
    from haloinfo.domain.ports.enrichment import CandidateFetcher

ClientFactory = Callable[["ResilienceConfig"], ResilientClient]


log = getLogger(__name__)


def build_reconciler(
    *,
    config: CatalogConfig | None = None,
    fetcher: CandidateFetcher | None = None,
    client_factory: ClientFactory | None = None,
) -> ReconciliationCache:
    """Create the session-scoped reconciler backed by the OpenAIP catalog."""

    effective_config = config or get_catalog_config()
    effective_fetcher = fetcher or OpenAipCandidateFetcher(
        client=OpenAipClient(config=effective_config, client_factory=client_factory)
    )
    # A TTL of 0 means entries never expire.
    ttl = effective_config.cache_ttl_seconds or None
    log.info(
        "Catalog reconciler ready: base_url=%s, ttl=%s",
        effective_config.resilience.base_url,
        ttl,
    )
    return ReconciliationCache(effective_fetcher, ttl_seconds=ttl)


def identify_feature(
    raw_feature: object,
    *,
    category: FeatureCategory | None = None,
) -> TileIdentity:
    """Extract a tile identity, optionally forcing the feature category."""

    identity = extract(raw_feature)
    if category is not None and category is not identity.feature_category:
        identity = replace(identity, feature_category=category)
    return identity


def lookup_feature(
    raw_feature: object,
    *,
    reconciler: ReconciliationCache | None = None,
    category: FeatureCategory | None = None,
) -> MergedRecord:
    """Extract and reconcile one clicked feature, blocking until the result is ready."""

    identity = identify_feature(raw_feature, category=category)
    effective_reconciler = reconciler or build_reconciler()
    record = effective_reconciler.resolve_feature_sync(identity)
    log.info(
        "Resolved %s: provenance=%s, warning=%s",
        identity.display_label,
        record.provenance,
        record.warning,
    )
    return record
