"""Reconciliation orchestrator: result cache plus in-flight lookup coalescing.

All table mutations happen synchronously between awaits on the event loop
thread, so no locks are needed. For a given key at most one catalog request is
in flight; every caller asking for that key while it runs awaits the same task.
Lookups are never cancelled once started.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Final

from haloinfo.domain.errors import ReconciliationError
from haloinfo.domain.model import DataProvenance

from .match import select_candidate
from .merge import merge_records

if TYPE_CHECKING:
    from collections.abc import Callable

    from haloinfo.domain.model import FeatureCategory, MergedRecord, TileIdentity
    from haloinfo.domain.ports.enrichment import CandidateFetcher

log = getLogger(__name__)

NO_COUNTRY: Final = "XX"
NAME_PREFIX: Final = "name:"
NO_LOOKUP_KEY_WARNING: Final = "Feature has no identifier or name; catalog lookup skipped."


@dataclass(frozen=True, slots=True)
class CacheKey:
    category: FeatureCategory
    lookup: str
    country: str = NO_COUNTRY

    @classmethod
    def for_identity(cls, identity: TileIdentity) -> CacheKey | None:
        """``None`` when the identity carries neither identifier nor name."""

        if identity.identifier is not None:
            lookup = identity.identifier
        elif identity.name is not None:
            lookup = NAME_PREFIX + identity.name
        else:
            return None
        return cls(identity.feature_category, lookup, identity.country or NO_COUNTRY)


@dataclass(frozen=True, slots=True)
class _CacheEntry:
    record: MergedRecord
    stored_at: float


class ReconciliationCache:
    """Session-scoped entry point turning a ``TileIdentity`` into a ``MergedRecord``.

    ``ttl_seconds=None`` keeps entries for the lifetime of the object.
    Every outcome is stored, ``error_fallback`` included; call ``invalidate``
    or let the TTL lapse to retry a failed lookup.
    """

    def __init__(
        self,
        fetcher: CandidateFetcher,
        *,
        ttl_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds is not None and ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self._fetcher = fetcher
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[CacheKey, _CacheEntry] = {}
        self._pending: dict[CacheKey, asyncio.Task[MergedRecord]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def in_flight(self) -> int:
        return len(self._pending)

    async def resolve_feature(self, identity: TileIdentity) -> MergedRecord:
        key = CacheKey.for_identity(identity)
        if key is None:
            log.debug("No lookup key for %s feature; using tile data", identity.feature_category)
            return merge_records(identity, None, warning=NO_LOOKUP_KEY_WARNING)

        cached = self.get(key)
        if cached is not None:
            log.debug("Cache hit for %s", key)
            return cached

        task = self._pending.get(key)
        if task is None:
            task = asyncio.ensure_future(self._reconcile(identity))
            self._pending[key] = task
            # Registered before any waiter, so the table is settled when waiters resume.
            task.add_done_callback(lambda done: self._settle(key, done))
        else:
            log.debug("Joining in-flight lookup for %s", key)
        return await asyncio.shield(task)

    def resolve_feature_sync(self, identity: TileIdentity) -> MergedRecord:
        """Blocking variant for callers without a running event loop."""

        return asyncio.run(self.resolve_feature(identity))

    def get(self, key: CacheKey) -> MergedRecord | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._ttl_seconds is not None and self._clock() - entry.stored_at >= self._ttl_seconds:
            log.debug("Cache entry for %s expired", key)
            del self._entries[key]
            return None
        return entry.record

    def invalidate(self, identity: TileIdentity) -> bool:
        """Drop the entry for ``identity``; a running lookup for it will not be stored."""

        key = CacheKey.for_identity(identity)
        if key is None:
            return False
        detached = self._pending.pop(key, None) is not None
        return self._entries.pop(key, None) is not None or detached

    def clear(self) -> None:
        """Empty both tables. Lookups still running finish but store nothing."""

        self._entries.clear()
        self._pending.clear()

    async def _reconcile(self, identity: TileIdentity) -> MergedRecord:
        try:
            candidates = await self._fetcher(identity)
        except ReconciliationError as exc:
            log.warning("Catalog lookup for %s failed: %s", identity.display_label, exc)
            return merge_records(identity, None, provenance=DataProvenance.ERROR_FALLBACK)
        except Exception:
            log.exception("Unexpected error during catalog lookup for %s", identity.display_label)
            return merge_records(identity, None, provenance=DataProvenance.ERROR_FALLBACK)

        outcome = select_candidate(identity, candidates)
        if outcome is None:
            log.info(
                "No confident match for %s among %d candidate(s)",
                identity.display_label,
                len(candidates),
            )
            return merge_records(identity, None)

        log.info("Matched %s by %s", identity.display_label, outcome.kind)
        return merge_records(identity, outcome.record)

    def _settle(self, key: CacheKey, task: asyncio.Task[MergedRecord]) -> None:
        if self._pending.get(key) is not task:
            return
        del self._pending[key]
        if task.cancelled() or task.exception() is not None:
            return
        self._entries[key] = _CacheEntry(task.result(), self._clock())
