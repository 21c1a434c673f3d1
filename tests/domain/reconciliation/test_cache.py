from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import pytest

from haloinfo.domain.errors import NetworkError, ParseError
from haloinfo.domain.model import Coordinates, DataProvenance, FeatureCategory
from haloinfo.domain.reconciliation import NO_COUNTRY, CacheKey, ReconciliationCache
from haloinfo.domain.reconciliation.cache import NO_LOOKUP_KEY_WARNING
from tests.support.catalog import FakeCandidateFetcher, make_candidate, make_identity

if TYPE_CHECKING:
    from collections.abc import Sequence

    from haloinfo.domain.model import MergedRecord, RemoteDetailRecord, TileIdentity


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def test_cache_key_defaults_country_and_prefixes_names() -> None:
    by_identifier = CacheKey.for_identity(make_identity("LFEV", country=None))
    by_name = CacheKey.for_identity(make_identity(None, name="Pontoise", country="FR"))

    assert by_identifier == CacheKey(FeatureCategory.AIRPORT, "LFEV", NO_COUNTRY)
    assert by_name == CacheKey(FeatureCategory.AIRPORT, "name:Pontoise", "FR")
    assert CacheKey.for_identity(make_identity(None, name=None)) is None


def test_cache_key_separates_categories() -> None:
    airport = CacheKey.for_identity(make_identity("ABC", category=FeatureCategory.AIRPORT))
    navaid = CacheKey.for_identity(make_identity("ABC", category=FeatureCategory.NAVAID))

    assert airport != navaid


def test_resolve_feature_is_idempotent() -> None:
    fetcher = FakeCandidateFetcher(candidates=[make_candidate()])
    cache = ReconciliationCache(fetcher)
    identity = make_identity()

    async def run() -> tuple[MergedRecord, MergedRecord]:
        first = await cache.resolve_feature(identity)
        second = await cache.resolve_feature(identity)
        return first, second

    first, second = asyncio.run(run())

    assert len(fetcher.calls) == 1
    assert first is second
    assert len(cache) == 1


def test_concurrent_calls_are_coalesced() -> None:
    async def run() -> tuple[FakeCandidateFetcher, ReconciliationCache, list[MergedRecord]]:
        fetcher = FakeCandidateFetcher(candidates=[make_candidate()], gate=asyncio.Event())
        cache = ReconciliationCache(fetcher)
        identity = make_identity()
        tasks = [asyncio.create_task(cache.resolve_feature(identity)) for _ in range(5)]
        await asyncio.sleep(0)
        assert cache.in_flight == 1
        assert fetcher.gate is not None
        fetcher.gate.set()
        results = await asyncio.gather(*tasks)
        return fetcher, cache, list(results)

    fetcher, cache, results = asyncio.run(run())

    assert len(fetcher.calls) == 1
    assert all(result is results[0] for result in results)
    assert cache.in_flight == 0


def test_pending_entry_removed_after_failure() -> None:
    fetcher = FakeCandidateFetcher(error=NetworkError("timeout"))
    cache = ReconciliationCache(fetcher)

    record = asyncio.run(cache.resolve_feature(make_identity()))

    assert record.provenance is DataProvenance.ERROR_FALLBACK
    assert cache.in_flight == 0


@pytest.mark.parametrize("error", [NetworkError("down"), ParseError("garbage")])
def test_fetch_errors_become_error_fallback(error: Exception) -> None:
    fetcher = FakeCandidateFetcher(error=error)
    cache = ReconciliationCache(fetcher)

    record = asyncio.run(cache.resolve_feature(make_identity()))

    assert record.provenance is DataProvenance.ERROR_FALLBACK
    assert record.warning
    assert record.identifier == "LFEV"


def test_unexpected_fetch_errors_do_not_propagate() -> None:
    fetcher = FakeCandidateFetcher(error=KeyError("bug"))
    cache = ReconciliationCache(fetcher)

    record = asyncio.run(cache.resolve_feature(make_identity()))

    assert record.provenance is DataProvenance.ERROR_FALLBACK


def test_error_fallback_is_cached_until_invalidated() -> None:
    fetcher = FakeCandidateFetcher(error=NetworkError("down"))
    cache = ReconciliationCache(fetcher)
    identity = make_identity()

    first = cache.resolve_feature_sync(identity)
    fetcher.error = None
    fetcher.candidates = [make_candidate()]
    second = cache.resolve_feature_sync(identity)

    assert first.provenance is DataProvenance.ERROR_FALLBACK
    assert second is first
    assert len(fetcher.calls) == 1

    assert cache.invalidate(identity)
    retried = cache.resolve_feature_sync(identity)

    assert retried.provenance is DataProvenance.HYBRID_VERIFIED
    assert len(fetcher.calls) == 2


def test_error_fallback_expires_with_ttl() -> None:
    now = [0.0]
    fetcher = FakeCandidateFetcher(error=NetworkError("down"))
    cache = ReconciliationCache(fetcher, ttl_seconds=30.0, clock=lambda: now[0])
    identity = make_identity()

    cache.resolve_feature_sync(identity)
    fetcher.error = None
    fetcher.candidates = [make_candidate()]
    now[0] = 30.0
    record = cache.resolve_feature_sync(identity)

    assert record.provenance is DataProvenance.HYBRID_VERIFIED
    assert len(fetcher.calls) == 2


def test_coalesced_waiters_share_error_fallback() -> None:
    async def run() -> tuple[FakeCandidateFetcher, list[MergedRecord]]:
        fetcher = FakeCandidateFetcher(error=NetworkError("down"), gate=asyncio.Event())
        cache = ReconciliationCache(fetcher)
        identity = make_identity()
        tasks = [asyncio.create_task(cache.resolve_feature(identity)) for _ in range(3)]
        await asyncio.sleep(0)
        assert fetcher.gate is not None
        fetcher.gate.set()
        return fetcher, list(await asyncio.gather(*tasks))

    fetcher, results = asyncio.run(run())

    assert len(fetcher.calls) == 1
    assert {result.provenance for result in results} == {DataProvenance.ERROR_FALLBACK}


def test_vector_only_results_are_cached() -> None:
    fetcher = FakeCandidateFetcher(candidates=[])
    cache = ReconciliationCache(fetcher)
    identity = make_identity("XYZ9", country=None)

    first = cache.resolve_feature_sync(identity)
    second = cache.resolve_feature_sync(identity)

    assert first.provenance is DataProvenance.VECTOR_ONLY
    assert second is first
    assert len(fetcher.calls) == 1


def test_identity_without_lookup_key_short_circuits() -> None:
    fetcher = FakeCandidateFetcher(candidates=[make_candidate()])
    cache = ReconciliationCache(fetcher)
    identity = make_identity(None, name=None, coordinates=Coordinates(1.0, 2.0))

    record = cache.resolve_feature_sync(identity)

    assert record.provenance is DataProvenance.VECTOR_ONLY
    assert record.warning == NO_LOOKUP_KEY_WARNING
    assert fetcher.calls == []
    assert len(cache) == 0


def test_clear_forces_new_lookup() -> None:
    fetcher = FakeCandidateFetcher(candidates=[make_candidate()])
    cache = ReconciliationCache(fetcher)
    identity = make_identity()

    cache.resolve_feature_sync(identity)
    cache.clear()
    cache.resolve_feature_sync(identity)

    assert len(fetcher.calls) == 2


def test_invalidate_drops_single_entry() -> None:
    fetcher = FakeCandidateFetcher(candidates=[make_candidate(), make_candidate("EGLL")])
    cache = ReconciliationCache(fetcher)
    lfev = make_identity("LFEV")
    egll = make_identity("EGLL")

    cache.resolve_feature_sync(lfev)
    cache.resolve_feature_sync(egll)

    assert cache.invalidate(lfev) is True
    assert cache.invalidate(lfev) is False
    assert len(cache) == 1


def test_ttl_expires_entries() -> None:
    clock = FakeClock()
    fetcher = FakeCandidateFetcher(candidates=[make_candidate()])
    cache = ReconciliationCache(fetcher, ttl_seconds=60, clock=clock)
    identity = make_identity()

    cache.resolve_feature_sync(identity)
    clock.now = 59.0
    cache.resolve_feature_sync(identity)
    assert len(fetcher.calls) == 1

    clock.now = 60.0
    cache.resolve_feature_sync(identity)
    assert len(fetcher.calls) == 2


def test_rejects_non_positive_ttl() -> None:
    with pytest.raises(ValueError, match="ttl_seconds"):
        ReconciliationCache(FakeCandidateFetcher(), ttl_seconds=0)


def test_slow_superseded_lookup_only_writes_its_own_key() -> None:
    async def run() -> tuple[ReconciliationCache, MergedRecord, MergedRecord]:
        slow = asyncio.Event()
        slow_fetcher = FakeCandidateFetcher(candidates=[make_candidate("LFEV")], gate=slow)
        fast_fetcher = FakeCandidateFetcher(candidates=[make_candidate("EGLL", country="GB")])

        async def fetcher(identity: TileIdentity) -> Sequence[RemoteDetailRecord]:
            chosen = slow_fetcher if identity.identifier == "LFEV" else fast_fetcher
            return await chosen(identity)

        cache = ReconciliationCache(fetcher)
        superseded = asyncio.create_task(cache.resolve_feature(make_identity("LFEV")))
        await asyncio.sleep(0)
        current = await cache.resolve_feature(make_identity("EGLL", country="GB"))
        slow.set()
        stale = await superseded
        return cache, current, stale

    cache, current, stale = asyncio.run(run())

    assert current.identifier == "EGLL"
    assert stale.identifier == "LFEV"
    assert len(cache) == 2
    assert cache.get(CacheKey(FeatureCategory.AIRPORT, "EGLL", "GB")) is current
    assert cache.get(CacheKey(FeatureCategory.AIRPORT, "LFEV", "FR")) is stale


def test_lookup_detached_by_clear_is_not_stored() -> None:
    async def run() -> tuple[ReconciliationCache, MergedRecord]:
        gate = asyncio.Event()
        fetcher = FakeCandidateFetcher(candidates=[make_candidate()], gate=gate)
        cache = ReconciliationCache(fetcher)
        task = asyncio.create_task(cache.resolve_feature(make_identity()))
        await asyncio.sleep(0)
        cache.clear()
        gate.set()
        return cache, await task

    cache, record = asyncio.run(run())

    assert record.provenance is DataProvenance.HYBRID_VERIFIED
    assert len(cache) == 0


def test_cancelled_caller_does_not_cancel_shared_lookup() -> None:
    async def run() -> tuple[FakeCandidateFetcher, MergedRecord]:
        gate = asyncio.Event()
        fetcher = FakeCandidateFetcher(candidates=[make_candidate()], gate=gate)
        cache = ReconciliationCache(fetcher)
        identity = make_identity()
        impatient = asyncio.create_task(cache.resolve_feature(identity))
        patient = asyncio.create_task(cache.resolve_feature(identity))
        await asyncio.sleep(0)
        impatient.cancel()
        gate.set()
        return fetcher, await patient

    fetcher, record = asyncio.run(run())

    assert record.provenance is DataProvenance.HYBRID_VERIFIED
    assert len(fetcher.calls) == 1
