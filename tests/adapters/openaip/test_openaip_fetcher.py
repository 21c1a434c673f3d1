from __future__ import annotations

import asyncio

import httpx
import pytest

from haloinfo.adapters.openaip import OpenAipCandidateFetcher, OpenAipClient, fetch_candidates
from haloinfo.domain.errors import MissingLookupKeyError
from haloinfo.domain.model import FeatureCategory
from tests.support.catalog import (
    airport_payload,
    make_catalog_config,
    make_client_factory,
    make_identity,
)


class _RecordingHandler:
    def __init__(self, *bodies: object) -> None:
        self.bodies = list(bodies)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(200, json=self.bodies.pop(0))


def _client(handler: _RecordingHandler) -> OpenAipClient:
    return OpenAipClient(config=make_catalog_config(), client_factory=make_client_factory(handler))


def test_identifier_hit_skips_name_query() -> None:
    handler = _RecordingHandler({"items": [airport_payload()]})

    records = asyncio.run(
        fetch_candidates(make_identity("LFEV", name="Chateauroux"), client=_client(handler))
    )

    assert [record.identifier for record in records] == ["LFEV"]
    assert len(handler.requests) == 1


def test_name_follow_up_carries_country() -> None:
    handler = _RecordingHandler({"items": []}, {"items": [airport_payload("LFEV")]})

    records = asyncio.run(
        fetch_candidates(make_identity("LFXX", name="Chateauroux"), client=_client(handler))
    )

    assert len(records) == 1
    assert handler.requests[0].url.params["icao"] == "LFXX"
    assert dict(handler.requests[1].url.params) == {"name": "Chateauroux", "country": "FR"}


def test_name_only_identity_queries_by_name() -> None:
    handler = _RecordingHandler([])

    records = asyncio.run(
        fetch_candidates(
            make_identity(None, name="Le Blanc", country=None), client=_client(handler)
        )
    )

    assert records == []
    assert dict(handler.requests[0].url.params) == {"name": "Le Blanc"}


def test_identity_without_lookup_key_is_rejected() -> None:
    handler = _RecordingHandler()

    with pytest.raises(MissingLookupKeyError):
        asyncio.run(fetch_candidates(make_identity(None, name=None), client=_client(handler)))

    assert handler.requests == []


def test_unsupported_category_returns_no_candidates() -> None:
    handler = _RecordingHandler()
    identity = make_identity("OBST1", category=FeatureCategory.OBSTACLE)

    assert asyncio.run(fetch_candidates(identity, client=_client(handler))) == []
    assert handler.requests == []


def test_fetcher_adapter_delegates_to_client() -> None:
    handler = _RecordingHandler({"items": [airport_payload()]})
    fetcher = OpenAipCandidateFetcher(client=_client(handler))

    records = asyncio.run(fetcher(make_identity("LFEV")))

    assert records[0].catalog_id == "id-LFEV-FR"
