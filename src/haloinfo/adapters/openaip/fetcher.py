"""OpenAIP implementation of the ``CandidateFetcher`` port."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from logging import getLogger
from typing import TYPE_CHECKING

from haloinfo.config.openaip import get_catalog_config
from haloinfo.domain.errors import MissingLookupKeyError

from .client import OpenAipClient

if TYPE_CHECKING:
    from haloinfo.domain.model import RemoteDetailRecord, TileIdentity
    from haloinfo.domain.ports.enrichment import CandidateFetcher

log = getLogger(__name__)


@lru_cache(maxsize=1)
def _get_default_client() -> OpenAipClient:
    return OpenAipClient(config=get_catalog_config())


@dataclass(slots=True)
class OpenAipCandidateFetcher:
    """Identifier query first; one follow-up query by name when that finds nothing."""

    client: OpenAipClient

    async def __call__(self, identity: TileIdentity) -> list[RemoteDetailRecord]:
        return await fetch_candidates(identity, client=self.client)


async def fetch_candidates(
    identity: TileIdentity,
    *,
    client: OpenAipClient | None = None,
) -> list[RemoteDetailRecord]:
    """Fetch catalog candidates for a tile identity.

    Raises ``MissingLookupKeyError`` when the identity has neither identifier
    nor name, ``NetworkError`` on transport failures and ``ParseError`` on
    malformed responses.
    """

    if not identity.has_lookup_key:
        raise MissingLookupKeyError(
            f"{identity.feature_category} feature has neither identifier nor name"
        )

    active_client = client or _get_default_client()
    category = identity.feature_category
    if not active_client.supports(category):
        log.debug("No catalog endpoint for %s features", category)
        return []

    candidates: list[RemoteDetailRecord] = []
    if identity.identifier is not None:
        candidates = await active_client.search_by_identifier(category, identity.identifier)
    if not candidates and identity.name is not None:
        log.debug("No candidates by identifier for %s, retrying by name", identity.display_label)
        candidates = await active_client.search_by_name(
            category, identity.name, country=identity.country
        )
    return candidates


if TYPE_CHECKING:
    _fetcher_check: CandidateFetcher = OpenAipCandidateFetcher(client=_get_default_client())
