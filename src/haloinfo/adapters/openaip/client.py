"""HTTP client for the OpenAIP catalog (directly or through the local proxy)."""

from __future__ import annotations

import json
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Final, cast

import httpx
from pydantic import ValidationError

from haloinfo.adapters.http_resilience import ResilientClient
from haloinfo.domain.errors import NetworkError, ParseError
from haloinfo.domain.model import FeatureCategory

from .schema import CatalogItem
from .translator import translate_item

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from haloinfo.config.http_resilience import ResilienceConfig
    from haloinfo.config.openaip import CatalogConfig
    from haloinfo.domain.model import RemoteDetailRecord

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Endpoint:
    path: str
    identifier_param: str | None
    name_param: str = "name"
    country_param: str | None = None


ENDPOINTS: Final[Mapping[FeatureCategory, Endpoint]] = {
    FeatureCategory.AIRPORT: Endpoint("airports", identifier_param="icao", country_param="country"),
    FeatureCategory.NAVAID: Endpoint("navaids", identifier_param="ident"),
    FeatureCategory.AIRSPACE: Endpoint("airspaces", identifier_param=None, country_param="country"),
}


def normalize_payload(payload: object) -> list[object]:
    """``{"items": [...]}``, a bare array or a single object -> list of raw items."""

    if payload is None:
        return []
    if isinstance(payload, list):
        return cast(list[object], payload)
    if isinstance(payload, dict):
        mapping = cast(dict[str, object], payload)
        items = mapping.get("items")
        if isinstance(items, list):
            return cast(list[object], items)
        if "items" in mapping:
            return []
        return [mapping]
    log.warning("Ignoring catalog payload of unexpected type %s", type(payload).__name__)
    return []


class OpenAipClient:
    """Queries one catalog endpoint per feature category and returns parsed candidates."""

    def __init__(
        self,
        *,
        config: CatalogConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient

    @staticmethod
    def supports(category: FeatureCategory) -> bool:
        return category in ENDPOINTS

    async def search_by_identifier(
        self, category: FeatureCategory, identifier: str
    ) -> list[RemoteDetailRecord]:
        endpoint = ENDPOINTS.get(category)
        if endpoint is None or endpoint.identifier_param is None:
            return []
        return await self._search(category, endpoint, {endpoint.identifier_param: identifier})

    async def search_by_name(
        self,
        category: FeatureCategory,
        name: str,
        *,
        country: str | None = None,
    ) -> list[RemoteDetailRecord]:
        endpoint = ENDPOINTS.get(category)
        if endpoint is None:
            return []
        params = {endpoint.name_param: name}
        if country is not None and endpoint.country_param is not None:
            params[endpoint.country_param] = country
        return await self._search(category, endpoint, params)

    async def _search(
        self,
        category: FeatureCategory,
        endpoint: Endpoint,
        params: dict[str, str],
    ) -> list[RemoteDetailRecord]:
        log.info("Querying catalog %s with %s", endpoint.path, params)
        async with self._client_factory(self._resilience) as client:
            payload = await self._perform_request(client=client, path=endpoint.path, params=params)

        records: list[RemoteDetailRecord] = []
        for raw_item in normalize_payload(payload):
            try:
                item = CatalogItem.model_validate(raw_item)
            except ValidationError as exc:
                log.warning(
                    "Skipping invalid %s item: %s", endpoint.path, exc.errors(include_url=False)
                )
                continue
            records.append(translate_item(item, category))
        log.info("Catalog %s returned %d candidate(s)", endpoint.path, len(records))
        return records

    async def _perform_request(
        self,
        *,
        client: ResilientClient,
        path: str,
        params: dict[str, str],
    ) -> object:
        try:
            response = await client.get(path, params=params)
        except httpx.TransportError as exc:
            raise NetworkError(f"Catalog request to {path} failed: {exc}") from exc

        if not response.is_success:
            log.warning(
                "Catalog %s answered HTTP %s; treating as no candidates", path, response.status_code
            )
            return None
        if not response.content.strip():
            return None

        try:
            return response.json()
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise ParseError(f"Catalog {path} returned malformed JSON: {exc}") from exc
