"""Catalog (OpenAIP REST API or its local proxy) configuration values."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlsplit

from .env import optional_env_float, optional_env_var, require_env_vars
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_CATALOG_BASE_URL = "http://localhost:3001/api/openaip"
DEFAULT_CATALOG_TIMEOUT_SECONDS = 5.0
DEFAULT_HTTP_CACHE_TTL_SECONDS = 24 * 60 * 60.0
DIRECT_CATALOG_HOST = "api.openaip.net"
API_KEY_HEADER = "x-openaip-api-key"
USER_AGENT = "Halo-Flight-Planning/1.0"


@dataclass(frozen=True, slots=True)
class CatalogConfig:
    resilience: ResilienceConfig
    cache_ttl_seconds: float | None = None


def _should_cache_payload(payload: object) -> bool:
    # Empty result pages are not kept; the catalog may be backfilled later.
    if isinstance(payload, dict):
        items = payload.get("items")
        if isinstance(items, list):
            return bool(items)
    return bool(payload)


def _api_key(base_url: str) -> str | None:
    """The proxy injects the key itself; only direct catalog access requires one."""

    if urlsplit(base_url).hostname == DIRECT_CATALOG_HOST:
        return require_env_vars(("OPENAIP_API_KEY",))["OPENAIP_API_KEY"]
    return optional_env_var("OPENAIP_API_KEY")


def get_catalog_config() -> CatalogConfig:
    base_url = optional_env_var("HALOINFO_CATALOG_URL") or DEFAULT_CATALOG_BASE_URL
    timeout = optional_env_float("HALOINFO_CATALOG_TIMEOUT") or DEFAULT_CATALOG_TIMEOUT_SECONDS

    headers = {"Accept": "application/json", "User-Agent": USER_AGENT}
    api_key = _api_key(base_url)
    if api_key is not None:
        headers[API_KEY_HEADER] = api_key

    cache_ttl = optional_env_float("HALOINFO_CACHE_TTL")
    # Responses are kept on disk across sessions, bounded by the record TTL when one is set.
    http_cache_ttl = cache_ttl or DEFAULT_HTTP_CACHE_TTL_SECONDS

    resilience = ResilienceConfig(
        name="openaip",
        base_url=base_url.rstrip("/") + "/",
        timeout_seconds=timeout,
        ratelimit=RateLimit(max_calls=5, per_seconds=1.0),
        retry=RetryPolicy(total=2),
        cache=CacheConfig(
            backend="sqlite",
            default_ttl_seconds=http_cache_ttl,
            should_cache=_should_cache_payload,
        ),
        default_headers=headers,
    )

    return CatalogConfig(
        resilience=resilience,
        cache_ttl_seconds=cache_ttl,
    )
