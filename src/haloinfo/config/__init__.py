"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_float, optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .openaip import CatalogConfig, get_catalog_config
from .storage import StorageConfig, get_http_cache_path, get_storage_config

__all__ = [
    "CacheConfig",
    "CatalogConfig",
    "ConfigurationError",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "configure_logging",
    "get_catalog_config",
    "get_http_cache_path",
    "get_storage_config",
    "optional_env_float",
    "optional_env_var",
    "require_env_vars",
]
