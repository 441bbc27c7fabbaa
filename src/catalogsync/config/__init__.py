"""Application configuration helpers."""

from __future__ import annotations

from .errors import ConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .package_lists import PackageListConfig, get_package_list_config
from .reconcile import DEFAULT_MAX_COLLECTION_SIZE, ReconcileConfig, get_reconcile_config
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "DEFAULT_MAX_COLLECTION_SIZE",
    "CacheConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "PackageListConfig",
    "RateLimit",
    "ReconcileConfig",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "configure_logging",
    "get_database_config",
    "get_package_list_config",
    "get_reconcile_config",
    "get_storage_config",
]
