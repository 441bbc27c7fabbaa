"""Package list source configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var
from .errors import ConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_PACKAGE_LIST_URL = (
    "https://raw.githubusercontent.com/SwiftPackageIndex/PackageList/main/packages.json"
)
DEFAULT_DENY_LIST_URL = (
    "https://raw.githubusercontent.com/SwiftPackageIndex/PackageList/main/denylist.json"
)
DEFAULT_COLLECTIONS_URL = (
    "https://raw.githubusercontent.com/SwiftPackageIndex/PackageList/main/"
    "custom-package-collections.json"
)
PACKAGE_LIST_TIMEOUT_SECONDS = 20.0


@dataclass(frozen=True, slots=True)
class PackageListConfig:
    """Locations of the externally published lists and how to reach them."""

    package_list_url: str
    deny_list_url: str
    collections_url: str
    resilience: ResilienceConfig


def _cache_config(value: str) -> CacheConfig | None:
    normalized = value.strip().lower()
    if normalized == "off":
        return None
    if normalized == "memory":
        return CacheConfig(backend="memory")
    if normalized == "sqlite":
        return CacheConfig(backend="sqlite")
    raise ConfigurationError(
        f"CATALOGSYNC_HTTP_CACHE must be one of off, memory, sqlite; got {value!r}"
    )


def get_package_list_config(*, resilience: ResilienceConfig | None = None) -> PackageListConfig:
    return PackageListConfig(
        package_list_url=optional_env_var("CATALOGSYNC_PACKAGE_LIST_URL", DEFAULT_PACKAGE_LIST_URL),
        deny_list_url=optional_env_var("CATALOGSYNC_DENY_LIST_URL", DEFAULT_DENY_LIST_URL),
        collections_url=optional_env_var("CATALOGSYNC_COLLECTIONS_URL", DEFAULT_COLLECTIONS_URL),
        resilience=resilience
        or ResilienceConfig(
            name="package-lists",
            timeout_seconds=PACKAGE_LIST_TIMEOUT_SECONDS,
            ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
            retry=RetryPolicy(total=3),
            cache=_cache_config(optional_env_var("CATALOGSYNC_HTTP_CACHE", "off")),
        ),
    )
