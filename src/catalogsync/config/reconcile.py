"""Reconciliation defaults."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_bool, env_int
from .errors import ConfigurationError

# Custom collections are third-party input, so their size is capped.
DEFAULT_MAX_COLLECTION_SIZE = 50


@dataclass(frozen=True, slots=True)
class ReconcileConfig:
    max_collection_size: int = DEFAULT_MAX_COLLECTION_SIZE
    restrict_collections_to_catalog: bool = False
    include_collections: bool = True

    def __post_init__(self) -> None:
        if self.max_collection_size < 1:
            raise ConfigurationError("max_collection_size must be a positive integer")


def get_reconcile_config() -> ReconcileConfig:
    return ReconcileConfig(
        max_collection_size=env_int(
            "CATALOGSYNC_MAX_COLLECTION_SIZE", DEFAULT_MAX_COLLECTION_SIZE
        ),
        restrict_collections_to_catalog=env_bool(
            "CATALOGSYNC_RESTRICT_COLLECTIONS_TO_CATALOG", default=False
        ),
        include_collections=env_bool("CATALOGSYNC_INCLUDE_COLLECTIONS", default=True),
    )
