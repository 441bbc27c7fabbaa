"""Locations of the catalog database and the HTTP response cache."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import optional_env_var

CATALOG_DB_FILENAME: Final[str] = "catalog.db"
HTTP_CACHE_FILENAME: Final[str] = "http_cache.db"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    """The directory both SQLite files live in.

    ``data_dir`` comes from ``CATALOGSYNC_DATA_DIR`` and falls back to
    ``$XDG_DATA_HOME/catalogsync``. It is created on first use.
    """

    data_dir: Path

    @property
    def catalog_path(self) -> Path:
        return self.data_dir / CATALOG_DB_FILENAME

    @property
    def http_cache_path(self) -> Path:
        return self.data_dir / HTTP_CACHE_FILENAME

    def prepare(self) -> StorageConfig:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        return self


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str


def get_storage_config() -> StorageConfig:
    xdg_data_home = optional_env_var("XDG_DATA_HOME", str(Path.home() / ".local" / "share"))
    default_dir = Path(xdg_data_home) / "catalogsync"
    data_dir = optional_env_var("CATALOGSYNC_DATA_DIR", str(default_dir))
    return StorageConfig(data_dir=Path(data_dir).expanduser().resolve())


def get_database_config(*, storage: StorageConfig | None = None) -> DatabaseConfig:
    """Return ``DATABASE_URI`` or a SQLite catalog inside the data directory."""

    uri = os.getenv("DATABASE_URI")
    if uri:
        return DatabaseConfig(uri=uri)
    catalog_path = (storage or get_storage_config()).prepare().catalog_path
    return DatabaseConfig(uri=f"sqlite+pysqlite:///{catalog_path}")


def get_http_cache_path() -> Path:
    return get_storage_config().prepare().http_cache_path
