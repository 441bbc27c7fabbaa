"""SQLAlchemy adapter package for catalogsync."""

from __future__ import annotations

from .mappings import create_all_tables, mapper_registry, start_mappers
from .repositories import (
    SqlAlchemyCustomCollectionRepository,
    SqlAlchemyPackageRepository,
)
from .unit_of_work import (
    SqlAlchemyReconciliationUnitOfWork,
    StartupError,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyCustomCollectionRepository",
    "SqlAlchemyPackageRepository",
    "SqlAlchemyReconciliationUnitOfWork",
    "StartupError",
    "create_all_tables",
    "mapper_registry",
    "start_mappers",
    "shutdown",
    "startup",
]
