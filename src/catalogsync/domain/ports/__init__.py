"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import (
    CollectionMembersFetcher,
    CollectionRegistryFetcher,
    DenyListFetcher,
    ListSources,
    PackageListFetcher,
)
from .persistence import CustomCollectionRepository, PackageRepository, PersistenceError
from .unit_of_work import (
    ReconciliationRepositories,
    ReconciliationUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "CollectionMembersFetcher",
    "CollectionRegistryFetcher",
    "CustomCollectionRepository",
    "DenyListFetcher",
    "ListSources",
    "PackageListFetcher",
    "PackageRepository",
    "PersistenceError",
    "ReconciliationRepositories",
    "ReconciliationUnitOfWork",
    "RepositoryCollection",
    "UnitOfWork",
]
