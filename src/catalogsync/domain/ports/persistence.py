"""Ports for persisting the catalog and its custom collections."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from catalogsync.domain.errors import PersistenceError

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable
    from uuid import UUID

    from catalogsync.domain.model import (
        CollectionDescriptor,
        CustomCollection,
        PackageURL,
        ProcessingStage,
    )

__all__ = ["CustomCollectionRepository", "PackageRepository", "PersistenceError"]


@runtime_checkable
class PackageRepository(Protocol):
    """Persistence contract for the main package catalog."""

    def list_urls(self) -> list[PackageURL]: ...

    def insert(self, urls: Iterable[PackageURL], stage: ProcessingStage) -> None: ...

    def delete(self, url: PackageURL) -> None: ...


@runtime_checkable
class CustomCollectionRepository(Protocol):
    """Persistence contract for custom collections and their membership."""

    def find_or_create(self, descriptor: CollectionDescriptor) -> CustomCollection: ...

    def member_urls(self, collection_id: UUID) -> list[PackageURL]: ...

    def reconcile_membership(
        self,
        collection_id: UUID,
        to_add: Collection[PackageURL],
        to_delete: Collection[PackageURL],
    ) -> None: ...
