"""Ports for fetching the externally published lists."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from catalogsync.domain.model import CollectionDescriptor, PackageURL


@runtime_checkable
class PackageListFetcher(Protocol):
    """Return the candidate package URLs of the main list."""

    async def __call__(self) -> Sequence[PackageURL]: ...


@runtime_checkable
class DenyListFetcher(Protocol):
    """Return the URLs that must never be part of the catalog."""

    async def __call__(self) -> Sequence[PackageURL]: ...


@runtime_checkable
class CollectionRegistryFetcher(Protocol):
    """Return the known custom collections."""

    async def __call__(self) -> Sequence[CollectionDescriptor]: ...


@runtime_checkable
class CollectionMembersFetcher(Protocol):
    """Return the raw, untruncated member URLs of one collection."""

    async def __call__(self, url: str) -> Sequence[PackageURL]: ...


@dataclass(frozen=True, slots=True)
class ListSources:
    """The set of list providers a reconciliation pass draws from."""

    package_list: PackageListFetcher
    deny_list: DenyListFetcher
    collection_registry: CollectionRegistryFetcher
    collection_members: CollectionMembersFetcher


__all__ = [
    "CollectionMembersFetcher",
    "CollectionRegistryFetcher",
    "DenyListFetcher",
    "ListSources",
    "PackageListFetcher",
]
