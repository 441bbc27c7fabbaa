"""Bounded reconciliation of custom collection membership.

Collection member lists are published by third parties, so they are capped
before they can influence persisted state, and every write stays inside the
membership relation of the collection being processed.
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import islice
from logging import getLogger
from typing import TYPE_CHECKING

from catalogsync.config.reconcile import DEFAULT_MAX_COLLECTION_SIZE

from .canonicalization import canonical_key, canonical_set

if TYPE_CHECKING:
    from collections.abc import Iterable
    from uuid import UUID

    from catalogsync.domain.model import CollectionDescriptor, PackageURL
    from catalogsync.domain.ports.persistence import CustomCollectionRepository

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CollectionReconciliation:
    """Outcome of reconciling one collection's membership."""

    collection_id: UUID
    name: str
    members: tuple[PackageURL, ...]
    added: frozenset[PackageURL]
    removed: frozenset[PackageURL]


def truncate(urls: Iterable[PackageURL], max_size: int) -> list[PackageURL]:
    """Return at most the first ``max_size`` URLs, preserving order."""

    if max_size < 1:
        raise ValueError("max_size must be a positive integer")
    return list(islice(urls, max_size))


def bound_incoming(
    urls: Iterable[PackageURL],
    max_size: int,
    *,
    name: str,
) -> list[PackageURL]:
    """Truncate a collection's raw member list, logging when entries were dropped."""

    incoming = list(urls)
    if len(incoming) > max_size:
        log.warning(
            "Collection '%s' lists %s packages, keeping the first %s",
            name,
            len(incoming),
            max_size,
        )
    return truncate(incoming, max_size)


def reconcile_custom_collection(
    collections: CustomCollectionRepository,
    descriptor: CollectionDescriptor,
    incoming_urls: Iterable[PackageURL],
    *,
    max_size: int = DEFAULT_MAX_COLLECTION_SIZE,
    catalog: Iterable[PackageURL] | None = None,
) -> CollectionReconciliation:
    """Make the membership of ``descriptor``'s collection match ``incoming_urls``.

    Callers are expected to bound ``incoming_urls`` with :func:`bound_incoming`;
    the cut to ``max_size`` entries is repeated here before anything else
    happens. When ``catalog`` is given, members that are not part of it
    (compared canonically) are skipped.
    """

    bounded = truncate(incoming_urls, max_size)

    if catalog is not None:
        known = canonical_set(catalog)
        unknown = [url for url in bounded if canonical_key(url) not in known]
        if unknown:
            log.info(
                "Collection '%s': skipping %s packages not in the catalog",
                descriptor.name,
                len(unknown),
            )
        bounded = [url for url in bounded if canonical_key(url) in known]

    wanted = canonical_set(bounded)

    collection = collections.find_or_create(descriptor)
    existing = canonical_set(collections.member_urls(collection.id))

    to_add = frozenset(url for key, url in wanted.items() if key not in existing)
    to_delete = frozenset(url for key, url in existing.items() if key not in wanted)
    if to_add or to_delete:
        collections.reconcile_membership(collection.id, to_add, to_delete)

    log.info(
        "Reconciled collection '%s': members=%s, added=%s, removed=%s",
        descriptor.name,
        len(wanted),
        len(to_add),
        len(to_delete),
    )
    return CollectionReconciliation(
        collection_id=collection.id,
        name=collection.name,
        members=tuple(wanted.values()),
        added=to_add,
        removed=to_delete,
    )
