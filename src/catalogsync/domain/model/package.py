"""Catalog entities: packages and custom collections."""

from __future__ import annotations

from dataclasses import dataclass

from catalogsync.domain.model.entity import Entity
from catalogsync.domain.model.enums import ProcessingStage

type PackageURL = str


@dataclass(eq=False, kw_only=True)
class Package(Entity):
    """A package known to the catalog, identified by its URL."""

    url: PackageURL
    processing_stage: ProcessingStage = ProcessingStage.RECONCILIATION


@dataclass(frozen=True, slots=True, kw_only=True)
class CollectionDescriptor:
    """Registry entry describing one community-curated collection.

    ``url`` locates the collection's member list and is its stable key.
    """

    name: str
    url: str
    description: str | None = None
    badge: str | None = None


@dataclass(eq=False, kw_only=True)
class CustomCollection(Entity):
    """Persisted counterpart of a :class:`CollectionDescriptor`."""

    name: str
    url: str
    description: str | None = None
    badge: str | None = None

    @classmethod
    def from_descriptor(cls, descriptor: CollectionDescriptor) -> CustomCollection:
        return cls(
            name=descriptor.name,
            url=descriptor.url,
            description=descriptor.description,
            badge=descriptor.badge,
        )

    def update_from(self, descriptor: CollectionDescriptor) -> bool:
        """Copy descriptive fields from ``descriptor``; return whether anything changed."""

        if descriptor.url != self.url:
            raise ValueError("descriptor must refer to the same collection url")
        changed = (
            self.name != descriptor.name
            or self.description != descriptor.description
            or self.badge != descriptor.badge
        )
        if changed:
            self.name = descriptor.name
            self.description = descriptor.description
            self.badge = descriptor.badge
        return changed
