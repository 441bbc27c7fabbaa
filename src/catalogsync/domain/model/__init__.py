"""Domain model for the package catalog."""

from __future__ import annotations

from .entity import Entity, new_id
from .enums import ProcessingStage
from .package import CollectionDescriptor, CustomCollection, Package, PackageURL

__all__ = [
    "CollectionDescriptor",
    "CustomCollection",
    "Entity",
    "Package",
    "PackageURL",
    "ProcessingStage",
    "new_id",
]
