"""Public interface for the package list adapter."""

from __future__ import annotations

from .client import PackageListAPIError, PackageListClient
from .schema import (
    CollectionPayload,
    CollectionRegistryPayload,
    DeniedPackagePayload,
    DenyListPayload,
    PackageListPayload,
)
from .translator import parse_package_url, parse_package_urls, translate_collection

__all__ = [
    "CollectionPayload",
    "CollectionRegistryPayload",
    "DeniedPackagePayload",
    "DenyListPayload",
    "PackageListAPIError",
    "PackageListClient",
    "PackageListPayload",
    "parse_package_url",
    "parse_package_urls",
    "translate_collection",
]
