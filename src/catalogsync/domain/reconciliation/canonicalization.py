"""Case-insensitive identity for package URLs.

Every set operation over package URLs goes through :func:`canonical_key`; the
original URL string is kept as the representative for storage and display.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from catalogsync.domain.model import PackageURL

type CanonicalKey = str


def canonical_key(url: PackageURL) -> CanonicalKey:
    """Return the identity key of ``url``: its full string, lower-cased."""

    return url.lower()


def canonical_set(urls: Iterable[PackageURL]) -> dict[CanonicalKey, PackageURL]:
    """Map canonical keys to their first-seen representative, in input order."""

    representatives: dict[CanonicalKey, PackageURL] = {}
    for url in urls:
        representatives.setdefault(canonical_key(url), url)
    return representatives


def deduplicate(urls: Iterable[PackageURL]) -> list[PackageURL]:
    """Drop URLs whose canonical key was already seen, preserving order."""

    return list(canonical_set(urls).values())
