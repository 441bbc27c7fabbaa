"""Translate validated payloads into domain values."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING
from urllib.parse import urlsplit

from catalogsync.domain.model import CollectionDescriptor

if TYPE_CHECKING:
    from collections.abc import Iterable

    from catalogsync.domain.model import PackageURL

    from .schema import CollectionPayload

log = getLogger(__name__)


def parse_package_url(value: str) -> PackageURL | None:
    """Return ``value`` as an absolute URL, or ``None`` when it cannot be one."""

    candidate = value.strip()
    if not candidate or any(char.isspace() for char in candidate):
        return None
    try:
        parts = urlsplit(candidate)
    except ValueError:
        return None
    if not parts.scheme or not parts.netloc:
        return None
    return candidate


def parse_package_urls(values: Iterable[str]) -> list[PackageURL]:
    """Keep the parseable URLs of ``values`` in order, dropping the rest."""

    urls: list[PackageURL] = []
    for value in values:
        url = parse_package_url(value)
        if url is None:
            log.debug("Dropping malformed package url %r", value)
            continue
        urls.append(url)
    return urls


def translate_collection(payload: CollectionPayload) -> CollectionDescriptor:
    return CollectionDescriptor(
        name=payload.name,
        url=payload.url,
        description=payload.description,
        badge=payload.badge,
    )
