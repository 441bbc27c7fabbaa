"""Deny-list filtering of candidate package lists."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .canonicalization import canonical_set

if TYPE_CHECKING:
    from collections.abc import Iterable

    from catalogsync.domain.model import PackageURL


def process_deny_list(
    package_list: Iterable[PackageURL],
    deny_list: Iterable[PackageURL],
) -> list[PackageURL]:
    """Return ``package_list`` without any URL matched by ``deny_list``.

    Both lists are compared by canonical key, so duplicates collapse onto their
    first-seen representative and casing never lets a denied package through.
    Result order follows first appearance in ``package_list``.

    Anything that needs to replay this filtering decision (for example the
    ``check-deny-list`` command) must call this function rather than copy it.
    """

    candidates = canonical_set(package_list)
    denied = canonical_set(deny_list)
    return [url for key, url in candidates.items() if key not in denied]
