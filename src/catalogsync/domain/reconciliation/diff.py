"""Set difference between a source list and the persisted state."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from catalogsync.domain.model import PackageURL


@dataclass(frozen=True, slots=True)
class ListDiff:
    to_add: frozenset[PackageURL] = field(default_factory=frozenset["PackageURL"])
    to_delete: frozenset[PackageURL] = field(default_factory=frozenset["PackageURL"])

    @property
    def is_empty(self) -> bool:
        return not self.to_add and not self.to_delete


def diff(source: Iterable[PackageURL], target: Iterable[PackageURL]) -> ListDiff:
    """Compute what must be added to and deleted from ``target`` to match ``source``.

    Comparison is on exact string identity; callers canonicalize beforehand.
    """

    source_set = frozenset(source)
    target_set = frozenset(target)
    return ListDiff(to_add=source_set - target_set, to_delete=target_set - source_set)
