"""Apply a list diff to the main package catalog."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from catalogsync.domain.model import ProcessingStage

from .diff import diff

if TYPE_CHECKING:
    from collections.abc import Iterable

    from catalogsync.domain.model import PackageURL
    from catalogsync.domain.ports.persistence import PackageRepository

    from .diff import ListDiff

log = getLogger(__name__)


def reconcile_lists(
    packages: PackageRepository,
    *,
    source: Iterable[PackageURL],
    target: Iterable[PackageURL],
) -> ListDiff:
    """Bring the catalog held by ``packages`` from ``target`` to ``source``.

    Deletions run before insertions so a URL whose casing changed upstream is
    replaced within the same pass instead of colliding with its old spelling.
    """

    changes = diff(source, target)
    for url in sorted(changes.to_delete):
        packages.delete(url)
    if changes.to_add:
        packages.insert(sorted(changes.to_add), ProcessingStage.RECONCILIATION)
    log.info(
        "Applied package list diff: added=%s, deleted=%s",
        len(changes.to_add),
        len(changes.to_delete),
    )
    return changes
