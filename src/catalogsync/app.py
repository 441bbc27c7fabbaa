"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

from catalogsync.adapters.package_lists import PackageListClient
from catalogsync.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyReconciliationUnitOfWork,
    startup,
)
from catalogsync.config import get_reconcile_config
from catalogsync.domain.reconciliation import (
    ReconciliationContext,
    ReconciliationResult,
    UnitOfWorkFactory,
    canonical_key,
    process_deny_list,
    reconcile,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from catalogsync.config import ReconcileConfig
    from catalogsync.domain.model import PackageURL
    from catalogsync.domain.ports.fetching import DenyListFetcher, ListSources

log = getLogger(__name__)


def reconcile_package_lists(
    *,
    sources: ListSources | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    config: ReconcileConfig | None = None,
    context: ReconciliationContext | None = None,
) -> ReconciliationResult:
    """Reconcile the persisted catalog against the published package lists."""

    startup()
    effective_uow = unit_of_work_factory or SqlAlchemyReconciliationUnitOfWork
    effective_config = config or get_reconcile_config()
    log.info(
        "Starting reconciliation: max_collection_size=%s, include_collections=%s, "
        "restrict_collections_to_catalog=%s",
        effective_config.max_collection_size,
        effective_config.include_collections,
        effective_config.restrict_collections_to_catalog,
    )

    async def run_pass() -> ReconciliationResult:
        if sources is not None:
            return await reconcile(
                sources, effective_uow, context=context, config=effective_config
            )
        async with PackageListClient() as client:
            return await reconcile(
                client.list_sources(), effective_uow, context=context, config=effective_config
            )

    result = asyncio.run(run_pass())

    log.info(
        f"Finished reconciliation: added={result.added}, deleted={result.deleted}, "
        f"collections={len(result.collections)}, "
        f"failed_collections={len(result.failed_collections)}, "
        f"duration={result.duration_seconds:.2f}s"
    )
    return result


def check_deny_list(
    *,
    deny_list: DenyListFetcher | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> list[PackageURL]:
    """Return persisted packages that the current deny list would remove.

    Nothing is written; the next reconciliation pass deletes these packages.
    """

    startup()
    effective_uow = unit_of_work_factory or SqlAlchemyReconciliationUnitOfWork

    async def fetch_deny_list() -> Sequence[PackageURL]:
        if deny_list is not None:
            return await deny_list()
        async with PackageListClient() as client:
            return await client.fetch_deny_list()

    denied_urls = asyncio.run(fetch_deny_list())
    with effective_uow() as uow:
        persisted = uow.repositories.packages.list_urls()

    allowed = {canonical_key(url) for url in process_deny_list(persisted, denied_urls)}
    matches = [url for url in persisted if canonical_key(url) not in allowed]
    log.info(f"Deny list matches {len(matches)} of {len(persisted)} persisted packages")
    return matches
