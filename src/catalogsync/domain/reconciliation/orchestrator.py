"""Sequencing of a full reconciliation pass.

A pass first brings the main catalog in line with the published package list
(minus the deny list), then walks the registry of custom collections one
collection at a time. Only main list failures escape :meth:`ListReconciler.run`;
collection failures are logged and recorded on the result.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from time import perf_counter
from typing import TYPE_CHECKING

from catalogsync.config.reconcile import ReconcileConfig
from catalogsync.domain.errors import FetchError

from .apply import reconcile_lists
from .context import ReconciliationContext
from .custom_collections import (
    CollectionReconciliation,
    bound_incoming,
    reconcile_custom_collection,
)
from .deny_list import process_deny_list

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

    from catalogsync.domain.model import CollectionDescriptor, PackageURL
    from catalogsync.domain.ports.fetching import ListSources
    from catalogsync.domain.ports.unit_of_work import ReconciliationUnitOfWork

    from .diff import ListDiff

type UnitOfWorkFactory = Callable[[], ReconciliationUnitOfWork]


@dataclass(slots=True)
class CollectionOutcome:
    """Result of processing one registry entry."""

    descriptor: CollectionDescriptor
    reconciliation: CollectionReconciliation | None = None
    error: Exception | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


@dataclass(slots=True)
class ReconciliationResult:
    """Summary of a reconciliation pass."""

    package_list: list[PackageURL]
    changes: ListDiff
    collections: list[CollectionOutcome] = field(default_factory=list["CollectionOutcome"])
    collection_registry_error: FetchError | None = None
    duration_seconds: float = 0.0

    @property
    def added(self) -> int:
        return len(self.changes.to_add)

    @property
    def deleted(self) -> int:
        return len(self.changes.to_delete)

    @property
    def failed_collections(self) -> list[CollectionOutcome]:
        return [outcome for outcome in self.collections if not outcome.succeeded]


@dataclass(slots=True)
class ListReconciler:
    """Run reconciliation passes against injected list sources and storage."""

    sources: ListSources
    unit_of_work_factory: UnitOfWorkFactory
    context: ReconciliationContext = field(default_factory=ReconciliationContext)
    config: ReconcileConfig = field(default_factory=ReconcileConfig)

    async def run(self) -> ReconciliationResult:
        """Reconcile the main list, then every custom collection."""

        log = self.context.logger
        start = perf_counter()
        try:
            log.info("Reconciling main list...")
            package_list, changes = await self.reconcile_main_list()
            result = ReconciliationResult(package_list=package_list, changes=changes)

            if self.config.include_collections:
                log.info("Reconciling custom collections...")
                await self.reconcile_custom_collections(result)
        finally:
            elapsed = perf_counter() - start
            self.context.observe("reconcile_duration_seconds", elapsed)

        result.duration_seconds = elapsed
        self.context.observe("reconcile_packages_added", result.added)
        self.context.observe("reconcile_packages_deleted", result.deleted)
        self.context.observe("reconcile_collections_failed", len(result.failed_collections))
        return result

    async def reconcile_main_list(self) -> tuple[list[PackageURL], ListDiff]:
        """Fetch the three input lists concurrently and apply the resulting diff.

        Returns the deny-filtered package list together with the applied diff.
        """

        source, denied, current = await self._fetch_main_lists()
        package_list = process_deny_list(source, denied)
        self.context.logger.info(
            "Package list: source=%s, denied=%s, processed=%s, current=%s",
            len(source),
            len(denied),
            len(package_list),
            len(current),
        )

        with self.unit_of_work_factory() as uow:
            changes = reconcile_lists(
                uow.repositories.packages,
                source=package_list,
                target=current,
            )
            uow.commit()
        return package_list, changes

    async def reconcile_custom_collections(self, result: ReconciliationResult) -> None:
        """Reconcile each registered collection, isolating failures per collection."""

        log = self.context.logger
        try:
            descriptors = await self._fetch("collection registry", self.sources.collection_registry)
        except FetchError as exc:
            log.error("Skipping custom collections: %s", exc)
            result.collection_registry_error = exc
            return

        catalog = result.package_list if self.config.restrict_collections_to_catalog else None
        for descriptor in descriptors:
            log.info("Reconciling '%s' collection...", descriptor.name)
            try:
                reconciliation = await self.reconcile_collection(descriptor, catalog=catalog)
            except Exception as exc:  # noqa: BLE001
                log.exception("Reconciling '%s' collection failed", descriptor.name)
                result.collections.append(CollectionOutcome(descriptor=descriptor, error=exc))
                continue
            result.collections.append(
                CollectionOutcome(descriptor=descriptor, reconciliation=reconciliation)
            )

    async def reconcile_collection(
        self,
        descriptor: CollectionDescriptor,
        *,
        catalog: Sequence[PackageURL] | None = None,
    ) -> CollectionReconciliation:
        """Fetch, bound and reconcile the membership of a single collection."""

        async def fetch_members() -> Sequence[PackageURL]:
            return await self.sources.collection_members(descriptor.url)

        raw_urls = await self._fetch(f"collection '{descriptor.name}'", fetch_members)
        incoming = bound_incoming(
            raw_urls,
            self.config.max_collection_size,
            name=descriptor.name,
        )

        with self.unit_of_work_factory() as uow:
            reconciliation = reconcile_custom_collection(
                uow.repositories.collections,
                descriptor,
                incoming,
                max_size=self.config.max_collection_size,
                catalog=catalog,
            )
            uow.commit()
        return reconciliation

    async def _fetch_main_lists(
        self,
    ) -> tuple[Sequence[PackageURL], Sequence[PackageURL], list[PackageURL]]:
        try:
            async with asyncio.TaskGroup() as group:
                source_task = group.create_task(
                    self._fetch("package list", self.sources.package_list)
                )
                deny_task = group.create_task(self._fetch("deny list", self.sources.deny_list))
                current_task = group.create_task(
                    self._fetch("current package list", self._fetch_current_list)
                )
        except ExceptionGroup as group_error:
            # every task wraps its failure, so the first one is a FetchError
            raise group_error.exceptions[0]  # noqa: B904
        return source_task.result(), deny_task.result(), current_task.result()

    async def _fetch_current_list(self) -> list[PackageURL]:
        return await asyncio.to_thread(self._read_current_list)

    def _read_current_list(self) -> list[PackageURL]:
        with self.unit_of_work_factory() as uow:
            return uow.repositories.packages.list_urls()

    async def _fetch[T](self, source: str, fetcher: Callable[[], Awaitable[T]]) -> T:
        try:
            return await fetcher()
        except Exception as exc:
            raise FetchError(source, exc) from exc


async def reconcile(
    sources: ListSources,
    unit_of_work_factory: UnitOfWorkFactory,
    *,
    context: ReconciliationContext | None = None,
    config: ReconcileConfig | None = None,
) -> ReconciliationResult:
    """Run one reconciliation pass with the given collaborators."""

    reconciler = ListReconciler(
        sources=sources,
        unit_of_work_factory=unit_of_work_factory,
        context=context or ReconciliationContext(),
        config=config or ReconcileConfig(),
    )
    return await reconciler.run()
