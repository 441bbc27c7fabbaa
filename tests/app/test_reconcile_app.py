from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from catalogsync.app import check_deny_list, reconcile_package_lists
from catalogsync.config import ReconcileConfig
from catalogsync.domain.reconciliation import ReconciliationResult
from tests.helpers.catalog import (
    FakeListSource,
    FakePackageRepository,
    FakeStore,
    make_descriptor,
    make_sources,
)

if TYPE_CHECKING:
    from types import TracebackType

    from catalogsync.domain.model import PackageURL
    from catalogsync.domain.ports.fetching import DenyListFetcher, ListSources


class FakePackageListClient:
    """Stands in for the HTTP client, tracking how often it is opened and closed."""

    instances: list[FakePackageListClient] = []

    def __init__(self) -> None:
        self.entered = 0
        self.closed = False
        self.sources = make_sources(
            package_list=["https://x/a"],
            deny_list=["https://x/stale"],
        )
        FakePackageListClient.instances.append(self)

    async def __aenter__(self) -> FakePackageListClient:
        self.entered += 1
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.closed = True

    def list_sources(self) -> ListSources:
        assert not self.closed
        return self.sources

    async def fetch_deny_list(self) -> list[PackageURL]:
        assert not self.closed
        return ["https://x/stale"]


@pytest.fixture
def fake_client(monkeypatch: pytest.MonkeyPatch) -> type[FakePackageListClient]:
    FakePackageListClient.instances = []
    monkeypatch.setattr("catalogsync.app.PackageListClient", FakePackageListClient)
    monkeypatch.setattr("catalogsync.app.startup", lambda: None)
    return FakePackageListClient


def test_reconcile_package_lists_orchestrates_dependencies(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    startup_called = False

    def fake_startup() -> None:
        nonlocal startup_called
        startup_called = True

    monkeypatch.setattr("catalogsync.app.startup", fake_startup)
    store = FakeStore(packages=FakePackageRepository(["https://x/stale"]))
    sources = make_sources(package_list=["https://x/a"])

    result = reconcile_package_lists(
        sources=sources,
        unit_of_work_factory=store,
        config=ReconcileConfig(),
    )

    assert startup_called is True
    assert isinstance(result, ReconciliationResult)
    assert store.packages.list_urls() == ["https://x/a"]
    assert result.deleted == 1


def test_reconcile_package_lists_reads_config_from_environment(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr("catalogsync.app.startup", lambda: None)
    monkeypatch.setenv("CATALOGSYNC_INCLUDE_COLLECTIONS", "false")
    registry = FakeListSource([make_descriptor("Ignored")])

    result = reconcile_package_lists(
        sources=make_sources(registry=registry),
        unit_of_work_factory=FakeStore(),
    )

    assert registry.calls == 0
    assert result.collections == []


def test_check_deny_list_reports_without_writing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("catalogsync.app.startup", lambda: None)
    store = FakeStore(packages=FakePackageRepository(["https://x/Bad", "https://x/good"]))
    deny_list: DenyListFetcher = FakeListSource(["https://x/bad"])  # type: ignore[assignment]

    matches = check_deny_list(deny_list=deny_list, unit_of_work_factory=store)

    assert matches == ["https://x/Bad"]
    assert store.packages.calls == []
    assert not any(uow.committed for uow in store.units)


def test_reconcile_package_lists_opens_one_client_per_pass(
    fake_client: type[FakePackageListClient],
) -> None:
    store = FakeStore(packages=FakePackageRepository(["https://x/stale"]))

    result = reconcile_package_lists(unit_of_work_factory=store, config=ReconcileConfig())

    assert len(fake_client.instances) == 1
    client = fake_client.instances[0]
    assert client.entered == 1
    assert client.closed
    assert store.packages.list_urls() == ["https://x/a"]
    assert result.deleted == 1


def test_check_deny_list_closes_its_client(fake_client: type[FakePackageListClient]) -> None:
    store = FakeStore(packages=FakePackageRepository(["https://x/stale", "https://x/a"]))

    matches = check_deny_list(unit_of_work_factory=store)

    assert matches == ["https://x/stale"]
    assert [client.closed for client in fake_client.instances] == [True]
