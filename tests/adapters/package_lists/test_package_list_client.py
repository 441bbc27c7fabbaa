from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Mapping  # noqa: TC003

import httpx
import pytest

from catalogsync.adapters.http_resilience import ResilienceConfig, ResilientClient
from catalogsync.adapters.package_lists import PackageListAPIError, PackageListClient
from catalogsync.config import PackageListConfig
from catalogsync.domain.model import CollectionDescriptor

PACKAGES_URL = "https://lists.example.com/packages.json"
DENY_URL = "https://lists.example.com/denylist.json"
COLLECTIONS_URL = "https://lists.example.com/custom-package-collections.json"


def _make_client_factory(
    handler: Callable[[httpx.Request], httpx.Response],
    built: list[ResilientClient] | None = None,
) -> Callable[[ResilienceConfig], ResilientClient]:
    async def async_handler(request: httpx.Request) -> httpx.Response:
        return handler(request)

    def factory(resilience: ResilienceConfig) -> ResilientClient:
        client = ResilientClient(resilience)
        client._client = httpx.AsyncClient(transport=httpx.MockTransport(async_handler))  # noqa: SLF001  # type: ignore[reportPrivateUsage]
        if built is not None:
            built.append(client)
        return client

    return factory


def _routes(payloads: Mapping[str, object]) -> Callable[[httpx.Request], httpx.Response]:
    def handler(request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        if url not in payloads:
            return httpx.Response(status_code=404)
        return httpx.Response(status_code=200, json=payloads[url])

    return handler


def _make_client(
    handler: Callable[[httpx.Request], httpx.Response],
    built: list[ResilientClient] | None = None,
) -> PackageListClient:
    return PackageListClient(
        config=PackageListConfig(
            package_list_url=PACKAGES_URL,
            deny_list_url=DENY_URL,
            collections_url=COLLECTIONS_URL,
            resilience=ResilienceConfig(name="test"),
        ),
        client_factory=_make_client_factory(handler, built),
    )


def _run[T](client: PackageListClient, call: Callable[[PackageListClient], Awaitable[T]]) -> T:
    async def run() -> T:
        async with client:
            return await call(client)

    return asyncio.run(run())


def test_fetch_package_list_drops_malformed_urls() -> None:
    client = _make_client(
        _routes(
            {
                PACKAGES_URL: [
                    "https://github.com/owner/a.git",
                    "not a url",
                    "github.com/owner/no-scheme.git",
                    "  https://github.com/owner/b.git  ",
                ]
            }
        )
    )

    result = _run(client, lambda c: c.fetch_package_list())

    assert result == ["https://github.com/owner/a.git", "https://github.com/owner/b.git"]


def test_fetch_deny_list_reads_package_urls() -> None:
    client = _make_client(
        _routes(
            {
                DENY_URL: [
                    {"package_url": "https://github.com/bad/actor.git", "reason": "spam"},
                    {"package_url": "https://github.com/Other/Bad.git"},
                ]
            }
        )
    )

    result = _run(client, lambda c: c.fetch_deny_list())

    assert result == ["https://github.com/bad/actor.git", "https://github.com/Other/Bad.git"]


def test_fetch_custom_collections_translates_descriptors() -> None:
    client = _make_client(
        _routes(
            {
                COLLECTIONS_URL: [
                    {
                        "name": "Server Side",
                        "url": "https://lists.example.com/server.json",
                        "description": "Server frameworks",
                        "badge": "  ",
                    }
                ]
            }
        )
    )

    result = _run(client, lambda c: c.fetch_custom_collections())

    assert result == [
        CollectionDescriptor(
            name="Server Side",
            url="https://lists.example.com/server.json",
            description="Server frameworks",
            badge=None,
        )
    ]


def test_fetch_custom_collection_returns_member_urls() -> None:
    collection_url = "https://lists.example.com/server.json"
    client = _make_client(_routes({collection_url: ["https://github.com/vapor/vapor.git"]}))

    result = _run(client, lambda c: c.fetch_custom_collection(collection_url))

    assert result == ["https://github.com/vapor/vapor.git"]


def test_http_errors_raise_api_error() -> None:
    client = _make_client(lambda _request: httpx.Response(status_code=503))

    with pytest.raises(PackageListAPIError) as excinfo:
        _run(client, lambda c: c.fetch_package_list())

    assert excinfo.value.status_code == 503
    assert excinfo.value.url == PACKAGES_URL


def test_unexpected_payload_raises_api_error() -> None:
    client = _make_client(_routes({PACKAGES_URL: {"packages": []}}))

    with pytest.raises(PackageListAPIError, match="Unexpected payload"):
        _run(client, lambda c: c.fetch_package_list())


def test_transport_errors_raise_api_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = _make_client(handler)

    with pytest.raises(PackageListAPIError) as excinfo:
        _run(client, lambda c: c.fetch_deny_list())

    assert excinfo.value.status_code is None


def test_one_http_client_serves_every_fetch() -> None:
    collection_url = "https://lists.example.com/server.json"
    built: list[ResilientClient] = []
    client = _make_client(
        _routes(
            {
                PACKAGES_URL: ["https://github.com/owner/a.git"],
                DENY_URL: [],
                COLLECTIONS_URL: [{"name": "Server", "url": collection_url}],
                collection_url: ["https://github.com/owner/a.git"],
            }
        ),
        built,
    )

    async def fetch_everything(c: PackageListClient) -> None:
        await c.fetch_package_list()
        await c.fetch_package_list()
        await c.fetch_deny_list()
        await c.fetch_custom_collections()
        await c.fetch_custom_collection(collection_url)

    _run(client, fetch_everything)

    assert len(built) == 1
    assert built[0]._client.is_closed  # noqa: SLF001  # type: ignore[reportPrivateUsage]


def test_http_client_is_rebuilt_after_close() -> None:
    built: list[ResilientClient] = []
    client = _make_client(_routes({PACKAGES_URL: []}), built)

    _run(client, lambda c: c.fetch_package_list())
    _run(client, lambda c: c.fetch_package_list())

    assert len(built) == 2


def test_list_sources_bundles_fetchers() -> None:
    client = _make_client(
        _routes(
            {
                PACKAGES_URL: ["https://github.com/owner/a.git"],
                DENY_URL: [],
            }
        )
    )

    async def fetch_both(c: PackageListClient) -> tuple[object, object]:
        sources = c.list_sources()
        return await sources.package_list(), await sources.deny_list()

    assert _run(client, fetch_both) == (["https://github.com/owner/a.git"], [])
