"""HTTP client for the published package lists."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import BaseModel, ValidationError

from catalogsync.adapters.http_resilience import ResilientClient
from catalogsync.config.package_lists import PackageListConfig, get_package_list_config
from catalogsync.domain.ports.fetching import ListSources

from .schema import CollectionRegistryPayload, DenyListPayload, PackageListPayload
from .translator import parse_package_urls, translate_collection

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from catalogsync.config.http_resilience import ResilienceConfig
    from catalogsync.domain.model import CollectionDescriptor, PackageURL

log = getLogger(__name__)


class PackageListAPIError(RuntimeError):
    """Raised when a list cannot be downloaded or its payload is not understood."""

    def __init__(self, message: str, *, url: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class PackageListClient:
    """Downloads the main list, the deny list and custom collections.

    All requests of one client share a single :class:`ResilientClient`, built on
    first use, so the rate limit and the response cache span the whole pass. Use
    the client as an async context manager (or call :meth:`aclose`) to release it.
    """

    def __init__(
        self,
        *,
        config: PackageListConfig | None = None,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config or get_package_list_config()
        self._client_factory = client_factory or ResilientClient
        self._http: ResilientClient | None = None

    @property
    def config(self) -> PackageListConfig:
        return self._config

    async def __aenter__(self) -> PackageListClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._http is None:
            return
        http, self._http = self._http, None
        await http.aclose()

    async def fetch_package_list(self) -> list[PackageURL]:
        payload = await self._get(self._config.package_list_url, PackageListPayload)
        return parse_package_urls(payload.root)

    async def fetch_deny_list(self) -> list[PackageURL]:
        payload = await self._get(self._config.deny_list_url, DenyListPayload)
        return parse_package_urls(entry.package_url for entry in payload.root)

    async def fetch_custom_collections(self) -> list[CollectionDescriptor]:
        payload = await self._get(self._config.collections_url, CollectionRegistryPayload)
        return [translate_collection(entry) for entry in payload.root]

    async def fetch_custom_collection(self, url: str) -> list[PackageURL]:
        payload = await self._get(url, PackageListPayload)
        return parse_package_urls(payload.root)

    def list_sources(self) -> ListSources:
        """Bundle this client's fetchers for a reconciliation pass."""

        return ListSources(
            package_list=self.fetch_package_list,
            deny_list=self.fetch_deny_list,
            collection_registry=self.fetch_custom_collections,
            collection_members=self.fetch_custom_collection,
        )

    async def _get[TPayload: BaseModel](self, url: str, model: type[TPayload]) -> TPayload:
        if self._http is None:
            self._http = self._client_factory(self._config.resilience)
        try:
            response = await self._http.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise PackageListAPIError(
                f"GET {url} returned HTTP {status}", url=url, status_code=status
            ) from exc
        except httpx.HTTPError as exc:
            raise PackageListAPIError(f"GET {url} failed: {exc}", url=url) from exc

        try:
            return model.model_validate_json(response.content)
        except ValidationError as exc:
            log.error(f"Unexpected payload from {url}: {exc.error_count()} validation errors")
            raise PackageListAPIError(f"Unexpected payload from {url}", url=url) from exc


if TYPE_CHECKING:
    from catalogsync.domain.ports.fetching import (
        CollectionMembersFetcher,
        CollectionRegistryFetcher,
        DenyListFetcher,
        PackageListFetcher,
    )

    _client_check = PackageListClient()
    _package_list_check: PackageListFetcher = _client_check.fetch_package_list
    _deny_list_check: DenyListFetcher = _client_check.fetch_deny_list
    _registry_check: CollectionRegistryFetcher = _client_check.fetch_custom_collections
    _members_check: CollectionMembersFetcher = _client_check.fetch_custom_collection
