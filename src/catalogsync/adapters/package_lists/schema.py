"""Pydantic models describing the published package list payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, RootModel, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class PackageListBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class PackageListPayload(RootModel[list[str]]):
    """``packages.json`` and custom collection files: a flat array of URLs."""


class DeniedPackagePayload(PackageListBaseModel):
    package_url: str


class DenyListPayload(RootModel[list[DeniedPackagePayload]]):
    pass


class CollectionPayload(PackageListBaseModel):
    name: str
    url: str
    description: str | None = None
    badge: str | None = None

    @field_validator("description", "badge", mode="before")
    @classmethod
    def _normalize_optional(cls, value: object) -> object:
        return _blank_to_none(value)

    @field_validator("name", "url")
    @classmethod
    def _require_text(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("must not be blank")
        return stripped


class CollectionRegistryPayload(RootModel[list[CollectionPayload]]):
    pass
