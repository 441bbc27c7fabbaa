"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, cast

from sqlalchemy import delete, insert, select
from sqlalchemy.exc import SQLAlchemyError

from catalogsync.adapters.sqlalchemy.mappings import (
    custom_collection_package_table,
    custom_collection_table,
    package_table,
)
from catalogsync.domain.errors import PersistenceError
from catalogsync.domain.model import CustomCollection, Package

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable, Iterator
    from uuid import UUID

    from sqlalchemy.orm import Session

    from catalogsync.domain.model import CollectionDescriptor, PackageURL, ProcessingStage


@contextmanager
def translate_errors(action: str) -> Iterator[None]:
    """Re-raise SQLAlchemy failures of ``action`` as :class:`PersistenceError`."""

    try:
        yield
    except SQLAlchemyError as exc:
        raise PersistenceError(f"{action} failed: {exc}") from exc


class SqlAlchemyPackageRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def list_urls(self) -> list[PackageURL]:
        stmt = select(package_table.c.url).order_by(package_table.c.url)
        with translate_errors("Listing package urls"):
            return list(self.session.execute(stmt).scalars())

    def insert(self, urls: Iterable[PackageURL], stage: ProcessingStage) -> None:
        packages = [Package(url=url, processing_stage=stage) for url in urls]
        if not packages:
            return
        with translate_errors(f"Inserting {len(packages)} packages"):
            self.session.add_all(packages)
            self.session.flush()

    def delete(self, url: PackageURL) -> None:
        stmt = delete(package_table).where(package_table.c.url == url)
        with translate_errors(f"Deleting package {url}"):
            self.session.execute(stmt)


class SqlAlchemyCustomCollectionRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def find_or_create(self, descriptor: CollectionDescriptor) -> CustomCollection:
        stmt = select(CustomCollection).where(custom_collection_table.c.url == descriptor.url)
        with translate_errors(f"Loading collection {descriptor.url}"):
            collection = self.session.execute(stmt).scalar_one_or_none()
            if collection is None:
                collection = CustomCollection.from_descriptor(descriptor)
                self.session.add(collection)
            else:
                collection.update_from(descriptor)
            self.session.flush()
        return cast(CustomCollection, collection)

    def member_urls(self, collection_id: UUID) -> list[PackageURL]:
        stmt = (
            select(custom_collection_package_table.c.url)
            .where(custom_collection_package_table.c.collection_id == collection_id)
            .order_by(custom_collection_package_table.c.url)
        )
        with translate_errors("Listing collection members"):
            return list(self.session.execute(stmt).scalars())

    def reconcile_membership(
        self,
        collection_id: UUID,
        to_add: Collection[PackageURL],
        to_delete: Collection[PackageURL],
    ) -> None:
        with translate_errors("Reconciling collection membership"):
            if to_delete:
                self.session.execute(
                    delete(custom_collection_package_table)
                    .where(custom_collection_package_table.c.collection_id == collection_id)
                    .where(custom_collection_package_table.c.url.in_(list(to_delete)))
                )
            if to_add:
                self.session.execute(
                    insert(custom_collection_package_table),
                    [{"collection_id": collection_id, "url": url} for url in sorted(to_add)],
                )


if TYPE_CHECKING:
    from catalogsync.domain.ports.persistence import (
        CustomCollectionRepository,
        PackageRepository,
    )

    _session_stub = cast("Session", object())
    _package_repo: PackageRepository = SqlAlchemyPackageRepository(_session_stub)
    _collection_repo: CustomCollectionRepository = SqlAlchemyCustomCollectionRepository(
        _session_stub
    )
