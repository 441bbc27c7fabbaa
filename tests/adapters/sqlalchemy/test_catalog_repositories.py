from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import select

from catalogsync.adapters.sqlalchemy import (
    SqlAlchemyCustomCollectionRepository,
    SqlAlchemyPackageRepository,
)
from catalogsync.adapters.sqlalchemy.mappings import package_table
from catalogsync.domain.model import CollectionDescriptor, ProcessingStage
from catalogsync.domain.ports.persistence import PersistenceError

if TYPE_CHECKING:
    from sqlalchemy.orm import Session


def test_package_repository_inserts_and_lists(sqlite_session: Session) -> None:
    repository = SqlAlchemyPackageRepository(sqlite_session)

    repository.insert(["https://x/b", "https://x/a"], ProcessingStage.RECONCILIATION)
    sqlite_session.commit()

    assert repository.list_urls() == ["https://x/a", "https://x/b"]
    stages = sqlite_session.execute(select(package_table.c.processing_stage)).scalars().all()
    assert set(stages) == {ProcessingStage.RECONCILIATION}


def test_package_repository_deletes_by_exact_url(sqlite_session: Session) -> None:
    repository = SqlAlchemyPackageRepository(sqlite_session)
    repository.insert(["https://x/a", "https://x/b"], ProcessingStage.RECONCILIATION)

    repository.delete("https://x/a")
    repository.delete("https://x/B")

    assert repository.list_urls() == ["https://x/b"]


def test_package_repository_rejects_case_variants(sqlite_session: Session) -> None:
    repository = SqlAlchemyPackageRepository(sqlite_session)
    repository.insert(["https://x/Repo"], ProcessingStage.RECONCILIATION)

    with pytest.raises(PersistenceError):
        repository.insert(["https://x/repo"], ProcessingStage.RECONCILIATION)


def test_find_or_create_reuses_collection_by_url(sqlite_session: Session) -> None:
    repository = SqlAlchemyCustomCollectionRepository(sqlite_session)
    url = "https://x/collection.json"

    created = repository.find_or_create(CollectionDescriptor(name="Old", url=url))
    sqlite_session.commit()
    found = repository.find_or_create(
        CollectionDescriptor(name="New", url=url, description="Refreshed")
    )
    sqlite_session.commit()

    assert found.id == created.id
    assert found.name == "New"
    assert found.description == "Refreshed"


def test_reconcile_membership_is_scoped_to_collection(sqlite_session: Session) -> None:
    repository = SqlAlchemyCustomCollectionRepository(sqlite_session)
    first = repository.find_or_create(CollectionDescriptor(name="First", url="https://x/1.json"))
    second = repository.find_or_create(CollectionDescriptor(name="Second", url="https://x/2.json"))

    repository.reconcile_membership(first.id, {"https://x/a", "https://x/shared"}, set())
    repository.reconcile_membership(second.id, {"https://x/shared"}, set())
    repository.reconcile_membership(second.id, set(), {"https://x/shared"})
    sqlite_session.commit()

    assert repository.member_urls(first.id) == ["https://x/a", "https://x/shared"]
    assert repository.member_urls(second.id) == []


def test_membership_rejects_case_variants(sqlite_session: Session) -> None:
    repository = SqlAlchemyCustomCollectionRepository(sqlite_session)
    collection = repository.find_or_create(CollectionDescriptor(name="C", url="https://x/c.json"))
    repository.reconcile_membership(collection.id, {"https://x/Repo"}, set())

    with pytest.raises(PersistenceError):
        repository.reconcile_membership(collection.id, {"https://x/repo"}, set())
