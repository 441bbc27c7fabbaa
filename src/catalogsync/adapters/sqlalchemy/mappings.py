"""SQLAlchemy mapping metadata for the catalog domain model."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from functools import cache
from typing import TYPE_CHECKING

from sqlalchemy import (
    Column,
    DateTime,
    Dialect,
    Enum,
    ForeignKey,
    Index,
    String,
    Table,
    TypeDecorator,
    Uuid,
    func,
    orm,
)
from sqlalchemy.orm import configure_mappers

from catalogsync.domain.model import CustomCollection, Package, ProcessingStage

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# Core tables -----------------------------------------------------------------

package_table = Table(
    "package",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("url", String, nullable=False, unique=True),
    Column("processing_stage", Enum(ProcessingStage, native_enum=False), nullable=False),
    Column("created_at", UTCDateTime(), nullable=False, server_default=func.now()),
    Column(
        "updated_at",
        UTCDateTime(),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    ),
)

# package identity is case-insensitive
Index("uq_package_url_lower", func.lower(package_table.c.url), unique=True)

custom_collection_table = Table(
    "custom_collection",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("name", String, nullable=False),
    Column("url", String, nullable=False, unique=True),
    Column("description", String, nullable=True),
    Column("badge", String, nullable=True),
    Column("created_at", UTCDateTime(), nullable=False, server_default=func.now()),
    Column(
        "updated_at",
        UTCDateTime(),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    ),
)

custom_collection_package_table = Table(
    "custom_collection_package",
    mapper_registry.metadata,
    Column(
        "collection_id",
        UUIDColumnType,
        ForeignKey("custom_collection.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("url", String, primary_key=True),
    Column("created_at", UTCDateTime(), nullable=False, server_default=func.now()),
)

Index(
    "uq_custom_collection_package_url_lower",
    custom_collection_package_table.c.collection_id,
    func.lower(custom_collection_package_table.c.url),
    unique=True,
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(Package, package_table)
    mapper_registry.map_imperatively(CustomCollection, custom_collection_table)

    configure_mappers()
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the mapped metadata."""

    log.info("Creating all tables")
    mapper_registry.metadata.create_all(engine)
