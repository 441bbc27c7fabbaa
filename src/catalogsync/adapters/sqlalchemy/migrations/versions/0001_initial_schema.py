"""initial schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19 00:00:00

"""

from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "0001_initial_schema"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "package",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("url", sa.String(), nullable=False),
        sa.Column(
            "processing_stage",
            sa.Enum(
                "RECONCILIATION",
                "INGESTION",
                "ANALYSIS",
                name="processingstage",
                native_enum=False,
            ),
            nullable=False,
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_package")),
        sa.UniqueConstraint("url", name=op.f("uq_package_url")),
    )
    op.create_index(
        "uq_package_url_lower",
        "package",
        [sa.text("lower(url)")],
        unique=True,
    )

    op.create_table(
        "custom_collection",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("url", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("badge", sa.String(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_custom_collection")),
        sa.UniqueConstraint("url", name=op.f("uq_custom_collection_url")),
    )

    op.create_table(
        "custom_collection_package",
        sa.Column("collection_id", sa.Uuid(), nullable=False),
        sa.Column("url", sa.String(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(
            ["collection_id"],
            ["custom_collection.id"],
            name=op.f("fk_custom_collection_package_collection_id_custom_collection"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("collection_id", "url", name=op.f("pk_custom_collection_package")),
    )
    op.create_index(
        "uq_custom_collection_package_url_lower",
        "custom_collection_package",
        ["collection_id", sa.text("lower(url)")],
        unique=True,
    )


def downgrade() -> None:
    op.drop_index(
        "uq_custom_collection_package_url_lower",
        table_name="custom_collection_package",
    )
    op.drop_table("custom_collection_package")
    op.drop_table("custom_collection")
    op.drop_index("uq_package_url_lower", table_name="package")
    op.drop_table("package")
