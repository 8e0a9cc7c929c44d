"""create_storage_tables

Revision ID: 0001_storage_tables
Revises:
Create Date: 2026-10-17 09:12:40.118204

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0001_storage_tables"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create storage_sources, filter_rules and user_storage_sources tables."""
    op.create_table(
        "storage_sources",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "name", sa.String(length=255), nullable=False, comment="Storage source display name"
        ),
        sa.Column(
            "key", sa.String(length=64), nullable=False, comment="Unique storage source key"
        ),
        sa.Column("type", sa.String(length=32), nullable=False, comment="Storage backend type"),
        sa.Column("enable", sa.Boolean(), nullable=False),
        sa.Column("order_num", sa.Integer(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_storage_sources_key"), "storage_sources", ["key"], unique=True)

    op.create_table(
        "filter_rules",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "storage_id",
            sa.Integer(),
            nullable=False,
            comment="Foreign key to storage_sources table",
        ),
        # NULL or "" = inert rule
        sa.Column(
            "expression",
            sa.Text(),
            nullable=True,
            comment="Glob expression matched against names and paths",
        ),
        sa.Column(
            "mode",
            sa.String(length=32),
            nullable=False,
            comment="Filter mode: hidden, inaccessible, disable_download",
        ),
        sa.Column(
            "description", sa.String(length=255), nullable=True, comment="Free-text description"
        ),
        sa.ForeignKeyConstraint(["storage_id"], ["storage_sources.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_filter_rules_storage_id"), "filter_rules", ["storage_id"])
    op.create_index(op.f("ix_filter_rules_mode"), "filter_rules", ["mode"])

    op.create_table(
        "user_storage_sources",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False, comment="User ID"),
        sa.Column(
            "storage_id",
            sa.Integer(),
            nullable=False,
            comment="Foreign key to storage_sources table",
        ),
        sa.Column("enable", sa.Boolean(), nullable=False),
        sa.Column(
            "permissions",
            sa.Text(),
            nullable=False,
            comment="Granted operations (JSON array of operator names)",
        ),
        sa.ForeignKeyConstraint(["storage_id"], ["storage_sources.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "user_id", "storage_id", name="uq_user_storage_sources_user_storage"
        ),
    )
    op.create_index(op.f("ix_user_storage_sources_user_id"), "user_storage_sources", ["user_id"])
    op.create_index(
        op.f("ix_user_storage_sources_storage_id"), "user_storage_sources", ["storage_id"]
    )


def downgrade() -> None:
    """Drop storage tables."""
    op.drop_index(op.f("ix_user_storage_sources_storage_id"), table_name="user_storage_sources")
    op.drop_index(op.f("ix_user_storage_sources_user_id"), table_name="user_storage_sources")
    op.drop_table("user_storage_sources")
    op.drop_index(op.f("ix_filter_rules_mode"), table_name="filter_rules")
    op.drop_index(op.f("ix_filter_rules_storage_id"), table_name="filter_rules")
    op.drop_table("filter_rules")
    op.drop_index(op.f("ix_storage_sources_key"), table_name="storage_sources")
    op.drop_table("storage_sources")
