"""create_store_tables

Revision ID: 3f1c9a2b7d40
Revises:
Create Date: 2026-10-19 04:40:00.000000

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3f1c9a2b7d40"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "collections",
        sa.Column("id", sa.String(length=36), nullable=False, comment="Collection ID"),
        sa.Column("name", sa.String(length=255), nullable=False, comment="Collection name"),
        sa.Column(
            "schema",
            sa.JSON(),
            nullable=False,
            comment="Caller-supplied schema description",
        ),
        sa.Column("created_at", sa.String(length=32), nullable=False),
        sa.Column("updated_at", sa.String(length=32), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "items",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column(
            "collection_id",
            sa.String(length=36),
            nullable=False,
            comment="Owning collection ID (not enforced)",
        ),
        sa.Column("data", sa.JSON(), nullable=True, comment="Opaque item payload"),
        sa.Column("created_at", sa.String(length=32), nullable=False),
        sa.Column("updated_at", sa.String(length=32), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_items_collection_id", "items", ["collection_id"])

    op.create_table(
        "webhooks",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("collection_id", sa.String(length=36), nullable=False),
        sa.Column("url", sa.Text(), nullable=False),
        sa.Column(
            "events",
            sa.Text(),
            nullable=True,
            comment="JSON-encoded list of event names",
        ),
        sa.Column("created_at", sa.String(length=32), nullable=False),
        sa.Column("updated_at", sa.String(length=32), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_webhooks_collection_id", "webhooks", ["collection_id"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_webhooks_collection_id", table_name="webhooks")
    op.drop_table("webhooks")
    op.drop_index("ix_items_collection_id", table_name="items")
    op.drop_table("items")
    op.drop_table("collections")
