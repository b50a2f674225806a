"""Initial schema - icon and role registries.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _registry_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("display_name", sa.String(255), nullable=False),
        sa.Column("slug", sa.String(255), nullable=False),
        sa.Column("type", sa.String(50), nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_by", sa.String(255), nullable=True),
        sa.Column("updated_by", sa.String(255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table("icon", *_registry_columns())
    op.create_index("ix_icon_type_slug", "icon", ["type", "slug"], unique=True)
    op.create_index(
        "ix_icon_type_display_name",
        "icon",
        ["type", sa.text("lower(display_name)")],
        unique=True,
    )

    op.create_table(
        "role",
        *_registry_columns(),
        sa.Column("description", sa.Text(), nullable=True),
    )
    op.create_index("ix_role_type_slug", "role", ["type", "slug"], unique=True)
    op.create_index(
        "ix_role_type_display_name",
        "role",
        ["type", sa.text("lower(display_name)")],
        unique=True,
    )


def downgrade() -> None:
    op.drop_table("role")
    op.drop_table("icon")
