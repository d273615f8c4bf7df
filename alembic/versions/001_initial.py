"""Initial database schema with the perfumes table."""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "perfumes",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("brand", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("price", sa.Numeric(10, 2), nullable=True),
        sa.Column("volume", sa.Integer(), nullable=True),
        sa.Column("category", sa.Text(), nullable=True),
        sa.Column("notes_top", sa.Text(), nullable=True),
        sa.Column("notes_middle", sa.Text(), nullable=True),
        sa.Column("notes_base", sa.Text(), nullable=True),
        sa.Column("gender", sa.Text(), nullable=False, server_default="unisex"),
        sa.Column("image_url", sa.Text(), nullable=True),
        sa.Column("stock_quantity", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_available", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        if_not_exists=True,
    )
    op.create_index(
        "ix_perfumes_available_created",
        "perfumes",
        ["is_available", "created_at"],
        if_not_exists=True,
    )


def downgrade() -> None:
    op.drop_index("ix_perfumes_available_created", table_name="perfumes")
    op.drop_table("perfumes")
