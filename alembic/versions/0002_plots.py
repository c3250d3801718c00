"""Plots and plot references.

Revision ID: 0002
Revises: 0001
Create Date: 2026-10-19

Creates:
- plots: Plot lines, each in at most one series and one book
- plot_references: Pointers from a plot line to another entity
"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0002"
down_revision: str | None = "0001"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

TABLES = ("plots", "plot_references")


def single_book_table(table: str, *columns: sa.Column) -> None:
    op.create_table(
        table,
        sa.Column("id", sa.Integer(), nullable=False),
        *columns,
        sa.Column("series_id", sa.Integer(), nullable=True),
        sa.Column("book_id", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["series_id"], ["series.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["book_id"], ["books.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(f"ix_{table}_series_id", table, ["series_id"])
    op.create_index(f"ix_{table}_book_id", table, ["book_id"])


def upgrade() -> None:
    """Create plot tables."""
    single_book_table(
        "plots",
        sa.Column("name", sa.String(length=50), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("type", sa.String(length=50), nullable=True),
        sa.Column("order", sa.Integer(), nullable=True),
    )
    single_book_table(
        "plot_references",
        sa.Column("name", sa.String(length=50), nullable=False),
        sa.Column("type", sa.String(length=50), nullable=True),
        sa.Column("reference_id", sa.Integer(), nullable=True),
    )


def downgrade() -> None:
    """Drop plot tables."""
    for table in reversed(TABLES):
        op.drop_index(f"ix_{table}_book_id", table_name=table)
        op.drop_index(f"ix_{table}_series_id", table_name=table)
        op.drop_table(table)
