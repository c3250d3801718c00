"""Initial schema.

Revision ID: 0001
Revises:
Create Date: 2026-10-19

Creates initial database tables:
- users: User accounts
- series, books: Owner entities
- battles, characters, creatures, settings, transports, groups,
  magic_systems, technologies, weapons, worlds: World-building resources
- books_<resource>: Book links for each resource table
"""

from collections.abc import Sequence

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

ENUM_TYPES: dict[str, tuple[str, ...]] = {
    "genre": ("fantasy", "sci-fi", "horror"),
    "character_title": (
        "mr", "master", "mrs", "miss", "commander", "lieutenant", "captain",
        "general", "admiral", "king", "queen", "prince", "princess", "lord",
        "lady", "count", "countess", "emperor", "empress",
    ),
    "character_type": (
        "main_protagonist", "main_antagonist", "protagonist", "antagonist",
        "anti_hero", "side_character", "minor_character",
    ),
    "character_gender": ("m", "f"),
    "height_metric": ("cm", "in", "ft"),
    "weight_metric": ("lbs", "kg", "st"),
}

# resource table -> column in its books_<table> link table
RESOURCE_TABLES: dict[str, str] = {
    "battles": "battle_id",
    "characters": "character_id",
    "creatures": "creature_id",
    "settings": "setting_id",
    "transports": "transport_id",
    "groups": "group_id",
    "magic_systems": "magic_system_id",
    "technologies": "technology_id",
    "weapons": "weapon_id",
    "worlds": "world_id",
}


def enum(name: str) -> postgresql.ENUM:
    return postgresql.ENUM(*ENUM_TYPES[name], name=name, create_type=False)


def timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    ]


def named() -> list[sa.Column]:
    return [
        sa.Column("name", sa.String(length=50), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
    ]


def image() -> list[sa.Column]:
    return [sa.Column("image", sa.String(length=255), nullable=True)]


def being() -> list[sa.Column]:
    return [
        sa.Column("height", sa.Float(), nullable=True),
        sa.Column("height_metric", enum("height_metric"), nullable=True),
        sa.Column("weight", sa.Float(), nullable=True),
        sa.Column("weight_metric", enum("weight_metric"), nullable=True),
        sa.Column("physical_description", sa.Text(), nullable=True),
        sa.Column("personality_description", sa.Text(), nullable=True),
    ]


def create_resource_table(table: str, *columns: sa.Column) -> None:
    op.create_table(
        table,
        sa.Column("id", sa.Integer(), nullable=False),
        *columns,
        sa.Column("series_id", sa.Integer(), nullable=True),
        *timestamps(),
        sa.ForeignKeyConstraint(["series_id"], ["series.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(f"ix_{table}_series_id", table, ["series_id"])


def upgrade() -> None:
    """Create all initial tables."""
    # Create enum types
    for name, values in ENUM_TYPES.items():
        labels = ", ".join(f"'{value}'" for value in values)
        op.execute(f"CREATE TYPE {name} AS ENUM ({labels})")

    # Create users table
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("username", sa.String(length=35), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        *timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_username", "users", ["username"], unique=True)
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    # Create series table
    op.create_table(
        "series",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=50), nullable=False),
        sa.Column("genre", enum("genre"), nullable=True),
        *timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_series_user_id", "series", ["user_id"])

    # Create books table
    op.create_table(
        "books",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("series_id", sa.Integer(), nullable=True),
        sa.Column("name", sa.String(length=50), nullable=False),
        sa.Column("genre", enum("genre"), nullable=True),
        *timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["series_id"], ["series.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_books_user_id", "books", ["user_id"])
    op.create_index("ix_books_series_id", "books", ["series_id"])

    # Create resource tables
    create_resource_table(
        "battles",
        *named(),
        sa.Column("start", sa.String(length=50), nullable=True),
        sa.Column("end", sa.String(length=50), nullable=True),
    )
    create_resource_table(
        "characters",
        sa.Column("first_name", sa.String(length=35), nullable=False),
        sa.Column("last_name", sa.String(length=35), nullable=True),
        sa.Column("title", enum("character_title"), nullable=True),
        sa.Column("type", enum("character_type"), nullable=True),
        sa.Column("age", sa.Integer(), nullable=True),
        sa.Column("gender", enum("character_gender"), nullable=True),
        sa.Column("character_arc", sa.Text(), nullable=True),
        *being(),
        *image(),
    )
    create_resource_table("creatures", *named(), *being(), *image())
    create_resource_table(
        "settings",
        *named(),
        *image(),
        sa.Column("type", sa.String(length=50), nullable=True),
        sa.Column("size", sa.Float(), nullable=True),
        sa.Column("size_metric", sa.String(length=20), nullable=True),
    )
    create_resource_table("transports", *named(), *image())
    create_resource_table(
        "groups",
        *named(),
        *image(),
        sa.Column("type", sa.String(length=50), nullable=True),
    )
    create_resource_table(
        "magic_systems",
        *named(),
        sa.Column("rules", sa.Text(), nullable=True),
    )
    create_resource_table(
        "technologies",
        *named(),
        *image(),
        sa.Column("inventor", sa.String(length=50), nullable=True),
    )
    create_resource_table(
        "weapons",
        *named(),
        *image(),
        sa.Column("creator", sa.String(length=50), nullable=True),
        sa.Column("wielder", sa.String(length=50), nullable=True),
        sa.Column("forged", sa.String(length=50), nullable=True),
    )
    create_resource_table("worlds", *named())

    # Create book link tables
    for table, column in RESOURCE_TABLES.items():
        op.create_table(
            f"books_{table}",
            sa.Column("book_id", sa.Integer(), nullable=False),
            sa.Column(column, sa.Integer(), nullable=False),
            sa.ForeignKeyConstraint(["book_id"], ["books.id"], ondelete="CASCADE"),
            sa.ForeignKeyConstraint([column], [f"{table}.id"], ondelete="CASCADE"),
            sa.PrimaryKeyConstraint("book_id", column),
        )


def downgrade() -> None:
    """Drop all tables and enum types."""
    for table in RESOURCE_TABLES:
        op.drop_table(f"books_{table}")

    for table in reversed(list(RESOURCE_TABLES)):
        op.drop_index(f"ix_{table}_series_id", table_name=table)
        op.drop_table(table)

    op.drop_index("ix_books_series_id", table_name="books")
    op.drop_index("ix_books_user_id", table_name="books")
    op.drop_table("books")

    op.drop_index("ix_series_user_id", table_name="series")
    op.drop_table("series")

    op.drop_index("ix_users_email", table_name="users")
    op.drop_index("ix_users_username", table_name="users")
    op.drop_table("users")

    # Drop enum types
    for name in reversed(list(ENUM_TYPES)):
        op.execute(f"DROP TYPE {name}")
