"""World-building resource models.

Every resource belongs to at most one series and to any number of books;
plots and plot references belong to at most one book.
That link is set when the resource is created and is what authorizes
all later reads and writes.
"""

from __future__ import annotations

from enum import Enum

from sqlalchemy import Column, Float, ForeignKey, Integer, String, Table, Text
from sqlalchemy.orm import Mapped, declared_attr, mapped_column, relationship

from .database import Base, TimestampMixin
from .library import Book, Series, enum_column


class CharacterTitle(str, Enum):
    MR = "mr"
    MASTER = "master"
    MRS = "mrs"
    MISS = "miss"
    COMMANDER = "commander"
    LIEUTENANT = "lieutenant"
    CAPTAIN = "captain"
    GENERAL = "general"
    ADMIRAL = "admiral"
    KING = "king"
    QUEEN = "queen"
    PRINCE = "prince"
    PRINCESS = "princess"
    LORD = "lord"
    LADY = "lady"
    COUNT = "count"
    COUNTESS = "countess"
    EMPEROR = "emperor"
    EMPRESS = "empress"


class CharacterType(str, Enum):
    """Narrative role of a character."""

    MAIN_PROTAGONIST = "main_protagonist"
    MAIN_ANTAGONIST = "main_antagonist"
    PROTAGONIST = "protagonist"
    ANTAGONIST = "antagonist"
    ANTI_HERO = "anti_hero"
    SIDE_CHARACTER = "side_character"
    MINOR_CHARACTER = "minor_character"


class CharacterGender(str, Enum):
    MALE = "m"
    FEMALE = "f"


class HeightMetric(str, Enum):
    CENTIMETRES = "cm"
    INCHES = "in"
    FEET = "ft"


class WeightMetric(str, Enum):
    POUNDS = "lbs"
    KILOS = "kg"
    STONE = "st"


def book_link(resource_table: str, resource_column: str) -> Table:
    """Association table linking books to one resource table."""
    return Table(
        f"books_{resource_table}",
        Base.metadata,
        Column(
            "book_id",
            Integer,
            ForeignKey("books.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        Column(
            resource_column,
            Integer,
            ForeignKey(f"{resource_table}.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )


books_battles = book_link("battles", "battle_id")
books_characters = book_link("characters", "character_id")
books_creatures = book_link("creatures", "creature_id")
books_settings = book_link("settings", "setting_id")
books_transports = book_link("transports", "transport_id")
books_groups = book_link("groups", "group_id")
books_magic_systems = book_link("magic_systems", "magic_system_id")
books_technologies = book_link("technologies", "technology_id")
books_weapons = book_link("weapons", "weapon_id")
books_worlds = book_link("worlds", "world_id")


class OwnedResourceMixin(TimestampMixin):
    """Primary key and series link shared by every resource."""

    # never hand a deleted row's id to a new one
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(primary_key=True)

    @declared_attr
    def series_id(cls) -> Mapped[int | None]:
        return mapped_column(
            ForeignKey("series.id", ondelete="SET NULL"),
            nullable=True,
            index=True,
        )

    @declared_attr
    def series(cls) -> Mapped[Series | None]:
        return relationship("Series")

    def __repr__(self) -> str:
        label = getattr(self, "name", None) or getattr(self, "first_name", None)
        return f"<{type(self).__name__}(id={self.id}, name='{label}')>"


class NamedMixin:
    name: Mapped[str] = mapped_column(String(50))
    description: Mapped[str | None] = mapped_column(Text, nullable=True)


class ImageMixin:
    image: Mapped[str | None] = mapped_column(String(255), nullable=True)


class BeingMixin:
    """Physical traits shared by characters and creatures."""

    height: Mapped[float | None] = mapped_column(Float, nullable=True)
    height_metric: Mapped[HeightMetric | None] = mapped_column(
        enum_column(HeightMetric, "height_metric"), nullable=True
    )
    weight: Mapped[float | None] = mapped_column(Float, nullable=True)
    weight_metric: Mapped[WeightMetric | None] = mapped_column(
        enum_column(WeightMetric, "weight_metric"), nullable=True
    )
    physical_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    personality_description: Mapped[str | None] = mapped_column(Text, nullable=True)


class Battle(OwnedResourceMixin, NamedMixin, Base):
    __tablename__ = "battles"

    start: Mapped[str | None] = mapped_column(String(50), nullable=True)
    end: Mapped[str | None] = mapped_column(String(50), nullable=True)

    books: Mapped[list[Book]] = relationship(secondary=books_battles)


class Character(OwnedResourceMixin, BeingMixin, ImageMixin, Base):
    __tablename__ = "characters"

    first_name: Mapped[str] = mapped_column(String(35))
    last_name: Mapped[str | None] = mapped_column(String(35), nullable=True)
    title: Mapped[CharacterTitle | None] = mapped_column(
        enum_column(CharacterTitle, "character_title"), nullable=True
    )
    type: Mapped[CharacterType | None] = mapped_column(
        enum_column(CharacterType, "character_type"), nullable=True
    )
    age: Mapped[int | None] = mapped_column(Integer, nullable=True)
    gender: Mapped[CharacterGender | None] = mapped_column(
        enum_column(CharacterGender, "character_gender"), nullable=True
    )
    character_arc: Mapped[str | None] = mapped_column(Text, nullable=True)

    books: Mapped[list[Book]] = relationship(secondary=books_characters)


class Creature(OwnedResourceMixin, NamedMixin, BeingMixin, ImageMixin, Base):
    __tablename__ = "creatures"

    books: Mapped[list[Book]] = relationship(secondary=books_creatures)


class Setting(OwnedResourceMixin, NamedMixin, ImageMixin, Base):
    """A place: region, city, town, village, land or building."""

    __tablename__ = "settings"

    type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    size: Mapped[float | None] = mapped_column(Float, nullable=True)
    size_metric: Mapped[str | None] = mapped_column(String(20), nullable=True)

    books: Mapped[list[Book]] = relationship(secondary=books_settings)


class Transport(OwnedResourceMixin, NamedMixin, ImageMixin, Base):
    __tablename__ = "transports"

    books: Mapped[list[Book]] = relationship(secondary=books_transports)


class Group(OwnedResourceMixin, NamedMixin, ImageMixin, Base):
    __tablename__ = "groups"

    type: Mapped[str | None] = mapped_column(String(50), nullable=True)

    books: Mapped[list[Book]] = relationship(secondary=books_groups)


class MagicSystem(OwnedResourceMixin, NamedMixin, Base):
    __tablename__ = "magic_systems"

    rules: Mapped[str | None] = mapped_column(Text, nullable=True)

    books: Mapped[list[Book]] = relationship(secondary=books_magic_systems)


class Technology(OwnedResourceMixin, NamedMixin, ImageMixin, Base):
    __tablename__ = "technologies"

    inventor: Mapped[str | None] = mapped_column(String(50), nullable=True)

    books: Mapped[list[Book]] = relationship(secondary=books_technologies)


class Weapon(OwnedResourceMixin, NamedMixin, ImageMixin, Base):
    __tablename__ = "weapons"

    creator: Mapped[str | None] = mapped_column(String(50), nullable=True)
    wielder: Mapped[str | None] = mapped_column(String(50), nullable=True)
    forged: Mapped[str | None] = mapped_column(String(50), nullable=True)

    books: Mapped[list[Book]] = relationship(secondary=books_weapons)


class World(OwnedResourceMixin, NamedMixin, Base):
    __tablename__ = "worlds"

    books: Mapped[list[Book]] = relationship(secondary=books_worlds)


class SingleBookMixin:
    """Many-to-one book link for resources that live in exactly one book."""

    @declared_attr
    def book_id(cls) -> Mapped[int | None]:
        return mapped_column(
            ForeignKey("books.id", ondelete="SET NULL"),
            nullable=True,
            index=True,
        )

    @declared_attr
    def book(cls) -> Mapped[Book | None]:
        return relationship("Book")


class Plot(OwnedResourceMixin, NamedMixin, SingleBookMixin, Base):
    __tablename__ = "plots"

    type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    order: Mapped[int | None] = mapped_column(Integer, nullable=True)


class PlotReference(OwnedResourceMixin, SingleBookMixin, Base):
    """Pointer from a plot line to another entity, by kind and id."""

    __tablename__ = "plot_references"

    name: Mapped[str] = mapped_column(String(50))
    type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    reference_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
