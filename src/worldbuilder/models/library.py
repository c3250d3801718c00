"""Series and book models.

The owner entities: every world-building resource is authorized through
a series or a book belonging to the requesting user.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import Enum as SQLEnum
from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .database import Base, TimestampMixin

if TYPE_CHECKING:
    from .user import User


class Genre(str, Enum):
    """Genres a series or book can be filed under."""

    FANTASY = "fantasy"
    SCI_FI = "sci-fi"
    HORROR = "horror"


def enum_column(enum_cls: type[Enum], name: str) -> SQLEnum:
    """SQL enum storing member values ("sci-fi") rather than names ("SCI_FI")."""
    return SQLEnum(
        enum_cls,
        name=name,
        values_callable=lambda members: [member.value for member in members],
    )


class Series(TimestampMixin, Base):
    """A series of books created by one user."""

    __tablename__ = "series"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
    )
    name: Mapped[str] = mapped_column(String(50))
    genre: Mapped[Genre | None] = mapped_column(enum_column(Genre, "genre"), nullable=True)

    # Relationships
    user: Mapped[User] = relationship("User", back_populates="series")
    books: Mapped[list[Book]] = relationship(
        "Book",
        back_populates="series",
        order_by="Book.id",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Series(id={self.id}, name='{self.name}')>"


class Book(TimestampMixin, Base):
    """A book, optionally part of a series."""

    __tablename__ = "books"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
    )
    series_id: Mapped[int | None] = mapped_column(
        ForeignKey("series.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(50))
    genre: Mapped[Genre | None] = mapped_column(enum_column(Genre, "genre"), nullable=True)

    # Relationships
    user: Mapped[User] = relationship("User", back_populates="books")
    series: Mapped[Series | None] = relationship("Series", back_populates="books")

    def __repr__(self) -> str:
        return f"<Book(id={self.id}, name='{self.name}')>"
