"""User account model.

Users own series and books; every other entity is reached through them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .database import Base, TimestampMixin

if TYPE_CHECKING:
    from .library import Book, Series


class User(TimestampMixin, Base):
    """User account model.

    Stores the login credentials of a world-builder.
    """

    __tablename__ = "users"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(primary_key=True)
    username: Mapped[str] = mapped_column(String(35), unique=True, index=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    hashed_password: Mapped[str] = mapped_column(String(255))

    # Relationships
    series: Mapped[list[Series]] = relationship(
        "Series",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    books: Mapped[list[Book]] = relationship(
        "Book",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
