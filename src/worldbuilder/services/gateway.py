"""Persistence gateways.

Thin async wrappers around an ``AsyncSession``, one per table family. They
expose the small vocabulary the rest of the service needs: ``create``
(build an unsaved instance), ``save``, ``delete`` by id, and lookups
filtered by the owning user through a series or a book.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from worldbuilder.models.database import Base
from worldbuilder.models.library import Book, Series
from worldbuilder.models.user import User

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class Gateway(Generic[ModelT]):
    """create / save / delete for a single mapped model."""

    model: type[ModelT]

    def __init__(self, session: AsyncSession, model: type[ModelT] | None = None):
        self.session = session
        if model is not None:
            self.model = model

    def create(self, data: Mapping[str, Any]) -> ModelT:
        """Build an unsaved instance from a mapping of attribute values."""
        return self.model(**data)

    async def save(self, entity: ModelT) -> ModelT:
        """Persist a new or modified instance and commit."""
        self.session.add(entity)
        await self.session.commit()
        return entity

    async def get(self, entity_id: int) -> ModelT | None:
        return await self.session.get(self.model, entity_id)

    async def delete(self, entity_id: int) -> bool:
        """Hard delete by id.

        Returns:
            True if a row was deleted, False if none matched
        """
        entity = await self.session.get(self.model, entity_id)
        if entity is None:
            return False
        await self.session.delete(entity)
        await self.session.commit()
        logger.debug("Deleted %s %s", self.model.__name__, entity_id)
        return True


class UserGateway(Gateway[User]):
    model = User

    async def get_by_email(self, email: str) -> User | None:
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> User | None:
        result = await self.session.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()


class SeriesGateway(Gateway[Series]):
    model = Series

    async def list_by_user(self, user_id: int) -> list[Series]:
        result = await self.session.execute(
            select(Series).where(Series.user_id == user_id).order_by(Series.id)
        )
        return list(result.scalars().all())

    async def get_by_user(
        self,
        user_id: int,
        series_id: int,
        with_books: bool = False,
    ) -> Series | None:
        """Series with this id, if it belongs to the user."""
        query = select(Series).where(Series.id == series_id, Series.user_id == user_id)
        if with_books:
            query = query.options(selectinload(Series.books))
        result = await self.session.execute(query)
        return result.scalar_one_or_none()


class BookGateway(Gateway[Book]):
    model = Book

    async def list_by_user(self, user_id: int) -> list[Book]:
        result = await self.session.execute(
            select(Book).where(Book.user_id == user_id).order_by(Book.id)
        )
        return list(result.scalars().all())

    async def list_by_user_and_series(self, user_id: int, series_id: int) -> list[Book]:
        result = await self.session.execute(
            select(Book)
            .where(Book.user_id == user_id, Book.series_id == series_id)
            .order_by(Book.id)
        )
        return list(result.scalars().all())

    async def get_by_user(self, user_id: int, book_id: int) -> Book | None:
        """Book with this id, if it belongs to the user."""
        result = await self.session.execute(
            select(Book).where(Book.id == book_id, Book.user_id == user_id)
        )
        return result.scalar_one_or_none()


class ResourceGateway(Gateway[ModelT]):
    """Queries for a world-building resource reached through its owners.

    The model must expose a ``series`` many-to-one relationship and a book
    relationship named by ``book_relation``: ``books`` (many-to-many) or
    ``book`` (many-to-one).
    """

    def __init__(
        self,
        session: AsyncSession,
        model: type[ModelT] | None = None,
        book_relation: str = "books",
    ):
        super().__init__(session, model)
        self.book_relation = book_relation

    @property
    def _book_link(self):
        return getattr(self.model, self.book_relation)

    def _by_series(self, user_id: int, series_id: int):
        return (
            select(self.model)
            .join(self.model.series)
            .where(Series.id == series_id, Series.user_id == user_id)
        )

    def _by_book(self, user_id: int, book_id: int):
        return (
            select(self.model)
            .join(self._book_link)
            .where(Book.id == book_id, Book.user_id == user_id)
        )

    def _with_relations(self, query):
        return query.options(
            selectinload(self.model.series),
            selectinload(self._book_link),
        )

    async def list_by_series(self, user_id: int, series_id: int) -> list[ModelT]:
        result = await self.session.execute(
            self._by_series(user_id, series_id).order_by(self.model.id)
        )
        return list(result.scalars().all())

    async def list_by_book(self, user_id: int, book_id: int) -> list[ModelT]:
        result = await self.session.execute(
            self._by_book(user_id, book_id).order_by(self.model.id)
        )
        return list(result.scalars().all())

    async def get_by_series(
        self,
        resource_id: int,
        user_id: int,
        series_id: int,
        with_relations: bool = False,
    ) -> ModelT | None:
        """Resource with this id, if it sits in the user's series."""
        query = self._by_series(user_id, series_id).where(self.model.id == resource_id)
        if with_relations:
            query = self._with_relations(query)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def get_by_book(
        self,
        resource_id: int,
        user_id: int,
        book_id: int,
        with_relations: bool = False,
    ) -> ModelT | None:
        """Resource with this id, if it is linked to the user's book."""
        query = self._by_book(user_id, book_id).where(self.model.id == resource_id)
        if with_relations:
            query = self._with_relations(query)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()
