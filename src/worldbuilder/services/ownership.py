"""Ownership resolution for series- and book-scoped resources.

A resource is only reachable through a series or a book that belongs to
the requesting user. Callers pass the ``seriesId`` and/or ``bookId`` they
were given; each supplied id is checked independently and the request
proceeds when either axis matches.

When both axes match, the series match is returned. Within one session
both lookups yield the same identity-mapped instance, so the choice only
matters for which axis is reported back to the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Generic

from worldbuilder.models.library import Book, Series
from worldbuilder.services.gateway import BookGateway, ModelT, ResourceGateway, SeriesGateway

logger = logging.getLogger(__name__)

MISSING_OWNER_MESSAGE = "At least one of seriesId or bookId query param must be passed."
FORBIDDEN_MESSAGE = "Forbidden account action."


class OwnershipError(Exception):
    """Base exception for ownership resolution failures."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class MissingOwnerError(OwnershipError):
    """Neither a series id nor a book id was supplied."""

    def __init__(self) -> None:
        super().__init__(MISSING_OWNER_MESSAGE)


class OwnerNotFoundError(OwnershipError):
    """None of the supplied owner ids belong to the user."""

    def __init__(self, resource_label: str):
        self.resource_label = resource_label
        super().__init__(
            f"A {resource_label.lower()} must be created belonging to one of your series or books."
        )


class ResourceForbiddenError(OwnershipError):
    """The resource is not reachable through any supplied owner of the user."""

    def __init__(self) -> None:
        super().__init__(FORBIDDEN_MESSAGE)


class OwnerAxis(str, Enum):
    """Which owner a resource was matched through."""

    SERIES = "series"
    BOOK = "book"


@dataclass
class Owners:
    """Owner entities a new resource will be attached to."""

    series: Series | None = None
    book: Book | None = None


@dataclass
class OwnerMatch(Generic[ModelT]):
    """A resource found under one of the user's owners."""

    resource: ModelT
    axis: OwnerAxis


def require_owner_param(series_id: int | None, book_id: int | None) -> None:
    """Raise MissingOwnerError unless at least one owner id was given."""
    if series_id is None and book_id is None:
        raise MissingOwnerError()


class OwnershipResolver:
    """Decides whether a user may create in, or act on, series/book scoped data."""

    def __init__(self, series: SeriesGateway, books: BookGateway):
        self.series = series
        self.books = books

    async def resolve_owner_for_create(
        self,
        resource_label: str,
        user_id: int,
        series_id: int | None = None,
        book_id: int | None = None,
    ) -> Owners:
        """Find the user's series and/or book a new resource should belong to.

        Args:
            resource_label: Human-readable resource name for error messages
            user_id: Requesting user
            series_id: Optional series to attach to
            book_id: Optional book to attach to

        Returns:
            The owners that were found; at least one is set

        Raises:
            MissingOwnerError: If neither id is supplied
            OwnerNotFoundError: If no supplied id belongs to the user
        """
        require_owner_param(series_id, book_id)

        owners = Owners()
        if series_id is not None:
            owners.series = await self.series.get_by_user(user_id, series_id)
        if book_id is not None:
            owners.book = await self.books.get_by_user(user_id, book_id)

        if owners.series is None and owners.book is None:
            logger.info(
                "No owner found for new %s (user=%s series=%s book=%s)",
                resource_label,
                user_id,
                series_id,
                book_id,
            )
            raise OwnerNotFoundError(resource_label)
        return owners

    async def resolve_owner_for_access(
        self,
        resources: ResourceGateway[ModelT],
        resource_id: int,
        user_id: int,
        series_id: int | None = None,
        book_id: int | None = None,
        with_relations: bool = False,
    ) -> OwnerMatch[ModelT]:
        """Find a resource reachable through the user's series or book.

        Args:
            resources: Gateway for the resource kind
            resource_id: Resource to look up
            user_id: Requesting user
            series_id: Optional series the resource should belong to
            book_id: Optional book the resource should be linked to
            with_relations: Eager-load the series and books relationships

        Returns:
            The match, preferring the series axis when both match

        Raises:
            MissingOwnerError: If neither id is supplied
            ResourceForbiddenError: If no supplied axis matches
        """
        require_owner_param(series_id, book_id)

        series_match = None
        book_match = None
        if series_id is not None:
            series_match = await resources.get_by_series(
                resource_id, user_id, series_id, with_relations
            )
        if book_id is not None:
            book_match = await resources.get_by_book(
                resource_id, user_id, book_id, with_relations
            )

        if series_match is not None:
            return OwnerMatch(series_match, OwnerAxis.SERIES)
        if book_match is not None:
            return OwnerMatch(book_match, OwnerAxis.BOOK)

        logger.info(
            "Forbidden access to %s %s (user=%s series=%s book=%s)",
            resources.model.__name__,
            resource_id,
            user_id,
            series_id,
            book_id,
        )
        raise ResourceForbiddenError()
