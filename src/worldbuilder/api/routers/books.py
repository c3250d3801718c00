"""Books router.

Books belong to one user and optionally sit inside one of that user's
series.
"""

import logging

from fastapi import APIRouter, status

from worldbuilder.api.deps import CurrentUser, DBSession, ResourceIdPath, SeriesIdQuery
from worldbuilder.api.exceptions import ForbiddenError
from worldbuilder.models.contracts import (
    BookCreate,
    BookDetail,
    BookFields,
    BookOut,
    DataResponse,
    MessageResponse,
    UpdateRequest,
)
from worldbuilder.models.library import Book
from worldbuilder.services.gateway import BookGateway, SeriesGateway

logger = logging.getLogger(__name__)

router = APIRouter()


async def _get_owned_book(gateway: BookGateway, user_id: int, book_id: int) -> Book:
    book = await gateway.get_by_user(user_id, book_id)
    if book is None:
        raise ForbiddenError()
    return book


@router.get("", response_model=DataResponse[list[BookOut]])
async def list_books(
    user: CurrentUser,
    db: DBSession,
    series_id: SeriesIdQuery = None,
) -> DataResponse[list[BookOut]]:
    """List the caller's books, optionally only those in one series."""
    gateway = BookGateway(db)

    if series_id is not None:
        books = await gateway.list_by_user_and_series(user.id, series_id)
        message = "Books by user id and series id fetched."
    else:
        books = await gateway.list_by_user(user.id)
        message = "Books by user id fetched."

    return DataResponse(message=message, data=[BookOut.model_validate(book) for book in books])


@router.post(
    "",
    response_model=DataResponse[BookOut],
    status_code=status.HTTP_201_CREATED,
)
async def create_book(
    request: BookCreate,
    user: CurrentUser,
    db: DBSession,
    series_id: SeriesIdQuery = None,
) -> DataResponse[BookOut]:
    """Create a book, placing it in ``seriesId`` when that series is the caller's.

    A ``seriesId`` the caller does not own is ignored and the book is
    created outside any series.
    """
    series = None
    if series_id is not None:
        series = await SeriesGateway(db).get_by_user(user.id, series_id)
        if series is None:
            logger.info("Ignoring series %s not owned by user %s", series_id, user.id)

    gateway = BookGateway(db)
    book = gateway.create({**request.model_dump(exclude_unset=True), "user_id": user.id})
    book.series = series
    await gateway.save(book)

    return DataResponse(message="Book created.", data=BookOut.model_validate(book))


@router.get("/{book_id}", response_model=DataResponse[BookDetail])
async def get_book(
    user: CurrentUser,
    db: DBSession,
    book_id: ResourceIdPath,
) -> DataResponse[BookDetail]:
    """Get one of the caller's books.

    Raises:
        ForbiddenError: If the book is not the caller's
    """
    book = await _get_owned_book(BookGateway(db), user.id, book_id)
    return DataResponse(message="Book by id fetched.", data=BookDetail.model_validate(book))


@router.patch("/{book_id}", response_model=DataResponse[BookOut])
async def update_book(
    request: UpdateRequest[BookFields],
    user: CurrentUser,
    db: DBSession,
    book_id: ResourceIdPath,
) -> DataResponse[BookOut]:
    """Apply ``updatedData`` to one of the caller's books.

    Raises:
        ForbiddenError: If the book is not the caller's
    """
    gateway = BookGateway(db)
    book = await _get_owned_book(gateway, user.id, book_id)

    for field, value in request.updated_data.model_dump(exclude_unset=True).items():
        setattr(book, field, value)
    await gateway.save(book)

    return DataResponse(message="Book updated.", data=BookOut.model_validate(book))


@router.delete("/{book_id}", response_model=MessageResponse)
async def delete_book(
    user: CurrentUser,
    db: DBSession,
    book_id: ResourceIdPath,
) -> MessageResponse:
    """Delete one of the caller's books and its resource links.

    Raises:
        ForbiddenError: If the book is not the caller's
    """
    gateway = BookGateway(db)
    await _get_owned_book(gateway, user.id, book_id)
    await gateway.delete(book_id)
    return MessageResponse(message="Book deleted.")
