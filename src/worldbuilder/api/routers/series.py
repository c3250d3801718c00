"""Series router.

A series is an owner entity: it belongs to exactly one user and is only
visible to that user.
"""

from fastapi import APIRouter, status

from worldbuilder.api.deps import CurrentUser, DBSession, ResourceIdPath
from worldbuilder.api.exceptions import ForbiddenError
from worldbuilder.models.contracts import (
    DataResponse,
    MessageResponse,
    SeriesCreate,
    SeriesDetail,
    SeriesFields,
    SeriesOut,
    UpdateRequest,
)
from worldbuilder.models.library import Series
from worldbuilder.services.gateway import SeriesGateway

router = APIRouter()


async def _get_owned_series(
    gateway: SeriesGateway, user_id: int, series_id: int, with_books: bool = False
) -> Series:
    series = await gateway.get_by_user(user_id, series_id, with_books=with_books)
    if series is None:
        raise ForbiddenError()
    return series


@router.get("", response_model=DataResponse[list[SeriesOut]])
async def list_series(user: CurrentUser, db: DBSession) -> DataResponse[list[SeriesOut]]:
    """List the caller's series."""
    series = await SeriesGateway(db).list_by_user(user.id)
    return DataResponse(
        message="Series by user id fetched.",
        data=[SeriesOut.model_validate(item) for item in series],
    )


@router.post(
    "",
    response_model=DataResponse[SeriesOut],
    status_code=status.HTTP_201_CREATED,
)
async def create_series(
    request: SeriesCreate,
    user: CurrentUser,
    db: DBSession,
) -> DataResponse[SeriesOut]:
    """Create a series owned by the caller."""
    gateway = SeriesGateway(db)
    series = gateway.create({**request.model_dump(exclude_unset=True), "user_id": user.id})
    await gateway.save(series)
    return DataResponse(message="Series created.", data=SeriesOut.model_validate(series))


@router.get("/{series_id}", response_model=DataResponse[SeriesDetail])
async def get_series(
    user: CurrentUser,
    db: DBSession,
    series_id: ResourceIdPath,
) -> DataResponse[SeriesDetail]:
    """Get one series with its books.

    Raises:
        ForbiddenError: If the series is not the caller's
    """
    series = await _get_owned_series(SeriesGateway(db), user.id, series_id, with_books=True)
    return DataResponse(
        message="Series by id fetched.",
        data=SeriesDetail.model_validate(series),
    )


@router.patch("/{series_id}", response_model=DataResponse[SeriesOut])
async def update_series(
    request: UpdateRequest[SeriesFields],
    user: CurrentUser,
    db: DBSession,
    series_id: ResourceIdPath,
) -> DataResponse[SeriesOut]:
    """Apply ``updatedData`` to one of the caller's series.

    Raises:
        ForbiddenError: If the series is not the caller's
    """
    gateway = SeriesGateway(db)
    series = await _get_owned_series(gateway, user.id, series_id)

    for field, value in request.updated_data.model_dump(exclude_unset=True).items():
        setattr(series, field, value)
    await gateway.save(series)

    return DataResponse(message="Series updated.", data=SeriesOut.model_validate(series))


@router.delete("/{series_id}", response_model=MessageResponse)
async def delete_series(
    user: CurrentUser,
    db: DBSession,
    series_id: ResourceIdPath,
) -> MessageResponse:
    """Delete one of the caller's series.

    Books and resources in the series are kept and lose their series link.

    Raises:
        ForbiddenError: If the series is not the caller's
    """
    gateway = SeriesGateway(db)
    await _get_owned_series(gateway, user.id, series_id)
    await gateway.delete(series_id)
    return MessageResponse(message="Series deleted.")
