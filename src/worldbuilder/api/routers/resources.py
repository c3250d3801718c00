"""Routers for series/book scoped world-building resources.

One router per ``ResourceKind``, all built by ``build_resource_router``.
Every route takes ``seriesId`` and/or ``bookId`` query parameters naming
the owner the caller is acting through.
"""

from fastapi import APIRouter, status

from worldbuilder.api.deps import (
    BookIdQuery,
    CurrentUser,
    DBSession,
    ResourceIdPath,
    SeriesIdQuery,
)
from worldbuilder.models.contracts import DataResponse, MessageResponse, UpdateRequest
from worldbuilder.services.crud import ResourceService
from worldbuilder.services.kinds import RESOURCE_KINDS, ResourceKind


def build_resource_router(kind: ResourceKind) -> APIRouter:
    """Create the list / create / get / update / delete routes for one kind.

    Args:
        kind: Resource kind descriptor

    Returns:
        Router to mount under ``/api/<kind.path>``
    """
    router = APIRouter()

    CreateBody = kind.create_schema
    UpdateBody = UpdateRequest[kind.fields_schema]
    Item = kind.response_schema

    # =========================================================================
    # Collection
    # =========================================================================

    @router.get(
        "",
        response_model=DataResponse[list[Item]],
        name=f"list_{kind.model.__tablename__}",
    )
    async def list_resources(
        user: CurrentUser,
        db: DBSession,
        series_id: SeriesIdQuery = None,
        book_id: BookIdQuery = None,
    ):
        result = await ResourceService(db, kind).list(user.id, series_id, book_id)
        return {"message": result.message, "data": result.data}

    @router.post(
        "",
        response_model=DataResponse[Item],
        status_code=status.HTTP_201_CREATED,
        name=f"create_{kind.model.__tablename__}",
    )
    async def create_resource(
        request: CreateBody,
        user: CurrentUser,
        db: DBSession,
        series_id: SeriesIdQuery = None,
        book_id: BookIdQuery = None,
    ):
        result = await ResourceService(db, kind).create(user.id, request, series_id, book_id)
        return {"message": result.message, "data": result.data}

    # =========================================================================
    # Single resource
    # =========================================================================

    @router.get(
        "/{resource_id}",
        response_model=DataResponse[Item],
        name=f"get_{kind.model.__tablename__}",
    )
    async def get_resource(
        user: CurrentUser,
        db: DBSession,
        resource_id: ResourceIdPath,
        series_id: SeriesIdQuery = None,
        book_id: BookIdQuery = None,
    ):
        result = await ResourceService(db, kind).get(resource_id, user.id, series_id, book_id)
        return {"message": result.message, "data": result.data}

    @router.patch(
        "/{resource_id}",
        response_model=DataResponse[Item],
        name=f"update_{kind.model.__tablename__}",
    )
    async def update_resource(
        request: UpdateBody,
        user: CurrentUser,
        db: DBSession,
        resource_id: ResourceIdPath,
        series_id: SeriesIdQuery = None,
        book_id: BookIdQuery = None,
    ):
        result = await ResourceService(db, kind).update(
            resource_id, user.id, request.updated_data, series_id, book_id
        )
        return {"message": result.message, "data": result.data}

    @router.delete(
        "/{resource_id}",
        response_model=MessageResponse,
        name=f"delete_{kind.model.__tablename__}",
    )
    async def delete_resource(
        user: CurrentUser,
        db: DBSession,
        resource_id: ResourceIdPath,
        series_id: SeriesIdQuery = None,
        book_id: BookIdQuery = None,
    ):
        result = await ResourceService(db, kind).delete(resource_id, user.id, series_id, book_id)
        return {"message": result.message}

    return router


resource_routers: dict[str, APIRouter] = {
    kind.path: build_resource_router(kind) for kind in RESOURCE_KINDS
}
