"""Generic CRUD orchestration for series/book scoped resources.

``ResourceService`` implements list / get / create / update / delete once,
parameterized by a ``ResourceKind``. Every operation runs the ownership
check first and then talks to the resource gateway.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from .gateway import BookGateway, ResourceGateway, SeriesGateway
from .kinds import ResourceKind
from .ownership import OwnerAxis, OwnershipResolver, require_owner_param

logger = logging.getLogger(__name__)


@dataclass
class CrudResult:
    """Outcome of an operation: the response message and optional payload."""

    message: str
    data: Any = None


class ResourceService:
    """Five standard operations for one resource kind.

    Usage:
        service = ResourceService(session, BATTLES)
        result = await service.create(user.id, body, series_id=1)
    """

    def __init__(self, session: AsyncSession, kind: ResourceKind):
        self.kind = kind
        self.resources: ResourceGateway = ResourceGateway(
            session, kind.model, kind.book_relation
        )
        self.ownership = OwnershipResolver(SeriesGateway(session), BookGateway(session))

    async def list(
        self,
        user_id: int,
        series_id: int | None = None,
        book_id: int | None = None,
    ) -> CrudResult:
        """All resources of this kind under one of the user's owners.

        The series axis is used when both ids are given.

        Raises:
            MissingOwnerError: If neither id is supplied
        """
        require_owner_param(series_id, book_id)

        if series_id is not None:
            entities = await self.resources.list_by_series(user_id, series_id)
            axis = OwnerAxis.SERIES
        else:
            entities = await self.resources.list_by_book(user_id, book_id)
            axis = OwnerAxis.BOOK

        return CrudResult(
            message=f"{self.kind.plural} by user id and {axis.value} id fetched.",
            data=[self.kind.serialize(entity) for entity in entities],
        )

    async def get(
        self,
        resource_id: int,
        user_id: int,
        series_id: int | None = None,
        book_id: int | None = None,
    ) -> CrudResult:
        """One resource, if reachable through a supplied owner.

        Raises:
            MissingOwnerError: If neither id is supplied
            ResourceForbiddenError: If the resource is not under a supplied owner
        """
        match = await self.ownership.resolve_owner_for_access(
            self.resources, resource_id, user_id, series_id, book_id
        )
        return CrudResult(
            message=f"{self.kind.label} by id and {match.axis.value} id fetched.",
            data=self.kind.serialize(match.resource),
        )

    async def create(
        self,
        user_id: int,
        payload: BaseModel,
        series_id: int | None = None,
        book_id: int | None = None,
    ) -> CrudResult:
        """Create a resource linked to whichever supplied owners were found.

        Args:
            user_id: Requesting user
            payload: Validated create body for this kind
            series_id: Optional owning series
            book_id: Optional owning book

        Returns:
            Result with the whitelisted view of the new resource

        Raises:
            MissingOwnerError: If neither id is supplied
            OwnerNotFoundError: If no supplied owner belongs to the user
        """
        owners = await self.ownership.resolve_owner_for_create(
            self.kind.lower_label, user_id, series_id, book_id
        )

        entity = self.resources.create(payload.model_dump(exclude_unset=True))
        entity.series = owners.series
        if self.kind.single_book:
            entity.book = owners.book
        else:
            entity.books = [owners.book] if owners.book is not None else []
        await self.resources.save(entity)

        logger.info(
            "Created %s %s (user=%s series=%s book=%s)",
            self.kind.lower_label,
            entity.id,
            user_id,
            series_id,
            book_id,
        )
        return CrudResult(
            message=f"{self.kind.label} created.",
            data=self.kind.serialize(entity),
        )

    async def update(
        self,
        resource_id: int,
        user_id: int,
        updated_data: BaseModel,
        series_id: int | None = None,
        book_id: int | None = None,
    ) -> CrudResult:
        """Apply a partial update on top of the current resource.

        Only fields present in ``updated_data`` are written; everything else
        keeps its stored value.

        Raises:
            MissingOwnerError: If neither id is supplied
            ResourceForbiddenError: If the resource is not under a supplied owner
        """
        match = await self.ownership.resolve_owner_for_access(
            self.resources, resource_id, user_id, series_id, book_id
        )

        entity = match.resource
        for field, value in updated_data.model_dump(exclude_unset=True).items():
            setattr(entity, field, value)
        await self.resources.save(entity)

        return CrudResult(
            message=f"{self.kind.label} updated.",
            data=self.kind.serialize(entity),
        )

    async def delete(
        self,
        resource_id: int,
        user_id: int,
        series_id: int | None = None,
        book_id: int | None = None,
    ) -> CrudResult:
        """Hard delete a resource reachable through a supplied owner.

        Raises:
            MissingOwnerError: If neither id is supplied
            ResourceForbiddenError: If the resource is not under a supplied owner
        """
        await self.ownership.resolve_owner_for_access(
            self.resources, resource_id, user_id, series_id, book_id
        )
        await self.resources.delete(resource_id)

        logger.info("Deleted %s %s (user=%s)", self.kind.lower_label, resource_id, user_id)
        return CrudResult(message=f"{self.kind.label} deleted.")
