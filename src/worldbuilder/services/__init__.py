"""Backend services for World Builder.

Everything between the HTTP layer and the ORM:

- gateway: thin async persistence wrappers (create / save / delete / find)
- ownership: decides whether a user may create in, or act on, a resource
- kinds: descriptors for each world-building resource family
- crud: the five standard operations, written once over a ResourceKind

Usage:
    from worldbuilder.services import BATTLES, ResourceService

    service = ResourceService(session, BATTLES)
    result = await service.list(user.id, series_id=1)
"""

from .crud import CrudResult, ResourceService
from .gateway import BookGateway, Gateway, ResourceGateway, SeriesGateway, UserGateway
from .kinds import (
    BATTLES,
    CHARACTERS,
    CREATURES,
    GROUPS,
    MAGIC_SYSTEMS,
    PLOT_REFERENCES,
    PLOTS,
    RESOURCE_KINDS,
    SETTINGS,
    TECHNOLOGIES,
    TRANSPORTS,
    WEAPONS,
    WORLDS,
    ResourceKind,
    get_kind,
)
from .ownership import (
    MissingOwnerError,
    OwnerAxis,
    OwnerMatch,
    OwnerNotFoundError,
    Owners,
    OwnershipError,
    OwnershipResolver,
    ResourceForbiddenError,
)

__all__ = [
    # CRUD
    "ResourceService",
    "CrudResult",
    # Gateways
    "Gateway",
    "UserGateway",
    "SeriesGateway",
    "BookGateway",
    "ResourceGateway",
    # Kinds
    "ResourceKind",
    "RESOURCE_KINDS",
    "get_kind",
    "BATTLES",
    "CHARACTERS",
    "CREATURES",
    "SETTINGS",
    "TRANSPORTS",
    "GROUPS",
    "MAGIC_SYSTEMS",
    "TECHNOLOGIES",
    "WEAPONS",
    "WORLDS",
    "PLOTS",
    "PLOT_REFERENCES",
    # Ownership
    "OwnershipResolver",
    "OwnershipError",
    "MissingOwnerError",
    "OwnerNotFoundError",
    "ResourceForbiddenError",
    "OwnerAxis",
    "OwnerMatch",
    "Owners",
]
