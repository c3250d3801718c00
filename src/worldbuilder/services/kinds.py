"""Registry of world-building resource kinds.

Each ``ResourceKind`` bundles what differs between resource families:
the ORM model, the URL segment, the human-readable labels used in
response messages, and the request/response schemas. Everything else
(ownership checks, persistence, envelopes) is shared.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from worldbuilder.models import contracts
from worldbuilder.models.database import Base
from worldbuilder.models.world import (
    Battle,
    Character,
    Creature,
    Group,
    MagicSystem,
    Plot,
    PlotReference,
    Setting,
    Technology,
    Transport,
    Weapon,
    World,
)


@dataclass(frozen=True)
class ResourceKind:
    """Descriptor for one resource family.

    Attributes:
        model: ORM model class
        path: URL path segment, e.g. ``"magic-systems"``
        label: Singular label, e.g. ``"Magic System"``
        plural: Plural label, e.g. ``"Magic Systems"``
        create_schema: Body schema for POST
        fields_schema: Partial schema for PATCH ``updatedData``
        response_schema: Whitelist of fields returned to clients
        book_relation: ``"books"`` for a many-to-many book link, ``"book"``
            for resources that live in a single book
    """

    model: type[Base]
    path: str
    label: str
    plural: str
    create_schema: type[BaseModel]
    fields_schema: type[BaseModel]
    response_schema: type[BaseModel]
    book_relation: str = "books"

    @property
    def single_book(self) -> bool:
        return self.book_relation == "book"

    @property
    def lower_label(self) -> str:
        return self.label.lower()

    def serialize(self, entity: Base) -> dict[str, Any]:
        """Whitelisted camelCase view of an entity."""
        return self.response_schema.model_validate(entity).model_dump(by_alias=True)


BATTLES = ResourceKind(
    model=Battle,
    path="battles",
    label="Battle",
    plural="Battles",
    create_schema=contracts.BattleCreate,
    fields_schema=contracts.BattleFields,
    response_schema=contracts.BattleOut,
)

CHARACTERS = ResourceKind(
    model=Character,
    path="characters",
    label="Character",
    plural="Characters",
    create_schema=contracts.CharacterCreate,
    fields_schema=contracts.CharacterFields,
    response_schema=contracts.CharacterOut,
)

CREATURES = ResourceKind(
    model=Creature,
    path="creatures",
    label="Creature",
    plural="Creatures",
    create_schema=contracts.CreatureCreate,
    fields_schema=contracts.CreatureFields,
    response_schema=contracts.CreatureOut,
)

SETTINGS = ResourceKind(
    model=Setting,
    path="settings",
    label="Setting",
    plural="Settings",
    create_schema=contracts.SettingCreate,
    fields_schema=contracts.SettingFields,
    response_schema=contracts.SettingOut,
)

TRANSPORTS = ResourceKind(
    model=Transport,
    path="transports",
    label="Transport",
    plural="Transports",
    create_schema=contracts.TransportCreate,
    fields_schema=contracts.TransportFields,
    response_schema=contracts.TransportOut,
)

GROUPS = ResourceKind(
    model=Group,
    path="groups",
    label="Group",
    plural="Groups",
    create_schema=contracts.GroupCreate,
    fields_schema=contracts.GroupFields,
    response_schema=contracts.GroupOut,
)

MAGIC_SYSTEMS = ResourceKind(
    model=MagicSystem,
    path="magic-systems",
    label="Magic System",
    plural="Magic Systems",
    create_schema=contracts.MagicSystemCreate,
    fields_schema=contracts.MagicSystemFields,
    response_schema=contracts.MagicSystemOut,
)

TECHNOLOGIES = ResourceKind(
    model=Technology,
    path="technologies",
    label="Technology",
    plural="Technologies",
    create_schema=contracts.TechnologyCreate,
    fields_schema=contracts.TechnologyFields,
    response_schema=contracts.TechnologyOut,
)

WEAPONS = ResourceKind(
    model=Weapon,
    path="weapons",
    label="Weapon",
    plural="Weapons",
    create_schema=contracts.WeaponCreate,
    fields_schema=contracts.WeaponFields,
    response_schema=contracts.WeaponOut,
)

WORLDS = ResourceKind(
    model=World,
    path="worlds",
    label="World",
    plural="Worlds",
    create_schema=contracts.WorldCreate,
    fields_schema=contracts.WorldFields,
    response_schema=contracts.WorldOut,
)

PLOTS = ResourceKind(
    model=Plot,
    path="plots",
    label="Plot",
    plural="Plots",
    create_schema=contracts.PlotCreate,
    fields_schema=contracts.PlotFields,
    response_schema=contracts.PlotOut,
    book_relation="book",
)

PLOT_REFERENCES = ResourceKind(
    model=PlotReference,
    path="plot-references",
    label="Plot Reference",
    plural="Plot References",
    create_schema=contracts.PlotReferenceCreate,
    fields_schema=contracts.PlotReferenceFields,
    response_schema=contracts.PlotReferenceOut,
    book_relation="book",
)

RESOURCE_KINDS: tuple[ResourceKind, ...] = (
    BATTLES,
    CHARACTERS,
    CREATURES,
    SETTINGS,
    TRANSPORTS,
    GROUPS,
    MAGIC_SYSTEMS,
    TECHNOLOGIES,
    WEAPONS,
    WORLDS,
    PLOTS,
    PLOT_REFERENCES,
)


def get_kind(path: str) -> ResourceKind:
    """Look up a kind by its URL path segment.

    Raises:
        KeyError: If no kind is registered under ``path``
    """
    for kind in RESOURCE_KINDS:
        if kind.path == path:
            return kind
    raise KeyError(path)
