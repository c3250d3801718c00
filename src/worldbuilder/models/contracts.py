"""Wire contracts for the REST API.

Pydantic models for request bodies and response payloads. Keys are
camelCase on the wire (``firstName``, ``updatedData``) and snake_case in
Python. Response models are the whitelist of fields a client may see;
relation objects are never exposed through them.
"""

from __future__ import annotations

from typing import ClassVar, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from worldbuilder.core.security import is_strong_password

from .library import Genre
from .world import (
    CharacterGender,
    CharacterTitle,
    CharacterType,
    HeightMetric,
    WeightMetric,
)

DataT = TypeVar("DataT")
FieldsT = TypeVar("FieldsT", bound=BaseModel)

UPDATED_DATA_REQUIRED = "updatedData field is required with data."
WEAK_PASSWORD = (
    "password must be at least 8 characters with a lowercase letter, "
    "an uppercase letter, a number and a symbol."
)


class CamelModel(BaseModel):
    """Base model reading and writing camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# =============================================================================
# Envelopes
# =============================================================================


class MessageResponse(BaseModel):
    """Response carrying only a message."""

    message: str


class DataResponse(BaseModel, Generic[DataT]):
    """Response carrying a message and a payload."""

    message: str
    data: DataT


class UpdateRequest(CamelModel, Generic[FieldsT]):
    """PATCH body: ``{"updatedData": {...}}`` with at least one field."""

    updated_data: FieldsT

    @field_validator("updated_data")
    @classmethod
    def _has_data(cls, value: FieldsT) -> FieldsT:
        if not value.model_fields_set:
            raise ValueError(UPDATED_DATA_REQUIRED)
        return value


class EditableFields(CamelModel):
    """Partial field set used by ``updatedData``.

    Fields listed in ``not_null`` may be omitted but never set to null.
    """

    not_null: ClassVar[tuple[str, ...]] = ("name",)

    @model_validator(mode="after")
    def _reject_null_required(self) -> EditableFields:
        for field_name in self.not_null:
            if field_name in self.model_fields_set and getattr(self, field_name) is None:
                raise ValueError(f"{to_camel(field_name)} cannot be null.")
        return self


# =============================================================================
# Users
# =============================================================================


class Credentials(BaseModel):
    email: EmailStr
    password: str = Field(..., max_length=20)

    @field_validator("password")
    @classmethod
    def _strong_password(cls, value: str) -> str:
        if not is_strong_password(value):
            raise ValueError(WEAK_PASSWORD)
        return value


class SignupRequest(Credentials):
    """User registration request."""

    username: str = Field(..., min_length=1, max_length=35)


class LoginRequest(Credentials):
    """User login request."""


class DeleteAccountRequest(BaseModel):
    id: int


# =============================================================================
# Series and books
# =============================================================================


class SeriesFields(EditableFields):
    name: str | None = Field(None, min_length=1, max_length=50)
    genre: Genre | None = None


class SeriesCreate(SeriesFields):
    name: str = Field(..., min_length=1, max_length=50)


class SeriesOut(CamelModel):
    id: int
    name: str
    genre: Genre | None = None


class BookFields(EditableFields):
    name: str | None = Field(None, min_length=1, max_length=50)
    genre: Genre | None = None


class BookCreate(BookFields):
    name: str = Field(..., min_length=1, max_length=50)


class BookOut(CamelModel):
    id: int
    name: str
    genre: Genre | None = None


class SeriesDetail(SeriesOut):
    books: list[BookOut] = Field(default_factory=list)


class BookDetail(BookOut):
    series_id: int | None = None


# =============================================================================
# Battles
# =============================================================================


class BattleFields(EditableFields):
    name: str | None = Field(None, min_length=1, max_length=50)
    start: str | None = Field(None, max_length=50)
    end: str | None = Field(None, max_length=50)
    description: str | None = None


class BattleCreate(BattleFields):
    name: str = Field(..., min_length=1, max_length=50)


class BattleOut(CamelModel):
    id: int
    name: str
    start: str | None = None
    end: str | None = None
    description: str | None = None


# =============================================================================
# Characters and creatures
# =============================================================================


class BeingFields(EditableFields):
    height: float | None = None
    height_metric: HeightMetric | None = None
    weight: float | None = None
    weight_metric: WeightMetric | None = None
    physical_description: str | None = None
    personality_description: str | None = None
    image: str | None = Field(None, max_length=255)


class CharacterFields(BeingFields):
    not_null: ClassVar[tuple[str, ...]] = ("first_name",)

    first_name: str | None = Field(None, min_length=1, max_length=35)
    last_name: str | None = Field(None, max_length=35)
    title: CharacterTitle | None = None
    type: CharacterType | None = None
    age: int | None = Field(None, ge=0)
    gender: CharacterGender | None = None
    character_arc: str | None = None


class CharacterCreate(CharacterFields):
    first_name: str = Field(..., min_length=1, max_length=35)


class CharacterOut(CamelModel):
    id: int
    first_name: str
    type: CharacterType | None = None


class CreatureFields(BeingFields):
    name: str | None = Field(None, min_length=1, max_length=50)
    description: str | None = None


class CreatureCreate(CreatureFields):
    name: str = Field(..., min_length=1, max_length=50)


class CreatureOut(CamelModel):
    id: int
    name: str
    physical_description: str | None = None
    personality_description: str | None = None


# =============================================================================
# Settings and transports
# =============================================================================


class SettingFields(EditableFields):
    name: str | None = Field(None, min_length=1, max_length=50)
    description: str | None = None
    type: str | None = Field(None, max_length=50)
    size: float | None = None
    size_metric: str | None = Field(None, max_length=20)
    image: str | None = Field(None, max_length=255)


class SettingCreate(SettingFields):
    name: str = Field(..., min_length=1, max_length=50)


class SettingOut(CamelModel):
    id: int
    name: str
    description: str | None = None
    type: str | None = None


class TransportFields(EditableFields):
    name: str | None = Field(None, min_length=1, max_length=50)
    description: str | None = None
    image: str | None = Field(None, max_length=255)


class TransportCreate(TransportFields):
    name: str = Field(..., min_length=1, max_length=50)


class TransportOut(CamelModel):
    id: int
    name: str
    description: str | None = None


# =============================================================================
# Groups, magic systems, technologies, weapons, worlds
# =============================================================================


class GroupFields(EditableFields):
    name: str | None = Field(None, min_length=1, max_length=50)
    description: str | None = None
    type: str | None = Field(None, max_length=50)
    image: str | None = Field(None, max_length=255)


class GroupCreate(GroupFields):
    name: str = Field(..., min_length=1, max_length=50)


class GroupOut(CamelModel):
    id: int
    name: str
    type: str | None = None
    description: str | None = None


class MagicSystemFields(EditableFields):
    name: str | None = Field(None, min_length=1, max_length=50)
    description: str | None = None
    rules: str | None = None


class MagicSystemCreate(MagicSystemFields):
    name: str = Field(..., min_length=1, max_length=50)


class MagicSystemOut(CamelModel):
    id: int
    name: str
    description: str | None = None
    rules: str | None = None


class TechnologyFields(EditableFields):
    name: str | None = Field(None, min_length=1, max_length=50)
    description: str | None = None
    inventor: str | None = Field(None, max_length=50)
    image: str | None = Field(None, max_length=255)


class TechnologyCreate(TechnologyFields):
    name: str = Field(..., min_length=1, max_length=50)


class TechnologyOut(CamelModel):
    id: int
    name: str
    description: str | None = None
    inventor: str | None = None


class WeaponFields(EditableFields):
    name: str | None = Field(None, min_length=1, max_length=50)
    description: str | None = None
    creator: str | None = Field(None, max_length=50)
    wielder: str | None = Field(None, max_length=50)
    forged: str | None = Field(None, max_length=50)
    image: str | None = Field(None, max_length=255)


class WeaponCreate(WeaponFields):
    name: str = Field(..., min_length=1, max_length=50)


class WeaponOut(CamelModel):
    id: int
    name: str
    description: str | None = None
    creator: str | None = None
    wielder: str | None = None
    forged: str | None = None


class WorldFields(EditableFields):
    name: str | None = Field(None, min_length=1, max_length=50)
    description: str | None = None


class WorldCreate(WorldFields):
    name: str = Field(..., min_length=1, max_length=50)


class WorldOut(CamelModel):
    id: int
    name: str
    description: str | None = None


# =============================================================================
# Plots and plot references
# =============================================================================


class PlotFields(EditableFields):
    name: str | None = Field(None, min_length=1, max_length=50)
    type: str | None = Field(None, max_length=50)
    description: str | None = None
    order: int | None = None


class PlotCreate(PlotFields):
    name: str = Field(..., min_length=1, max_length=50)


class PlotOut(CamelModel):
    id: int
    name: str
    type: str | None = None
    description: str | None = None
    order: int | None = None


class PlotReferenceFields(EditableFields):
    name: str | None = Field(None, min_length=1, max_length=50)
    type: str | None = Field(None, max_length=50)
    reference_id: int | None = None


class PlotReferenceCreate(PlotReferenceFields):
    name: str = Field(..., min_length=1, max_length=50)


class PlotReferenceOut(CamelModel):
    id: int
    name: str
    type: str | None = None
    reference_id: int | None = None
