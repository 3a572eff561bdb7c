"""
Normalized output models.

Pydantic models for the stable, typed representation campvue produces from
RIDB payloads. Raw RIDB shapes live in ``datasources/ridb/models.py``; the
``normalize`` package maps those onto these.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# Attributes
# =============================================================================


class Scope(StrEnum):
    """What an attribute describes."""

    CAMPGROUND = "campground"
    CAMPSITE = "campsite"
    UNKNOWN = "unknown"


class ValueType(StrEnum):
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"


class _ClassifiedBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str = Field(..., description="Canonical snake_case identifier")
    label: str = Field(..., description="Title-cased display name")
    scope: Scope = Scope.UNKNOWN
    is_amenity: bool = False


class BooleanAttribute(_ClassifiedBase):
    value_type: Literal["boolean"] = "boolean"
    value: bool


class NumberAttribute(_ClassifiedBase):
    value_type: Literal["number"] = "number"
    value: int | float


class StringAttribute(_ClassifiedBase):
    value_type: Literal["string"] = "string"
    value: str


#: A classified attribute; ``value_type`` always matches the type of ``value``.
ClassifiedAttribute = Annotated[
    BooleanAttribute | NumberAttribute | StringAttribute,
    Field(discriminator="value_type"),
]


# =============================================================================
# Activities
# =============================================================================


class NormalizedActivity(BaseModel):
    id: int
    name: str


# =============================================================================
# Campsites
# =============================================================================


class NormalizedEquipment(BaseModel):
    """A vehicle/equipment type permitted on a site, with its max length (ft)."""

    name: str
    max_length: float


class NormalizedMedia(BaseModel):
    attribution: str | None = None
    description: str | None = None
    height: float
    width: float
    is_gallery: bool = False
    is_preview: bool = False
    is_primary: bool = False
    type: str | None = None
    subtitle: str | None = None
    title: str | None = None
    url: str


class NormalizedCampsite(BaseModel):
    campsite_id: str
    facility_id: str
    name: str
    site_number: str
    loop: str
    campsite_type: str
    reservable: bool = False
    accessible: bool = False
    latitude: float | None = None
    longitude: float | None = None
    features: list[ClassifiedAttribute] = Field(default_factory=list)
    equipment: list[NormalizedEquipment] = Field(default_factory=list)
    media: list[NormalizedMedia] = Field(default_factory=list)


class SiteMaxLength(BaseModel):
    ridb_site_id: str
    site_number: str
    max_length: float


class FacilityMaxLength(BaseModel):
    """Longest vehicle each site (and the campground overall) can take."""

    facility_id: str
    max_length: float
    sites: list[SiteMaxLength] = Field(default_factory=list)


# =============================================================================
# Facilities
# =============================================================================


class NormalizedFacility(BaseModel):
    ridb_id: str
    name: str
    park: str
    park_type: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    type: str | None = None
    reservations: str
    description_html: str | None = None
    description: str | None = None
    description_for_embedding: str | None = None
