"""RIDB response models.

These pydantic models are the structural validation gate: every decoded page
is checked against one of them before the aggregator accepts it. Field names
are snake_case with the RIDB spelling kept as the alias.
"""

from __future__ import annotations

from typing import Annotated, Any, Generic, TypeVar

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    HttpUrl,
    StringConstraints,
    ValidationError,
    ValidatorFunctionWrapHandler,
    field_validator,
)


def _id_to_str(value: Any) -> Any:
    if isinstance(value, int | str) and not isinstance(value, bool):
        return str(value).strip()
    return value


def _strip_numeric_str(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


#: IDs arrive as numbers or strings; they are kept as non-empty strings.
IdStr = Annotated[str, BeforeValidator(_id_to_str), StringConstraints(min_length=1)]

#: Numbers that may arrive as numeric strings; NaN/inf are rejected.
Numberish = Annotated[float, BeforeValidator(_strip_numeric_str), Field(allow_inf_nan=False)]


class RIDBModel(BaseModel):
    """Base for RIDB payloads: accept aliases or field names, ignore extras."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


# =============================================================================
# Page envelope
# =============================================================================


class ResultsMetadata(RIDBModel):
    total_count: int | None = Field(default=None, alias="TOTAL_COUNT")
    current_count: int | None = Field(default=None, alias="CURRENT_COUNT")


class SearchParameters(RIDBModel):
    limit: int | None = Field(default=None, alias="LIMIT")
    offset: int | None = Field(default=None, alias="OFFSET")
    query: str | None = Field(default=None, alias="QUERY")


class PageMetadata(RIDBModel):
    results: ResultsMetadata | None = Field(default=None, alias="RESULTS")
    search_parameters: SearchParameters | None = Field(default=None, alias="SEARCH_PARAMETERS")


RecordT = TypeVar("RecordT", bound=BaseModel)


class RIDBPage(RIDBModel, Generic[RecordT]):
    """``{"RECDATA": [...], "METADATA": {"RESULTS": {"TOTAL_COUNT": n}}}``"""

    records: list[RecordT] = Field(default_factory=list, alias="RECDATA")
    metadata: PageMetadata | None = Field(default=None, alias="METADATA")

    @field_validator("records", mode="before")
    @classmethod
    def _null_records_are_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def total_count(self) -> int | None:
        """Authoritative count across all pages, when RIDB reports one."""
        if self.metadata is None or self.metadata.results is None:
            return None
        return self.metadata.results.total_count


# =============================================================================
# Records
# =============================================================================


class Attribute(RIDBModel):
    """A free-form name/value pair attached to a campsite."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", coerce_numbers_to_str=True)

    name: str = Field(alias="AttributeName")
    value: str = Field(alias="AttributeValue")


class PermittedEquipment(RIDBModel):
    name: Annotated[str, StringConstraints(min_length=1)] = Field(alias="EquipmentName")
    max_length: Numberish = Field(alias="MaxLength")


class EntityMedia(RIDBModel):
    credits: str | None = Field(default=None, alias="Credits")
    description: str | None = Field(default=None, alias="Description")
    height: Numberish = Field(alias="Height")
    width: Numberish = Field(alias="Width")
    is_gallery: bool = Field(default=False, alias="IsGallery")
    is_preview: bool = Field(default=False, alias="IsPreview")
    is_primary: bool = Field(default=False, alias="IsPrimary")
    media_type: str | None = Field(default=None, alias="MediaType")
    subtitle: str | None = Field(default=None, alias="Subtitle")
    title: str | None = Field(default=None, alias="Title")
    url: HttpUrl = Field(alias="URL")


class Activity(RIDBModel):
    id: int = Field(alias="ActivityID")
    name: str | None = Field(default=None, alias="ActivityName")


class Campsite(RIDBModel):
    facility_id: IdStr = Field(alias="FacilityID")
    campsite_id: IdStr = Field(alias="CampsiteID")
    name: IdStr = Field(alias="CampsiteName")
    accessible: bool = Field(default=False, alias="CampsiteAccessible")
    reservable: bool = Field(default=False, alias="CampsiteReservable")
    longitude: float | None = Field(default=None, alias="CampsiteLongitude")
    latitude: float | None = Field(default=None, alias="CampsiteLatitude")
    created_date: str | None = Field(default=None, alias="CreatedDate")
    last_updated_date: str | None = Field(default=None, alias="LastUpdatedDate")
    campsite_type: str = Field(alias="CampsiteType")
    loop: str = Field(alias="Loop")
    type_of_use: str | None = Field(default=None, alias="TypeOfUse")
    attributes: list[Attribute] = Field(default_factory=list, alias="ATTRIBUTES")
    permitted_equipment: list[PermittedEquipment] = Field(
        default_factory=list, alias="PERMITTEDEQUIPMENT"
    )
    entity_media: list[EntityMedia] = Field(default_factory=list, alias="ENTITYMEDIA")

    @field_validator("attributes", mode="before")
    @classmethod
    def _null_attributes_are_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("permitted_equipment", "entity_media", mode="wrap")
    @classmethod
    def _drop_invalid_lists(cls, value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
        # Equipment and media are decorative; a bad entry blanks the list
        # instead of rejecting the whole campsite.
        try:
            return handler(value)
        except ValidationError:
            return []


class RecArea(RIDBModel):
    name: str = Field(alias="RecAreaName")


class Facility(RIDBModel):
    facility_id: IdStr = Field(alias="FacilityID")
    name: str = Field(alias="FacilityName")
    description: str | None = Field(default=None, alias="FacilityDescription")
    latitude: float | None = Field(alias="FacilityLatitude")
    longitude: float | None = Field(alias="FacilityLongitude")
    type_description: str | None = Field(default=None, alias="FacilityTypeDescription")
    rec_areas: list[RecArea] | None = Field(default=None, alias="RECAREA")


ActivityPage = RIDBPage[Activity]
AttributePage = RIDBPage[Attribute]
CampsitePage = RIDBPage[Campsite]
