"""Facility (campground) shaping."""

from __future__ import annotations

from campvue.datasources.ridb.models import Facility
from campvue.normalize.text import (
    html_to_text,
    normalize_campground_name,
    normalize_park_type,
    to_embedding_text,
)
from campvue.schemas import NormalizedFacility

RESERVATIONS_URL = "https://www.recreation.gov/camping/campgrounds/{facility_id}"


def normalize_facility(facility: Facility) -> NormalizedFacility:
    """
    Build the display view of a facility.

    The park is the first linked rec area ("Unknown" when RIDB links none);
    the HTML description is kept alongside plain-text and embedding variants.
    """
    description_html = facility.description or None
    park = facility.rec_areas[0].name.strip() if facility.rec_areas else "Unknown"

    return NormalizedFacility(
        ridb_id=facility.facility_id,
        name=normalize_campground_name(facility.name),
        park=park,
        park_type=normalize_park_type(park),
        latitude=facility.latitude,
        longitude=facility.longitude,
        type=facility.type_description.lower() if facility.type_description else None,
        reservations=RESERVATIONS_URL.format(facility_id=facility.facility_id),
        description_html=description_html,
        description=html_to_text(description_html) if description_html else None,
        description_for_embedding=to_embedding_text(description_html) if description_html else None,
    )
