"""Facility (campground) details from ``/facilities/{id}?full=true``."""

from __future__ import annotations

from campvue.datasources.ridb import client
from campvue.datasources.ridb.models import Facility


def fetch_facility(facility_id: str | int) -> Facility:
    """
    Fetch one facility with its rec-area links.

    RIDB occasionally truncates this payload; a body without ``FacilityID``
    fails validation and surfaces as ``SchemaViolation``.
    """
    result: Facility = client.fetch_record(
        client.resource("facilities", facility_id),
        schema=Facility,
        params={"full": "true"},
    )
    return result
