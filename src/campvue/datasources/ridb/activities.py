"""RIDB activities: the catalogue (``/activities``, ``/activities/{id}``) and the
activities offered at one facility (``/facilities/{id}/activities``)."""

from __future__ import annotations

from campvue.datasources.ridb import client
from campvue.datasources.ridb.errors import RemoteError
from campvue.datasources.ridb.models import Activity, ActivityPage
from campvue.datasources.ridb.pagination import MAX_PAGE_SIZE, Page

ACTIVITIES_PATH = "activities"
MAX_PAGES_DEFAULT = 10


def fetch_activities_page(limit: int = MAX_PAGE_SIZE, offset: int = 0) -> Page[Activity]:
    """Fetch a single page of activities."""
    return client.fetch_page(ACTIVITIES_PATH, schema=ActivityPage, limit=limit, offset=offset)


def fetch_all_activities(*, max_pages: int = MAX_PAGES_DEFAULT) -> list[Activity]:
    """Page through ``/activities`` and return every activity."""
    return client.get_all(ACTIVITIES_PATH, schema=ActivityPage, max_pages=max_pages)


def fetch_activity(activity_id: str | int) -> Activity:
    """Fetch one activity by its RIDB ActivityID.

    RIDB answers unknown IDs with 200 and ``{"ActivityID": 0}``; that is
    reported as a 404.
    """
    activity: Activity = client.fetch_record(
        client.resource(ACTIVITIES_PATH, activity_id), schema=Activity
    )
    if activity.id == 0 and not activity.name:
        msg = f"Activity with id '{activity_id}' not found in RIDB"
        raise RemoteError(msg, status=404, status_text="Not Found")
    return activity


def facility_activities_path(facility_id: str | int) -> str:
    return client.resource("facilities", facility_id, ACTIVITIES_PATH)


def fetch_all_facility_activities(
    facility_id: str | int,
    *,
    max_pages: int = MAX_PAGES_DEFAULT,
    start_offset: int = 0,
    page_size: int = MAX_PAGE_SIZE,
) -> list[Activity]:
    """Page through the activities offered at one facility."""
    return client.get_all(
        facility_activities_path(facility_id),
        schema=ActivityPage,
        max_pages=max_pages,
        start_offset=start_offset,
        page_size=page_size,
    )
