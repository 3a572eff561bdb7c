"""Campsites and campsite attributes.

Endpoints:
  - ``/facilities/{id}/campsites``  campsites of one campground (paged)
  - ``/campsites/{id}``             one campsite (returned as a one-item list)
  - ``/campsites/{id}/attributes``  free-form attributes of one campsite (paged)
"""

from __future__ import annotations

from pydantic import TypeAdapter

from campvue.datasources.ridb import client
from campvue.datasources.ridb.errors import RemoteError
from campvue.datasources.ridb.models import Attribute, AttributePage, Campsite, CampsitePage
from campvue.datasources.ridb.pagination import MAX_PAGE_SIZE, Page, StopPolicy

CAMPSITES_MAX_PAGES = 600
ATTRIBUTES_MAX_PAGES = 100

_campsite_list = TypeAdapter(list[Campsite])


def campsites_path(facility_id: str | int) -> str:
    return client.resource("facilities", facility_id, "campsites")


def attributes_path(campsite_id: str | int) -> str:
    return client.resource("campsites", campsite_id, "attributes")


# =============================================================================
# Campsites
# =============================================================================


def fetch_campsites_page(
    facility_id: str | int,
    *,
    limit: int = MAX_PAGE_SIZE,
    offset: int = 0,
    query: str | None = None,
) -> Page[Campsite]:
    """Fetch one page of campsites for a facility.

    ``query`` is RIDB's substring matcher on the site, so ``"3"`` matches
    sites 3, 13, 23 ...
    """
    return client.fetch_page(
        campsites_path(facility_id),
        schema=CampsitePage,
        limit=limit,
        offset=offset,
        query=query,
    )


def fetch_all_campsites(
    facility_id: str | int,
    *,
    query: str | None = None,
    max_pages: int = CAMPSITES_MAX_PAGES,
    stop_policy: StopPolicy | None = None,
) -> list[Campsite]:
    """Page through every campsite of a facility."""
    return client.get_all(
        campsites_path(facility_id),
        schema=CampsitePage,
        query=query,
        max_pages=max_pages,
        stop_policy=stop_policy,
    )


def fetch_campsite(campsite_id: str | int) -> Campsite:
    """Fetch a single campsite by its RIDB CampsiteID.

    Raises:
        RemoteError: RIDB returned an empty list for the ID (status 404).
    """
    sites: list[Campsite] = client.fetch_record(
        client.resource("campsites", campsite_id), schema=_campsite_list
    )
    if not sites:
        msg = f"Campsite {campsite_id} not found"
        raise RemoteError(msg, status=404, status_text="Not Found")
    return sites[0]


# =============================================================================
# Attributes
# =============================================================================


def fetch_attributes_page(
    campsite_id: str | int,
    *,
    limit: int = MAX_PAGE_SIZE,
    offset: int = 0,
    query: str | None = None,
) -> Page[Attribute]:
    """Fetch one page of attributes for a campsite.

    ``query`` matches attribute names (e.g. ``"Fire Pit"``).
    """
    return client.fetch_page(
        attributes_path(campsite_id),
        schema=AttributePage,
        limit=limit,
        offset=offset,
        query=query,
    )


def fetch_all_attributes(
    campsite_id: str | int,
    *,
    query: str | None = None,
    max_pages: int = ATTRIBUTES_MAX_PAGES,
) -> list[Attribute]:
    """Page through every attribute of a campsite."""
    return client.get_all(
        attributes_path(campsite_id),
        schema=AttributePage,
        query=query,
        max_pages=max_pages,
    )
