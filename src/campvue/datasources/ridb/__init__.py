"""Recreation Information Database (RIDB) data source.

Public API:
  - client: low-level HTTP (deadline, error mapping, validation, ``get_all``)
  - pagination: Page, StopPolicy, PageAggregator, paginate
  - models: pydantic models that validate RIDB payloads
  - activities / campsites / facilities: one fetch function per endpoint
  - errors: Timeout, RemoteError, MalformedResponse, SchemaViolation, InvalidParameter
"""

from campvue.datasources.ridb.activities import (
    fetch_activities_page,
    fetch_activity,
    fetch_all_activities,
    fetch_all_facility_activities,
)
from campvue.datasources.ridb.campsites import (
    fetch_all_attributes,
    fetch_all_campsites,
    fetch_attributes_page,
    fetch_campsite,
    fetch_campsites_page,
)
from campvue.datasources.ridb.errors import (
    InvalidParameter,
    MalformedResponse,
    RemoteError,
    RIDBError,
    SchemaViolation,
    Timeout,
)
from campvue.datasources.ridb.facilities import fetch_facility
from campvue.datasources.ridb.models import Activity, Attribute, Campsite, Facility
from campvue.datasources.ridb.pagination import (
    MAX_PAGE_SIZE,
    Page,
    PageAggregator,
    StopPolicy,
    paginate,
)

__all__ = [
    "MAX_PAGE_SIZE",
    "Activity",
    "Attribute",
    "Campsite",
    "Facility",
    "InvalidParameter",
    "MalformedResponse",
    "Page",
    "PageAggregator",
    "RIDBError",
    "RemoteError",
    "SchemaViolation",
    "StopPolicy",
    "Timeout",
    "fetch_activities_page",
    "fetch_activity",
    "fetch_all_activities",
    "fetch_all_attributes",
    "fetch_all_campsites",
    "fetch_all_facility_activities",
    "fetch_attributes_page",
    "fetch_campsite",
    "fetch_campsites_page",
    "fetch_facility",
    "paginate",
]
