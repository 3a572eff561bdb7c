"""
Prefect flow for the campground vehicle-length report.

Pages through every campsite of a facility and reports the longest vehicle
each site (and the campground) accepts.

Run locally:
    python -m campvue.flows.vehicle_lengths 232447

Run with Prefect dashboard:
    prefect server start &
    python -m campvue.flows.vehicle_lengths 232447
"""

from __future__ import annotations

import json
import logging
import sys

from prefect import flow, task

from campvue.datasources.ridb import Campsite, fetch_all_campsites
from campvue.normalize.campsites import facility_max_length
from campvue.schemas import FacilityMaxLength

logger = logging.getLogger(__name__)


# RIDB failures are surfaced to the caller as-is; tasks don't retry.
@task(name="fetch-campsites")
def fetch_campsites(facility_id: str) -> list[Campsite]:
    """Fetch every campsite of a facility."""
    return fetch_all_campsites(facility_id)


@task(name="summarize-vehicle-lengths")
def summarize_vehicle_lengths(
    facility_id: str,
    campsites: list[Campsite],
    reservable: bool | None = None,
) -> FacilityMaxLength:
    """Reduce campsites to per-site and facility-wide max vehicle lengths."""
    return facility_max_length(facility_id, campsites, reservable=reservable)


@flow(name="vehicle-lengths", log_prints=True)
def vehicle_lengths(facility_id: str, reservable: bool | None = None) -> FacilityMaxLength:
    """Build the vehicle-length report for one campground."""
    campsites = fetch_campsites(facility_id)
    report = summarize_vehicle_lengths(facility_id, campsites, reservable=reservable)
    logger.info(
        "Facility %s: %d sites, max vehicle length %.0f ft",
        facility_id,
        len(report.sites),
        report.max_length,
    )
    return report


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("usage: python -m campvue.flows.vehicle_lengths FACILITY_ID", file=sys.stderr)
        sys.exit(2)
    result = vehicle_lengths(sys.argv[1])
    print(json.dumps(result.model_dump(mode="json"), indent=2))
