"""
Tests for the vehicle-length flow.

Tasks and the flow are exercised through ``.fn`` so no Prefect server is
needed.
"""

from __future__ import annotations

from unittest.mock import Mock, patch

import pytest

from campvue.datasources.ridb import Campsite, RemoteError
from campvue.flows import vehicle_lengths as flow_module
from campvue.schemas import FacilityMaxLength


def make_campsite(campsite_id: int, name: str, *, reservable: bool, max_length: float) -> Campsite:
    return Campsite.model_validate(
        {
            "CampsiteID": campsite_id,
            "FacilityID": "232447",
            "CampsiteName": name,
            "CampsiteType": "STANDARD NONELECTRIC",
            "Loop": "A",
            "CampsiteReservable": reservable,
            "PERMITTEDEQUIPMENT": [
                {"EquipmentName": "Tent", "MaxLength": 99},
                {"EquipmentName": "RV", "MaxLength": max_length},
            ],
        }
    )


SITES = [
    make_campsite(1, "001", reservable=True, max_length=30),
    make_campsite(2, "002", reservable=False, max_length=42),
]


class TestFetchCampsites:
    """Test the fetch task."""

    @patch("campvue.flows.vehicle_lengths.fetch_all_campsites")
    def test_fetches_all_pages(self, mock_fetch: Mock) -> None:
        mock_fetch.return_value = SITES

        result = flow_module.fetch_campsites.fn("232447")

        assert result == SITES
        mock_fetch.assert_called_once_with("232447")

    @patch("campvue.flows.vehicle_lengths.fetch_all_campsites")
    def test_errors_propagate(self, mock_fetch: Mock) -> None:
        mock_fetch.side_effect = RemoteError("RIDB API responded with 502 Bad Gateway", 502)
        with pytest.raises(RemoteError):
            flow_module.fetch_campsites.fn("232447")


class TestSummarize:
    """Test the summarize task."""

    def test_all_sites(self) -> None:
        report = flow_module.summarize_vehicle_lengths.fn("232447", SITES)
        assert report.max_length == 42.0
        assert len(report.sites) == 2

    def test_reservable_only(self) -> None:
        report = flow_module.summarize_vehicle_lengths.fn("232447", SITES, reservable=True)
        assert report.max_length == 30.0
        assert [s.site_number for s in report.sites] == ["1"]


class TestVehicleLengthsFlow:
    """Test the flow wiring."""

    def test_flow_runs_tasks_in_order(self) -> None:
        call_order: list[str] = []
        summarize = flow_module.summarize_vehicle_lengths.fn

        def fake_fetch(facility_id: str) -> list[Campsite]:
            call_order.append("fetch")
            return SITES

        def fake_summarize(
            facility_id: str, campsites: list[Campsite], reservable: bool | None = None
        ) -> FacilityMaxLength:
            call_order.append("summarize")
            return summarize(facility_id, campsites, reservable=reservable)

        with (
            patch.object(flow_module, "fetch_campsites", side_effect=fake_fetch),
            patch.object(flow_module, "summarize_vehicle_lengths", side_effect=fake_summarize),
        ):
            report = flow_module.vehicle_lengths.fn("232447", reservable=False)

        assert call_order == ["fetch", "summarize"]
        assert report.facility_id == "232447"
        assert report.max_length == 42.0
