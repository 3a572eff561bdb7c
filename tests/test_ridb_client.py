"""
Tests for the RIDB client: request building, deadline, error mapping and
response validation.
"""

from __future__ import annotations

import contextlib
import json
import threading
import time
from collections.abc import Iterator
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any
from unittest.mock import Mock, patch

import pytest
import requests

from campvue.config import ConfigurationError, Settings
from campvue.datasources.ridb import client
from campvue.datasources.ridb.errors import (
    ErrorKind,
    InvalidParameter,
    MalformedResponse,
    RemoteError,
    SchemaViolation,
    Timeout,
)
from campvue.datasources.ridb.models import Activity, ActivityPage, Facility

API = {"api_key": "test-key", "base_url": "https://ridb.example/api/v1"}


def make_response(
    body: Any = None,
    *,
    status: int = 200,
    reason: str = "OK",
    raw: bytes | None = None,
) -> Mock:
    """A streamed ``requests.Response`` stand-in."""
    content = raw if raw is not None else json.dumps(body).encode()
    resp = Mock()
    resp.ok = status < 400
    resp.status_code = status
    resp.reason = reason
    resp.iter_content.return_value = [content[:10], content[10:]]
    return resp


def activities_body(records: list[dict[str, Any]], total: int | None = None) -> dict[str, Any]:
    body: dict[str, Any] = {"RECDATA": records}
    if total is not None:
        body["METADATA"] = {"RESULTS": {"CURRENT_COUNT": len(records), "TOTAL_COUNT": total}}
    return body


class TestResource:
    """Tests for path building."""

    def test_joins_segments(self) -> None:
        assert client.resource("facilities", 232447, "campsites") == "facilities/232447/campsites"

    def test_encodes_user_input(self) -> None:
        assert client.resource("campsites", " 12/../3 ") == "campsites/12%2F..%2F3"


@patch("campvue.datasources.ridb.client.session.get")
class TestFetchPage:
    """Tests for fetch_page."""

    def test_request_shape(self, mock_get: Mock) -> None:
        mock_get.return_value = make_response(activities_body([], total=0))

        client.fetch_page("activities", schema=ActivityPage, limit=25, offset=50, **API)

        args, kwargs = mock_get.call_args
        assert args[0] == "https://ridb.example/api/v1/activities"
        assert kwargs["params"] == {"limit": 25, "offset": 50}
        assert kwargs["headers"]["apikey"] == "test-key"
        assert kwargs["headers"]["accept"] == "application/json"
        assert kwargs["stream"] is True

    def test_query_sent_only_when_not_blank(self, mock_get: Mock) -> None:
        mock_get.return_value = make_response(activities_body([]))
        client.fetch_page("activities", schema=ActivityPage, query="   ", **API)
        assert "query" not in mock_get.call_args.kwargs["params"]

        mock_get.return_value = make_response(activities_body([]))
        client.fetch_page("activities", schema=ActivityPage, query=" Fire Pit ", **API)
        assert mock_get.call_args.kwargs["params"]["query"] == "Fire Pit"

    def test_parses_records_and_total(self, mock_get: Mock) -> None:
        mock_get.return_value = make_response(
            activities_body(
                [{"ActivityID": 9, "ActivityName": "CAMPING"}, {"ActivityID": 5}], total=120
            )
        )

        page = client.fetch_page("activities", schema=ActivityPage, **API)

        assert page.returned_count == 2
        assert page.total_count == 120
        assert page.items[0] == Activity(id=9, name="CAMPING")
        assert page.items[1].name is None

    def test_missing_metadata_has_no_total(self, mock_get: Mock) -> None:
        mock_get.return_value = make_response({"RECDATA": [{"ActivityID": 1}]})
        page = client.fetch_page("activities", schema=ActivityPage, **API)
        assert page.total_count is None

    def test_null_recdata_is_empty(self, mock_get: Mock) -> None:
        mock_get.return_value = make_response({"RECDATA": None})
        assert client.fetch_page("activities", schema=ActivityPage, **API).items == []

    @pytest.mark.parametrize(("limit", "offset"), [(0, 0), (51, 0), (10, -1), (True, 0)])
    def test_invalid_parameters_make_no_request(
        self, mock_get: Mock, limit: int, offset: int
    ) -> None:
        with pytest.raises(InvalidParameter):
            client.fetch_page("activities", schema=ActivityPage, limit=limit, offset=offset, **API)
        mock_get.assert_not_called()


@patch("campvue.datasources.ridb.client.session.get")
class TestErrorMapping:
    """Every transport and payload failure maps to one error kind."""

    def test_http_error_status(self, mock_get: Mock) -> None:
        resp = make_response({}, status=503, reason="Service Unavailable")
        mock_get.return_value = resp

        with pytest.raises(RemoteError) as exc_info:
            client.fetch_page("activities", schema=ActivityPage, **API)

        err = exc_info.value
        assert err.status == 503
        assert err.status_text == "Service Unavailable"
        assert str(err) == "RIDB API responded with 503 Service Unavailable"
        assert err.kind is ErrorKind.REMOTE_ERROR
        assert not err.is_client_error
        resp.close.assert_called_once()

    def test_connection_error(self, mock_get: Mock) -> None:
        mock_get.side_effect = requests.ConnectionError("refused")
        with pytest.raises(RemoteError, match="refused"):
            client.fetch_page("activities", schema=ActivityPage, **API)

    def test_transport_timeout(self, mock_get: Mock) -> None:
        mock_get.side_effect = requests.ReadTimeout("read timed out")
        with pytest.raises(Timeout):
            client.fetch_page("activities", schema=ActivityPage, **API)

    def test_malformed_json(self, mock_get: Mock) -> None:
        mock_get.return_value = make_response(raw=b'{"RECDATA": [')
        with pytest.raises(MalformedResponse, match=r"Invalid or incomplete JSON"):
            client.fetch_page("activities", schema=ActivityPage, **API)

    def test_schema_violation_missing_recdata_type(self, mock_get: Mock) -> None:
        mock_get.return_value = make_response({"RECDATA": "nope"})
        with pytest.raises(SchemaViolation, match="RECDATA"):
            client.fetch_page("activities", schema=ActivityPage, **API)

    def test_schema_violation_bad_record(self, mock_get: Mock) -> None:
        mock_get.return_value = make_response({"RECDATA": [{"ActivityName": "no id"}]})
        with pytest.raises(SchemaViolation) as exc_info:
            client.fetch_page("activities", schema=ActivityPage, **API)
        assert exc_info.value.to_dict()["kind"] == "schema_violation"

    def test_body_not_an_object(self, mock_get: Mock) -> None:
        mock_get.return_value = make_response([1, 2, 3])
        with pytest.raises(SchemaViolation):
            client.fetch_page("activities", schema=ActivityPage, **API)


class SlowBodyHandler(BaseHTTPRequestHandler):
    """Sends status and headers at once, then the body one byte per ``delay``."""

    body = json.dumps({"RECDATA": [{"ActivityID": 9}]}).encode()
    delay = 0.4

    def do_GET(self) -> None:  # noqa: N802
        self.send_response(200)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(self.body)))
        self.end_headers()
        with contextlib.suppress(ConnectionError):
            for i in range(len(self.body)):
                self.wfile.write(self.body[i : i + 1])
                self.wfile.flush()
                time.sleep(self.delay)

    def log_message(self, format: str, *args: Any) -> None:  # noqa: A002
        pass


class QuickBodyHandler(SlowBodyHandler):
    delay = 0.0


@pytest.fixture
def local_server(monkeypatch: pytest.MonkeyPatch) -> Iterator[Any]:
    """Start a loopback HTTP server for a handler class; yields its base URL factory."""
    monkeypatch.setenv("NO_PROXY", "127.0.0.1")
    monkeypatch.setenv("no_proxy", "127.0.0.1")
    servers: list[ThreadingHTTPServer] = []

    def start(handler: type[BaseHTTPRequestHandler]) -> str:
        server = ThreadingHTTPServer(("127.0.0.1", 0), handler)
        threading.Thread(target=server.serve_forever, daemon=True).start()
        servers.append(server)
        host, port = server.server_address[:2]
        return f"http://{host}:{port}/api/v1"

    yield start
    for server in servers:
        server.shutdown()
        server.server_close()


class TestDeadline:
    """The request deadline is wall-clock, measured against a real socket."""

    def test_trickling_body_is_cut_off(self, local_server: Any) -> None:
        base_url = local_server(SlowBodyHandler)

        started = time.monotonic()
        with pytest.raises(Timeout, match=r"timed out after 1s"):
            client.fetch_page(
                "activities", schema=ActivityPage, api_key="k", base_url=base_url, timeout=1.0
            )

        assert time.monotonic() - started < 2.0

    def test_prompt_body_is_read(self, local_server: Any) -> None:
        base_url = local_server(QuickBodyHandler)

        page = client.fetch_page(
            "activities", schema=ActivityPage, api_key="k", base_url=base_url, timeout=1.0
        )

        assert [a.id for a in page.items] == [9]


class TestSettings:
    """Credentials and endpoint come from settings when not given."""

    @patch("campvue.datasources.ridb.client.session.get")
    @patch("campvue.datasources.ridb.client.get_settings")
    def test_uses_settings(self, mock_settings: Mock, mock_get: Mock) -> None:
        mock_settings.return_value = Settings(
            _env_file=None,
            ridb_api_key="from-env",
            ridb_base_url="https://ridb.test/v1/",
            request_timeout_s=5,
        )
        mock_get.return_value = make_response(activities_body([]))

        client.fetch_page("activities", schema=ActivityPage)

        args, kwargs = mock_get.call_args
        assert args[0] == "https://ridb.test/v1/activities"
        assert kwargs["headers"]["apikey"] == "from-env"
        assert kwargs["timeout"] == 5

    @patch("campvue.datasources.ridb.client.session.get")
    @patch("campvue.datasources.ridb.client.get_settings")
    def test_missing_api_key(self, mock_settings: Mock, mock_get: Mock) -> None:
        mock_settings.return_value = Settings(_env_file=None, ridb_api_key=None)
        with pytest.raises(ConfigurationError, match="RIDB_API_KEY"):
            client.fetch_page("activities", schema=ActivityPage)
        mock_get.assert_not_called()


@patch("campvue.datasources.ridb.client.session.get")
class TestFetchRecord:
    """Tests for single-resource fetches."""

    def test_facility(self, mock_get: Mock) -> None:
        mock_get.return_value = make_response(
            {
                "FacilityID": "232447",
                "FacilityName": "FISH CREEK CAMPGROUND",
                "FacilityLatitude": 48.5,
                "FacilityLongitude": -113.9,
            }
        )
        facility = client.fetch_record("facilities/232447", schema=Facility, **API)
        assert facility.facility_id == "232447"
        assert facility.rec_areas is None

    def test_truncated_facility_is_schema_violation(self, mock_get: Mock) -> None:
        mock_get.return_value = make_response({"FacilityName": "Half a payload"})
        with pytest.raises(SchemaViolation, match="FacilityID"):
            client.fetch_record("facilities/1", schema=Facility, **API)


@patch("campvue.datasources.ridb.client.session.get")
class TestGetAll:
    """Tests for get_all (fetch_page + pagination)."""

    def test_pages_until_total(self, mock_get: Mock) -> None:
        first = [{"ActivityID": i} for i in range(50)]
        second = [{"ActivityID": i} for i in range(50, 70)]
        mock_get.side_effect = [
            make_response(activities_body(first, total=70)),
            make_response(activities_body(second, total=70)),
        ]

        records = client.get_all("activities", schema=ActivityPage, **API)

        assert [a.id for a in records] == list(range(70))
        offsets = [c.kwargs["params"]["offset"] for c in mock_get.call_args_list]
        assert offsets == [0, 50]

    def test_failure_discards_partial_results(self, mock_get: Mock) -> None:
        mock_get.side_effect = [
            make_response(activities_body([{"ActivityID": i} for i in range(50)], total=200)),
            make_response({}, status=500, reason="Internal Server Error"),
        ]
        with pytest.raises(RemoteError):
            client.get_all("activities", schema=ActivityPage, **API)
