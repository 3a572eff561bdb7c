"""
RIDB (Recreation Information Database) API client.

Low-level HTTP client for ``https://ridb.recreation.gov/api/v1``.
Handles request building, the per-request deadline, error mapping and
response validation. Pagination is delegated to ``pagination.paginate``.

API docs: https://ridb.recreation.gov/docs
Requires API key: RIDB_API_KEY env var
"""

from __future__ import annotations

import contextlib
import json
import logging
import socket
import threading
import time
from typing import Any, TypeVar
from urllib.parse import quote

import requests
import urllib3
from pydantic import BaseModel, TypeAdapter, ValidationError

from campvue.config import get_settings
from campvue.datasources.ridb.errors import MalformedResponse, RemoteError, SchemaViolation, Timeout
from campvue.datasources.ridb.models import RIDBPage
from campvue.datasources.ridb.pagination import (
    MAX_PAGE_SIZE,
    Page,
    StopPolicy,
    paginate,
    require_int,
)
from campvue.services.http import session

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# API configuration
# ---------------------------------------------------------------------------
FETCH_TIMEOUT_S = 12.0
CHUNK_SIZE = 64 * 1024
DEFAULT_MAX_PAGES = 10  # safety valve for list endpoints

ModelT = TypeVar("ModelT", bound=BaseModel)
RecordT = TypeVar("RecordT", bound=BaseModel)


def resource(*parts: str | int) -> str:
    """Join path segments, URL-encoding each (IDs come from user input)."""
    return "/".join(quote(str(p).strip(), safe="") for p in parts)


# ---------------------------------------------------------------------------
# Transport
# ---------------------------------------------------------------------------


def _timed_out(timeout: float) -> Timeout:
    return Timeout(f"RIDB request timed out after {timeout:g}s")


def _sever(resp: requests.Response) -> None:
    """Shut down the socket under ``resp`` so a blocked read returns at once."""
    conn = getattr(resp.raw, "connection", None)
    sock = getattr(conn, "sock", None)
    if sock is None:
        resp.close()
        return
    with contextlib.suppress(OSError):
        sock.shutdown(socket.SHUT_RDWR)


def _read_body(resp: requests.Response, deadline: float, timeout: float) -> bytes:
    """Read the streamed body, cutting the connection once the deadline passes."""
    expired = threading.Event()

    def abort() -> None:
        expired.set()
        _sever(resp)

    timer = threading.Timer(max(deadline - time.monotonic(), 0.0), abort)
    timer.daemon = True
    timer.start()
    chunks: list[bytes] = []
    try:
        for chunk in resp.iter_content(chunk_size=CHUNK_SIZE):
            if expired.is_set() or time.monotonic() > deadline:
                raise _timed_out(timeout)
            chunks.append(chunk)
    except requests.Timeout as exc:
        raise _timed_out(timeout) from exc
    except (requests.RequestException, urllib3.exceptions.HTTPError, OSError, ValueError) as exc:
        if expired.is_set():
            raise _timed_out(timeout) from exc
        msg = f"RIDB response was interrupted: {exc}"
        raise RemoteError(msg) from exc
    finally:
        timer.cancel()
    if expired.is_set():
        raise _timed_out(timeout)
    return b"".join(chunks)


def _get_json(
    path: str,
    params: dict[str, Any],
    *,
    api_key: str | None = None,
    base_url: str | None = None,
    timeout: float | None = None,
) -> Any:
    """GET ``{base_url}/{path}`` within one wall-clock deadline and decode JSON.

    The deadline covers connecting, the response headers and the body. A
    watchdog timer severs the connection when it passes, so a server that
    trickles bytes cannot hold the request open.
    """
    settings = get_settings()
    key = api_key or settings.require_api_key()
    base = (base_url or settings.ridb_base_url).rstrip("/")
    timeout = timeout or settings.request_timeout_s or FETCH_TIMEOUT_S
    url = f"{base}/{path}"

    headers = {"accept": "application/json", "apikey": key}
    logger.debug("GET %s params=%s", url, params)
    deadline = time.monotonic() + timeout
    try:
        resp = session.get(url, params=params, headers=headers, timeout=timeout, stream=True)
    except requests.Timeout as exc:
        raise _timed_out(timeout) from exc
    except requests.RequestException as exc:
        msg = f"RIDB request failed: {exc}"
        raise RemoteError(msg) from exc

    try:
        if time.monotonic() > deadline:
            raise _timed_out(timeout)
        if not resp.ok:
            raise RemoteError.from_status(resp.status_code, resp.reason or "")
        body = _read_body(resp, deadline, timeout)
    finally:
        resp.close()

    try:
        return json.loads(body)
    except ValueError as exc:
        msg = f"Invalid or incomplete JSON received from RIDB ({path})"
        raise MalformedResponse(msg) from exc


def _validate(schema: type[ModelT] | TypeAdapter[Any], data: Any, path: str) -> Any:
    try:
        if isinstance(schema, TypeAdapter):
            return schema.validate_python(data)
        return schema.model_validate(data)
    except ValidationError as exc:
        first = exc.errors()[0]
        where = ".".join(str(p) for p in first["loc"]) or "<root>"
        msg = (
            f"Unexpected RIDB response shape ({path}): {exc.error_count()} error(s), "
            f"first at {where}: {first['msg']}"
        )
        raise SchemaViolation(msg) from exc


# ---------------------------------------------------------------------------
# Public helpers
# ---------------------------------------------------------------------------


def fetch_page(
    path: str,
    *,
    schema: type[RIDBPage[RecordT]],
    limit: int = MAX_PAGE_SIZE,
    offset: int = 0,
    query: str | None = None,
    api_key: str | None = None,
    base_url: str | None = None,
    timeout: float | None = None,
) -> Page[RecordT]:
    """
    Fetch one page of a RIDB list endpoint.

    Args:
        path: Resource path below the API base (e.g. ``facilities/234672/campsites``).
        schema: ``RIDBPage[...]`` model the payload must satisfy.
        limit: Page size, 1 to ``MAX_PAGE_SIZE``.
        offset: Index of the first record, >= 0.
        query: RIDB substring filter; blank values are not sent.

    Raises:
        InvalidParameter: ``limit`` or ``offset`` out of range (no request made).
        Timeout, RemoteError, MalformedResponse, SchemaViolation
    """
    params: dict[str, Any] = {
        "limit": require_int("limit", limit, 1, MAX_PAGE_SIZE),
        "offset": require_int("offset", offset, 0),
    }
    if query and query.strip():
        params["query"] = query.strip()

    data = _get_json(path, params, api_key=api_key, base_url=base_url, timeout=timeout)
    parsed: RIDBPage[RecordT] = _validate(schema, data, path)
    return Page(items=list(parsed.records), total_count=parsed.total_count)


def fetch_record(
    path: str,
    *,
    schema: type[ModelT] | TypeAdapter[Any],
    params: dict[str, Any] | None = None,
    api_key: str | None = None,
    base_url: str | None = None,
    timeout: float | None = None,
) -> Any:
    """Fetch and validate a single (non-paginated) RIDB resource."""
    data = _get_json(path, params or {}, api_key=api_key, base_url=base_url, timeout=timeout)
    return _validate(schema, data, path)


def get_all(
    path: str,
    *,
    schema: type[RIDBPage[RecordT]],
    query: str | None = None,
    max_pages: int = DEFAULT_MAX_PAGES,
    start_offset: int = 0,
    page_size: int = MAX_PAGE_SIZE,
    stop_policy: StopPolicy | None = None,
    **request_kwargs: Any,
) -> list[RecordT]:
    """
    Fetch every record of a list endpoint by paging through it.

    Returns a flat list in remote order. Hitting ``max_pages`` returns what was
    collected so far (logged as a warning); any failure discards everything.
    """

    def fetch(limit: int, offset: int) -> Page[RecordT]:
        return fetch_page(
            path, schema=schema, limit=limit, offset=offset, query=query, **request_kwargs
        )

    records = paginate(
        fetch,
        page_size=page_size,
        start_offset=start_offset,
        max_pages=max_pages,
        stop_policy=stop_policy,
    )
    logger.info("Fetched %d records from %s", len(records), path)
    return records
