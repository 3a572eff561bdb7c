"""
Shared HTTP client for RIDB requests.

Provides a pre-configured ``requests.Session`` with a mounted adapter, a
project ``User-Agent`` and a default timeout. Retries are disabled: a failed
page is reported to the caller, never silently re-sent.

Usage::

    from campvue.services.http import session

    resp = session.get("https://ridb.recreation.gov/api/v1/activities", timeout=12)
"""

from __future__ import annotations

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

#: No retries at the transport layer; retry policy belongs to callers.
DEFAULT_RETRY = Retry(
    total=0,
    connect=0,
    read=0,
    redirect=3,
    raise_on_status=False,  # status codes are mapped by the RIDB client
)

DEFAULT_TIMEOUT = 12  # seconds

USER_AGENT = "campvue/0.1 (RIDB normalizer)"


def create_session(
    retry: Retry | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> requests.Session:
    """
    Build a ``requests.Session`` with the adapter mounted.

    Args:
        retry: Custom retry strategy (defaults to ``DEFAULT_RETRY``).
        timeout: Default timeout applied to every request.
    """
    s = requests.Session()
    adapter = HTTPAdapter(max_retries=retry or DEFAULT_RETRY)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    s.headers["User-Agent"] = USER_AGENT
    s.headers["accept"] = "application/json"

    # Inject a default timeout so callers that forget ``timeout=`` still
    # cannot hang forever.
    _original_send = s.send

    def _send_with_timeout(
        prepared: requests.PreparedRequest, **kwargs: object
    ) -> requests.Response:
        kwargs.setdefault("timeout", timeout)
        return _original_send(prepared, **kwargs)  # type: ignore[arg-type]

    s.send = _send_with_timeout  # type: ignore[method-assign]
    return s


#: Module-level session, import and use directly.
session: requests.Session = create_session()
