"""
Typed failures raised while talking to RIDB.

Every failure during paging is fatal to that aggregation call. The CLI maps
``InvalidParameter`` to a client error and everything else to an upstream
error carrying the message.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    """Stable identifiers for each failure type."""

    TIMEOUT = "timeout"
    REMOTE_ERROR = "remote_error"
    MALFORMED_RESPONSE = "malformed_response"
    SCHEMA_VIOLATION = "schema_violation"
    INVALID_PARAMETER = "invalid_parameter"


class RIDBError(RuntimeError):
    """Base class for RIDB fetch and aggregation failures."""

    kind: ErrorKind = ErrorKind.REMOTE_ERROR

    @property
    def is_client_error(self) -> bool:
        """True when the caller, not the upstream service, is at fault."""
        return self.kind is ErrorKind.INVALID_PARAMETER

    def to_dict(self) -> dict[str, object]:
        return {"kind": str(self.kind), "message": str(self)}


class Timeout(RIDBError):
    """The request did not complete within its deadline."""

    kind = ErrorKind.TIMEOUT


class RemoteError(RIDBError):
    """RIDB answered with a non-success status, or could not be reached."""

    kind = ErrorKind.REMOTE_ERROR

    def __init__(self, message: str, status: int | None = None, status_text: str = "") -> None:
        super().__init__(message)
        self.status = status
        self.status_text = status_text

    @classmethod
    def from_status(cls, status: int, status_text: str) -> RemoteError:
        return cls(f"RIDB API responded with {status} {status_text}".rstrip(), status, status_text)

    def to_dict(self) -> dict[str, object]:
        data = super().to_dict()
        data["status"] = self.status
        data["status_text"] = self.status_text
        return data


class MalformedResponse(RIDBError):
    """The response body could not be decoded as JSON."""

    kind = ErrorKind.MALFORMED_RESPONSE


class SchemaViolation(RIDBError):
    """The JSON body decoded but does not have the expected shape."""

    kind = ErrorKind.SCHEMA_VIOLATION


class InvalidParameter(RIDBError, ValueError):
    """A caller-supplied limit, offset or page bound is out of range."""

    kind = ErrorKind.INVALID_PARAMETER


__all__ = [
    "ErrorKind",
    "InvalidParameter",
    "MalformedResponse",
    "RIDBError",
    "RemoteError",
    "SchemaViolation",
    "Timeout",
]
