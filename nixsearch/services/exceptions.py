"""Errors raised while searching the package index."""

from __future__ import annotations


class NixSearchError(RuntimeError):
    """Base class for every search failure surfaced to callers."""


class QueryEncodingError(NixSearchError):
    """The query text could not be serialized into a request body."""


class TransportError(NixSearchError):
    """The HTTP exchange failed after all retry attempts."""


class MalformedResponseError(NixSearchError):
    """The backend answered with something other than the expected JSON envelope."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class BackendUnexpectedError(NixSearchError):
    """Non-success status without a structured error object."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"API failed with status={status_code}: {body}")
        self.status_code = status_code
        self.body = body


class ChannelNotFoundError(NixSearchError):
    """The index for the requested channel does not exist."""

    def __init__(self, status_code: int, channel: str, resource_id: str | None) -> None:
        super().__init__(
            f"API failed with status={status_code}: index={resource_id or ''} does not exist "
            f"(invalid channel={channel})"
        )
        self.status_code = status_code
        self.channel = channel
        self.resource_id = resource_id


class BackendReportedError(NixSearchError):
    """Non-success status with a structured error of any other kind."""

    def __init__(
        self,
        status_code: int,
        reason: str,
        *,
        kind: str = "",
        resource_type: str | None = None,
        resource_id: str | None = None,
    ) -> None:
        super().__init__(reason)
        self.status_code = status_code
        self.reason = reason
        self.kind = kind
        self.resource_type = resource_type
        self.resource_id = resource_id


__all__ = [
    "BackendReportedError",
    "BackendUnexpectedError",
    "ChannelNotFoundError",
    "MalformedResponseError",
    "NixSearchError",
    "QueryEncodingError",
    "TransportError",
]
