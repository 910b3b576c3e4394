"""Error types and HTTP status mapping."""

from __future__ import annotations

import json


def extract_error_message(body: bytes | None) -> str | None:
    """Pull a human readable message out of a service error body."""

    if not body:
        return None
    try:
        payload = json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, ValueError):
        return None
    if not isinstance(payload, dict):
        return None
    for key in ("Message", "message", "ExceptionMessage"):
        value = payload.get(key)
        if value is not None:
            return str(value)
    return None


class QueryClientError(Exception):
    """Base exception for this package."""

    def __init__(
        self,
        message: str,
        *,
        http_status: int | None = None,
        cause: str | None = None,
    ) -> None:
        super().__init__(message)
        self.http_status = http_status
        self.cause = cause


class QueryValidationError(QueryClientError, ValueError):
    """Invalid construction or call argument."""


class QueryClientClosedError(QueryClientError):
    """Raised when client is used after close."""


class QueryProtocolError(QueryClientError):
    """Response shape inconsistent with the query protocol."""


class QueryMalformedResponseError(QueryProtocolError, OSError):
    """Page response carries a missing, unknown or mismatched item type."""


class QueryTransportError(QueryClientError):
    """Network/transport-level failure."""


class QueryAuthError(QueryTransportError):
    """Credentials rejected by the service."""


class QueryNotFoundError(QueryTransportError):
    """Target resource does not exist."""


class QueryThrottledError(QueryTransportError):
    """Service asked the caller to slow down."""


class QueryServerError(QueryTransportError):
    """Server-side unexpected error."""


class QueryUnavailableError(QueryServerError):
    """Service temporarily unavailable."""


def classify_http_status(
    http_status: int | None,
    *,
    body: bytes | None = None,
) -> QueryClientError | None:
    """Map an HTTP status to a domain exception, ``None`` for success."""

    if http_status is None:
        return QueryProtocolError("Missing HTTP status")
    if http_status < 400:
        return None

    message = extract_error_message(body) or f"query request failed with HTTP {http_status}"
    if http_status in (401, 403):
        return QueryAuthError(message, http_status=http_status, cause="auth")
    if http_status == 404:
        return QueryNotFoundError(message, http_status=http_status)
    if http_status == 429:
        return QueryThrottledError(message, http_status=http_status, cause="server_transient")
    if http_status == 503:
        return QueryUnavailableError(message, http_status=http_status, cause="server_transient")
    if http_status >= 500:
        return QueryServerError(message, http_status=http_status, cause="server_transient")
    return QueryTransportError(message, http_status=http_status, cause="http_status")


__all__ = [
    "QueryClientError",
    "QueryValidationError",
    "QueryClientClosedError",
    "QueryProtocolError",
    "QueryMalformedResponseError",
    "QueryTransportError",
    "QueryAuthError",
    "QueryNotFoundError",
    "QueryThrottledError",
    "QueryServerError",
    "QueryUnavailableError",
    "extract_error_message",
    "classify_http_status",
]
