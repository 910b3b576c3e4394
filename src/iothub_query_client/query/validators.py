"""Input validation for query collections."""

from __future__ import annotations

import re

from ..core.errors import QueryValidationError
from .models import QueryType

_SELECT_PATTERN = re.compile(r"\bselect\b", re.IGNORECASE)
_FROM_PATTERN = re.compile(r"\bfrom\b", re.IGNORECASE)


def validate_query_text(text: str | None) -> None:
    """Reject query text without both a SELECT and a FROM clause."""

    if text is None or not isinstance(text, str):
        raise QueryValidationError("query text is required")
    if text.strip() == "":
        raise QueryValidationError("query text is required")
    if not _SELECT_PATTERN.search(text) or not _FROM_PATTERN.search(text):
        raise QueryValidationError("query text must contain both SELECT and FROM")


def validate_page_size(page_size: int) -> None:
    if isinstance(page_size, bool) or not isinstance(page_size, int):
        raise QueryValidationError("page_size must be int")
    if page_size <= 0:
        raise QueryValidationError("page_size must be > 0")


def validate_query_type(query_type: QueryType | None) -> None:
    if query_type is None:
        raise QueryValidationError("query_type is required")
    if not isinstance(query_type, QueryType):
        raise QueryValidationError("query_type must be QueryType")
    if query_type is QueryType.UNKNOWN:
        raise QueryValidationError("query_type must not be UNKNOWN")


def validate_request_target(
    *,
    credentials: object,
    url: str | None,
    method: object,
    timeout_seconds: float,
) -> None:
    if credentials is None:
        raise QueryValidationError("credentials are required")
    if url is None or str(url).strip() == "":
        raise QueryValidationError("url is required")
    if method is None or str(method).strip() == "":
        raise QueryValidationError("method is required")
    if timeout_seconds is None or timeout_seconds < 0:
        raise QueryValidationError("timeout_seconds must be >= 0")


__all__ = [
    "validate_query_text",
    "validate_page_size",
    "validate_query_type",
    "validate_request_target",
]
