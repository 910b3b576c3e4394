"""Page request builders: header values and request body."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from .models import QueryCollectionResponse
from .options import QueryOptions

PAGE_SIZE_HEADER = "x-ms-max-item-count"
CONTINUATION_HEADER = "x-ms-continuation"
ITEM_TYPE_HEADER = "x-ms-item-type"


@dataclass(slots=True, frozen=True)
class PageRequest:
    page_size: int
    continuation_token: str | None = None


def resolve_page_request(
    options: QueryOptions | None,
    latest_response: QueryCollectionResponse | None,
    default_page_size: int,
) -> PageRequest:
    """Pick the token and page size of the next request.

    Token: options, then the held response, then none.
    Page size: options, then the collection default.
    """

    token: str | None = None
    if options is not None and options.continuation_token:
        token = options.continuation_token
    elif latest_response is not None and latest_response.continuation_token:
        token = latest_response.continuation_token

    page_size = default_page_size
    if options is not None and options.page_size is not None:
        page_size = options.page_size

    return PageRequest(page_size=page_size, continuation_token=token)


def build_page_headers(page_request: PageRequest) -> Mapping[str, str]:
    headers = {PAGE_SIZE_HEADER: str(page_request.page_size)}
    if page_request.continuation_token is not None:
        headers[CONTINUATION_HEADER] = page_request.continuation_token
    return MappingProxyType(headers)


def build_query_body(query_text: str) -> bytes:
    return json.dumps({"query": query_text}).encode("utf-8")


__all__ = [
    "PAGE_SIZE_HEADER",
    "CONTINUATION_HEADER",
    "ITEM_TYPE_HEADER",
    "PageRequest",
    "resolve_page_request",
    "build_page_headers",
    "build_query_body",
]
