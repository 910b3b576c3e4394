"""State, validation and classification shared by sync/async query collections."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from enum import Enum

from ..core.errors import QueryMalformedResponseError, QueryValidationError
from ..core.models import HttpMethod, PageResponse, find_header
from .models import QueryCollectionResponse, QueryTarget, QueryType
from .options import QueryOptions
from .params import (
    CONTINUATION_HEADER,
    ITEM_TYPE_HEADER,
    PageRequest,
    build_page_headers,
    build_query_body,
    resolve_page_request,
)
from .specs import QuerySpec, SqlQuery, TypedQuery
from .validators import (
    validate_page_size,
    validate_query_text,
    validate_query_type,
    validate_request_target,
)

logger = logging.getLogger("iothub_query_client")

QueryTextValidator = Callable[[str], None]
RequestBodyBuilder = Callable[[str], bytes]


class CollectionState(Enum):
    NO_RESPONSE_YET = "no_response_yet"
    RESPONSE_UNCONSUMED = "response_unconsumed"
    RESPONSE_CONSUMED_HAS_CONTINUATION = "response_consumed_has_continuation"
    RESPONSE_CONSUMED_NO_CONTINUATION = "response_consumed_no_continuation"


def derive_collection_state(
    latest_response: QueryCollectionResponse | None,
    *,
    already_returned: bool,
) -> CollectionState:
    if latest_response is None:
        return CollectionState.NO_RESPONSE_YET
    if not already_returned:
        return CollectionState.RESPONSE_UNCONSUMED
    if latest_response.has_continuation:
        return CollectionState.RESPONSE_CONSUMED_HAS_CONTINUATION
    return CollectionState.RESPONSE_CONSUMED_NO_CONTINUATION


def classify_page_response(
    response: PageResponse,
    *,
    query_type: QueryType,
) -> QueryCollectionResponse:
    """Check the returned item type against the requested one and wrap the page."""

    headers: Mapping[str, str] = getattr(response, "headers", None) or {}
    raw_item_type = find_header(headers, ITEM_TYPE_HEADER)
    item_type = QueryType.from_item_type(raw_item_type)
    if item_type is None or item_type is QueryType.UNKNOWN:
        logger.error(
            "page rejected: unknown item type requested=%s received=%s",
            query_type.item_type,
            raw_item_type,
        )
        raise QueryMalformedResponseError(
            f"unknown query response item type: {raw_item_type!r}",
            cause="item_type_unknown",
        )
    if item_type is not query_type:
        logger.error(
            "page rejected: item type mismatch requested=%s received=%s",
            query_type.item_type,
            raw_item_type,
        )
        raise QueryMalformedResponseError(
            f"unexpected query response item type: expected {query_type.item_type!r}, "
            f"got {raw_item_type!r}",
            cause="item_type_mismatch",
        )

    body = getattr(response, "body", b"") or b""
    return QueryCollectionResponse(
        body=bytes(body),
        continuation_token=find_header(headers, CONTINUATION_HEADER) or None,
    )


class QueryCollectionCore:
    """Construction checks and page bookkeeping of a query collection.

    Subclasses add the executor call; everything here is free of I/O.
    """

    def __init__(
        self,
        query: QuerySpec,
        page_size: int,
        query_type: QueryType,
        *,
        target: QueryTarget | None = None,
        validator: QueryTextValidator = validate_query_text,
        body_builder: RequestBodyBuilder = build_query_body,
    ) -> None:
        if isinstance(query, SqlQuery):
            validator(query.text)
            query_text: str | None = query.text
        elif isinstance(query, TypedQuery):
            query_text = None
        else:
            raise QueryValidationError("query must be SqlQuery or TypedQuery")
        validate_page_size(page_size)
        validate_query_type(query_type)

        self._query_text = query_text
        self._page_size = page_size
        self._query_type = query_type
        self._body_builder = body_builder
        self._target: QueryTarget | None = None
        if target is not None:
            self._bind_target(
                credentials=target.credentials,
                url=target.url,
                method=target.method,
                timeout_seconds=target.timeout_seconds,
                request_id=target.request_id,
            )
        self._latest_response: QueryCollectionResponse | None = None
        self._response_already_returned = False

    @property
    def query_text(self) -> str | None:
        return self._query_text

    @property
    def is_sql_query(self) -> bool:
        return self._query_text is not None

    @property
    def page_size(self) -> int:
        return self._page_size

    def get_page_size(self) -> int:
        return self._page_size

    @property
    def query_type(self) -> QueryType:
        return self._query_type

    @property
    def target(self) -> QueryTarget | None:
        return self._target

    @property
    def latest_response(self) -> QueryCollectionResponse | None:
        return self._latest_response

    @property
    def response_already_returned(self) -> bool:
        return self._response_already_returned

    @property
    def state(self) -> CollectionState:
        return derive_collection_state(
            self._latest_response,
            already_returned=self._response_already_returned,
        )

    def _bind_target(
        self,
        *,
        credentials: object,
        url: str,
        method: HttpMethod | str,
        timeout_seconds: float,
        request_id: str | None,
    ) -> QueryTarget:
        validate_request_target(
            credentials=credentials,
            url=url,
            method=method,
            timeout_seconds=timeout_seconds,
        )
        self._target = QueryTarget(
            credentials=credentials,
            url=url,
            method=method,
            timeout_seconds=timeout_seconds,
            request_id=request_id,
        )
        return self._target

    def _require_target(self) -> QueryTarget:
        if self._target is None:
            raise QueryValidationError(
                "no request target bound; call send_query_request or pass target"
            )
        return self._target

    def _prepare_request(
        self,
        options: QueryOptions | None,
    ) -> tuple[PageRequest, Mapping[str, str], bytes]:
        page_request = resolve_page_request(options, self._latest_response, self._page_size)
        headers = build_page_headers(page_request)
        if self._query_text is not None:
            body = self._body_builder(self._query_text)
        else:
            body = b""
        logger.debug(
            "page request query_type=%s page_size=%s has_continuation=%s body_bytes=%s",
            self._query_type.item_type,
            page_request.page_size,
            page_request.continuation_token is not None,
            len(body),
        )
        return page_request, headers, body

    def _store_response(self, response: PageResponse) -> QueryCollectionResponse:
        page = classify_page_response(response, query_type=self._query_type)
        self._latest_response = page
        self._response_already_returned = False
        logger.info(
            "page stored query_type=%s has_continuation=%s body_bytes=%s",
            self._query_type.item_type,
            page.has_continuation,
            len(page.body),
        )
        return page

    def _mark_returned(self) -> QueryCollectionResponse | None:
        self._response_already_returned = True
        return self._latest_response

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(query_type={self._query_type.name}, "
            f"page_size={self._page_size}, is_sql_query={self.is_sql_query}, "
            f"state={self.state.name})"
        )


__all__ = [
    "CollectionState",
    "QueryCollectionCore",
    "QueryTextValidator",
    "RequestBodyBuilder",
    "derive_collection_state",
    "classify_page_response",
]
