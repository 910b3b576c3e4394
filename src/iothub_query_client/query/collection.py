"""Paged query collection driven by ``has_next`` / ``next``."""

from __future__ import annotations

from collections.abc import Iterator

from ..core.models import HttpMethod, RequestExecutor
from .collection_shared import (
    CollectionState,
    QueryCollectionCore,
    QueryTextValidator,
    RequestBodyBuilder,
)
from .models import QueryCollectionResponse, QueryTarget, QueryType
from .options import QueryOptions
from .params import build_query_body
from .specs import QuerySpec, SqlQuery, TypedQuery
from .validators import validate_query_text


class QueryCollection(QueryCollectionCore):
    """Single-owner iterator over the pages of one query.

    ``has_next`` may fetch a page when the held one was already returned and
    carries a continuation token; ``next`` hands out the held page and only
    fetches for the very first page or through ``has_next``. Not thread-safe.
    """

    def __init__(
        self,
        query: QuerySpec,
        page_size: int,
        query_type: QueryType,
        *,
        executor: RequestExecutor,
        target: QueryTarget | None = None,
        validator: QueryTextValidator = validate_query_text,
        body_builder: RequestBodyBuilder = build_query_body,
    ) -> None:
        super().__init__(
            query,
            page_size,
            query_type,
            target=target,
            validator=validator,
            body_builder=body_builder,
        )
        self._executor = executor

    @classmethod
    def sql(
        cls,
        query_text: str,
        page_size: int,
        query_type: QueryType,
        *,
        executor: RequestExecutor,
        **kwargs: object,
    ) -> "QueryCollection":
        return cls(SqlQuery(query_text), page_size, query_type, executor=executor, **kwargs)

    @classmethod
    def typed(
        cls,
        page_size: int,
        query_type: QueryType,
        *,
        executor: RequestExecutor,
        **kwargs: object,
    ) -> "QueryCollection":
        return cls(TypedQuery(), page_size, query_type, executor=executor, **kwargs)

    def send_query_request(
        self,
        credentials: object,
        url: str,
        method: HttpMethod | str,
        timeout_seconds: float,
        options: QueryOptions | None = None,
        *,
        request_id: str | None = None,
    ) -> QueryCollectionResponse:
        """Fetch one page and hold it as the latest, unreturned response."""

        target = self._bind_target(
            credentials=credentials,
            url=url,
            method=method,
            timeout_seconds=timeout_seconds,
            request_id=request_id,
        )
        return self._fetch(target, options)

    def has_next(self, options: QueryOptions | None = None) -> bool:
        state = self.state
        if state in (CollectionState.NO_RESPONSE_YET, CollectionState.RESPONSE_UNCONSUMED):
            return True
        if state is CollectionState.RESPONSE_CONSUMED_HAS_CONTINUATION:
            self._fetch(self._require_target(), options)
            return True
        return False

    def next(self, options: QueryOptions | None = None) -> QueryCollectionResponse | None:
        if self.state is CollectionState.NO_RESPONSE_YET:
            self._fetch(self._require_target(), options)
        elif not self.has_next(options):
            return None
        return self._mark_returned()

    def __iter__(self) -> Iterator[QueryCollectionResponse]:
        while True:
            page = self.next()
            if page is None:
                return
            yield page

    def _fetch(
        self,
        target: QueryTarget,
        options: QueryOptions | None,
    ) -> QueryCollectionResponse:
        _, headers, body = self._prepare_request(options)
        response = self._executor.execute(
            credentials=target.credentials,
            url=target.url,
            method=target.method,
            body=body,
            headers=headers,
            timeout_seconds=target.timeout_seconds,
            request_id=target.request_id,
        )
        return self._store_response(response)


__all__ = [
    "QueryCollection",
]
