"""Async paged query collection."""

from __future__ import annotations

from collections.abc import AsyncIterator

from ..core.models import AsyncRequestExecutor, HttpMethod
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


class AsyncQueryCollection(QueryCollectionCore):
    """Async counterpart of :class:`QueryCollection`; same state transitions."""

    def __init__(
        self,
        query: QuerySpec,
        page_size: int,
        query_type: QueryType,
        *,
        executor: AsyncRequestExecutor,
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
        executor: AsyncRequestExecutor,
        **kwargs: object,
    ) -> "AsyncQueryCollection":
        return cls(SqlQuery(query_text), page_size, query_type, executor=executor, **kwargs)

    @classmethod
    def typed(
        cls,
        page_size: int,
        query_type: QueryType,
        *,
        executor: AsyncRequestExecutor,
        **kwargs: object,
    ) -> "AsyncQueryCollection":
        return cls(TypedQuery(), page_size, query_type, executor=executor, **kwargs)

    async def send_query_request(
        self,
        credentials: object,
        url: str,
        method: HttpMethod | str,
        timeout_seconds: float,
        options: QueryOptions | None = None,
        *,
        request_id: str | None = None,
    ) -> QueryCollectionResponse:
        target = self._bind_target(
            credentials=credentials,
            url=url,
            method=method,
            timeout_seconds=timeout_seconds,
            request_id=request_id,
        )
        return await self._fetch(target, options)

    async def has_next(self, options: QueryOptions | None = None) -> bool:
        state = self.state
        if state in (CollectionState.NO_RESPONSE_YET, CollectionState.RESPONSE_UNCONSUMED):
            return True
        if state is CollectionState.RESPONSE_CONSUMED_HAS_CONTINUATION:
            await self._fetch(self._require_target(), options)
            return True
        return False

    async def next(self, options: QueryOptions | None = None) -> QueryCollectionResponse | None:
        if self.state is CollectionState.NO_RESPONSE_YET:
            await self._fetch(self._require_target(), options)
        elif not await self.has_next(options):
            return None
        return self._mark_returned()

    async def __aiter__(self) -> AsyncIterator[QueryCollectionResponse]:
        while True:
            page = await self.next()
            if page is None:
                return
            yield page

    async def _fetch(
        self,
        target: QueryTarget,
        options: QueryOptions | None,
    ) -> QueryCollectionResponse:
        _, headers, body = self._prepare_request(options)
        response = await self._executor.execute(
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
    "AsyncQueryCollection",
]
