"""Public async client entrypoint."""

from __future__ import annotations

import inspect
from collections.abc import Mapping
from types import TracebackType

from .client_shared import (
    build_job_query_target,
    build_twin_query_target,
    resolve_credentials,
    resolve_page_size,
    validate_client_config,
)
from .config import QueryClientConfig
from .core.async_transport import AsyncHttpRequestExecutor
from .core.credentials import ServiceCredentials
from .core.errors import QueryClientClosedError
from .core.models import AsyncRequestExecutor, HttpMethod, PageResponse
from .query.async_collection import AsyncQueryCollection
from .query.models import QueryType
from .query.specs import SqlQuery, TypedQuery


class _GuardedAsyncRequestExecutor:
    """Guard wrapper to block page fetches after client close."""

    def __init__(self, owner: "AsyncQueryClient", delegate: AsyncRequestExecutor) -> None:
        self._owner = owner
        self._delegate = delegate

    async def execute(
        self,
        *,
        credentials: object,
        url: str,
        method: HttpMethod | str,
        body: bytes,
        headers: Mapping[str, str],
        timeout_seconds: float,
        request_id: str | None = None,
    ) -> PageResponse:
        self._owner._ensure_open()
        response = await self._delegate.execute(
            credentials=credentials,
            url=url,
            method=method,
            body=body,
            headers=headers,
            timeout_seconds=timeout_seconds,
            request_id=request_id,
        )
        self._owner._ensure_open()
        return response


class AsyncQueryClient:
    """Async variant of :class:`QueryClient`."""

    def __init__(
        self,
        config: QueryClientConfig,
        credentials: ServiceCredentials | str,
        *,
        executor: AsyncRequestExecutor | None = None,
    ) -> None:
        validate_client_config(config)
        self._config = config
        self._credentials = resolve_credentials(credentials)
        self._executor = executor or AsyncHttpRequestExecutor(config)
        self._guarded_executor = _GuardedAsyncRequestExecutor(self, self._executor)
        self._closed = False

    @property
    def config(self) -> QueryClientConfig:
        return self._config

    def query_twins(self, sql: str, *, page_size: int | None = None) -> AsyncQueryCollection:
        return self._sql_collection(sql, QueryType.TWIN, page_size)

    def query_raw(self, sql: str, *, page_size: int | None = None) -> AsyncQueryCollection:
        return self._sql_collection(sql, QueryType.RAW, page_size)

    def query_device_jobs(
        self,
        sql: str,
        *,
        page_size: int | None = None,
    ) -> AsyncQueryCollection:
        return self._sql_collection(sql, QueryType.DEVICE_JOB, page_size)

    def query_job_responses(
        self,
        *,
        job_type: str | None = None,
        job_status: str | None = None,
        page_size: int | None = None,
    ) -> AsyncQueryCollection:
        self._ensure_open()
        return AsyncQueryCollection(
            TypedQuery(),
            resolve_page_size(self._config, page_size),
            QueryType.JOB_RESPONSE,
            executor=self._guarded_executor,
            target=build_job_query_target(
                self._config,
                self._credentials,
                job_type=job_type,
                job_status=job_status,
            ),
        )

    def _sql_collection(
        self,
        sql: str,
        query_type: QueryType,
        page_size: int | None,
    ) -> AsyncQueryCollection:
        self._ensure_open()
        return AsyncQueryCollection(
            SqlQuery(sql),
            resolve_page_size(self._config, page_size),
            query_type,
            executor=self._guarded_executor,
            target=build_twin_query_target(self._config, self._credentials),
        )

    def _ensure_open(self) -> None:
        if self._closed:
            raise QueryClientClosedError("AsyncQueryClient is already closed")

    async def close(self) -> None:
        if self._closed:
            return
        close_executor = getattr(self._executor, "close", None)
        if callable(close_executor):
            result = close_executor()
            if inspect.isawaitable(result):
                await result
        self._closed = True

    async def __aenter__(self) -> "AsyncQueryClient":
        self._ensure_open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        await self.close()
        return False


__all__ = [
    "AsyncQueryClient",
]
