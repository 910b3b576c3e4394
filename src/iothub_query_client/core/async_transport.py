"""Async HTTP request executor with retry, throttling, and status evaluation."""

from __future__ import annotations

import asyncio
import logging
import random
import time
from collections.abc import Awaitable, Callable, Mapping
from typing import Protocol

import httpx

from ..config import QueryClientConfig
from .async_throttling import AsyncRequestThrottler
from .errors import QueryTransportError, classify_http_status
from .models import HttpMethod, HttpResponse
from .retry import is_retryable_http_status
from .transport_shared import (
    build_default_headers,
    build_request_headers,
    build_request_timeout,
    compute_backoff_seconds,
    method_name,
    should_retry_attempt,
    to_http_response,
)

logger = logging.getLogger("iothub_query_client")


class AsyncTransportClient(Protocol):
    async def request(
        self,
        method: str,
        url: str,
        *,
        content: bytes,
        headers: Mapping[str, str],
        timeout: httpx.Timeout,
    ) -> object: ...

    async def aclose(self) -> None: ...


class AsyncHttpRequestExecutor:
    """Asynchronous request executor backed by ``httpx.AsyncClient``."""

    def __init__(
        self,
        config: QueryClientConfig,
        *,
        client: AsyncTransportClient | None = None,
        sleeper: Callable[[float], Awaitable[None]] | None = None,
        clock: Callable[[], float] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._config = config
        self._sleep = sleeper or _default_sleep
        self._clock = clock or time.monotonic
        self._rng = rng or random.Random()
        self._closed = False

        self._throttler = AsyncRequestThrottler(
            config.throttling.min_wait_interval_seconds,
            clock=self._clock,
            sleeper=self._sleep,
        )
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(headers=build_default_headers(config))

    @property
    def closed(self) -> bool:
        return self._closed

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._owns_client and hasattr(self._client, "aclose"):
            await self._client.aclose()

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
    ) -> HttpResponse:
        if self._closed:
            raise QueryTransportError("transport is already closed")

        verb = method_name(method)
        request_headers = build_request_headers(
            credentials=credentials,
            headers=headers,
            request_id=request_id,
        )
        timeout = build_request_timeout(self._config, timeout_seconds)
        started_at = self._clock()
        attempt = 0

        while True:
            attempt += 1
            logger.debug("request start method=%s url=%s attempt=%s", verb, url, attempt)
            waited = await self._throttler.acquire()
            if waited > 0:
                logger.debug("request throttled url=%s waited_seconds=%.3f", url, waited)

            try:
                raw = await self._client.request(
                    verb,
                    url,
                    content=body,
                    headers=request_headers,
                    timeout=timeout,
                )
            except Exception as exc:
                if should_retry_attempt(
                    config=self._config,
                    attempt=attempt,
                    started_at=started_at,
                    now=self._clock(),
                ):
                    logger.warning(
                        "request network error; retrying url=%s attempt=%s error=%s",
                        url,
                        attempt,
                        exc.__class__.__name__,
                    )
                    await self._sleep(
                        compute_backoff_seconds(
                            config=self._config,
                            attempt=attempt,
                            rng=self._rng,
                        )
                    )
                    continue
                logger.error(
                    "request network error; giving up url=%s attempt=%s error=%s",
                    url,
                    attempt,
                    exc.__class__.__name__,
                )
                raise QueryTransportError(
                    "network/transport error",
                    cause="network",
                ) from exc

            http_status = getattr(raw, "status_code", None)
            logger.debug(
                "response received url=%s attempt=%s http_status=%s",
                url,
                attempt,
                http_status,
            )
            response = to_http_response(raw)
            mapped_error = classify_http_status(http_status, body=response.body)
            if mapped_error is None:
                logger.info("request success url=%s attempt=%s", url, attempt)
                return response

            if (
                is_retryable_http_status(http_status)
                and should_retry_attempt(
                    config=self._config,
                    attempt=attempt,
                    started_at=started_at,
                    now=self._clock(),
                )
            ):
                logger.warning(
                    "request transient failure; retrying url=%s attempt=%s http_status=%s",
                    url,
                    attempt,
                    http_status,
                )
                await self._sleep(
                    compute_backoff_seconds(
                        config=self._config,
                        attempt=attempt,
                        rng=self._rng,
                    )
                )
                continue

            logger.error(
                "request failed url=%s attempt=%s http_status=%s",
                url,
                attempt,
                http_status,
            )
            raise mapped_error


async def _default_sleep(seconds: float) -> None:
    await asyncio.sleep(seconds)


__all__ = [
    "AsyncHttpRequestExecutor",
]
