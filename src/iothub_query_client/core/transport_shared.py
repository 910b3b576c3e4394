"""Shared helpers for sync/async transport implementations."""

from __future__ import annotations

import random
from collections.abc import Mapping

import httpx

from ..config import QueryClientConfig
from .errors import QueryValidationError
from .models import HttpMethod, HttpResponse
from .retry import backoff_delay, may_retry

AUTHORIZATION_HEADER = "Authorization"
REQUEST_ID_HEADER = "Request-Id"


def build_default_headers(config: QueryClientConfig) -> Mapping[str, str]:
    return {
        "Accept": "application/json",
        "Content-Type": "application/json; charset=utf-8",
        "User-Agent": config.user_agent,
    }


def build_request_timeout(config: QueryClientConfig, timeout_seconds: float) -> httpx.Timeout:
    return httpx.Timeout(
        connect=config.transport.timeout_connect_seconds,
        read=timeout_seconds or None,
        write=config.transport.timeout_write_seconds,
        pool=config.transport.timeout_pool_seconds,
    )


def build_request_headers(
    *,
    credentials: object,
    headers: Mapping[str, str],
    request_id: str | None,
) -> dict[str, str]:
    authorization = getattr(credentials, "authorization_header", None)
    if not callable(authorization):
        raise QueryValidationError("credentials must provide authorization_header()")
    merged = dict(headers)
    merged[AUTHORIZATION_HEADER] = authorization()
    if request_id:
        merged[REQUEST_ID_HEADER] = request_id
    return merged


def method_name(method: HttpMethod | str) -> str:
    if isinstance(method, HttpMethod):
        return method.value
    return str(method).upper()


def to_http_response(response: object) -> HttpResponse:
    headers = getattr(response, "headers", None) or {}
    body = getattr(response, "content", b"") or b""
    return HttpResponse(
        status_code=getattr(response, "status_code", None),
        headers=dict(headers.items()),
        body=bytes(body),
    )


def should_retry_attempt(
    *,
    config: QueryClientConfig,
    attempt: int,
    started_at: float,
    now: float,
) -> bool:
    return may_retry(config.retry, attempt, elapsed_seconds=now - started_at)


def compute_backoff_seconds(
    *,
    config: QueryClientConfig,
    attempt: int,
    rng: random.Random,
) -> float:
    return backoff_delay(config.retry, attempt, rng=rng)


__all__ = [
    "AUTHORIZATION_HEADER",
    "REQUEST_ID_HEADER",
    "build_default_headers",
    "build_request_timeout",
    "build_request_headers",
    "method_name",
    "to_http_response",
    "should_retry_attempt",
    "compute_backoff_seconds",
]
