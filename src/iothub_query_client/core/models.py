"""Core HTTP-boundary models and executor contracts."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Protocol


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


def find_header(headers: Mapping[str, str], name: str) -> str | None:
    """Case-insensitive header lookup over a plain mapping."""

    value = headers.get(name)
    if value is not None:
        return value
    wanted = name.lower()
    for key, candidate in headers.items():
        if key.lower() == wanted:
            return candidate
    return None


@dataclass(slots=True, frozen=True)
class HttpResponse:
    status_code: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""

    def __post_init__(self) -> None:
        normalized = {str(key).lower(): str(value) for key, value in self.headers.items()}
        object.__setattr__(self, "headers", MappingProxyType(normalized))

    def header(self, name: str) -> str | None:
        return self.headers.get(name.lower())


class PageResponse(Protocol):
    @property
    def headers(self) -> Mapping[str, str]: ...

    @property
    def body(self) -> bytes: ...


class RequestExecutor(Protocol):
    def execute(
        self,
        *,
        credentials: object,
        url: str,
        method: HttpMethod | str,
        body: bytes,
        headers: Mapping[str, str],
        timeout_seconds: float,
        request_id: str | None = None,
    ) -> PageResponse: ...


class AsyncRequestExecutor(Protocol):
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
    ) -> PageResponse: ...


__all__ = [
    "HttpMethod",
    "HttpResponse",
    "PageResponse",
    "RequestExecutor",
    "AsyncRequestExecutor",
    "find_header",
]
