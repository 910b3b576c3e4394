"""Query domain and response models."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum

from ..core.errors import QueryMalformedResponseError
from ..core.models import HttpMethod


class QueryType(str, Enum):
    """Collection kind requested by a query; value is the wire item-type tag."""

    TWIN = "twin"
    DEVICE_JOB = "deviceJob"
    JOB_RESPONSE = "jobResponse"
    RAW = "raw"
    UNKNOWN = "unknown"

    @property
    def item_type(self) -> str:
        return self.value

    @classmethod
    def from_item_type(cls, value: str | None) -> "QueryType | None":
        if value is None:
            return None
        wanted = value.strip().lower()
        for member in cls:
            if member.value.lower() == wanted:
                return member
        return None


@dataclass(slots=True, frozen=True)
class QueryTarget:
    """Where and how page requests of one collection are sent."""

    credentials: object = field(repr=False)
    url: str
    method: HttpMethod | str
    timeout_seconds: float
    request_id: str | None = None


@dataclass(slots=True, frozen=True)
class QueryCollectionResponse:
    """One fetched page: raw body plus the continuation token for the next."""

    body: bytes
    continuation_token: str | None = None

    def __post_init__(self) -> None:
        if isinstance(self.body, str):
            object.__setattr__(self, "body", self.body.encode("utf-8"))
        if self.continuation_token == "":
            object.__setattr__(self, "continuation_token", None)

    @property
    def has_continuation(self) -> bool:
        return self.continuation_token is not None

    @property
    def text(self) -> str:
        try:
            return self.body.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise QueryMalformedResponseError("page body is not valid UTF-8") from exc

    @property
    def items(self) -> tuple[object, ...]:
        """Page entries decoded from the JSON array body.

        An empty body is an empty page.
        """

        if not self.body.strip():
            return ()
        try:
            payload = json.loads(self.body.decode("utf-8"))
        except (UnicodeDecodeError, ValueError) as exc:
            raise QueryMalformedResponseError("page body is not valid JSON") from exc
        if not isinstance(payload, list):
            raise QueryMalformedResponseError("page body JSON root must be an array")
        return tuple(payload)


__all__ = [
    "QueryType",
    "QueryTarget",
    "QueryCollectionResponse",
]
