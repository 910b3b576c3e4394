"""Per-call query options."""

from __future__ import annotations

from dataclasses import dataclass

from ..core.errors import QueryValidationError


@dataclass(slots=True, frozen=True)
class QueryOptions:
    """Continuation token and page size override for a single fetch."""

    continuation_token: str | None = None
    page_size: int | None = None

    def __post_init__(self) -> None:
        if self.continuation_token is not None and not isinstance(self.continuation_token, str):
            raise QueryValidationError("continuation_token must be str")
        if self.page_size is None:
            return
        if isinstance(self.page_size, bool) or not isinstance(self.page_size, int):
            raise QueryValidationError("page_size must be int")
        if self.page_size <= 0:
            raise QueryValidationError("page_size must be > 0")


__all__ = [
    "QueryOptions",
]
