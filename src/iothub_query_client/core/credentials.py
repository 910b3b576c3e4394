"""Credential objects handed through to the request executor."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from .errors import QueryValidationError


@runtime_checkable
class ServiceCredentials(Protocol):
    def authorization_header(self) -> str: ...


@dataclass(slots=True, frozen=True)
class SasTokenCredentials:
    """Pre-issued shared access signature, sent verbatim."""

    token: str = field(repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.token, str) or not self.token.strip():
            raise QueryValidationError("token is required")

    def authorization_header(self) -> str:
        return self.token


__all__ = [
    "ServiceCredentials",
    "SasTokenCredentials",
]
