"""Client configuration."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True, frozen=True)
class TransportConfig:
    """Transport-related settings.

    The read timeout is supplied per request by the query collection.
    """

    timeout_connect_seconds: float = 5.0
    timeout_write_seconds: float = 30.0
    timeout_pool_seconds: float = 5.0

    def validate(self) -> None:
        for field_name in (
            "timeout_connect_seconds",
            "timeout_write_seconds",
            "timeout_pool_seconds",
        ):
            if getattr(self, field_name) <= 0:
                raise ValueError(f"transport.{field_name} must be > 0")


@dataclass(slots=True, frozen=True)
class RetryConfig:
    """Retry-related settings."""

    max_attempts: int = 3
    max_backoff_seconds: float = 10.0
    total_retry_budget_seconds: float = 60.0

    def validate(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("retry.max_attempts must be >= 1")
        if self.max_backoff_seconds < 0:
            raise ValueError("retry.max_backoff_seconds must be >= 0")
        if self.total_retry_budget_seconds < 0:
            raise ValueError("retry.total_retry_budget_seconds must be >= 0")


@dataclass(slots=True, frozen=True)
class ThrottlingConfig:
    """Throttling-related settings."""

    min_wait_interval_seconds: float = 0.0

    def validate(self) -> None:
        if self.min_wait_interval_seconds < 0:
            raise ValueError("throttling.min_wait_interval_seconds must be >= 0")


@dataclass(slots=True, frozen=True)
class QueryConfig:
    """Defaults applied to collections created by the client."""

    default_page_size: int = 100
    default_timeout_seconds: float = 24.0

    def validate(self) -> None:
        if isinstance(self.default_page_size, bool) or not isinstance(self.default_page_size, int):
            raise ValueError("query.default_page_size must be int")
        if self.default_page_size <= 0:
            raise ValueError("query.default_page_size must be > 0")
        if self.default_timeout_seconds <= 0:
            raise ValueError("query.default_timeout_seconds must be > 0")


@dataclass(slots=True, frozen=True)
class QueryClientConfig:
    """Runtime configuration for the query client."""

    base_url: str
    api_version: str = "2021-04-12"
    user_agent: str = "iothub-query-client/0.1.0"

    transport: TransportConfig = field(default_factory=TransportConfig)
    retry: RetryConfig = field(default_factory=RetryConfig)
    throttling: ThrottlingConfig = field(default_factory=ThrottlingConfig)
    query: QueryConfig = field(default_factory=QueryConfig)

    @property
    def normalized_base_url(self) -> str:
        base = self.base_url.strip().rstrip("/")
        if "://" not in base:
            base = f"https://{base}"
        return base

    def validate(self) -> None:
        if not self.base_url or not self.base_url.strip():
            raise ValueError("base_url must not be empty")
        if not self.api_version:
            raise ValueError("api_version must not be empty")
        self.transport.validate()
        self.retry.validate()
        self.throttling.validate()
        self.query.validate()


__all__ = [
    "TransportConfig",
    "RetryConfig",
    "ThrottlingConfig",
    "QueryConfig",
    "QueryClientConfig",
]
