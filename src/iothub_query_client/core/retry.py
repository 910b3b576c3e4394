"""Retry policy for page requests."""

from __future__ import annotations

import random

from ..config import RetryConfig

_RETRYABLE_HTTP_STATUSES = frozenset({429, 500, 503})
_JITTER_RATIO = 0.1


def is_retryable_http_status(http_status: int | None) -> bool:
    return http_status in _RETRYABLE_HTTP_STATUSES


def backoff_delay(
    policy: RetryConfig,
    attempt: int,
    *,
    rng: random.Random | None = None,
) -> float:
    """Seconds to wait after the 1-based ``attempt`` failed.

    Doubles per attempt up to ``max_backoff_seconds``, with +/-10% jitter.
    """

    delay = min(policy.max_backoff_seconds, 2.0 ** (attempt - 1))
    if delay <= 0:
        return 0.0
    spread = delay * _JITTER_RATIO
    return max(0.0, delay + (rng or random).uniform(-spread, spread))


def may_retry(policy: RetryConfig, attempt: int, *, elapsed_seconds: float) -> bool:
    if attempt >= policy.max_attempts:
        return False
    return elapsed_seconds <= policy.total_retry_budget_seconds


__all__ = [
    "is_retryable_http_status",
    "backoff_delay",
    "may_retry",
]
