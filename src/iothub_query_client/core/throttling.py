"""Outbound request pacing."""

from __future__ import annotations

import time
from typing import Callable


class RequestThrottler:
    """Keeps at least ``min_interval_seconds`` between two page requests."""

    def __init__(
        self,
        min_interval_seconds: float,
        *,
        clock: Callable[[], float] | None = None,
        sleeper: Callable[[float], None] | None = None,
    ) -> None:
        self._min_interval_seconds = max(0.0, float(min_interval_seconds))
        self._clock = clock or time.monotonic
        self._sleep = sleeper or time.sleep
        self._last_request_at: float | None = None

    def acquire(self) -> float:
        """Block until the next request may go out; return the seconds waited."""

        waited = 0.0
        now = self._clock()
        if self._last_request_at is not None:
            remaining = self._min_interval_seconds - (now - self._last_request_at)
            if remaining > 0:
                self._sleep(remaining)
                waited = remaining
                now = self._clock()
        self._last_request_at = now
        return waited

    def reset(self) -> None:
        self._last_request_at = None


__all__ = [
    "RequestThrottler",
]
