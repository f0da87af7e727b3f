"""Bounded retry with exponential backoff for transport failures.

WHY: Uploads of large media files and long-lived connections to the API
host occasionally hit timeouts or connection resets. Retrying those a few
times hides transient network trouble from the caller.

HOW: RetryPolicy.call() runs a zero-argument callable. When it raises
httpx.TransportError, the policy sleeps base_delay_ms * 2**(attempt-1)
milliseconds and tries again, up to max_retries attempts in total. The
sleep function is injectable so tests can record delays instead of
waiting.

RULES:
- Only httpx.TransportError (timeouts, connect/read errors) is retried
- HTTP error statuses are ordinary responses and are never retried here
- max_retries counts total attempts; after the last one the original
  exception is re-raised unchanged
- Backoff blocks the calling thread; there is no cancellation hook
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional, TypeVar

import httpx

from rarus_echo.config import DEFAULT_MAX_RETRIES, DEFAULT_RETRY_DELAY_MS

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RetryPolicy:
    """Retry a transport call on transient failure."""

    def __init__(
        self,
        max_retries: int = DEFAULT_MAX_RETRIES,
        base_delay_ms: int = DEFAULT_RETRY_DELAY_MS,
        sleep: Optional[Callable[[float], None]] = None,
    ) -> None:
        if max_retries < 1:
            raise ValueError("max_retries must be at least 1")
        if base_delay_ms < 0:
            raise ValueError("base_delay_ms must not be negative")
        self.max_retries = max_retries
        self.base_delay_ms = base_delay_ms
        self._sleep = sleep or time.sleep

    def delay_for(self, attempt: int) -> int:
        """Backoff in milliseconds after the given failed attempt (1-based)."""
        return self.base_delay_ms * (2 ** (attempt - 1))

    def call(self, func: Callable[[], T], description: str = "request") -> T:
        attempt = 0
        while True:
            attempt += 1
            try:
                return func()
            except httpx.TransportError as exc:
                if attempt >= self.max_retries:
                    logger.error(
                        "%s failed after %d attempt(s): %s", description, attempt, exc
                    )
                    raise
                delay_ms = self.delay_for(attempt)
                logger.warning(
                    "%s failed (attempt %d/%d), retrying in %d ms: %s",
                    description,
                    attempt,
                    self.max_retries,
                    delay_ms,
                    exc,
                )
                self._sleep(delay_ms / 1000.0)
