"""
Client-side request budget.

The service throttles aggressively (HTTP 429). Long-running callers can opt into a token
bucket so the jar spaces its own dispatches instead of collecting `RateLimited` errors.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field


@dataclass
class TokenBucketRateLimiter:
    """Token bucket limiter for N requests per minute (best-effort, thread-safe)."""

    max_per_minute: float
    burst: float | None = None
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def __post_init__(self) -> None:
        rpm = float(self.max_per_minute)
        if rpm <= 0:
            raise ValueError("max_per_minute must be > 0")
        self._capacity = float(self.burst) if self.burst is not None else float(rpm)
        self._tokens = self._capacity
        self._refill_per_sec = rpm / 60.0
        self._last = time.monotonic()

    def _refill(self) -> None:
        now = time.monotonic()
        elapsed = now - self._last
        if elapsed <= 0:
            return
        self._tokens = min(self._capacity, self._tokens + elapsed * self._refill_per_sec)
        self._last = now

    def acquire(self) -> float:
        """Block until one request may be sent; returns the total time slept."""
        slept = 0.0
        while True:
            with self._lock:
                self._refill()
                if self._tokens >= 1.0:
                    self._tokens -= 1.0
                    return slept
                missing = 1.0 - self._tokens
            sleep_s = min(1.0, max(0.05, missing / self._refill_per_sec))
            time.sleep(sleep_s)
            slept += sleep_s
