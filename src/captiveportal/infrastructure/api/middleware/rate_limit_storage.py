"""In-memory storage for rate limiting counters.

Thread-safe token bucket storage keyed by client IP address.
"""

import time
from dataclasses import dataclass
from threading import Lock


@dataclass
class TokenBucket:
    """Token bucket for a single client key."""

    tokens: float
    last_updated: float


class RateLimitStorage:
    """Thread-safe in-memory storage for rate limit counters."""

    def __init__(self, cleanup_interval: int = 3600, stale_after: int = 3600) -> None:
        """Initialize storage.

        Args:
            cleanup_interval: Seconds between sweeps of stale entries.
            stale_after: Seconds without a request before a key is dropped.
        """
        self._storage: dict[str, TokenBucket] = {}
        self._lock = Lock()
        self._last_cleanup = time.monotonic()
        self._cleanup_interval = cleanup_interval
        self._stale_after = stale_after

    def consume(
        self, key: str, rate_per_minute: float, burst: float = 1.0
    ) -> tuple[bool, int, float]:
        """Attempt to consume a token for the given key.

        Args:
            key: The client key.
            rate_per_minute: Tokens refilled per minute.
            burst: Bucket capacity, at least one token.

        Returns:
            A tuple of (is_allowed, remaining_tokens, seconds_until_reset).
            When the request is refused the last value is the wait until
            the next token.
        """
        now = time.monotonic()
        rate_per_second = rate_per_minute / 60.0
        capacity = max(1.0, burst)

        with self._lock:
            if now - self._last_cleanup > self._cleanup_interval:
                self._cleanup_stale(now)

            bucket = self._storage.get(key)
            if bucket is None:
                bucket = TokenBucket(tokens=capacity - 1.0, last_updated=now)
                self._storage[key] = bucket
                return True, int(bucket.tokens), 1.0 / rate_per_second

            elapsed = now - bucket.last_updated
            bucket.tokens = min(capacity, bucket.tokens + elapsed * rate_per_second)
            bucket.last_updated = now

            if bucket.tokens >= 1.0:
                bucket.tokens -= 1.0
                reset_seconds = (capacity - bucket.tokens) / rate_per_second
                return True, int(bucket.tokens), reset_seconds

            wait_seconds = (1.0 - bucket.tokens) / rate_per_second
            return False, 0, wait_seconds

    def reset(self) -> None:
        with self._lock:
            self._storage.clear()

    def _cleanup_stale(self, now: float) -> None:
        to_delete = [
            key for key, bucket in self._storage.items()
            if now - bucket.last_updated > self._stale_after
        ]
        for key in to_delete:
            del self._storage[key]
        self._last_cleanup = now
