"""In-memory token bucket rate limiter.

Notes:
- Per-process only: running multiple workers multiplies the effective limit.
- Thread-safe: each instance guards its own state with a lock, so calls for
  different buckets never contend.
- Tokens accrue as real numbers; fractional tokens carry over between calls.
"""

from __future__ import annotations

import threading

from admission.adapters.rate_limit.base import (
    AbstractRateLimiter,
    Clock,
    monotonic_millis,
)
from admission.core.errors import InvalidConfigurationError


def _require_positive_int(name: str, value: object) -> int:
    """Validate a positive integer configuration value.

    Raises:
        InvalidConfigurationError: If value is not an int or is <= 0.
    """
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidConfigurationError(
            code="invalid_rate_limit_config",
            message=f"{name} must be a positive integer",
            details={"field": name, "actual_value": value},
        )
    return value


class TokenBucketRateLimiter(AbstractRateLimiter):
    """Token bucket for a single subject.

    The bucket holds at most ``capacity`` tokens and refills continuously at
    ``capacity / window_millis`` tokens per millisecond. Each admitted event
    spends one token.

    Example:
        >>> limiter = TokenBucketRateLimiter(capacity=100, window_millis=60_000)
        >>> limiter.try_admit()
        True
    """

    def __init__(
        self,
        capacity: int,
        window_millis: int,
        *,
        clock: Clock = monotonic_millis,
    ) -> None:
        """Initialize a full bucket.

        Args:
            capacity: Maximum number of tokens the bucket can hold.
            window_millis: Time in milliseconds for an empty bucket to refill.
            clock: Monotonic time source returning milliseconds.

        Raises:
            InvalidConfigurationError: If capacity or window_millis are invalid.
        """
        self._capacity = _require_positive_int("capacity", capacity)
        self._window_millis = _require_positive_int("window_millis", window_millis)
        self._refill_rate_per_ms = self._capacity / self._window_millis
        self._clock = clock
        self._lock = threading.Lock()
        self._available_tokens = float(self._capacity)
        self._last_refill = clock()

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def window_millis(self) -> int:
        return self._window_millis

    @property
    def refill_rate_per_ms(self) -> float:
        return self._refill_rate_per_ms

    @property
    def available_tokens(self) -> float:
        """Token balance as of the last refill (not advanced to now)."""
        with self._lock:
            return self._available_tokens

    def _accrued(self, elapsed: float) -> float:
        # Single rounding step: whole-token accruals over whole milliseconds are exact.
        return elapsed * self._capacity / self._window_millis

    def _refill(self, now: float) -> None:
        # Caller must hold self._lock.
        elapsed = max(0.0, now - self._last_refill)
        refilled = self._accrued(elapsed)
        self._available_tokens = min(
            float(self._capacity), self._available_tokens + refilled
        )
        self._last_refill = max(self._last_refill, now)

    def try_admit(self) -> bool:
        """Refill from elapsed time, then spend one token if available."""
        with self._lock:
            self._refill(self._clock())
            if self._available_tokens >= 1.0:
                self._available_tokens -= 1.0
                return True
            return False

    def wait_millis(self) -> float:
        """Milliseconds until the next token is available, without spending.

        Returns 0.0 when a token is available right now.
        """
        with self._lock:
            elapsed = max(0.0, self._clock() - self._last_refill)
            tokens = min(
                float(self._capacity),
                self._available_tokens + self._accrued(elapsed),
            )
        if tokens >= 1.0:
            return 0.0
        return (1.0 - tokens) * self._window_millis / self._capacity

    def copy(self) -> TokenBucketRateLimiter:
        return TokenBucketRateLimiter(
            self._capacity,
            self._window_millis,
            clock=self._clock,
        )

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(capacity={self._capacity}, "
            f"window_millis={self._window_millis})"
        )
