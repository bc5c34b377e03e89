"""Rate limiting adapters.

This package provides a small abstraction layer so the service can start with
an in-memory token bucket and later add other algorithms without changing the
admission registry.
"""

from admission.adapters.rate_limit.base import AbstractRateLimiter, Clock, monotonic_millis
from admission.adapters.rate_limit.factory import create_rate_limiter
from admission.adapters.rate_limit.token_bucket import TokenBucketRateLimiter

__all__ = [
    "AbstractRateLimiter",
    "Clock",
    "TokenBucketRateLimiter",
    "create_rate_limiter",
    "monotonic_millis",
]
