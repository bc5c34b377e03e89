"""Factory pattern for creating rate limiter templates."""

from admission.adapters.rate_limit.base import AbstractRateLimiter, Clock, monotonic_millis
from admission.adapters.rate_limit.token_bucket import TokenBucketRateLimiter
from admission.core.errors import InvalidConfigurationError

SUPPORTED_ALGORITHMS = ("token_bucket",)


def create_rate_limiter(
    algorithm: str,
    *,
    capacity: int,
    window_millis: int,
    clock: Clock = monotonic_millis,
) -> AbstractRateLimiter:
    """Instantiate a rate limiter for the configured algorithm.

    The returned instance is used as a template: the registry calls
    ``copy()`` on it once per client.

    Args:
        algorithm: Algorithm name (case-insensitive), e.g. ``token_bucket``.
        capacity: Maximum burst size.
        window_millis: Full-refill window in milliseconds.
        clock: Monotonic time source in milliseconds.

    Returns:
        AbstractRateLimiter: Configured limiter instance.

    Raises:
        InvalidConfigurationError: If the algorithm is unknown or the
            parameters are invalid.
    """
    name = algorithm.strip().lower()

    if name == "token_bucket":
        return TokenBucketRateLimiter(capacity, window_millis, clock=clock)

    raise InvalidConfigurationError(
        code="unknown_rate_limit_algorithm",
        message=(
            f"Unknown rate limit algorithm: '{algorithm}'. "
            f"Supported algorithms: {', '.join(SUPPORTED_ALGORITHMS)}"
        ),
        details={"supported": list(SUPPORTED_ALGORITHMS)},
    )
