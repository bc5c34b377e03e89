"""Tests for the rate limiter factory."""

from unittest.mock import Mock

import pytest

from admission.adapters.rate_limit import TokenBucketRateLimiter, create_rate_limiter
from admission.core.errors import InvalidConfigurationError


@pytest.mark.parametrize("name", ["token_bucket", "TOKEN_BUCKET", " token_bucket "])
def test_creates_token_bucket(name: str, clock: Mock) -> None:
    limiter = create_rate_limiter(name, capacity=10, window_millis=1000, clock=clock)

    assert isinstance(limiter, TokenBucketRateLimiter)
    assert limiter.capacity == 10
    assert limiter.window_millis == 1000


def test_unknown_algorithm_raises() -> None:
    with pytest.raises(InvalidConfigurationError) as exc_info:
        create_rate_limiter("sliding_window", capacity=10, window_millis=1000)

    assert exc_info.value.code == "unknown_rate_limit_algorithm"
    assert exc_info.value.details == {"supported": ["token_bucket"]}


def test_invalid_parameters_propagate() -> None:
    with pytest.raises(InvalidConfigurationError):
        create_rate_limiter("token_bucket", capacity=0, window_millis=1000)
