"""Tests for request replay through the registry."""

from unittest.mock import Mock

from admission.adapters.rate_limit.token_bucket import TokenBucketRateLimiter
from admission.services.registry import AdmissionRegistry
from admission.services.replay import ReplaySummary, replay_requests


def test_burst_from_single_client(clock: Mock) -> None:
    template = TokenBucketRateLimiter(capacity=100, window_millis=60_000, clock=clock)
    registry = AdmissionRegistry(["client1", "client2", "client3"], template)

    summary = replay_requests(registry, ["client1"] * 300)

    assert summary.as_dict() == {
        "total": 300,
        "admitted": 100,
        "rate_limited": 200,
        "unknown_client": 0,
    }


def test_mixed_clients(clock: Mock) -> None:
    template = TokenBucketRateLimiter(capacity=1, window_millis=1000, clock=clock)
    registry = AdmissionRegistry(["a", "b"], template)

    summary = replay_requests(registry, ["a", "a", "b", "ghost", "b", "ghost"])

    assert summary.admitted == 2
    assert summary.rate_limited == 2
    assert summary.unknown_client == 2
    assert summary.total == 6


def test_empty_replay(clock: Mock) -> None:
    template = TokenBucketRateLimiter(capacity=1, window_millis=1000, clock=clock)
    registry = AdmissionRegistry(["a"], template)

    summary = replay_requests(registry, [])

    assert summary == ReplaySummary()
    assert summary.total == 0
