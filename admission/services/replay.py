"""Replay a sequence of client requests through an admission registry.

Used by scripts/simulate_burst.py to reproduce burst scenarios and by tests.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Iterable

from admission.core.clients import hash_client_id
from admission.services.registry import AdmissionRegistry, AdmissionResult

logger = logging.getLogger(__name__)


@dataclass
class ReplaySummary:
    """Outcome counts of a replayed request sequence."""

    counts: Counter[AdmissionResult] = field(default_factory=Counter)

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    @property
    def admitted(self) -> int:
        return self.counts[AdmissionResult.ADMITTED]

    @property
    def rate_limited(self) -> int:
        return self.counts[AdmissionResult.RATE_LIMITED]

    @property
    def unknown_client(self) -> int:
        return self.counts[AdmissionResult.UNKNOWN_CLIENT]

    def as_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "admitted": self.admitted,
            "rate_limited": self.rate_limited,
            "unknown_client": self.unknown_client,
        }


def replay_requests(registry: AdmissionRegistry, client_ids: Iterable[str]) -> ReplaySummary:
    """Evaluate each client id in order and count the outcomes.

    Args:
        registry: Registry to evaluate against.
        client_ids: Client identifier of each request, in arrival order.

    Returns:
        ReplaySummary with one count per AdmissionResult.
    """
    summary = ReplaySummary()
    for seq, client_id in enumerate(client_ids, start=1):
        result = registry.evaluate(client_id)
        summary.counts[result] += 1
        logger.debug(
            "replay.request",
            extra={
                "seq": seq,
                "client_hash": hash_client_id(client_id),
                "outcome": result.value,
            },
        )

    logger.info("replay.completed", extra=summary.as_dict())
    return summary
