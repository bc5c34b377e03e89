"""Per-client admission registry.

Holds one independent rate limiter per recognized client and routes every
admission decision to the limiter owned by that client. Membership is fixed
at construction time.
"""

from __future__ import annotations

import logging
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping

from admission.adapters.rate_limit.base import AbstractRateLimiter

logger = logging.getLogger(__name__)


class AdmissionResult(str, Enum):
    """Outcome of an admission decision."""

    ADMITTED = "admitted"
    RATE_LIMITED = "rate_limited"
    UNKNOWN_CLIENT = "unknown_client"


class AdmissionRegistry:
    """Maps client identifiers to their own rate limiter.

    Each member gets ``template.copy()``, so no two clients share mutable
    counters. There is no registry-wide lock: membership never changes and
    each limiter serializes its own calls.
    """

    def __init__(self, client_ids: Iterable[str], template: AbstractRateLimiter) -> None:
        """Build one limiter per distinct client identifier.

        Args:
            client_ids: Recognized client identifiers.
            template: Limiter used only as a configuration source; it is never
                consulted for admission itself.
        """
        members = {client_id: template.copy() for client_id in client_ids}
        self._members: Mapping[str, AbstractRateLimiter] = MappingProxyType(members)
        self._template = template

        logger.info(
            "registry.built",
            extra={
                "client_count": len(members),
                "limiter": type(template).__name__,
                "capacity": template.capacity,
                "window_ms": template.window_millis,
            },
        )

    @property
    def members(self) -> Mapping[str, AbstractRateLimiter]:
        return self._members

    @property
    def client_ids(self) -> frozenset[str]:
        return frozenset(self._members)

    @property
    def template(self) -> AbstractRateLimiter:
        return self._template

    def limiter_for(self, client_id: str) -> AbstractRateLimiter | None:
        """Return the limiter owned by client_id, or None if unknown."""
        return self._members.get(client_id)

    def evaluate(self, client_id: str) -> AdmissionResult:
        """Decide whether a request from client_id may proceed.

        Unknown identifiers are rejected without consulting any limiter.
        Otherwise exactly one limiter (the client's own) is updated.
        """
        limiter = self._members.get(client_id)
        if limiter is None:
            return AdmissionResult.UNKNOWN_CLIENT
        if limiter.try_admit():
            return AdmissionResult.ADMITTED
        return AdmissionResult.RATE_LIMITED

    def __contains__(self, client_id: object) -> bool:
        return client_id in self._members

    def __len__(self) -> int:
        return len(self._members)
