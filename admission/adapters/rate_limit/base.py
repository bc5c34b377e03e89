"""Rate limiter interfaces.

The admission registry depends on this abstraction (not the concrete
implementation) so other algorithms (sliding window, leaky bucket) can be
added later without changing the registry contract.
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from typing import Callable

Clock = Callable[[], float]
"""Time source returning monotonic milliseconds."""


def monotonic_millis() -> float:
    """Default clock: monotonic time in milliseconds."""
    return time.monotonic() * 1000.0


class AbstractRateLimiter(ABC):
    """Interface for single-subject rate limiters.

    An instance tracks the budget of exactly one subject (e.g. one client).
    Per-key isolation is obtained by creating one instance per key with
    ``copy()``.
    """

    @property
    @abstractmethod
    def capacity(self) -> int:
        """Maximum number of events allowed in a burst."""
        raise NotImplementedError

    @property
    @abstractmethod
    def window_millis(self) -> int:
        """Window in milliseconds over which ``capacity`` fully replenishes."""
        raise NotImplementedError

    @abstractmethod
    def try_admit(self) -> bool:
        """Decide whether the next unit-cost event may proceed.

        Returns:
            True if the event was admitted (budget consumed), False otherwise.
            Never raises.
        """
        raise NotImplementedError

    def wait_millis(self) -> float:
        """Milliseconds until the next event would be admitted.

        Must not consume budget. Limiters that cannot estimate it return 0.0.
        """
        return 0.0

    @abstractmethod
    def copy(self) -> AbstractRateLimiter:
        """Return an independent limiter with the same configuration.

        The copy starts from a fresh state, as if newly constructed, and
        shares no mutable counters with this instance.
        """
        raise NotImplementedError
