"""
Bounded polling — check a predicate until it holds or attempts run out.

Used for every readiness wait in the installer (daemon socket, cluster
control plane). The wait is always bounded by ``max_attempts × delay``;
exhaustion is reported, never raised.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass
class PollResult:
    """Outcome of a bounded poll."""

    ok: bool
    attempts: int
    waited: float = 0.0
    last_error: str = ""

    def __bool__(self) -> bool:
        return self.ok


def poll_until(
    predicate: Callable[[], bool],
    *,
    max_attempts: int,
    delay: float,
    sleep: Callable[[float], None] = time.sleep,
    label: str = "condition",
) -> PollResult:
    """Call ``predicate`` up to ``max_attempts`` times, sleeping ``delay`` between.

    No sleep happens after the final attempt, so the total wait is at most
    ``(max_attempts - 1) × delay`` plus the predicate's own run time.

    An exception from the predicate counts as a failed attempt; its message
    is kept in ``last_error``.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be >= 1")

    waited = 0.0
    last_error = ""
    for attempt in range(1, max_attempts + 1):
        try:
            if predicate():
                logger.debug("%s ready after %d attempt(s)", label, attempt)
                return PollResult(ok=True, attempts=attempt, waited=waited)
        except Exception as e:  # predicate errors are retried, not propagated
            last_error = str(e)
            logger.debug("%s check raised on attempt %d: %s", label, attempt, e)

        if attempt < max_attempts:
            sleep(delay)
            waited += delay

    logger.info("%s not ready after %d attempts (%.1fs)", label, max_attempts, waited)
    return PollResult(ok=False, attempts=max_attempts, waited=waited, last_error=last_error)
