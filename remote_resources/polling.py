"""
Bounded readiness polling.

Before a resource is created from a dependency, the client waits for the
dependency to finish processing. The wait is best effort: when the attempt
budget runs out the caller goes ahead and lets the server accept or reject
the request.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Awaitable, Callable, Optional, Union

from .models.base import ReadinessVerdict
from .models.resource import PollingPolicy

logger = logging.getLogger(__name__)

ProbeOutcome = Union[bool, ReadinessVerdict]
Probe = Callable[[], Union[ProbeOutcome, Awaitable[ProbeOutcome]]]
Sleep = Callable[[float], Awaitable[None]]


def as_verdict(outcome: ProbeOutcome) -> ReadinessVerdict:
    """Normalize a probe outcome to a ReadinessVerdict."""
    if isinstance(outcome, ReadinessVerdict):
        return outcome
    return ReadinessVerdict.READY if outcome else ReadinessVerdict.PENDING


class ReadinessPoller:
    """
    Repeatedly query a readiness probe until it succeeds or the budget ends.

    The probe may be a plain function or a coroutine function, returning a
    bool or a ReadinessVerdict. Between failed attempts the poller suspends
    with ``sleep`` (``asyncio.sleep`` by default); it never sleeps after a
    success or after the last attempt.

    Example:
        ```python
        poller = ReadinessPoller()
        ready = await poller.await_ready(
            lambda: api.is_ready("timeseries/5f3c..."),
            PollingPolicy(interval_millis=500, max_attempts=20),
        )
        ```
    """

    def __init__(self, sleep: Optional[Sleep] = None) -> None:
        """
        Initialize the poller.

        Args:
            sleep: Coroutine function used to wait between attempts
        """
        self._sleep: Sleep = sleep or asyncio.sleep

    async def await_ready(self, probe: Probe, policy: PollingPolicy) -> bool:
        """
        Wait until ``probe`` reports ready.

        Args:
            probe: Zero-argument readiness check
            policy: Interval and attempt budget

        Returns:
            True if the probe confirmed readiness, False if the wait was
            skipped, the budget ran out or the probe reported a failure

        Raises:
            asyncio.CancelledError: If the waiting task is cancelled
        """
        if policy.skips_wait:
            logger.debug(
                "Readiness wait skipped (interval %d ms, %d attempts)",
                policy.interval_millis,
                policy.max_attempts,
            )
            return False

        for attempt in range(1, policy.max_attempts + 1):
            verdict = await self._probe_once(probe, attempt)
            if verdict is ReadinessVerdict.READY:
                logger.debug("Dependency ready after %d attempt(s)", attempt)
                return True
            if verdict is ReadinessVerdict.FAILED:
                logger.error(
                    "Dependency reported a failed status on attempt %d; not waiting",
                    attempt,
                )
                return False
            if attempt < policy.max_attempts:
                await self._sleep(policy.interval_seconds)

        logger.warning(
            "Dependency not confirmed ready after %d attempt(s)", policy.max_attempts
        )
        return False

    async def _probe_once(self, probe: Probe, attempt: int) -> ReadinessVerdict:
        try:
            outcome = probe()
            if inspect.isawaitable(outcome):
                outcome = await outcome
        except Exception as e:
            logger.warning("Readiness probe failed on attempt %d: %s", attempt, e)
            return ReadinessVerdict.PENDING
        return as_verdict(outcome)


__all__ = ["Probe", "ProbeOutcome", "ReadinessPoller", "as_verdict"]
