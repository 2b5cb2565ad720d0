"""Generic polling loop shared by every wait."""

from __future__ import annotations

import enum
import time
from dataclasses import dataclass
from typing import Callable

from selenium_waiter.constants import DEFAULT_POLL_MS, TIMEOUT
from selenium_waiter.core.errors import WaitTimeoutError


class Outcome(str, enum.Enum):
    SATISFIED = "satisfied"
    NOT_YET = "not_yet"
    # The optional page feature being waited on does not exist.
    ABSENT = "absent"

    @property
    def done(self) -> bool:
        return self is not Outcome.NOT_YET


class ErrorPolicy(str, enum.Enum):
    """How an exception raised by a probe is read.

    NOT_READY: the page is not there yet, keep polling. Used by every DOM
    interaction.
    READY: the feature probed for is missing, which counts as success. Used
    by the jQuery idle check so pages without jQuery never block.
    """
    NOT_READY = "not_ready"
    READY = "ready"


class Condition:
    """A repeatable check-or-action evaluated by :func:`wait_until`."""

    def __init__(
        self,
        probe: Callable[[], bool],
        policy: ErrorPolicy = ErrorPolicy.NOT_READY,
    ):
        self.probe = probe
        self.policy = policy
        self.last_error: Exception | None = None

    def evaluate(self) -> Outcome:
        self.last_error = None
        try:
            ok = self.probe()
        except Exception as exc:
            self.last_error = exc
            if self.policy is ErrorPolicy.READY:
                return Outcome.ABSENT
            return Outcome.NOT_YET
        return Outcome.SATISFIED if ok else Outcome.NOT_YET


@dataclass
class WaitResult:
    outcome: Outcome
    attempts: int
    elapsed_s: float


def wait_until(
    condition: Condition,
    timeout_s: float = TIMEOUT,
    poll_ms: int = DEFAULT_POLL_MS,
    operation: str = "Condition",
    target: str = "page",
) -> WaitResult:
    """Poll *condition* until it is satisfied or *timeout_s* elapses.

    The condition is always evaluated at least once, so a zero timeout still
    succeeds against a condition that already holds. The deadline is measured
    from the call; a slow evaluation consumes budget but is never interrupted.
    """
    start = time.monotonic()
    deadline = start + timeout_s
    attempts = 0
    while True:
        attempts += 1
        outcome = condition.evaluate()
        now = time.monotonic()
        if outcome.done:
            return WaitResult(outcome, attempts, now - start)
        if now >= deadline:
            raise WaitTimeoutError(
                operation, target, timeout_s, attempts=attempts
            ) from condition.last_error
        time.sleep(min(poll_ms / 1000.0, deadline - now))
