r"""Abstract base classes for backoff policies."""

from __future__ import annotations

__all__ = ["STOP", "BackOff", "BackOffExecution", "LimitedBackOffExecution"]

import logging
from abc import ABC, abstractmethod

from aretry.utils.validation import validate_backoff_params

logger: logging.Logger = logging.getLogger(__name__)

# Returned by ``BackOffExecution.next_backoff`` when no more waiting is allowed.
# Valid delays are never negative, so the sentinel cannot be mistaken for one.
STOP: float = -1.0


class BackOffExecution(ABC):
    """Stateful cursor yielding successive wait durations.

    An execution is created by ``BackOff.start`` for a single call to
    the retry template and is never shared between calls.
    """

    @abstractmethod
    def next_backoff(self) -> float:
        """Return the delay to wait before the next attempt.

        Returns:
            The delay in seconds (``0.0`` means retry immediately), or
            ``STOP`` if no further attempt should be made.
        """


class BackOff(ABC):
    """Abstract base class for backoff policies.

    A backoff policy determines how long to wait before each retry. The
    policy object is immutable and can be shared between concurrent
    calls; the mutable state lives in the ``BackOffExecution`` returned
    by ``start``.

    Subclasses implement ``calculate`` and inherit the stop rules
    enforced by ``LimitedBackOffExecution``.

    Args:
        max_attempts: Maximum number of delays to issue, ``None`` for
            unbounded.
        max_elapsed_time: Maximum accumulated delay in seconds, ``None``
            for unbounded.
    """

    def __init__(
        self,
        max_attempts: int | None = None,
        max_elapsed_time: float | None = None,
    ) -> None:
        validate_backoff_params(max_attempts=max_attempts, max_elapsed_time=max_elapsed_time)
        self.max_attempts = max_attempts
        self.max_elapsed_time = max_elapsed_time

    @abstractmethod
    def calculate(self, attempt: int) -> float:
        """Calculate the backoff delay for a given retry attempt.

        Args:
            attempt: The current attempt number (0-indexed). For example,
                attempt=0 is the first retry, attempt=1 is the second retry, etc.

        Returns:
            The calculated delay in seconds before the next retry attempt.
        """

    def start(self) -> BackOffExecution:
        """Create a fresh backoff execution.

        Returns:
            A new execution that has not issued any delay yet.
        """
        return LimitedBackOffExecution(self)


class LimitedBackOffExecution(BackOffExecution):
    """Execution issuing the delays of a ``BackOff`` within its limits.

    ``STOP`` is returned once ``max_attempts`` delays have been issued,
    or when the next delay would push the accumulated delay above
    ``max_elapsed_time``. After the first ``STOP`` every later call
    returns ``STOP`` too.

    Args:
        backoff: The policy computing the delays.
    """

    def __init__(self, backoff: BackOff) -> None:
        self.backoff = backoff
        self.attempts = 0
        self.elapsed_time = 0.0
        self.stopped = False

    def next_backoff(self) -> float:
        if self.stopped:
            return STOP
        max_attempts = self.backoff.max_attempts
        if max_attempts is not None and self.attempts >= max_attempts:
            logger.debug(f"Backoff stopped after {self.attempts} delays (max_attempts)")
            self.stopped = True
            return STOP
        delay = self.backoff.calculate(self.attempts)
        max_elapsed_time = self.backoff.max_elapsed_time
        if max_elapsed_time is not None and self.elapsed_time + delay > max_elapsed_time:
            logger.debug(
                f"Backoff stopped after {self.elapsed_time:.2f}s "
                f"(max_elapsed_time={max_elapsed_time:.2f}s)"
            )
            self.stopped = True
            return STOP
        self.attempts += 1
        self.elapsed_time += delay
        return delay

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(attempts={self.attempts}, "
            f"elapsed_time={self.elapsed_time}, stopped={self.stopped})"
        )
