r"""Exponential backoff policy."""

from __future__ import annotations

__all__ = ["ExponentialBackOff"]

import random

from aretry.backoff.base import BackOff


class ExponentialBackOff(BackOff):
    """Exponential backoff policy.

    Calculates delay as: initial_interval * (multiplier ** attempt), capped
    at max_interval. When ``jitter`` is positive, a random fraction of
    the delay (up to ``jitter``) is added, and the result is capped at
    ``max_interval`` again.

    Args:
        initial_interval: The delay in seconds before the first retry
            (default: 2.0).
        multiplier: The growth factor between two delays (default: 1.5).
            Must be >= 1.
        max_interval: The maximum delay in seconds (default: 30.0).
        max_elapsed_time: Maximum accumulated delay in seconds, ``None``
            for unbounded (default).
        max_attempts: Maximum number of delays to issue, ``None`` for
            unbounded (default).
        jitter: Factor for adding random jitter to delays (default: 0.0).

    Example:
        ```pycon
        >>> from aretry.backoff import ExponentialBackOff
        >>> backoff = ExponentialBackOff(initial_interval=1.0, multiplier=2.0, max_interval=5.0)
        >>> execution = backoff.start()
        >>> [execution.next_backoff() for _ in range(5)]
        [1.0, 2.0, 4.0, 5.0, 5.0]

        ```
    """

    def __init__(
        self,
        initial_interval: float = 2.0,
        multiplier: float = 1.5,
        max_interval: float = 30.0,
        max_elapsed_time: float | None = None,
        max_attempts: int | None = None,
        jitter: float = 0.0,
    ) -> None:
        if initial_interval < 0:
            msg = f"initial_interval must be non-negative, got {initial_interval}"
            raise ValueError(msg)
        if multiplier < 1:
            msg = f"multiplier must be >= 1, got {multiplier}"
            raise ValueError(msg)
        if max_interval < initial_interval:
            msg = (
                f"max_interval must be >= initial_interval, got {max_interval} "
                f"(initial_interval={initial_interval})"
            )
            raise ValueError(msg)
        if jitter < 0:
            msg = f"jitter must be non-negative, got {jitter}"
            raise ValueError(msg)
        super().__init__(max_attempts=max_attempts, max_elapsed_time=max_elapsed_time)
        self.initial_interval = initial_interval
        self.multiplier = multiplier
        self.max_interval = max_interval
        self.jitter = jitter

    def calculate(self, attempt: int) -> float:
        """Calculate exponential backoff delay.

        Args:
            attempt: The current attempt number (0-indexed).

        Returns:
            The calculated delay, capped at max_interval.
        """
        delay = self.initial_interval
        if delay > 0:
            try:
                delay *= self.multiplier**attempt
            except OverflowError:
                delay = self.max_interval
            delay = min(delay, self.max_interval)
        if self.jitter > 0:
            delay += random.uniform(0, self.jitter) * delay  # noqa: S311
            delay = min(delay, self.max_interval)
        return delay

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(initial_interval={self.initial_interval}, "
            f"multiplier={self.multiplier}, max_interval={self.max_interval}, "
            f"jitter={self.jitter}, max_attempts={self.max_attempts}, "
            f"max_elapsed_time={self.max_elapsed_time})"
        )
