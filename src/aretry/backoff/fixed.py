r"""Fixed-interval backoff policy."""

from __future__ import annotations

__all__ = ["FixedBackOff"]

from aretry.backoff.base import BackOff
from aretry.utils.validation import validate_backoff_params


class FixedBackOff(BackOff):
    """Fixed-interval backoff policy.

    Returns the same delay for every retry attempt, until ``max_attempts``
    delays have been issued or ``max_elapsed_time`` would be exceeded.

    Args:
        interval: The fixed delay in seconds (default: 1.0). A delay of
            zero means retry immediately.
        max_attempts: Maximum number of delays to issue, ``None`` for
            unbounded (default).
        max_elapsed_time: Maximum accumulated delay in seconds, ``None``
            for unbounded (default).

    Example:
        ```pycon
        >>> from aretry.backoff import STOP, FixedBackOff
        >>> execution = FixedBackOff(interval=2.5, max_attempts=2).start()
        >>> execution.next_backoff()
        2.5
        >>> execution.next_backoff()
        2.5
        >>> execution.next_backoff() == STOP
        True

        ```
    """

    def __init__(
        self,
        interval: float = 1.0,
        max_attempts: int | None = None,
        max_elapsed_time: float | None = None,
    ) -> None:
        validate_backoff_params(interval=interval)
        super().__init__(max_attempts=max_attempts, max_elapsed_time=max_elapsed_time)
        self.interval = interval

    def calculate(self, attempt: int) -> float:  # noqa: ARG002
        """Calculate the fixed backoff delay.

        Args:
            attempt: The current attempt number (0-indexed, unused).

        Returns:
            The fixed delay value.
        """
        return self.interval

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(interval={self.interval}, "
            f"max_attempts={self.max_attempts}, max_elapsed_time={self.max_elapsed_time})"
        )
