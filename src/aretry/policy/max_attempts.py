r"""Count-based retry policy."""

from __future__ import annotations

__all__ = ["MaxAttemptsRetryExecution", "MaxAttemptsRetryPolicy"]

from aretry.policy.base import RetryExecution, RetryPolicy
from aretry.utils.validation import validate_max_attempts


class MaxAttemptsRetryExecution(RetryExecution):
    """Execution counting observed failures against a maximum.

    Args:
        max_attempts: Total number of attempts allowed, including the
            initial one.
    """

    def __init__(self, max_attempts: int) -> None:
        self.max_attempts = max_attempts
        self.attempts = 0

    def should_retry(self, error: BaseException) -> bool:  # noqa: ARG002
        self.attempts += 1
        return self.attempts < self.max_attempts

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(attempts={self.attempts}, "
            f"max_attempts={self.max_attempts})"
        )


class MaxAttemptsRetryPolicy(RetryPolicy):
    """Retry policy allowing a fixed number of attempts.

    The execution answers ``True`` while the number of failures it has
    observed is lower than ``max_attempts``. Because the counter only
    grows, the answer never goes back to ``True`` after a ``False``.

    Args:
        max_attempts: Total number of attempts, including the initial
            one (default: 3). Must be >= 1.

    Example:
        ```pycon
        >>> from aretry.policy import MaxAttemptsRetryPolicy
        >>> execution = MaxAttemptsRetryPolicy(max_attempts=3).start()
        >>> error = RuntimeError("boom")
        >>> execution.should_retry(error)
        True
        >>> execution.should_retry(error)
        True
        >>> execution.should_retry(error)
        False

        ```
    """

    def __init__(self, max_attempts: int = 3) -> None:
        validate_max_attempts(max_attempts)
        self.max_attempts = max_attempts

    def start(self) -> MaxAttemptsRetryExecution:
        return MaxAttemptsRetryExecution(self.max_attempts)

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(max_attempts={self.max_attempts})"
