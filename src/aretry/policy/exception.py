r"""Retry policy deciding on the kind of failure.

This module provides the ExceptionRetryPolicy class that refuses to
retry failures that are not transient, in addition to bounding the
number of attempts.
"""

from __future__ import annotations

__all__ = ["ExceptionRetryExecution", "ExceptionRetryPolicy"]

import logging
from typing import TYPE_CHECKING

from aretry.policy.base import RetryExecution, RetryPolicy
from aretry.utils.validation import validate_max_attempts

if TYPE_CHECKING:
    from collections.abc import Callable

logger: logging.Logger = logging.getLogger(__name__)


class ExceptionRetryExecution(RetryExecution):
    """Execution checking each failure against the policy rules.

    Once a failure is refused, the execution is exhausted and refuses
    every later failure too.

    Args:
        policy: The policy holding the rules.
    """

    def __init__(self, policy: ExceptionRetryPolicy) -> None:
        self.policy = policy
        self.attempts = 0
        self.exhausted = False

    def should_retry(self, error: BaseException) -> bool:
        if self.exhausted:
            return False
        self.attempts += 1
        if not self.policy.is_retryable(error):
            logger.debug(f"{type(error).__name__} is not retryable: {error}")
            self.exhausted = True
        elif self.attempts >= self.policy.max_attempts:
            self.exhausted = True
        return not self.exhausted

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(attempts={self.attempts}, "
            f"exhausted={self.exhausted})"
        )


class ExceptionRetryPolicy(RetryPolicy):
    """Retry policy that only retries selected failures.

    A failure is retryable if it is an instance of one of ``retry_on``,
    is not an instance of one of ``ignore`` and, when provided,
    ``predicate(error)`` returns ``True``. The number of attempts is
    bounded by ``max_attempts`` as in ``MaxAttemptsRetryPolicy``.

    Args:
        max_attempts: Total number of attempts, including the initial
            one (default: 3). Must be >= 1.
        retry_on: Exception types that may be retried
            (default: ``(Exception,)``).
        ignore: Exception types that are never retried, even if they
            match ``retry_on``.
        predicate: Optional custom predicate called with the failure.

    Example:
        ```pycon
        >>> from aretry.policy import ExceptionRetryPolicy
        >>> policy = ExceptionRetryPolicy(max_attempts=5, retry_on=(ConnectionError,))
        >>> execution = policy.start()
        >>> execution.should_retry(ConnectionError("reset"))
        True
        >>> execution.should_retry(ValueError("bad input"))
        False
        >>> execution.should_retry(ConnectionError("reset"))
        False

        ```
    """

    def __init__(
        self,
        max_attempts: int = 3,
        retry_on: tuple[type[BaseException], ...] = (Exception,),
        ignore: tuple[type[BaseException], ...] = (),
        predicate: Callable[[BaseException], bool] | None = None,
    ) -> None:
        validate_max_attempts(max_attempts)
        self.max_attempts = max_attempts
        self.retry_on = tuple(retry_on)
        self.ignore = tuple(ignore)
        self.predicate = predicate

    def is_retryable(self, error: BaseException) -> bool:
        """Indicate whether a failure matches the retry rules.

        Args:
            error: The failure to evaluate.

        Returns:
            ``True`` if the failure may be retried, otherwise ``False``.
        """
        if self.ignore and isinstance(error, self.ignore):
            return False
        if not isinstance(error, self.retry_on):
            return False
        return self.predicate is None or bool(self.predicate(error))

    def start(self) -> ExceptionRetryExecution:
        return ExceptionRetryExecution(self)

    def __repr__(self) -> str:
        names = ", ".join(exc.__name__ for exc in self.retry_on)
        return f"{self.__class__.__qualname__}(max_attempts={self.max_attempts}, retry_on=({names}))"
