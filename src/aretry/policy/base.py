r"""Abstract base classes for retry policies."""

from __future__ import annotations

__all__ = ["RetryExecution", "RetryPolicy"]

from abc import ABC, abstractmethod


class RetryExecution(ABC):
    """Stateful cursor deciding whether another attempt should occur.

    An execution is created by ``RetryPolicy.start`` for a single call
    to the retry template and is never shared between calls. Once
    ``should_retry`` returns ``False`` it must keep returning ``False``.
    """

    @abstractmethod
    def should_retry(self, error: BaseException) -> bool:
        """Decide whether the operation should be attempted again.

        Args:
            error: The failure of the most recent attempt.

        Returns:
            ``True`` if another attempt should be made, otherwise ``False``.
        """


class RetryPolicy(ABC):
    """Abstract base class for retry policies.

    A retry policy is an immutable configuration object and a factory
    for ``RetryExecution`` instances. It can be shared by any number of
    concurrent calls.
    """

    @abstractmethod
    def start(self) -> RetryExecution:
        """Create a fresh retry execution.

        Returns:
            A new execution with no observed failures.
        """
