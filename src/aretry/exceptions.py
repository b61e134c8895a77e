r"""Exception classes raised by the retry templates.

This module defines the error hierarchy surfaced to callers: the
exhaustion error aggregating every attempt's failure, and the abort
error raised when a backoff wait is cancelled.
"""

from __future__ import annotations

__all__ = ["RetryAbortedError", "RetryCancelledError", "RetryError", "RetryExhaustedError"]

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence


class RetryError(Exception):
    """Base class for errors raised by a retry template.

    Args:
        operation_name: The diagnostic name of the operation.
        message: A descriptive error message.

    Example:
        ```pycon
        >>> from aretry.exceptions import RetryError
        >>> error = RetryError(operation_name="fetch", message="something went wrong")
        >>> error.operation_name
        'fetch'
        >>> str(error)
        'something went wrong'

        ```
    """

    def __init__(self, operation_name: str, message: str) -> None:
        super().__init__(message)
        self.operation_name = operation_name
        self.message = message


class RetryExhaustedError(RetryError):
    """Exception raised when the retry or backoff policy is exhausted.

    The initial failure is stored as the primary cause (``cause`` and
    ``__cause__``) and every subsequent failure is kept, in order, in
    ``suppressed``. No attempt's failure is discarded.

    Args:
        operation_name: The diagnostic name of the operation.
        message: A descriptive error message.
        cause: The failure of the initial attempt.
        suppressed: The failures of the retry attempts, in order.

    Example:
        ```pycon
        >>> from aretry.exceptions import RetryExhaustedError
        >>> first, second = ValueError("first"), ValueError("second")
        >>> error = RetryExhaustedError(
        ...     operation_name="fetch",
        ...     message="Retry policy for operation 'fetch' exhausted; aborting execution",
        ...     cause=first,
        ...     suppressed=[second],
        ... )
        >>> error.attempts
        2
        >>> error.errors == [first, second]
        True

        ```
    """

    def __init__(
        self,
        operation_name: str,
        message: str,
        cause: BaseException,
        suppressed: Sequence[BaseException] = (),
    ) -> None:
        super().__init__(operation_name=operation_name, message=message)
        self.cause = cause
        self.suppressed: list[BaseException] = list(suppressed)
        self.__cause__ = cause

    @property
    def attempts(self) -> int:
        """The total number of attempts that failed."""
        return len(self.suppressed) + 1

    @property
    def errors(self) -> list[BaseException]:
        """All failures in the order they were observed."""
        return [self.cause, *self.suppressed]

    def add_suppressed(self, error: BaseException) -> None:
        """Append a failure to the suppressed list.

        Args:
            error: The failure to record.
        """
        self.suppressed.append(error)


class RetryAbortedError(RetryError):
    """Exception raised when a backoff wait is cancelled.

    The retry loop stops immediately; no further attempt is made and no
    suppressed failures are attached.

    Args:
        operation_name: The diagnostic name of the operation.
        message: A descriptive error message.
        cause: The cancellation that interrupted the wait.
    """

    def __init__(self, operation_name: str, message: str, cause: BaseException) -> None:
        super().__init__(operation_name=operation_name, message=message)
        self.cause = cause
        self.__cause__ = cause


class RetryCancelledError(RetryError):
    """Exception describing a cancelled backoff wait.

    Used as the cause of a ``RetryAbortedError`` raised by the
    synchronous template when its cancellation token is set.
    """
