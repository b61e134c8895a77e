r"""Shared core logic for retry templates.

This module provides the base class holding the configuration shared by
the synchronous and asynchronous retry templates, and helper functions
for error creation and phase logging used by both.
"""

from __future__ import annotations

__all__ = [
    "BaseRetryTemplate",
    "create_aborted_error",
    "create_exhausted_error",
    "log_phase",
]

import logging
from typing import TYPE_CHECKING, Any

from aretry.backoff.fixed import FixedBackOff
from aretry.exceptions import RetryAbortedError, RetryExhaustedError
from aretry.listener import CompositeRetryListener, RetryListener
from aretry.policy.max_attempts import MaxAttemptsRetryPolicy
from aretry.template.config import DEFAULT_INTERVAL, DEFAULT_MAX_ATTEMPTS
from aretry.utils.structured_logging import log_structured

if TYPE_CHECKING:
    from collections.abc import Sequence

    from aretry.backoff.base import BackOff
    from aretry.policy.base import RetryPolicy
    from aretry.template.config import RetryConfig

logger: logging.Logger = logging.getLogger(__name__)


class BaseRetryTemplate:
    """Configuration shared by the retry templates.

    The policies and the listener are read-only while the template is in
    use, so a template can serve any number of concurrent calls. Each
    call creates its own retry and backoff executions.

    Args:
        retry_policy: The retry policy. Defaults to
            ``MaxAttemptsRetryPolicy(max_attempts=3)``.
        backoff_policy: The backoff policy. Defaults to a fixed backoff
            of 1 second with no limit.
        listener: The listener notified of the retry lifecycle. Use a
            ``CompositeRetryListener`` to register several listeners.
            Defaults to a no-op listener.
    """

    def __init__(
        self,
        retry_policy: RetryPolicy | None = None,
        backoff_policy: BackOff | None = None,
        listener: RetryListener | None = None,
    ) -> None:
        self.retry_policy: RetryPolicy = (
            retry_policy if retry_policy is not None else MaxAttemptsRetryPolicy(DEFAULT_MAX_ATTEMPTS)
        )
        self.backoff_policy: BackOff = (
            backoff_policy if backoff_policy is not None else FixedBackOff(DEFAULT_INTERVAL)
        )
        self.listener: RetryListener = listener if listener is not None else RetryListener()

    @classmethod
    def from_config(cls, config: RetryConfig) -> Any:
        """Create a template from a ``RetryConfig``.

        Args:
            config: The configuration to use.

        Returns:
            A template using a count-based retry policy and a fixed
            backoff.
        """
        return cls(
            retry_policy=MaxAttemptsRetryPolicy(config.max_attempts),
            backoff_policy=FixedBackOff(config.interval, max_elapsed_time=config.max_elapsed_time),
            listener=CompositeRetryListener(config.listeners) if config.listeners else None,
        )

    def set_retry_policy(self, retry_policy: RetryPolicy) -> None:
        """Set the retry policy.

        Args:
            retry_policy: The retry policy to use.

        Raises:
            ValueError: If retry_policy is None.
        """
        if retry_policy is None:
            msg = "retry_policy must not be None"
            raise ValueError(msg)
        self.retry_policy = retry_policy

    def set_backoff_policy(self, backoff_policy: BackOff) -> None:
        """Set the backoff policy.

        Args:
            backoff_policy: The backoff policy to use.

        Raises:
            ValueError: If backoff_policy is None.
        """
        if backoff_policy is None:
            msg = "backoff_policy must not be None"
            raise ValueError(msg)
        self.backoff_policy = backoff_policy

    def set_listener(self, listener: RetryListener) -> None:
        """Set the listener.

        Args:
            listener: The listener to use.

        Raises:
            ValueError: If listener is None.
        """
        if listener is None:
            msg = "listener must not be None"
            raise ValueError(msg)
        self.listener = listener

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(retry_policy={self.retry_policy!r}, "
            f"backoff_policy={self.backoff_policy!r}, listener={self.listener!r})"
        )


def create_exhausted_error(
    operation_name: str,
    initial_error: BaseException,
    suppressed: Sequence[BaseException],
) -> RetryExhaustedError:
    """Create the error raised when the retry loop is exhausted.

    Args:
        operation_name: The diagnostic name of the operation.
        initial_error: The failure of the initial attempt.
        suppressed: The failures of the retry attempts, in order.

    Returns:
        RetryExhaustedError chaining every failure.
    """
    error = RetryExhaustedError(
        operation_name=operation_name,
        message=f"Retry policy for operation '{operation_name}' exhausted; aborting execution",
        cause=initial_error,
    )
    for failure in suppressed:
        error.add_suppressed(failure)
    return error


def create_aborted_error(operation_name: str, cause: BaseException) -> RetryAbortedError:
    """Create the error raised when a backoff wait is cancelled.

    Args:
        operation_name: The diagnostic name of the operation.
        cause: The cancellation that interrupted the wait.

    Returns:
        RetryAbortedError with the cancellation as cause.
    """
    return RetryAbortedError(
        operation_name=operation_name,
        message=f"Unable to back off for operation '{operation_name}'",
        cause=cause,
    )


def log_phase(
    message: str,
    operation_name: str,
    attempt: int,
    error: BaseException | None = None,
    **extra: Any,
) -> None:
    """Emit the debug record of a retry phase.

    Args:
        message: The log message.
        operation_name: The diagnostic name of the operation.
        attempt: The attempt number (1-indexed).
        error: Optional failure whose traceback is attached.
        **extra: Additional structured fields.
    """
    log_structured(
        logger,
        logging.DEBUG,
        message,
        exc_info=error,
        operation=operation_name,
        attempt=attempt,
        **extra,
    )
