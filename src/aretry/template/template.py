r"""Synchronous retry template.

This module provides the RetryTemplate class that invokes an operation
and retries it according to a retry policy and a backoff policy.
"""

from __future__ import annotations

__all__ = ["RetryTemplate"]

from typing import TYPE_CHECKING, NoReturn, TypeVar

from aretry.backoff.base import STOP
from aretry.exceptions import RetryCancelledError
from aretry.listener import RetryState
from aretry.operation import get_operation_name
from aretry.template.core import (
    BaseRetryTemplate,
    create_aborted_error,
    create_exhausted_error,
    log_phase,
)
from aretry.utils.sleep import wait

if TYPE_CHECKING:
    from collections.abc import Callable

    from aretry.utils.sleep import CancellationToken

T = TypeVar("T")


class RetryTemplate(BaseRetryTemplate):
    """Executes operations with automatic retry logic.

    By default an operation is invoked at most 3 times with a fixed
    backoff of 1 second between attempts.

    The initial attempt runs without creating any policy state. When it
    fails, a fresh retry execution and backoff execution are created for
    the call and the operation is retried until it succeeds, the retry
    policy refuses another attempt, or the backoff policy returns
    ``STOP``. On exhaustion a ``RetryExhaustedError`` is raised with the
    initial failure as cause and every later failure as suppressed.

    All phases are logged at debug level by the ``aretry.template.core``
    logger.

    Args:
        retry_policy: The retry policy. Defaults to
            ``MaxAttemptsRetryPolicy(max_attempts=3)``.
        backoff_policy: The backoff policy. Defaults to
            ``FixedBackOff(interval=1.0)``.
        listener: The listener notified of the retry lifecycle.
            Defaults to a no-op listener.

    Example:
        ```pycon
        >>> from aretry import RetryTemplate
        >>> from aretry.backoff import FixedBackOff
        >>> from aretry.exceptions import RetryExhaustedError
        >>> from aretry.policy import MaxAttemptsRetryPolicy
        >>> template = RetryTemplate(
        ...     retry_policy=MaxAttemptsRetryPolicy(max_attempts=3),
        ...     backoff_policy=FixedBackOff(interval=0.0),
        ... )
        >>> template.execute(lambda: 42)
        42
        >>> def always_fails():
        ...     raise RuntimeError("boom")
        ...
        >>> try:
        ...     template.execute(always_fails)
        ... except RetryExhaustedError as exc:
        ...     print(exc, exc.attempts)
        ...
        Retry policy for operation 'always_fails' exhausted; aborting execution 3

        ```
    """

    def execute(
        self,
        operation: Callable[[], T],
        *,
        cancellation: CancellationToken | None = None,
    ) -> T:
        """Execute an operation according to the retry and backoff
        policies.

        Args:
            operation: The zero-argument callable to invoke. Its name,
                resolved with ``get_operation_name``, is used in log
                messages and errors.
            cancellation: Optional token used to cancel the backoff
                waits. When it is cancelled, the retry loop aborts and
                the token is left cancelled.

        Returns:
            The value returned by the first successful attempt.

        Raises:
            RetryExhaustedError: If the retry or backoff policy is
                exhausted. Failures of the retry attempts are available
                in ``suppressed``.
            RetryAbortedError: If a backoff wait is cancelled.
        """
        name = get_operation_name(operation)
        log_phase(f"Preparing to execute operation '{name}'", name, attempt=1)
        try:
            result = operation()
        except Exception as exc:
            initial_error = exc
        else:
            log_phase(f"Operation '{name}' completed successfully", name, attempt=1)
            return result

        log_phase(
            f"Execution of operation '{name}' failed; initiating the retry process",
            name,
            attempt=1,
            error=initial_error,
        )
        return self._retry(operation, name, initial_error, cancellation)

    def _retry(
        self,
        operation: Callable[[], T],
        name: str,
        initial_error: Exception,
        cancellation: CancellationToken | None,
    ) -> T:
        retry_execution = self.retry_policy.start()
        backoff_execution = self.backoff_policy.start()
        state = RetryState(operation_name=name, execution=retry_execution)
        suppressed: list[Exception] = []

        last_error = initial_error
        while retry_execution.should_retry(last_error):
            delay = backoff_execution.next_backoff()
            if delay == STOP:
                log_phase(f"Backoff policy for operation '{name}' exhausted", name, state.attempt)
                break
            log_phase(
                f"Operation '{name}' failed due to '{last_error}'; backing off for {delay:.2f}s",
                name,
                state.attempt,
                delay=delay,
            )
            if wait(delay, cancellation):
                self._abort(name, state.attempt, cancellation)

            state.attempt += 1
            log_phase(f"Preparing to retry operation '{name}'", name, state.attempt)
            self.listener.before_retry(state)
            try:
                result = operation()
            except Exception as exc:
                self.listener.on_retry_failure(state, exc)
                log_phase(f"Retry of operation '{name}' failed", name, state.attempt, error=exc)
                suppressed.append(exc)
                last_error = exc
            else:
                self.listener.on_retry_success(state, result)
                log_phase(
                    f"Operation '{name}' completed successfully after retry", name, state.attempt
                )
                return result

        error = create_exhausted_error(name, initial_error, suppressed)
        log_phase(
            f"Retry policy for operation '{name}' exhausted after {state.attempt} attempts",
            name,
            state.attempt,
        )
        self.listener.on_retry_policy_exhaustion(state, error)
        raise error from initial_error

    def _abort(self, name: str, attempt: int, cancellation: CancellationToken | None) -> NoReturn:
        if cancellation is not None:
            # Keep the token cancelled for the caller.
            cancellation.cancel()
        cause = RetryCancelledError(
            operation_name=name,
            message=f"Backoff wait for operation '{name}' was cancelled",
        )
        log_phase(f"Backoff for operation '{name}' cancelled; aborting retries", name, attempt)
        raise create_aborted_error(name, cause) from cause
