r"""Asynchronous retry template.

This module provides the AsyncRetryTemplate class that awaits a
coroutine operation and retries it according to a retry policy and a
backoff policy.
"""

from __future__ import annotations

__all__ = ["AsyncRetryTemplate"]

import asyncio
from typing import TYPE_CHECKING, TypeVar

from aretry.backoff.base import STOP
from aretry.listener import RetryState
from aretry.operation import get_operation_name
from aretry.template.core import (
    BaseRetryTemplate,
    create_aborted_error,
    create_exhausted_error,
    log_phase,
)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

T = TypeVar("T")


class AsyncRetryTemplate(BaseRetryTemplate):
    """Executes coroutine operations with automatic retry logic.

    This class mirrors ``RetryTemplate`` for operations returning an
    awaitable. Backoff delays use ``asyncio.sleep``, allowing other tasks
    to run while the template waits. Listeners are invoked synchronously
    and should be fast operations.

    If the task running ``execute`` is cancelled while backing off, the
    retry loop aborts with a ``RetryAbortedError`` chained from the
    ``asyncio.CancelledError``. The cancellation request of the task is
    left pending, so ``asyncio.Task.cancelling`` still reports it.

    Args:
        retry_policy: The retry policy. Defaults to
            ``MaxAttemptsRetryPolicy(max_attempts=3)``.
        backoff_policy: The backoff policy. Defaults to
            ``FixedBackOff(interval=1.0)``.
        listener: The listener notified of the retry lifecycle.
            Defaults to a no-op listener.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aretry import AsyncRetryTemplate
        >>> from aretry.backoff import FixedBackOff
        >>> async def fetch():
        ...     return 42
        ...
        >>> template = AsyncRetryTemplate(backoff_policy=FixedBackOff(interval=0.0))
        >>> asyncio.run(template.execute(fetch))
        42

        ```
    """

    async def execute(self, operation: Callable[[], Awaitable[T]]) -> T:
        """Execute a coroutine operation according to the retry and
        backoff policies.

        Args:
            operation: The zero-argument callable returning an awaitable.

        Returns:
            The value returned by the first successful attempt.

        Raises:
            RetryExhaustedError: If the retry or backoff policy is
                exhausted.
            RetryAbortedError: If the task is cancelled while backing off.
        """
        name = get_operation_name(operation)
        log_phase(f"Preparing to execute operation '{name}'", name, attempt=1)
        try:
            result = await operation()
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
        return await self._retry(operation, name, initial_error)

    async def _retry(
        self,
        operation: Callable[[], Awaitable[T]],
        name: str,
        initial_error: Exception,
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
            try:
                await asyncio.sleep(delay)
            except asyncio.CancelledError as exc:
                log_phase(
                    f"Backoff for operation '{name}' cancelled; aborting retries",
                    name,
                    state.attempt,
                )
                raise create_aborted_error(name, exc) from exc

            state.attempt += 1
            log_phase(f"Preparing to retry operation '{name}'", name, state.attempt)
            self.listener.before_retry(state)
            try:
                result = await operation()
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
