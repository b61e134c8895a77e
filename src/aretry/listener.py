r"""Listener types and data structures for observability.

This module provides the listener support of the aretry library,
enabling users to hook into the retry lifecycle for logging, metrics
and alerting. Listeners are observers only; they never influence retry
decisions.

The listener contract provides four lifecycle hooks:
- before_retry: Called before each retry attempt (after the backoff delay)
- on_retry_success: Called when a retry attempt succeeds
- on_retry_failure: Called when a retry attempt fails
- on_retry_policy_exhaustion: Called once when no further attempt is made

Example:
    ```pycon
    >>> from aretry import RetryTemplate
    >>> from aretry.backoff import FixedBackOff
    >>> from aretry.listener import CallbackRetryListener, RetryEvent
    >>> def log_retry(event: RetryEvent) -> None:
    ...     print(f"Retrying {event.operation_name} (attempt {event.attempt})")
    ...
    >>> template = RetryTemplate(
    ...     backoff_policy=FixedBackOff(interval=0.0),
    ...     listener=CallbackRetryListener(before_retry=log_retry),
    ... )
    >>> outcomes = iter([ValueError("boom"), 42])
    >>> def flaky():
    ...     outcome = next(outcomes)
    ...     if isinstance(outcome, Exception):
    ...         raise outcome
    ...     return outcome
    ...
    >>> template.execute(flaky)
    Retrying flaky (attempt 2)
    42

    ```
"""

from __future__ import annotations

__all__ = [
    "CallbackRetryListener",
    "CompositeRetryListener",
    "RetryEvent",
    "RetryListener",
    "RetryState",
]

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from aretry.exceptions import RetryExhaustedError
    from aretry.policy.base import RetryExecution


@dataclass
class RetryState:
    """State of one call to a retry template, passed to listeners.

    Attributes:
        operation_name: The diagnostic name of the operation.
        execution: The retry execution created for this call.
        attempt: The current attempt number (1-indexed). The initial
            attempt is 1, so the first retry is attempt 2.
    """

    operation_name: str
    execution: RetryExecution
    attempt: int = 1


@dataclass(frozen=True)
class RetryEvent:
    """Information passed to the callbacks of a ``CallbackRetryListener``.

    Attributes:
        operation_name: The diagnostic name of the operation.
        attempt: The attempt number the event relates to (1-indexed).
        result: The result of the successful attempt (if any).
        error: The failure of the attempt, or the exhaustion error (if any).
    """

    operation_name: str
    attempt: int
    result: Any = None
    error: BaseException | None = None


class RetryListener:
    """Observer of the retry lifecycle.

    Every method is a no-op, so subclasses only override the events
    they are interested in. An instance of this class is the default
    listener of a retry template.
    """

    def before_retry(self, state: RetryState) -> None:
        """Called before each retry attempt.

        Args:
            state: The state of the current call.
        """

    def on_retry_success(self, state: RetryState, result: Any) -> None:
        """Called when a retry attempt succeeds.

        Args:
            state: The state of the current call.
            result: The value returned by the operation.
        """

    def on_retry_failure(self, state: RetryState, error: BaseException) -> None:
        """Called when a retry attempt fails.

        Args:
            state: The state of the current call.
            error: The failure of the attempt.
        """

    def on_retry_policy_exhaustion(self, state: RetryState, error: RetryExhaustedError) -> None:
        """Called when the retry or backoff policy is exhausted.

        Args:
            state: The state of the current call.
            error: The aggregated failure about to be raised.
        """


class CompositeRetryListener(RetryListener):
    """Listener forwarding every event to an ordered list of listeners.

    Listeners are invoked in registration order. An exception raised by
    a listener propagates to the caller and the remaining listeners are
    not invoked.

    Args:
        listeners: The initial listeners.

    Example:
        ```pycon
        >>> from aretry.listener import CompositeRetryListener, RetryListener
        >>> composite = CompositeRetryListener([RetryListener()])
        >>> composite.add_listener(RetryListener())
        >>> len(composite.listeners)
        2

        ```
    """

    def __init__(self, listeners: Iterable[RetryListener] = ()) -> None:
        self.listeners: list[RetryListener] = list(listeners)

    def add_listener(self, listener: RetryListener) -> None:
        """Append a listener.

        Args:
            listener: The listener to append.
        """
        self.listeners.append(listener)

    def before_retry(self, state: RetryState) -> None:
        for listener in self.listeners:
            listener.before_retry(state)

    def on_retry_success(self, state: RetryState, result: Any) -> None:
        for listener in self.listeners:
            listener.on_retry_success(state, result)

    def on_retry_failure(self, state: RetryState, error: BaseException) -> None:
        for listener in self.listeners:
            listener.on_retry_failure(state, error)

    def on_retry_policy_exhaustion(self, state: RetryState, error: RetryExhaustedError) -> None:
        for listener in self.listeners:
            listener.on_retry_policy_exhaustion(state, error)

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(listeners={self.listeners!r})"


class CallbackRetryListener(RetryListener):
    """Listener adapting plain functions to the listener contract.

    Each callback is optional and receives a ``RetryEvent``.

    Args:
        before_retry: Optional callback invoked before each retry attempt.
        on_success: Optional callback invoked when a retry attempt succeeds.
        on_failure: Optional callback invoked when a retry attempt fails.
        on_exhaustion: Optional callback invoked when the policy is exhausted.
    """

    def __init__(
        self,
        before_retry: Callable[[RetryEvent], None] | None = None,
        on_success: Callable[[RetryEvent], None] | None = None,
        on_failure: Callable[[RetryEvent], None] | None = None,
        on_exhaustion: Callable[[RetryEvent], None] | None = None,
    ) -> None:
        self._before_retry = before_retry
        self._on_success = on_success
        self._on_failure = on_failure
        self._on_exhaustion = on_exhaustion

    def before_retry(self, state: RetryState) -> None:
        if self._before_retry is not None:
            self._before_retry(RetryEvent(operation_name=state.operation_name, attempt=state.attempt))

    def on_retry_success(self, state: RetryState, result: Any) -> None:
        if self._on_success is not None:
            self._on_success(
                RetryEvent(operation_name=state.operation_name, attempt=state.attempt, result=result)
            )

    def on_retry_failure(self, state: RetryState, error: BaseException) -> None:
        if self._on_failure is not None:
            self._on_failure(
                RetryEvent(operation_name=state.operation_name, attempt=state.attempt, error=error)
            )

    def on_retry_policy_exhaustion(self, state: RetryState, error: RetryExhaustedError) -> None:
        if self._on_exhaustion is not None:
            self._on_exhaustion(
                RetryEvent(operation_name=state.operation_name, attempt=state.attempt, error=error)
            )
