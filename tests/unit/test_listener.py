r"""Unit tests for retry listeners."""

from __future__ import annotations

from unittest.mock import Mock

import pytest

from aretry.exceptions import RetryExhaustedError
from aretry.listener import (
    CallbackRetryListener,
    CompositeRetryListener,
    RetryEvent,
    RetryListener,
    RetryState,
)
from aretry.policy import MaxAttemptsRetryPolicy


@pytest.fixture
def state() -> RetryState:
    return RetryState(
        operation_name="fetch", execution=MaxAttemptsRetryPolicy().start(), attempt=2
    )


@pytest.fixture
def exhausted_error() -> RetryExhaustedError:
    return RetryExhaustedError(
        operation_name="fetch", message="exhausted", cause=RuntimeError("first")
    )


def test_retry_state_default_attempt() -> None:
    execution = MaxAttemptsRetryPolicy().start()
    state = RetryState(operation_name="fetch", execution=execution)
    assert state.attempt == 1
    assert state.execution is execution


###################################
#     Tests for RetryListener     #
###################################


def test_retry_listener_methods_are_no_op(
    state: RetryState, exhausted_error: RetryExhaustedError
) -> None:
    listener = RetryListener()
    assert listener.before_retry(state) is None
    assert listener.on_retry_success(state, 42) is None
    assert listener.on_retry_failure(state, RuntimeError("boom")) is None
    assert listener.on_retry_policy_exhaustion(state, exhausted_error) is None


############################################
#     Tests for CompositeRetryListener     #
############################################


def test_composite_listener_empty(state: RetryState) -> None:
    composite = CompositeRetryListener()
    assert composite.listeners == []
    composite.before_retry(state)


def test_composite_listener_add_listener() -> None:
    first, second = RetryListener(), RetryListener()
    composite = CompositeRetryListener([first])
    composite.add_listener(second)
    assert composite.listeners == [first, second]


def test_composite_listener_forwards_events_in_order(
    state: RetryState, exhausted_error: RetryExhaustedError
) -> None:
    manager = Mock()
    first = Mock(spec=RetryListener)
    second = Mock(spec=RetryListener)
    manager.attach_mock(first, "first")
    manager.attach_mock(second, "second")
    composite = CompositeRetryListener([first, second])
    error = RuntimeError("boom")

    composite.before_retry(state)
    composite.on_retry_failure(state, error)
    composite.on_retry_success(state, 42)
    composite.on_retry_policy_exhaustion(state, exhausted_error)

    assert [name for name, _args, _kwargs in manager.mock_calls] == [
        "first.before_retry",
        "second.before_retry",
        "first.on_retry_failure",
        "second.on_retry_failure",
        "first.on_retry_success",
        "second.on_retry_success",
        "first.on_retry_policy_exhaustion",
        "second.on_retry_policy_exhaustion",
    ]
    second.on_retry_failure.assert_called_once_with(state, error)
    second.on_retry_success.assert_called_once_with(state, 42)
    second.on_retry_policy_exhaustion.assert_called_once_with(state, exhausted_error)


def test_composite_listener_propagates_listener_error(state: RetryState) -> None:
    first = Mock(spec=RetryListener)
    first.before_retry.side_effect = RuntimeError("listener bug")
    second = Mock(spec=RetryListener)
    composite = CompositeRetryListener([first, second])

    with pytest.raises(RuntimeError, match=r"listener bug"):
        composite.before_retry(state)

    second.before_retry.assert_not_called()


def test_composite_listener_accepts_generator() -> None:
    composite = CompositeRetryListener(RetryListener() for _ in range(3))
    assert len(composite.listeners) == 3


###########################################
#     Tests for CallbackRetryListener     #
###########################################


def test_callback_listener_without_callbacks(
    state: RetryState, exhausted_error: RetryExhaustedError
) -> None:
    listener = CallbackRetryListener()
    listener.before_retry(state)
    listener.on_retry_success(state, 42)
    listener.on_retry_failure(state, RuntimeError("boom"))
    listener.on_retry_policy_exhaustion(state, exhausted_error)


def test_callback_listener_before_retry(state: RetryState) -> None:
    callback = Mock()
    CallbackRetryListener(before_retry=callback).before_retry(state)
    callback.assert_called_once_with(RetryEvent(operation_name="fetch", attempt=2))


def test_callback_listener_on_success(state: RetryState) -> None:
    callback = Mock()
    CallbackRetryListener(on_success=callback).on_retry_success(state, "value")
    callback.assert_called_once_with(
        RetryEvent(operation_name="fetch", attempt=2, result="value")
    )


def test_callback_listener_on_failure(state: RetryState) -> None:
    callback = Mock()
    error = RuntimeError("boom")
    CallbackRetryListener(on_failure=callback).on_retry_failure(state, error)
    event = callback.call_args.args[0]
    assert event.operation_name == "fetch"
    assert event.attempt == 2
    assert event.error is error
    assert event.result is None


def test_callback_listener_on_exhaustion(
    state: RetryState, exhausted_error: RetryExhaustedError
) -> None:
    callback = Mock()
    CallbackRetryListener(on_exhaustion=callback).on_retry_policy_exhaustion(
        state, exhausted_error
    )
    assert callback.call_args.args[0].error is exhausted_error


def test_retry_event_is_frozen() -> None:
    event = RetryEvent(operation_name="fetch", attempt=1)
    with pytest.raises(AttributeError):
        event.attempt = 2
