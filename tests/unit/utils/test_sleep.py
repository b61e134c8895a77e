r"""Unit tests for cancellable waiting."""

from __future__ import annotations

import threading
from unittest.mock import Mock, patch

from aretry.utils.sleep import CancellationToken, wait


def test_cancellation_token_initial_state() -> None:
    token = CancellationToken()
    assert not token.is_cancelled
    assert repr(token) == "CancellationToken(cancelled=False)"


def test_cancellation_token_cancel() -> None:
    token = CancellationToken()
    token.cancel()
    token.cancel()
    assert token.is_cancelled
    assert repr(token) == "CancellationToken(cancelled=True)"


def test_cancellation_token_wait_timeout() -> None:
    assert not CancellationToken().wait(0.01)


def test_cancellation_token_wait_cancelled_from_other_thread() -> None:
    token = CancellationToken()
    timer = threading.Timer(0.01, token.cancel)
    timer.start()
    try:
        assert token.wait(30.0)
    finally:
        timer.cancel()


def test_wait_without_token(mock_sleep: Mock) -> None:
    assert not wait(2.5)
    mock_sleep.assert_called_once_with(2.5)


def test_wait_with_token_not_cancelled(mock_sleep: Mock) -> None:
    token = CancellationToken()
    with patch.object(token, "wait", return_value=False) as mock_wait:
        assert not wait(1.5, token)
    mock_wait.assert_called_once_with(1.5)
    mock_sleep.assert_not_called()


def test_wait_with_token_cancelled_during_wait() -> None:
    token = CancellationToken()
    with patch.object(token, "wait", return_value=True):
        assert wait(1.5, token)


def test_wait_with_token_already_cancelled() -> None:
    token = CancellationToken()
    token.cancel()
    with patch.object(token, "wait") as mock_wait:
        assert wait(60.0, token)
    mock_wait.assert_not_called()
    assert token.is_cancelled
