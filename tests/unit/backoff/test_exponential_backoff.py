r"""Unit tests for ExponentialBackOff policy."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from aretry.backoff import STOP, ExponentialBackOff


def test_exponential_backoff_default_values() -> None:
    backoff = ExponentialBackOff()
    assert backoff.initial_interval == 2.0
    assert backoff.multiplier == 1.5
    assert backoff.max_interval == 30.0
    assert backoff.max_elapsed_time is None
    assert backoff.max_attempts is None
    assert backoff.jitter == 0.0


def test_exponential_backoff_calculate() -> None:
    backoff = ExponentialBackOff(initial_interval=1.0, multiplier=2.0, max_interval=100.0)
    assert backoff.calculate(0) == 1.0
    assert backoff.calculate(1) == 2.0
    assert backoff.calculate(2) == 4.0
    assert backoff.calculate(3) == 8.0


def test_exponential_backoff_max_interval() -> None:
    backoff = ExponentialBackOff(initial_interval=1.0, multiplier=2.0, max_interval=5.0)
    assert backoff.calculate(3) == 5.0
    assert backoff.calculate(50) == 5.0


def test_exponential_backoff_execution() -> None:
    execution = ExponentialBackOff(initial_interval=0.5, multiplier=2.0, max_interval=3.0).start()
    assert [execution.next_backoff() for _ in range(5)] == [0.5, 1.0, 2.0, 3.0, 3.0]


def test_exponential_backoff_max_elapsed_time() -> None:
    execution = ExponentialBackOff(
        initial_interval=1.0, multiplier=2.0, max_interval=10.0, max_elapsed_time=5.0
    ).start()
    assert execution.next_backoff() == 1.0
    assert execution.next_backoff() == 2.0
    # 1 + 2 + 4 would exceed the budget of 5 seconds.
    assert execution.next_backoff() == STOP


def test_exponential_backoff_max_attempts() -> None:
    execution = ExponentialBackOff(initial_interval=1.0, multiplier=1.0, max_attempts=2).start()
    assert [execution.next_backoff() for _ in range(3)] == [1.0, 1.0, STOP]


def test_exponential_backoff_jitter() -> None:
    backoff = ExponentialBackOff(initial_interval=1.0, multiplier=2.0, max_interval=10.0, jitter=0.5)
    with patch("random.uniform", return_value=0.25) as mock_uniform:
        assert backoff.calculate(1) == 2.5
    mock_uniform.assert_called_once_with(0, 0.5)


def test_exponential_backoff_jitter_capped_at_max_interval() -> None:
    backoff = ExponentialBackOff(initial_interval=1.0, multiplier=2.0, max_interval=4.0, jitter=1.0)
    with patch("random.uniform", return_value=1.0):
        assert backoff.calculate(2) == 4.0


def test_exponential_backoff_no_jitter_does_not_use_random() -> None:
    backoff = ExponentialBackOff(initial_interval=1.0)
    with patch("random.uniform") as mock_uniform:
        backoff.calculate(0)
    mock_uniform.assert_not_called()


@pytest.mark.parametrize(
    ("kwargs", "message"),
    [
        ({"initial_interval": -1.0}, r"initial_interval must be non-negative"),
        ({"multiplier": 0.5}, r"multiplier must be >= 1"),
        ({"initial_interval": 5.0, "max_interval": 1.0}, r"max_interval must be >= initial_interval"),
        ({"jitter": -0.1}, r"jitter must be non-negative"),
        ({"max_attempts": -1}, r"max_attempts must be >= 0"),
        ({"max_elapsed_time": -1.0}, r"max_elapsed_time must be >= 0"),
    ],
)
def test_exponential_backoff_invalid_params(kwargs: dict, message: str) -> None:
    with pytest.raises(ValueError, match=message):
        ExponentialBackOff(**kwargs)


def test_exponential_backoff_large_attempt_is_capped() -> None:
    backoff = ExponentialBackOff(initial_interval=1.0, multiplier=2.0, max_interval=30.0)
    assert backoff.calculate(1024) == 30.0
    assert backoff.calculate(100_000) == 30.0


def test_exponential_backoff_large_attempt_zero_interval() -> None:
    backoff = ExponentialBackOff(initial_interval=0.0, multiplier=2.0, max_interval=0.0)
    assert backoff.calculate(5000) == 0.0


def test_exponential_backoff_large_attempt_with_jitter() -> None:
    backoff = ExponentialBackOff(initial_interval=1.0, multiplier=2.0, max_interval=8.0, jitter=0.5)
    with patch("random.uniform", return_value=0.5):
        assert backoff.calculate(5000) == 8.0


def test_exponential_backoff_unbounded_execution_does_not_overflow() -> None:
    execution = ExponentialBackOff(initial_interval=0.5, multiplier=2.0, max_interval=4.0).start()
    delays = [execution.next_backoff() for _ in range(3000)]
    assert delays[:4] == [0.5, 1.0, 2.0, 4.0]
    assert set(delays[3:]) == {4.0}


def test_exponential_backoff_repr() -> None:
    backoff = ExponentialBackOff(
        initial_interval=1.0, multiplier=2.0, max_interval=8.0, max_attempts=5, jitter=0.1
    )
    assert repr(backoff) == (
        "ExponentialBackOff(initial_interval=1.0, multiplier=2.0, max_interval=8.0, "
        "jitter=0.1, max_attempts=5, max_elapsed_time=None)"
    )
