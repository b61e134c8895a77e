from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import Mock, patch

import pytest

from aretry.listener import RetryListener

if TYPE_CHECKING:
    from collections.abc import Callable, Generator


@pytest.fixture
def mock_sleep() -> Generator[Mock, None, None]:
    """Patch time.sleep to make tests run faster."""
    with patch("time.sleep", return_value=None) as mock:
        yield mock


@pytest.fixture
def mock_listener() -> Mock:
    """Create a mock listener recording every lifecycle event."""
    return Mock(spec=RetryListener)


@pytest.fixture
def make_operation() -> Callable[..., Mock]:
    """Create a mock operation failing a given number of times.

    The returned factory accepts the number of failures, the value
    returned afterwards, and the exception factory used for failures.
    A ``name`` attribute is set so the operation has a stable name.
    """

    def factory(
        failures: int,
        result: object = None,
        error: Callable[[int], Exception] = lambda index: RuntimeError(f"boom {index}"),
    ) -> Mock:
        side_effect = [error(index) for index in range(failures)]
        side_effect.append(result)
        operation = Mock(side_effect=side_effect)
        operation.name = "flaky"
        return operation

    return factory
