r"""Decorator running a function through a retry template."""

from __future__ import annotations

__all__ = ["retry"]

import functools
import inspect
from typing import TYPE_CHECKING, Any

from aretry.operation import NamedOperation
from aretry.template.template import RetryTemplate
from aretry.template.template_async import AsyncRetryTemplate

if TYPE_CHECKING:
    from collections.abc import Callable

    from aretry.backoff.base import BackOff
    from aretry.listener import RetryListener
    from aretry.policy.base import RetryPolicy


def retry(
    func: Callable[..., Any] | None = None,
    *,
    retry_policy: RetryPolicy | None = None,
    backoff_policy: BackOff | None = None,
    listener: RetryListener | None = None,
) -> Any:
    """Retry every call of the decorated function.

    Each call binds its arguments into a zero-argument operation named
    after the function and executes it with a ``RetryTemplate``, or an
    ``AsyncRetryTemplate`` when the function is a coroutine function.
    The decorator can be used with or without arguments.

    Args:
        func: The function to decorate, when used without arguments.
        retry_policy: The retry policy. Defaults to 3 attempts.
        backoff_policy: The backoff policy. Defaults to a fixed backoff
            of 1 second.
        listener: The listener notified of the retry lifecycle.

    Returns:
        The decorated function, or a decorator.

    Example:
        ```pycon
        >>> from aretry import retry
        >>> from aretry.backoff import FixedBackOff
        >>> calls = []
        >>> @retry(backoff_policy=FixedBackOff(interval=0.0))
        ... def divide(a, b):
        ...     calls.append((a, b))
        ...     if len(calls) < 2:
        ...         raise ZeroDivisionError("not yet")
        ...     return a / b
        ...
        >>> divide(6, 3)
        2.0
        >>> len(calls)
        2

        ```
    """

    def decorator(function: Callable[..., Any]) -> Callable[..., Any]:
        name = function.__qualname__
        if inspect.iscoroutinefunction(function):
            async_template = AsyncRetryTemplate(retry_policy, backoff_policy, listener)

            @functools.wraps(function)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                operation = NamedOperation(functools.partial(function, *args, **kwargs), name=name)
                return await async_template.execute(operation)

            async_wrapper.retry_template = async_template
            return async_wrapper

        template = RetryTemplate(retry_policy, backoff_policy, listener)

        @functools.wraps(function)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            operation = NamedOperation(functools.partial(function, *args, **kwargs), name=name)
            return template.execute(operation)

        wrapper.retry_template = template
        return wrapper

    if func is not None:
        return decorator(func)
    return decorator
