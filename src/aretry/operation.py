r"""Helpers for naming the operations executed by a retry template.

An operation is any zero-argument callable. Its name is only used in
log lines and error messages.
"""

from __future__ import annotations

__all__ = ["NamedOperation", "get_operation_name", "named"]

import functools
from typing import TYPE_CHECKING, Any, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable

T = TypeVar("T")


class NamedOperation(Generic[T]):
    """Callable wrapper attaching an explicit diagnostic name to an
    operation.

    Args:
        func: The zero-argument callable to wrap.
        name: The diagnostic name. Defaults to the name resolved from
            ``func``.

    Example:
        ```pycon
        >>> from aretry.operation import NamedOperation
        >>> operation = NamedOperation(lambda: 42, name="answer")
        >>> operation.name
        'answer'
        >>> operation()
        42

        ```
    """

    def __init__(self, func: Callable[[], T], name: str | None = None) -> None:
        self.func = func
        self.name = name if name is not None else get_operation_name(func)

    def __call__(self) -> T:
        return self.func()

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(name={self.name!r})"


def named(name: str) -> Callable[[Callable[[], T]], NamedOperation[T]]:
    """Return a decorator that wraps a function in a ``NamedOperation``.

    Args:
        name: The diagnostic name to attach.

    Returns:
        The decorator.

    Example:
        ```pycon
        >>> from aretry.operation import named
        >>> @named("load-config")
        ... def load():
        ...     return {"debug": True}
        ...
        >>> load.name
        'load-config'

        ```
    """

    def decorator(func: Callable[[], T]) -> NamedOperation[T]:
        return NamedOperation(func, name=name)

    return decorator


def get_operation_name(operation: Any) -> str:
    """Resolve the diagnostic name of an operation.

    The lookup order is: an explicit ``name`` string attribute, the
    qualified name of a function, the wrapped function of a
    ``functools.partial``, and finally the class name of the callable.

    Args:
        operation: The operation to name.

    Returns:
        The diagnostic name.

    Example:
        ```pycon
        >>> import functools
        >>> from aretry.operation import get_operation_name
        >>> def fetch(url):
        ...     return url
        ...
        >>> get_operation_name(fetch)
        'fetch'
        >>> get_operation_name(functools.partial(fetch, "https://example.com"))
        'fetch'

        ```
    """
    name = getattr(operation, "name", None)
    if isinstance(name, str):
        return name
    if isinstance(operation, functools.partial):
        return get_operation_name(operation.func)
    qualname = getattr(operation, "__qualname__", None)
    if isinstance(qualname, str):
        return qualname
    return type(operation).__qualname__
