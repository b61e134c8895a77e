r"""Parameter validation utilities for retry and backoff policies.

This module provides validation functions for policy parameters to
ensure they meet the required constraints before being used in the
retry loop.
"""

from __future__ import annotations

__all__ = ["validate_backoff_params", "validate_max_attempts"]


def validate_max_attempts(max_attempts: int) -> None:
    """Validate the maximum number of attempts.

    Args:
        max_attempts: Total number of attempts, including the initial
            one. Must be >= 1. A value of 1 means no retries.

    Raises:
        ValueError: If max_attempts is lower than 1.

    Example:
        ```pycon
        >>> from aretry.utils.validation import validate_max_attempts
        >>> validate_max_attempts(3)
        >>> validate_max_attempts(0)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: max_attempts must be >= 1, got 0

        ```
    """
    if max_attempts < 1:
        msg = f"max_attempts must be >= 1, got {max_attempts}"
        raise ValueError(msg)


def validate_backoff_params(
    interval: float = 0.0,
    max_attempts: int | None = None,
    max_elapsed_time: float | None = None,
) -> None:
    """Validate backoff parameters.

    Args:
        interval: Delay in seconds between attempts. Must be >= 0.
        max_attempts: Maximum number of delays to issue. Must be >= 0
            if provided.
        max_elapsed_time: Maximum accumulated delay in seconds. Must be
            >= 0 if provided.

    Raises:
        ValueError: If any parameter is negative.

    Example:
        ```pycon
        >>> from aretry.utils.validation import validate_backoff_params
        >>> validate_backoff_params(interval=1.0)
        >>> validate_backoff_params(interval=0.5, max_attempts=3, max_elapsed_time=10.0)
        >>> validate_backoff_params(interval=-1.0)  # doctest: +SKIP

        ```
    """
    if interval < 0:
        msg = f"interval must be >= 0, got {interval}"
        raise ValueError(msg)
    if max_attempts is not None and max_attempts < 0:
        msg = f"max_attempts must be >= 0, got {max_attempts}"
        raise ValueError(msg)
    if max_elapsed_time is not None and max_elapsed_time < 0:
        msg = f"max_elapsed_time must be >= 0, got {max_elapsed_time}"
        raise ValueError(msg)
