r"""Cancellable waiting between retry attempts.

This module provides the CancellationToken class used to interrupt a
backoff wait from another thread, and the function performing the wait.
"""

from __future__ import annotations

__all__ = ["CancellationToken", "wait"]

import logging
import threading
import time

logger: logging.Logger = logging.getLogger(__name__)


class CancellationToken:
    """Thread-safe flag used to cancel a retry loop while it backs off.

    Once cancelled, the token stays cancelled. A retry template never
    resets it, so the caller can observe the cancellation after the
    retry loop has been aborted.

    Example:
        ```pycon
        >>> from aretry.utils.sleep import CancellationToken
        >>> token = CancellationToken()
        >>> token.is_cancelled
        False
        >>> token.cancel()
        >>> token.is_cancelled
        True
        >>> token.wait(10.0)  # Returns immediately
        True

        ```
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    @property
    def is_cancelled(self) -> bool:
        """Indicate whether the token has been cancelled."""
        return self._event.is_set()

    def cancel(self) -> None:
        """Cancel the token and wake up any thread waiting on it."""
        self._event.set()

    def wait(self, timeout: float) -> bool:
        """Block until the token is cancelled or the timeout elapses.

        Args:
            timeout: Maximum time to wait in seconds.

        Returns:
            ``True`` if the token was cancelled, ``False`` if the timeout
            elapsed normally.
        """
        return self._event.wait(timeout)

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(cancelled={self.is_cancelled})"


def wait(delay: float, cancellation: CancellationToken | None = None) -> bool:
    """Wait before the next retry attempt.

    Without a cancellation token the wait is a plain ``time.sleep``.
    With a token, the wait returns early if the token is cancelled.

    Args:
        delay: The delay in seconds.
        cancellation: Optional token used to cancel the wait.

    Returns:
        ``True`` if the wait was cancelled, ``False`` if the delay
        elapsed normally.

    Example:
        ```pycon
        >>> from aretry.utils.sleep import CancellationToken, wait
        >>> wait(0.0)
        False
        >>> token = CancellationToken()
        >>> token.cancel()
        >>> wait(5.0, token)
        True

        ```
    """
    if cancellation is None:
        time.sleep(delay)
        return False
    if cancellation.is_cancelled or cancellation.wait(delay):
        logger.debug(f"Wait of {delay:.2f}s cancelled")
        return True
    return False
