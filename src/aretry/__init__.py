r"""aretry - Generic retry execution engine.

This package invokes an arbitrary operation and, when it fails, retries
it according to a pluggable retry policy (how many and which failures
are retried) and a pluggable backoff policy (how long to wait between
attempts). Every failure is preserved: when the policies are exhausted
the caller receives one error whose cause is the initial failure and
whose suppressed list holds every later failure.

Key Features:
    - Count-based and exception-based retry policies
    - Fixed and exponential backoff policies with optional limits
    - Listeners for observability (logging, metrics, alerting)
    - Cancellable backoff waits for threads, and asyncio support
    - Structured debug logging of every retry phase

Example:
    ```pycon
    >>> from aretry import RetryTemplate
    >>> from aretry.backoff import FixedBackOff
    >>> from aretry.policy import MaxAttemptsRetryPolicy
    >>> template = RetryTemplate(
    ...     retry_policy=MaxAttemptsRetryPolicy(max_attempts=5),
    ...     backoff_policy=FixedBackOff(interval=0.0),
    ... )
    >>> template.execute(lambda: "done")
    'done'

    ```
"""

from __future__ import annotations

__all__ = [
    "AsyncRetryTemplate",
    "CancellationToken",
    "RetryAbortedError",
    "RetryConfig",
    "RetryError",
    "RetryExhaustedError",
    "RetryTemplate",
    "__version__",
    "retry",
]

from importlib.metadata import PackageNotFoundError, version

from aretry.exceptions import RetryAbortedError, RetryError, RetryExhaustedError
from aretry.template import AsyncRetryTemplate, RetryConfig, RetryTemplate, retry
from aretry.utils.sleep import CancellationToken

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
