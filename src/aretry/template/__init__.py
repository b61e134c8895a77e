r"""Retry templates orchestrating the retry loop.

Public API:
    - RetryConfig: Configuration for count-based retries with a fixed backoff
    - RetryTemplate: Synchronous retry template
    - AsyncRetryTemplate: Asynchronous retry template
    - retry: Decorator running a function through a retry template
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_INTERVAL",
    "DEFAULT_MAX_ATTEMPTS",
    "AsyncRetryTemplate",
    "BaseRetryTemplate",
    "RetryConfig",
    "RetryTemplate",
    "retry",
]

from aretry.template.config import DEFAULT_INTERVAL, DEFAULT_MAX_ATTEMPTS, RetryConfig
from aretry.template.core import BaseRetryTemplate
from aretry.template.decorator import retry
from aretry.template.template import RetryTemplate
from aretry.template.template_async import AsyncRetryTemplate
