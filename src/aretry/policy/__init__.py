r"""Retry policies deciding whether a failed operation is attempted
again.

This package provides the retry policy contract and the count-based and
exception-based policies.
"""

from __future__ import annotations

__all__ = [
    "ExceptionRetryPolicy",
    "MaxAttemptsRetryPolicy",
    "RetryExecution",
    "RetryPolicy",
]

from aretry.policy.base import RetryExecution, RetryPolicy
from aretry.policy.exception import ExceptionRetryPolicy
from aretry.policy.max_attempts import MaxAttemptsRetryPolicy
