r"""Utility functions for retry loops.

This package provides cancellable waiting, parameter validation and
structured logging helpers shared by the retry templates and policies.
"""

from __future__ import annotations

__all__ = [
    "CancellationToken",
    "log_structured",
    "validate_backoff_params",
    "validate_max_attempts",
    "wait",
]

from aretry.utils.sleep import CancellationToken, wait
from aretry.utils.structured_logging import log_structured
from aretry.utils.validation import validate_backoff_params, validate_max_attempts
