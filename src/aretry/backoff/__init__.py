r"""Backoff policies for retry delays.

This package provides the backoff contract and the fixed-interval and
exponential backoff policies.
"""

from __future__ import annotations

__all__ = [
    "STOP",
    "BackOff",
    "BackOffExecution",
    "ExponentialBackOff",
    "FixedBackOff",
    "LimitedBackOffExecution",
]

from aretry.backoff.base import STOP, BackOff, BackOffExecution, LimitedBackOffExecution
from aretry.backoff.exponential import ExponentialBackOff
from aretry.backoff.fixed import FixedBackOff
