r"""Configuration dataclass and defaults for retry templates.

This module provides configuration constants and a dataclass-based
configuration object for the RetryTemplate and AsyncRetryTemplate
classes.
"""

from __future__ import annotations

__all__ = ["DEFAULT_INTERVAL", "DEFAULT_MAX_ATTEMPTS", "RetryConfig"]

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from aretry.utils.validation import validate_backoff_params, validate_max_attempts

if TYPE_CHECKING:
    from aretry.listener import RetryListener

# Default maximum number of attempts
# Total attempts = 1 initial attempt + 2 retries
DEFAULT_MAX_ATTEMPTS = 3

# Default fixed delay in seconds between two attempts
DEFAULT_INTERVAL = 1.0


@dataclass(frozen=True)
class RetryConfig:
    """Configuration for the retry behavior of a template.

    The configuration describes a count-based retry policy combined with
    a fixed backoff. Templates needing other policies are built directly
    from policy objects.

    Args:
        max_attempts: Total number of attempts, including the initial one.
            Must be >= 1.
        interval: Fixed delay in seconds between two attempts. Must be >= 0.
        max_elapsed_time: Optional maximum accumulated delay in seconds.
            Must be >= 0 if provided.
        listeners: Listeners notified of the retry lifecycle, in order.

    Example:
        ```pycon
        >>> from aretry.template import RetryConfig
        >>> config = RetryConfig()  # Use defaults
        >>> config.max_attempts
        3
        >>> config = RetryConfig(max_attempts=5)
        >>> merged = config.merge(max_attempts=10)  # Override specific parameters
        >>> merged.max_attempts
        10
        >>> config.max_attempts  # Original unchanged
        5

        ```
    """

    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    interval: float = DEFAULT_INTERVAL
    max_elapsed_time: float | None = None
    listeners: tuple[RetryListener, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Validate configuration parameters after initialization.

        Raises:
            ValueError: If any parameter fails validation.
        """
        validate_max_attempts(self.max_attempts)
        validate_backoff_params(interval=self.interval, max_elapsed_time=self.max_elapsed_time)
        object.__setattr__(self, "listeners", tuple(self.listeners))

    def merge(self, **overrides: Any) -> RetryConfig:
        """Create a new config with specified parameters overridden.

        Only non-None override values are applied.

        Args:
            **overrides: Keyword arguments for parameters to override.

        Returns:
            A new RetryConfig instance with overrides applied.
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary format.

        Returns:
            Dictionary with the configuration parameters.
        """
        return {
            "max_attempts": self.max_attempts,
            "interval": self.interval,
            "max_elapsed_time": self.max_elapsed_time,
            "listeners": self.listeners,
        }
