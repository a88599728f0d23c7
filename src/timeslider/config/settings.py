"""
Configuration dataclasses for the time slider controller.

This module provides type-safe configuration using Python 3.10+ dataclasses.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass

from src.shared.exceptions import ConfigError


logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class TimeSliderConfig:
    """Main time slider configuration.

    Attributes
    ----------
    tool_name : str
        Name the controller reports to its owner
    min_interval_ms : float
        Smallest step interval honored; finer intervals are raised to it
    event_history_size : int
        Number of delivered change events kept by the controller's bus
    log_level : str
        Logging level used by the CLI
    """

    tool_name: str = "TimeSlider"
    min_interval_ms: float = 1.0
    event_history_size: int = 100
    log_level: str = "INFO"

    def __post_init__(self):
        """Validate settings after initialization."""
        if not self.tool_name:
            raise ConfigError("tool_name must not be empty", field_name="tool_name")
        if self.min_interval_ms <= 0:
            raise ConfigError(
                f"min_interval_ms must be positive, got {self.min_interval_ms}",
                field_name="min_interval_ms",
            )
        if self.event_history_size < 0:
            raise ConfigError(
                f"event_history_size must be >= 0, got {self.event_history_size}",
                field_name="event_history_size",
            )
        self.log_level = str(self.log_level).upper()
        if self.log_level not in _LOG_LEVELS:
            raise ConfigError(
                f"log_level must be one of {', '.join(_LOG_LEVELS)}, got {self.log_level}",
                field_name="log_level",
            )

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for easy serialization."""
        return asdict(self)


__all__ = ["TimeSliderConfig"]
