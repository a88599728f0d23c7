"""Time slider configuration."""

from src.timeslider.config.io import load_config, save_config
from src.timeslider.config.settings import TimeSliderConfig
from src.timeslider.config.step_constants import StepThresholds

__all__ = ["TimeSliderConfig", "StepThresholds", "load_config", "save_config"]
