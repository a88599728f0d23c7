"""
Configuration import/export for time slider settings.

Settings are stored as flat YAML mappings, one key per
:class:`TimeSliderConfig` field.
"""

from __future__ import annotations

import logging
from dataclasses import fields
from pathlib import Path

import yaml

from src.shared.exceptions import ConfigError
from src.timeslider.config.settings import TimeSliderConfig

logger = logging.getLogger(__name__)


def save_config(config: TimeSliderConfig, output_path: str | Path) -> None:
    """
    Export slider settings to a YAML file.

    Parameters
    ----------
    config : TimeSliderConfig
        Settings to export
    output_path : str | Path
        Destination file; parent directories are created
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w") as f:
        yaml.safe_dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)

    logger.info(f"Exported time slider config to {output_path}")


def load_config(input_path: str | Path) -> TimeSliderConfig:
    """
    Import slider settings from a YAML file.

    Missing keys keep their defaults; unknown keys are ignored with a warning.

    Parameters
    ----------
    input_path : str | Path
        YAML file to read

    Returns
    -------
    TimeSliderConfig
        Validated settings

    Raises
    ------
    ConfigError
        If the file is missing, unreadable, or holds invalid values
    """
    input_path = Path(input_path)
    if not input_path.exists():
        raise ConfigError("Config file not found", config_path=str(input_path))

    try:
        with open(input_path, "r") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML: {e}", config_path=str(input_path)) from e

    if data is None:
        logger.warning(f"Empty config file, using defaults: {input_path}")
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("Config root must be a mapping", config_path=str(input_path))

    known = {f.name for f in fields(TimeSliderConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        logger.warning(f"Ignoring unknown config keys in {input_path}: {', '.join(unknown)}")

    try:
        config = TimeSliderConfig(**{k: v for k, v in data.items() if k in known})
    except ConfigError as e:
        raise ConfigError(e.message, config_path=str(input_path), field_name=e.field_name) from e
    except TypeError as e:
        raise ConfigError(f"Invalid value: {e}", config_path=str(input_path)) from e

    logger.info(f"Imported time slider config from {input_path}")
    return config
