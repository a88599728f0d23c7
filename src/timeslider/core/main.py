"""
Time slider - Main Entry Point.

This is the CLI entry point that uses tyro for argument parsing. It loads a
layer scenario, runs the controller over it and prints the resulting steps.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import tyro

from src.timeslider.config.io import load_config
from src.timeslider.config.settings import TimeSliderConfig
from src.timeslider.core.controller import TimeSliderController
from src.timeslider.core.scenario import load_scenario

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO") -> None:
    """
    Setup logging configuration.

    Parameters
    ----------
    level : str
        Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def describe(controller: TimeSliderController, show_steps: bool = True) -> str:
    """Human-readable summary of the controller state."""
    lines = [
        f"Full extent:     {controller.full_extent}",
        f"Step interval:   {controller.step_interval or '-'}",
        f"Steps:           {controller.number_of_steps}",
        f"Current extent:  {controller.current_extent}",
        f"Selection:       {controller.start_step} .. {controller.end_step}",
        f"Participants:    {', '.join(controller.participants) or '-'}",
    ]
    if show_steps:
        for i, step_time in enumerate(controller.step_times):
            lines.append(f"  [{i:>4}] {step_time.isoformat()}")
    return "\n".join(lines)


def main(
    scenario: Annotated[Path, tyro.conf.Positional],
    config: Path | None = None,
    start_step: int | None = None,
    end_step: int | None = None,
    log_level: str | None = None,
    show_steps: bool = True,
) -> None:
    """
    Discretize the time extent of a layer scenario into slider steps.

    Parameters
    ----------
    scenario : Path
        YAML file describing the layers (and optionally the view extent)
    config : Path | None
        YAML time slider config (defaults are used if omitted)
    start_step : int | None
        Move the selection start to this step
    end_step : int | None
        Move the selection end to this step
    log_level : str | None
        Logging level override: DEBUG, INFO, WARNING, ERROR
    show_steps : bool
        Print every step time (default: True)

    Examples
    --------
    Show the steps of a scenario:
        timeslider ./scenario.yaml

    Select steps 2 to 5:
        timeslider ./scenario.yaml --start-step 2 --end-step 5
    """
    slider_config = load_config(config) if config is not None else TimeSliderConfig()
    setup_logging(log_level or slider_config.log_level)

    logger.info(f"Scenario: {scenario}")
    loaded = load_scenario(scenario)
    controller = TimeSliderController(loaded.view, config=slider_config)

    if start_step is not None and end_step is not None:
        controller.set_start_and_end_steps(start_step, end_step)
    elif start_step is not None:
        controller.set_start_step(start_step)
    elif end_step is not None:
        controller.set_end_step(end_step)

    print(describe(controller, show_steps=show_steps))
    controller.close()


def cli() -> None:
    """Console script entry point."""
    tyro.cli(main)


if __name__ == "__main__":
    cli()
