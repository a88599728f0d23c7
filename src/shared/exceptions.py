"""
Custom exceptions for the time slider.

The controller itself never raises: empty or out-of-range inputs degrade to
no-ops. These exceptions are raised at the edges only (configuration files
and CLI scenarios).

Clean Architecture Note:
- This file belongs to the Shared layer (cross-cutting concerns)
- Can be imported by any layer (domain, timeslider)
"""


class TimeSliderError(Exception):
    """Base exception for all time slider errors."""

    pass


class ConfigError(TimeSliderError):
    """Raised when configuration is invalid or missing."""

    def __init__(
        self,
        message: str,
        config_path: str | None = None,
        field_name: str | None = None,
    ):
        """
        Initialize ConfigError.

        Parameters
        ----------
        message : str
            Error message
        config_path : str | None
            Path to the config file
        field_name : str | None
            Name of the invalid/missing config field
        """
        self.message = message
        self.config_path = config_path
        self.field_name = field_name

        full_message = message
        if field_name:
            full_message = f"{full_message} (field: {field_name})"
        if config_path:
            full_message = f"{full_message} (config: {config_path})"

        super().__init__(full_message)


class ScenarioError(TimeSliderError):
    """Raised when a layer scenario file is malformed."""

    def __init__(
        self,
        message: str,
        scenario_path: str | None = None,
        layer_name: str | None = None,
    ):
        """
        Initialize ScenarioError.

        Parameters
        ----------
        message : str
            Error message
        scenario_path : str | None
            Path to the scenario file
        layer_name : str | None
            Name (or index) of the offending layer entry
        """
        self.message = message
        self.scenario_path = scenario_path
        self.layer_name = layer_name

        full_message = message
        if layer_name:
            full_message = f"[{layer_name}] {full_message}"
        if scenario_path:
            full_message = f"{full_message} (scenario: {scenario_path})"

        super().__init__(full_message)
