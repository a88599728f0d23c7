"""
Layer scenarios loaded from YAML.

A scenario describes the layers of a view and, optionally, the extent the
view displays. Used by the command line entry point.

Example
-------
.. code-block:: yaml

    view:
      extent: {start: 2020-01-03, end: 2020-01-05}
    layers:
      - name: rainfall
        start: 2020-01-01
        end: 2020-01-11
        interval: {duration: 1, unit: days}
      - name: gauges
        start: 2020-01-02T06:00:00Z
        end: 2020-01-08
        status: failed
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Any

import yaml

from src.domain.interfaces import LoadStatus
from src.domain.time import TimeExtent, TimeUnit, TimeValue
from src.shared.exceptions import ScenarioError
from src.timeslider.adapters import InMemoryTemporalView, LayerList, TimeAwareLayer

logger = logging.getLogger(__name__)

_STATUSES = {
    "loaded": LoadStatus.LOADED,
    "failed": LoadStatus.FAILED_TO_LOAD,
    "loading": LoadStatus.LOADING,
    "not_loaded": LoadStatus.NOT_LOADED,
}


@dataclass
class Scenario:
    """Layers and view built from a scenario file."""

    view: InMemoryTemporalView
    layers: LayerList


def parse_timestamp(value: Any) -> datetime:
    """Accept datetimes, dates, and ISO-8601 strings (naive means UTC)."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            pass
    raise ValueError(f"Not a timestamp: {value!r}")


def parse_extent(data: Any) -> TimeExtent:
    if not isinstance(data, dict) or "start" not in data or "end" not in data:
        raise ValueError("extent needs 'start' and 'end'")
    return TimeExtent(parse_timestamp(data["start"]), parse_timestamp(data["end"]))


def parse_interval(data: Any) -> TimeValue | None:
    if data is None:
        return None
    if not isinstance(data, dict) or "unit" not in data:
        raise ValueError("interval needs 'duration' and 'unit'")
    return TimeValue(float(data.get("duration", 1)), TimeUnit.from_name(str(data["unit"])))


def _parse_layer(entry: Any, index: int) -> TimeAwareLayer:
    if not isinstance(entry, dict):
        raise ScenarioError("layer entry must be a mapping", layer_name=f"#{index}")

    name = str(entry.get("name", f"layer-{index}"))
    try:
        extent = (
            parse_extent(entry)
            if "start" in entry or "end" in entry
            else TimeExtent.empty()
        )
        interval = parse_interval(entry.get("interval"))
    except ValueError as e:
        raise ScenarioError(str(e), layer_name=name) from e

    status_name = str(entry.get("status", "loaded")).lower()
    if status_name not in _STATUSES:
        raise ScenarioError(
            f"unknown status '{status_name}' (valid: {', '.join(_STATUSES)})", layer_name=name
        )

    return TimeAwareLayer(
        name,
        full_time_extent=extent,
        time_interval=interval,
        load_status=_STATUSES[status_name],
        visible=bool(entry.get("visible", True)),
        time_filtering_enabled=bool(entry.get("time_filtering", True)),
    )


def load_scenario(path: str | Path) -> Scenario:
    """
    Build a view and its layers from a YAML scenario file.

    Raises
    ------
    ScenarioError
        If the file is missing or malformed
    """
    path = Path(path)
    if not path.exists():
        raise ScenarioError("Scenario file not found", scenario_path=str(path))

    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ScenarioError(f"Invalid YAML: {e}", scenario_path=str(path)) from e

    if not isinstance(data, dict):
        raise ScenarioError("Scenario root must be a mapping", scenario_path=str(path))

    entries = data.get("layers") or []
    if not isinstance(entries, list):
        raise ScenarioError("'layers' must be a list", scenario_path=str(path))

    try:
        layers = LayerList(_parse_layer(entry, i) for i, entry in enumerate(entries))
    except ScenarioError as e:
        raise ScenarioError(e.message, scenario_path=str(path), layer_name=e.layer_name) from e

    view_data = data.get("view") or {}
    if not isinstance(view_data, dict):
        raise ScenarioError("'view' must be a mapping", scenario_path=str(path))
    try:
        extent = parse_extent(view_data["extent"]) if "extent" in view_data else None
        bounds = parse_extent(view_data["bounds"]) if "bounds" in view_data else None
    except ValueError as e:
        raise ScenarioError(f"view: {e}", scenario_path=str(path)) from e

    view = InMemoryTemporalView(sources=layers, current_extent=extent, bounds=bounds)
    logger.debug(f"Loaded scenario {path} with {len(layers)} layers")
    return Scenario(view=view, layers=layers)
