"""Tests for scenario loading and the command line entry point."""

import textwrap

import pytest

from src.domain.interfaces import LoadStatus
from src.domain.time import TimeValue
from src.shared.exceptions import ScenarioError
from src.timeslider.core.main import main
from src.timeslider.core.scenario import load_scenario, parse_timestamp


SCENARIO = textwrap.dedent(
    """
    layers:
      - name: rainfall
        start: 2020-01-01
        end: 2020-01-11
      - name: gauges
        start: 2020-01-02T06:00:00Z
        end: 2020-01-08
        status: failed
      - name: hidden
        start: 2019-01-01
        end: 2021-01-01
        visible: false
    """
)


@pytest.fixture
def scenario_file(tmp_path):
    path = tmp_path / "scenario.yaml"
    path.write_text(SCENARIO)
    return path


class TestLoadScenario:
    def test_layers(self, scenario_file, extent):
        scenario = load_scenario(scenario_file)
        rainfall, gauges, hidden = list(scenario.layers)

        assert rainfall.full_time_extent == extent(0, 10)
        assert gauges.load_status is LoadStatus.FAILED_TO_LOAD
        assert not hidden.is_visible
        assert scenario.view.get_sources() is scenario.layers
        assert scenario.view.get_current_extent().is_empty

    def test_interval_and_view(self, tmp_path, extent):
        path = tmp_path / "s.yaml"
        path.write_text(
            textwrap.dedent(
                """
                view:
                  extent: {start: 2020-01-03, end: 2020-01-05}
                layers:
                  - name: a
                    start: 2020-01-01
                    end: 2020-01-11
                    interval: {duration: 12, unit: hours}
                """
            )
        )
        scenario = load_scenario(path)

        assert scenario.layers[0].time_interval == TimeValue.hours(12)
        assert scenario.view.get_current_extent() == extent(2, 4)

    @pytest.mark.parametrize(
        "body",
        [
            "layers: {a: 1}\n",
            "layers:\n  - name: a\n    start: 2020-01-05\n    end: 2020-01-01\n",
            "layers:\n  - name: a\n    status: exploded\n",
            "layers:\n  - name: a\n    start: 2020-01-01\n    end: 2020-01-02\n    interval: {unit: fortnights}\n",
            "- just a list\n",
        ],
    )
    def test_malformed(self, tmp_path, body):
        path = tmp_path / "bad.yaml"
        path.write_text(body)
        with pytest.raises(ScenarioError):
            load_scenario(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ScenarioError):
            load_scenario(tmp_path / "absent.yaml")

    def test_parse_timestamp(self, day):
        assert parse_timestamp("2020-01-02T00:00:00Z") == day(1)
        with pytest.raises(ValueError):
            parse_timestamp("yesterday")


class TestMain:
    def test_prints_steps(self, scenario_file, capsys):
        main(scenario_file, show_steps=True)
        out = capsys.readouterr().out

        assert "Steps:           11" in out
        assert "Selection:       0 .. 10" in out
        assert "Participants:    rainfall" in out
        assert "2020-01-11T00:00:00+00:00" in out

    def test_select_steps(self, scenario_file, capsys):
        main(scenario_file, start_step=2, end_step=5, show_steps=False)
        out = capsys.readouterr().out

        assert "Selection:       2 .. 5" in out
        assert "[   0]" not in out

    def test_with_config(self, scenario_file, tmp_path, capsys):
        config_path = tmp_path / "slider.yaml"
        config_path.write_text("log_level: WARNING\n")

        main(scenario_file, config=config_path, end_step=3, show_steps=False)
        assert "Selection:       0 .. 3" in capsys.readouterr().out
