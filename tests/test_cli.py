"""Tests for the fleet-sim command-line interface."""

import json

import pytest
from click.testing import CliRunner

from inspection_fleet.cli import main
from inspection_fleet.config import Config


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    Config.default().to_yaml(path)
    return path


def invoke(runner, config_file, *args):
    return runner.invoke(main, ["--config", str(config_file), *args])


class TestInit:
    """Tests for the init command."""

    def test_writes_config(self, runner, tmp_path):
        output = tmp_path / "out"

        result = runner.invoke(main, ["--config", str(tmp_path / "none.yaml"), "init", "-o", str(output)])

        assert result.exit_code == 0
        assert (output / "config.yaml").exists()
        assert Config.from_yaml(output / "config.yaml") == Config.default()


class TestFleetCommand:
    """Tests for the fleet command."""

    def test_text_output(self, runner, config_file):
        result = invoke(runner, config_file, "fleet")

        assert result.exit_code == 0
        assert "10 of 10 systems" in result.output
        assert "system-001" in result.output

    def test_json_status_filter(self, runner, config_file):
        result = invoke(runner, config_file, "fleet", "--status", "online", "--json")

        assert result.exit_code == 0
        systems = json.loads(result.output)
        assert all(s["status"] == "online" for s in systems)

    def test_invalid_status(self, runner, config_file):
        result = invoke(runner, config_file, "fleet", "--status", "broken")
        assert result.exit_code == 2


class TestSystemCommand:
    """Tests for the system command."""

    def test_json(self, runner, config_file):
        result = invoke(runner, config_file, "system", "system-002", "--range", "7d", "--json")

        assert result.exit_code == 0
        report = json.loads(result.output)
        assert report["system"]["id"] == "system-002"
        assert len(report["daily"]) == 7

    def test_text(self, runner, config_file):
        result = invoke(runner, config_file, "system", "system-002")

        assert result.exit_code == 0
        assert "Inspection System 2 (system-002)" in result.output
        assert "Throughput trend" in result.output

    def test_unknown_system(self, runner, config_file):
        result = invoke(runner, config_file, "system", "system-999")

        assert result.exit_code == 2
        assert "Unknown system" in result.output


class TestHistoryCommand:
    """Tests for the history command."""

    def test_json(self, runner, config_file):
        result = invoke(runner, config_file, "history", "system-007", "--days", "5", "--json")

        assert result.exit_code == 0
        points = json.loads(result.output)
        assert len(points) == 5
        assert points[0]["timestamp"] == "2024-01-01"

    def test_negative_days_prints_nothing(self, runner, config_file):
        result = invoke(runner, config_file, "history", "system-007", "--days=-3", "--json")

        assert result.exit_code == 0
        assert json.loads(result.output) == []


class TestReportCommand:
    """Tests for the report command."""

    def test_json(self, runner, config_file):
        result = invoke(runner, config_file, "report", "--json")

        assert result.exit_code == 0
        report = json.loads(result.output)
        assert report["metrics"]["total_systems"] == 10

    def test_text(self, runner, config_file):
        result = invoke(runner, config_file, "report")

        assert result.exit_code == 0
        assert "Fleet Report" in result.output
        assert "Top performers:" in result.output
