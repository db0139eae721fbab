"""Tests for the command-line entry point."""
import json
from contextlib import contextmanager

import pytest
from click.testing import CliRunner

import cliptrail.main as cli
from cliptrail.settings import MAX_POLL_INTERVAL_MS, AppSettings


@pytest.fixture
def launched(monkeypatch) -> list[AppSettings]:
    """Replace the tray app with a recorder of the settings it receives."""
    calls: list[AppSettings] = []

    def fake_run_app(settings: AppSettings) -> int:
        calls.append(settings)
        return 0

    monkeypatch.setattr(cli, "_run_app", fake_run_app)
    return calls


class TestSettingsResolution:
    """Settings handed to the tray app."""

    def test_defaults_written_on_first_run(self, tmp_path, launched) -> None:
        """A missing config file is created with default values."""
        path = tmp_path / "config.json"
        result = CliRunner().invoke(cli.main, ["--config", str(path)])
        assert result.exit_code == 0, result.output
        assert launched == [AppSettings()]
        assert json.loads(path.read_text(encoding="utf-8"))["max_entries"] == 10

    def test_config_file_is_used(self, tmp_path, launched) -> None:
        """Values from config.json reach the app."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"max_entries": 3, "capture_on_start": True}), encoding="utf-8")
        result = CliRunner().invoke(cli.main, ["--config", str(path)])
        assert result.exit_code == 0, result.output
        assert launched == [AppSettings(max_entries=3, capture_on_start=True)]

    def test_options_override_file(self, tmp_path, launched) -> None:
        """Command-line options win over the file and are clamped."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"max_entries": 3, "capture_on_start": True}), encoding="utf-8")
        result = CliRunner().invoke(
            cli.main,
            ["--config", str(path), "--max-entries", "20", "--interval-ms", "999999", "--skip-existing"],
        )
        assert result.exit_code == 0, result.output
        assert launched == [
            AppSettings(max_entries=20, poll_interval_ms=MAX_POLL_INTERVAL_MS, capture_on_start=False)
        ]

    def test_override_not_saved(self, tmp_path, launched) -> None:
        """Overrides apply to this run only."""
        path = tmp_path / "config.json"
        CliRunner().invoke(cli.main, ["--config", str(path), "--max-entries", "7"])
        assert json.loads(path.read_text(encoding="utf-8"))["max_entries"] == 10
        assert launched[0].max_entries == 7


class TestArguments:
    """Option validation and process-level behaviour."""

    def test_zero_max_entries_rejected(self, tmp_path, launched) -> None:
        """A capacity below one is a usage error."""
        result = CliRunner().invoke(cli.main, ["--config", str(tmp_path / "c.json"), "--max-entries", "0"])
        assert result.exit_code == 2
        assert launched == []

    def test_help(self) -> None:
        """--help lists the capacity option."""
        result = CliRunner().invoke(cli.main, ["--help"])
        assert result.exit_code == 0
        assert "--max-entries" in result.output

    def test_second_instance_does_not_launch(self, tmp_path, launched, monkeypatch) -> None:
        """When another instance holds the mutex nothing is started."""

        @contextmanager
        def taken():
            yield False

        monkeypatch.setattr(cli, "single_instance", taken)
        result = CliRunner().invoke(cli.main, ["--config", str(tmp_path / "c.json")])
        assert result.exit_code == 0
        assert launched == []
