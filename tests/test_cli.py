"""Tests for CLI module."""

import json
import logging
from unittest.mock import patch

import pytest

from uplan_volumes.cli import main, print_help

START = "1704067200"


@pytest.fixture
def trajectory_csv(tmp_path, sample_csv_text):
    """Trajectory CSV on disk."""
    path = tmp_path / "flight.csv"
    path.write_text(sample_csv_text)
    return path


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep UPLAN_* variables of the caller out of the tests."""
    for name in (
        "UPLAN_TSE_H",
        "UPLAN_TSE_V",
        "UPLAN_ALPHA_H",
        "UPLAN_ALPHA_V",
        "UPLAN_TBUF",
        "UPLAN_COMPRESSION_FACTOR",
    ):
        monkeypatch.delenv(name, raising=False)


def run_cli(*args):
    """Run main() with the given arguments."""
    with patch("sys.argv", ["uplan-volumes", *args]):
        main()


class TestPrintHelp:
    """Tests for print_help function."""

    def test_print_help_output(self, capsys):
        """Test that help text is printed."""
        print_help()
        captured = capsys.readouterr()

        assert "U-plan Volume Generator" in captured.out
        assert "USAGE:" in captured.out
        assert "OPTIONS:" in captured.out
        assert "EXAMPLES:" in captured.out
        assert "--scheduled-at" in captured.out
        assert "--compression-factor" in captured.out
        assert "--help" in captured.out


class TestArgumentHandling:
    """Tests for argument parsing in main."""

    def test_no_arguments_shows_help(self, capsys):
        """Test that running with no arguments shows help and exits."""
        with pytest.raises(SystemExit) as exc_info:
            run_cli()

        assert exc_info.value.code == 1
        assert "U-plan Volume Generator" in capsys.readouterr().out

    @pytest.mark.parametrize("flag", ["-h", "--help"])
    def test_help_flags(self, flag, capsys):
        """Test help flags show help and exit successfully."""
        with pytest.raises(SystemExit) as exc_info:
            run_cli(flag)

        assert exc_info.value.code == 0
        assert "USAGE:" in capsys.readouterr().out

    def test_missing_scheduled_at(self, trajectory_csv, capsys):
        """Test the scheduled start is required."""
        with pytest.raises(SystemExit) as exc_info:
            run_cli(str(trajectory_csv))

        assert exc_info.value.code == 1
        assert "--scheduled-at is required" in capsys.readouterr().out

    def test_missing_input(self, capsys):
        """Test a trajectory file is required."""
        with pytest.raises(SystemExit) as exc_info:
            run_cli("--scheduled-at", START)

        assert exc_info.value.code == 1
        assert "No trajectory CSV specified" in capsys.readouterr().out

    def test_option_without_value(self, trajectory_csv, capsys):
        """Test options that need a value fail without one."""
        with pytest.raises(SystemExit) as exc_info:
            run_cli(str(trajectory_csv), "--scheduled-at")

        assert exc_info.value.code == 1
        assert "--scheduled-at requires a value" in capsys.readouterr().out

    def test_non_numeric_value(self, trajectory_csv, capsys):
        """Test numeric options reject text."""
        with pytest.raises(SystemExit) as exc_info:
            run_cli(str(trajectory_csv), "--scheduled-at", START, "--tbuf", "abc")

        assert exc_info.value.code == 1
        assert "--tbuf expects a number, got 'abc'" in capsys.readouterr().out

    @pytest.mark.parametrize("value", ["inf", "-inf", "nan"])
    def test_non_finite_scheduled_at(self, trajectory_csv, value, capsys):
        """Test infinite and NaN start times are rejected before generation."""
        with pytest.raises(SystemExit) as exc_info:
            run_cli(str(trajectory_csv), "--scheduled-at", value)

        assert exc_info.value.code == 1
        assert f"--scheduled-at expects a finite number, got '{value}'" in capsys.readouterr().out
        assert not (trajectory_csv.parent / "flight_uplan.json").exists()

    def test_non_finite_ground_elevation(self, trajectory_csv, capsys):
        """Test NaN ground elevation is rejected."""
        with pytest.raises(SystemExit) as exc_info:
            run_cli(str(trajectory_csv), "--scheduled-at", START, "--ground-elevation", "nan")

        assert exc_info.value.code == 1
        assert "expects a finite number" in capsys.readouterr().out

    def test_float_compression_factor(self, trajectory_csv, capsys):
        """Test the compression factor must be an integer."""
        with pytest.raises(SystemExit) as exc_info:
            run_cli(str(trajectory_csv), "--scheduled-at", START, "--compression-factor", "2.5")

        assert exc_info.value.code == 1
        assert "--compression-factor expects a number" in capsys.readouterr().out

    def test_unknown_option(self, trajectory_csv):
        """Test unknown options are rejected."""
        with pytest.raises(SystemExit) as exc_info:
            run_cli(str(trajectory_csv), "--bogus")

        assert exc_info.value.code == 1

    def test_second_positional_argument(self, trajectory_csv):
        """Test only one trajectory file is accepted."""
        with pytest.raises(SystemExit) as exc_info:
            run_cli(str(trajectory_csv), "other.csv")

        assert exc_info.value.code == 1


class TestMainRun:
    """Tests for complete CLI runs."""

    def test_writes_default_output(self, trajectory_csv, capsys):
        """Test a run writes <stem>_uplan.json next to the input."""
        run_cli(str(trajectory_csv), "--scheduled-at", START)

        output = trajectory_csv.parent / "flight_uplan.json"
        document = json.loads(output.read_text())
        assert len(document["operationVolumes"]) >= 1
        assert document["state"] == "SENT"

        out = capsys.readouterr().out
        assert "Volumes:" in out
        assert "flight_uplan.json" in out

    def test_explicit_output_and_config(self, trajectory_csv, tmp_path):
        """Test --output and config flags are applied."""
        output = tmp_path / "plans" / "plan.json"
        run_cli(
            str(trajectory_csv),
            "--scheduled-at", START,
            "--compression-factor", "1",
            "--tbuf", "2",
            "--output", str(output),
        )

        volumes = json.loads(output.read_text())["operationVolumes"]
        assert len(volumes) == 3
        assert volumes[0]["timeBegin"] == "2024-01-01T00:00:08"
        assert [v["ordinal"] for v in volumes] == [0, 1, 2]

    def test_environment_overridden_by_flag(self, trajectory_csv, tmp_path, monkeypatch):
        """Test command-line flags take precedence over UPLAN_* variables."""
        monkeypatch.setenv("UPLAN_COMPRESSION_FACTOR", "50")
        output = tmp_path / "plan.json"
        run_cli(
            str(trajectory_csv),
            "--scheduled-at", START,
            "--compression-factor", "1",
            "--output", str(output),
        )

        assert len(json.loads(output.read_text())["operationVolumes"]) == 3

    def test_details_file(self, trajectory_csv, tmp_path):
        """Test --details fills the document."""
        details = tmp_path / "details.json"
        details.write_text(json.dumps({"operatorId": "OP-7", "uas": {"registrationNumber": "R1"}}))
        output = tmp_path / "plan.json"

        run_cli(
            str(trajectory_csv),
            "--scheduled-at", START,
            "--details", str(details),
            "--output", str(output),
        )

        document = json.loads(output.read_text())
        assert document["operatorId"] == "OP-7"
        assert document["uas"]["registrationNumber"] == "R1"

    def test_details_must_be_object(self, trajectory_csv, tmp_path):
        """Test a details file holding a list is rejected."""
        details = tmp_path / "details.json"
        details.write_text("[1, 2]")

        with pytest.raises(SystemExit) as exc_info:
            run_cli(str(trajectory_csv), "--scheduled-at", START, "--details", str(details))

        assert exc_info.value.code == 1

    def test_details_invalid_json(self, trajectory_csv, tmp_path):
        """Test a malformed details file is rejected."""
        details = tmp_path / "details.json"
        details.write_text("{not json")

        with pytest.raises(SystemExit) as exc_info:
            run_cli(str(trajectory_csv), "--scheduled-at", START, "--details", str(details))

        assert exc_info.value.code == 1

    def test_legacy_volumes(self, trajectory_csv, tmp_path):
        """Test --legacy builds axis-aligned volumes."""
        output = tmp_path / "plan.json"
        run_cli(
            str(trajectory_csv),
            "--scheduled-at", START,
            "--legacy",
            "--compression-factor", "1",
            "--output", str(output),
        )

        volumes = json.loads(output.read_text())["operationVolumes"]
        assert len(volumes) >= 1
        for volume in volumes:
            assert len(volume["geometry"]["coordinates"][0]) == 5

    def test_ground_elevation(self, trajectory_csv, tmp_path):
        """Test --ground-elevation lowers the volumes."""
        low = tmp_path / "low.json"
        high = tmp_path / "high.json"
        run_cli(str(trajectory_csv), "--scheduled-at", START, "--output", str(high))
        run_cli(
            str(trajectory_csv),
            "--scheduled-at", START,
            "--ground-elevation", "20",
            "--output", str(low),
        )

        high_max = json.loads(high.read_text())["operationVolumes"][0]["maxAltitude"]["value"]
        low_max = json.loads(low.read_text())["operationVolumes"][0]["maxAltitude"]["value"]
        assert low_max < high_max

    def test_debug_flag_enables_debug_mode(self, trajectory_csv, tmp_path):
        """Test that --debug flag enables debug mode."""
        from uplan_volumes.logger import logger

        run_cli(
            str(trajectory_csv),
            "--scheduled-at", START,
            "--debug",
            "--output", str(tmp_path / "plan.json"),
        )

        assert logger.level == logging.DEBUG

    def test_missing_input_file(self, tmp_path):
        """Test a nonexistent trajectory fails validation."""
        with pytest.raises(SystemExit) as exc_info:
            run_cli(str(tmp_path / "missing.csv"), "--scheduled-at", START)

        assert exc_info.value.code == 1

    def test_invalid_config_value(self, trajectory_csv):
        """Test configuration errors exit with status 1."""
        with pytest.raises(SystemExit) as exc_info:
            run_cli(str(trajectory_csv), "--scheduled-at", START, "--tbuf", "0")

        assert exc_info.value.code == 1

    def test_csv_without_rows(self, tmp_path):
        """Test a CSV with only a header fails cleanly."""
        path = tmp_path / "header.csv"
        path.write_text("SimTime,Lat,Lon,Alt\n")

        with pytest.raises(SystemExit) as exc_info:
            run_cli(str(path), "--scheduled-at", START)

        assert exc_info.value.code == 1
