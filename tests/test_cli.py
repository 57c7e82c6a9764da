"""
Tests for the command-line interface.
"""

import json

import pytest

from terramech.cli.main import cli, create_parser


@pytest.fixture
def example_file(tmp_path):
    """Write the example input document and return its path."""
    path = tmp_path / "example_input.json"
    assert cli(["make-example", "--output", str(path)]) == 0
    return path


class TestParser:
    """Tests for argument parsing."""

    def test_no_command_prints_help(self, capsys):
        assert cli([]) == 0
        assert "usage" in capsys.readouterr().out.lower()

    def test_sweep_slips(self):
        args = create_parser().parse_args(["sweep", "--input", "x.json", "--slips", "0.1", "0.3"])
        assert args.slips == [0.1, 0.3]

    def test_verbose_flag(self):
        args = create_parser().parse_args(["--verbose", "presets"])
        assert args.verbose is True


class TestCommands:
    """Tests for each command."""

    def test_presets(self, capsys):
        assert cli(["presets"]) == 0
        out = capsys.readouterr().out
        assert "SandyBrendan" in out
        assert "YoloLoamBrendan" in out

    def test_make_example(self, example_file):
        data = json.loads(example_file.read_text())
        assert data["soil"] == "sandy"
        assert data["slip_ratio"] == 0.2

    def test_analyze_json(self, example_file, capsys):
        capsys.readouterr()
        assert cli(["analyze", "--input", str(example_file)]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["soil_name"] == "SandyBrendan"
        assert data["vertical_step_count"] == 5
        assert data["reactions"]["vertical_load_N"] > 0

    def test_analyze_to_file(self, example_file, tmp_path):
        out_path = tmp_path / "result.json"
        assert cli(["analyze", "--input", str(example_file), "--output", str(out_path)]) == 0
        assert "reactions" in json.loads(out_path.read_text())

    def test_analyze_readable(self, example_file, capsys):
        capsys.readouterr()
        assert cli(["analyze", "--input", str(example_file), "--readable"]) == 0
        out = capsys.readouterr().out
        assert "Vertical load" in out
        assert "Drawbar pull" in out

    def test_sweep(self, example_file, capsys):
        capsys.readouterr()
        assert cli(["sweep", "--input", str(example_file), "--slips", "0.1", "0.5"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["slip_ratios_swept"] == [0.1, 0.5]

    def test_profile(self, example_file, capsys):
        capsys.readouterr()
        assert cli(["profile", "--input", str(example_file), "--samples", "5"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert len(data["points"]) == 5

    def test_profile_readable_in_kpa(self, example_file, capsys):
        capsys.readouterr()
        assert cli(["profile", "--input", str(example_file), "--samples", "5", "--readable"]) == 0
        out = capsys.readouterr().out
        assert "sigma [kPa]" in out
        assert "Peak radial stress" in out

    def test_sweep_readable(self, example_file, capsys):
        capsys.readouterr()
        assert cli(["sweep", "--input", str(example_file), "--slips", "0.1", "0.5", "--readable"]) == 0
        assert "Peak drawbar pull at slip" in capsys.readouterr().out

    def test_solve_readable(self, example_file, capsys):
        capsys.readouterr()
        assert cli(["solve", "--input", str(example_file), "--readable"]) == 0
        out = capsys.readouterr().out
        assert "reference returns 20.0 deg" in out


class TestErrors:
    """Tests for failure exit codes."""

    def test_missing_file(self, tmp_path):
        assert cli(["analyze", "--input", str(tmp_path / "missing.json")]) == 1

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        assert cli(["analyze", "--input", str(path)]) == 1

    def test_unknown_preset(self, tmp_path, capsys):
        path = tmp_path / "clay.json"
        path.write_text(json.dumps({
            "soil": "clay",
            "tire_width_m": 0.2,
            "tire_radius_m": 0.3,
            "contact_length_m": 0.1,
        }))
        assert cli(["analyze", "--input", str(path)]) == 1
        assert "Unknown soil preset 'clay'" in capsys.readouterr().err

    def test_validation_error(self, tmp_path):
        path = tmp_path / "incomplete.json"
        path.write_text(json.dumps({"soil": "sandy"}))
        assert cli(["analyze", "--input", str(path)]) == 1
