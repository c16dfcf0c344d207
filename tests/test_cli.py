"""Tests for the standoff command-line interface."""

import json
import logging

import pytest

from standoff.cli.app import build_parser, main


@pytest.fixture
def root_level():
    root = logging.getLogger()
    saved = root.level
    yield root
    root.setLevel(saved)


def _write_scenario(path, **sections):
    document = {
        "source": {"shape": "cube", "side": 0.1, "contact_exposure": 100},
        "config": {"distances": [0.0, 1.0]},
    }
    document.update(sections)
    path.write_text(json.dumps(document))
    return path


class TestParser:

    def test_requires_command(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_rejects_unknown_orientation(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(
                ["project", "--shape", "cylinder", "--contact", "100", "--orientation", "diagonal"]
            )


class TestProject:

    def test_cube_table(self, capsys):
        code = main(["project", "--shape", "cube", "--side", "0.1", "--contact", "100"])
        out = capsys.readouterr().out
        assert code == 0
        assert "Source: cube (r_s = 0.05 m)" in out
        assert "Exponent n = 2.5000 (nominal), B = 1.050" in out
        assert len(out.strip().splitlines()) == 3 + 5

    def test_calibrated_json_output(self, tmp_path, capsys):
        output = tmp_path / "projection.json"
        code = main(
            [
                "project",
                "--shape", "cylinder",
                "--diameter", "0.1",
                "--height", "0.2",
                "--orientation", "side",
                "--contact", "100",
                "--x30", "20",
                "--distances", "0.3", "1.0",
                "--output", str(output),
            ]
        )
        assert code == 0
        assert "Wrote exposure projection" in capsys.readouterr().out
        result = json.loads(output.read_text())
        assert result["calibrated"] is True
        assert result["exponent"] == pytest.approx(0.852, abs=1e-3)
        assert result["exposures"][0] == pytest.approx(20.0)

    def test_missing_geometry_exits_2(self, capsys):
        code = main(["project", "--shape", "cube", "--contact", "100"])
        assert code == 2

    def test_invalid_contact_exits_2(self):
        assert main(["project", "--shape", "cube", "--side", "0.1", "--contact", "0"]) == 2


class TestCalibrate:

    def test_prints_exponent(self, capsys):
        code = main(
            ["calibrate", "--shape", "cube", "--side", "0.1", "--contact", "100", "--x30", "20"]
        )
        assert code == 0
        assert "Calibrated exponent n = 0.8522 (nominal 2.5)" in capsys.readouterr().out


class TestRun:

    def test_scenario_file(self, tmp_path):
        scenario = tmp_path / "scenario.json"
        scenario.write_text(
            json.dumps(
                {
                    "source": {
                        "shape": "cylinder",
                        "diameter": 0.1,
                        "height": 0.2,
                        "orientation": "top",
                        "contact_exposure": 100,
                    },
                    "config": {"distances": [0.0, 1.0]},
                }
            )
        )
        output = tmp_path / "out.json"
        assert main(["run", str(scenario), "--output", str(output)]) == 0
        result = json.loads(output.read_text())
        assert result["source"]["self_distance"] == 0.1
        assert result["exposures"][0] == 100
        assert result["exposures"][1] == pytest.approx(100 * (0.1 / 1.1) ** 2 * 1.05)

    def test_bad_scenario_exits_2(self, tmp_path):
        scenario = tmp_path / "scenario.json"
        scenario.write_text(json.dumps({"source": {"shape": "sphere", "contact_exposure": 1}}))
        assert main(["run", str(scenario)]) == 2

    def test_string_geometry_exits_2(self, tmp_path):
        scenario = _write_scenario(
            tmp_path / "scenario.json",
            source={"shape": "cube", "side": "0.1", "contact_exposure": 100},
        )
        assert main(["run", str(scenario)]) == 2

    def test_null_reference_buildup_exits_2(self, tmp_path):
        scenario = _write_scenario(
            tmp_path / "scenario.json", reference={"x_30": 20, "buildup": None}
        )
        assert main(["run", str(scenario)]) == 2

    def test_malformed_file_exits_2(self, tmp_path):
        scenario = tmp_path / "scenario.json"
        scenario.write_text('{"source": {"shape": "cube",')
        assert main(["run", str(scenario)]) == 2

    def test_list_document_exits_2(self, tmp_path):
        scenario = tmp_path / "scenario.json"
        scenario.write_text(json.dumps([{"shape": "cube"}]))
        assert main(["run", str(scenario)]) == 2


class TestLogLevel:

    def test_default_is_warning(self, root_level, capsys):
        code = main(
            ["calibrate", "--shape", "cube", "--side", "0.1", "--contact", "100", "--x30", "20"]
        )
        assert code == 0
        assert root_level.level == logging.WARNING

    def test_flag_sets_root_level(self, root_level, capsys):
        code = main(
            ["--log-level", "INFO", "project", "--shape", "cube", "--side", "0.1", "--contact", "100"]
        )
        assert code == 0
        assert root_level.level == logging.INFO

    def test_flag_rejects_unknown_level(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--log-level", "VERBOSE", "run", "scenario.json"])

    def test_scenario_level_applied(self, root_level, tmp_path, capsys):
        scenario = _write_scenario(
            tmp_path / "scenario.json", config={"distances": [0.0, 1.0], "log_level": "debug"}
        )
        assert main(["run", str(scenario)]) == 0
        assert root_level.level == logging.DEBUG

    def test_flag_overrides_scenario_level(self, root_level, tmp_path, capsys):
        scenario = _write_scenario(
            tmp_path / "scenario.json", config={"distances": [0.0, 1.0], "log_level": "DEBUG"}
        )
        assert main(["--log-level", "ERROR", "run", str(scenario)]) == 0
        assert root_level.level == logging.ERROR
