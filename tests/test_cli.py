import json

import pytest

from plotplan import cli
from plotplan import executor as executor_module
from plotplan.config import Workspace, workspace_for_model
from plotplan.device import MockPlotter

SVG = """<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg" width="40" height="40">
  <path d="M 10 10 L 30 10" stroke="#000000" fill="none"/>
  <path d="M 10 20 L 30 20" stroke="#000000" fill="none"/>
</svg>
"""


@pytest.fixture
def svg_file(tmp_path):
    path = tmp_path / "lines.svg"
    path.write_text(SVG, encoding="utf-8")
    return path


def test_json_summary(svg_file, capsys):
    assert cli.main([str(svg_file), "--json", "--simplify", "0.1"]) == 0
    summary = json.loads(capsys.readouterr().out)
    assert summary["segments"] == 3
    assert summary["pen_lifts"] == 1
    assert summary["bounds"] == [[10.0, 10.0], [30.0, 20.0]]


def test_fit_to_area(svg_file, capsys):
    assert cli.main([str(svg_file), "--json", "--simplify", "0.1", "--fit", "--area", "100x100"]) == 0
    summary = json.loads(capsys.readouterr().out)
    assert summary["bounds"] == [[0.0, 0.0], [100.0, 50.0]]


def test_dry_run_command_stream(svg_file, monkeypatch):
    devices = []

    class RecordingPlotter(MockPlotter):
        def connect(self):
            devices.append(self)
            return super().connect()

    monkeypatch.setattr(executor_module.time, "sleep", lambda s: None)
    monkeypatch.setattr(cli, "MockPlotter", RecordingPlotter)
    assert cli.main([str(svg_file), "--simplify", "0.1", "--dry-run"]) == 0

    (device,) = devices
    assert device.commands == [
        "pen_up",
        "move 10.000,10.000 F3000",
        "pen_down",
        "draw 30.000,10.000 F3000",
        "pen_up",
        "move 10.000,20.000 F3000",
        "pen_down",
        "draw 30.000,20.000 F3000",
        "pen_up",
        "move 0.000,0.000 F3000",
    ]
    assert not device.connected


def test_missing_file(tmp_path):
    assert cli.main([str(tmp_path / "missing.svg")]) == 1


def test_area_parsing():
    assert cli._parse_area("300x245mm") == (300.0, 245.0)
    with pytest.raises(Exception):
        cli._parse_area("300")


def test_model_presets():
    ws = workspace_for_model("v3")
    assert ws.as_tuple() == pytest.approx((215.9, 279.4))
    with pytest.raises(ValueError):
        workspace_for_model("plotmaster")
    assert Workspace().as_tuple() == (300.0, 245.0)


def test_log_file(svg_file, tmp_path):
    log_file = tmp_path / "plot.log"
    assert cli.main([str(svg_file), "--log-file", str(log_file)]) == 0
    assert "Plan: 3 segments" in log_file.read_text(encoding="utf-8")
