import logging

import pytest

from gcodeplot.cli.main import axis_offset, build_parser, main, resolve_log_level
from gcodeplot.config import TRACE


def test_transform_command(write_gcode, capsys):
    path = write_gcode("G0 X10 Y0\nG1 X10 Y10\n")
    assert main([str(path), "transform", "-X", "1", "-y", "2", "-S", "2"]) == 0

    target = path.with_name("drawing_transformed.gcode")
    assert capsys.readouterr().out.strip() == str(target)
    assert target.read_text(encoding="utf-8") == "G0 X21 Y-2\nG1 X21 Y18"


def test_transform_rejects_non_gcode_name(write_gcode):
    path = write_gcode("G28\n", name="drawing.txt")
    assert main([str(path), "transform", "-X", "1"]) == 1


def test_transform_reports_parse_error(write_gcode, capsys):
    path = write_gcode("G28\nG1 X1\n")
    assert main([str(path), "transform"]) == 1
    assert "line 2" in capsys.readouterr().err


def test_check_command(write_gcode, arc_program, capsys):
    path = write_gcode(arc_program)
    assert main([str(path), "check"]) == 0
    out = capsys.readouterr().out
    assert "5 commands, 3 segments (2 drawn)" in out
    assert "end position: X0 Y0" in out
    assert "warning" not in out


def test_check_strict_fails_on_bad_center(write_gcode, capsys):
    path = write_gcode("G0 X0 Y0\nG2 X0 Y10 I0 J4\n")
    assert main([str(path), "check"]) == 0
    assert main([str(path), "check", "--strict"]) == 2
    assert "warning: Cannot draw arc in line 2" in capsys.readouterr().out


def test_check_loose_tolerance_hides_warning(write_gcode, capsys):
    path = write_gcode("G0 X0 Y0\nG2 X0 Y10 I0 J4.99\n")
    assert main([str(path), "check", "--strict", "-t", "1"]) == 0


def test_check_missing_file(tmp_path):
    assert main([str(tmp_path / "nothing.gcode"), "check"]) == 1


def test_subcommand_required():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["drawing.gcode"])


def test_axis_offset():
    assert axis_offset(None, None) == 0.0
    assert axis_offset(3.0, None) == 3.0
    assert axis_offset(None, 3.0) == -3.0
    assert axis_offset(1.0, 3.0) == 1.0


@pytest.mark.parametrize(
    "flags,level",
    [
        ([], logging.INFO),
        (["-q"], logging.WARNING),
        (["-v"], logging.INFO),
        (["-vv"], logging.DEBUG),
        (["-vvv"], TRACE),
        (["--log-level", "ERROR"], logging.ERROR),
    ],
)
def test_resolve_log_level(flags, level, monkeypatch):
    monkeypatch.setattr("gcodeplot.config.TRACE_ENABLED", False)
    args = build_parser().parse_args(flags + ["drawing.gcode", "check"])
    assert resolve_log_level(args) == level


def test_transform_overflow_writes_nothing(write_gcode):
    path = write_gcode("G0 X1000000 Y1\n")
    assert main([str(path), "transform", "-S", "1e38"]) == 1
    assert not path.with_name("drawing_transformed.gcode").exists()
