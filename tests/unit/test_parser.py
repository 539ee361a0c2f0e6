import numpy as np
import pytest

from gcodeplot.gcode.commands import Arc, Comment, Home, LinearMove, PenState, RapidMove
from gcodeplot.gcode.parser import GcodeParser, parse, parse_program, parse_program_commentless
from gcodeplot.utils.errors import ParseError


def test_parse_two_moves():
    commands = parse_program("G0 X10 Y0\nG1 X10 Y10\n")
    assert commands == [(0, RapidMove(10.0, 0.0)), (1, LinearMove(10.0, 10.0))]
    assert commands[0].line == 0
    assert commands[1].command == LinearMove(10.0, 10.0)


@pytest.mark.parametrize(
    "line,expected",
    [
        ("G28", Home()),
        ("G0 X1 Y2", RapidMove(1.0, 2.0)),
        ("G0 Y2 X1", RapidMove(1.0, 2.0)),
        ("G1 X-3.5 Y+4", LinearMove(-3.5, 4.0)),
        ("G1 X.5 Y7.", LinearMove(0.5, 7.0)),
        ("G2 X0 Y10 I0 J5", Arc(True, 0.0, 10.0, 0.0, 5.0)),
        ("G3 J-5 I0 Y0 X0", Arc(False, 0.0, 0.0, 0.0, -5.0)),
        ("M280 P0 S50", PenState(True)),
        ("M280 S40 P0", PenState(True)),
        ("M280 P0 S39.9", PenState(False)),
        ("M280 P0 S0", PenState(False)),
    ],
)
def test_parse_single_command(line, expected):
    assert GcodeParser().parse_line(line) == [expected]


def test_numbers_are_single_precision():
    (line, cmd), = parse_program("G1 X0.1 Y0")
    assert cmd.x == pytest.approx(0.1, abs=1e-7)
    assert cmd.x != 0.1  # 0.1 is not representable as float32
    assert cmd.x == float(np.float32(0.1))


def test_several_commands_share_a_line():
    commands = parse_program("M280 P0 S50 G1 X1 Y1\nG28")
    assert commands == [
        (0, PenState(True)),
        (0, LinearMove(1.0, 1.0)),
        (1, Home()),
    ]


def test_blank_and_comment_lines_keep_numbering():
    text = "; header\n\n   \nG0 X1 Y1\n;another\nG28"
    commands = parse_program(text)
    assert commands == [(3, RapidMove(1.0, 1.0)), (5, Home())]


def test_leading_whitespace_and_tabs():
    assert parse_program("   \tG0 X1\tY2  ") == [(0, RapidMove(1.0, 2.0))]


def test_trailing_comment_is_kept_after_commands():
    commands = parse_program("G1 X1 Y2 ; go there")
    assert commands == [(0, LinearMove(1.0, 2.0)), (0, Comment(" go there"))]


def test_commentless_mode_drops_comments():
    text = "G1 X1 Y2 ; go there\nG28;home"
    assert parse_program_commentless(text) == [(0, LinearMove(1.0, 2.0)), (1, Home())]
    assert parse(text, keep_comments=False) == parse_program_commentless(text)
    assert parse(text) == parse_program(text)


def test_comment_mode_does_not_change_commands():
    text = "G0 X1 Y1 ;a\nG2 X3 Y1 I1 J0 ;b\nM280 P0 S50"
    with_comments = [c for c in parse_program(text) if not isinstance(c.command, Comment)]
    assert with_comments == parse_program_commentless(text)


def test_crlf_line_endings():
    assert parse_program("G0 X1 Y1\r\nG28\r\n") == [(0, RapidMove(1.0, 1.0)), (1, Home())]


def test_list_of_lines_input():
    assert parse_program(["G0 X1 Y1\n", "G28\n"]) == [(0, RapidMove(1.0, 1.0)), (1, Home())]


def test_missing_parameter_fails_whole_file():
    with pytest.raises(ParseError) as excinfo:
        parse_program("G1 X10")
    assert excinfo.value.line == 0
    assert excinfo.value.column == 0
    assert "Y" in excinfo.value.reason


def test_error_reports_the_offending_line():
    text = "G0 X0 Y0\nG1 X1 Y1\nG1 X10\nG28"
    with pytest.raises(ParseError) as excinfo:
        parse_program(text)
    assert excinfo.value.line == 2
    assert "line 3" in str(excinfo.value)


@pytest.mark.parametrize(
    "line,column",
    [
        ("G4 P100", 0),  # unknown head
        ("X1 Y1", 0),  # parameter before any head
        ("G1 X1 Y1 Z3", 9),  # unknown letter
        ("G1X1 Y1", 0),  # no space after head
        ("G0 X1 I1 Y2", 6),  # I not accepted by G0
        ("G1 X1 X2 Y1", 6),  # duplicate
        ("G1 X1.2.3 Y1", 4),  # malformed number
        ("G1 X Y1", 4),  # empty number
        ("G1 Xabc Y1", 4),
        ("G1 X1e3 Y1", 4),  # no exponents
        ("G2 X1 Y1", 0),  # no center offset
        ("G2 X10 Y0 I5", 0),  # J missing
        ("G3 X10 Y0 J5", 0),  # I missing
        ("M280 S50", 0),  # missing P0
        ("M280 P1 S50", 0),  # other servo
        ("g1 x1 y1", 0),  # heads are upper case
    ],
)
def test_malformed_lines(line, column):
    with pytest.raises(ParseError) as excinfo:
        GcodeParser().parse_line(line, 4)
    assert excinfo.value.line == 4
    assert excinfo.value.column == column
    assert excinfo.value.source_line == line


def test_comment_text_is_not_parsed():
    assert parse_program("G28 ; G1 X1 (not code)") == [(0, Home()), (0, Comment(" G1 X1 (not code)"))]


def test_commands_are_immutable():
    (_, cmd), = parse_program("G0 X1 Y1")
    with pytest.raises(AttributeError):
        cmd.x = 5.0
