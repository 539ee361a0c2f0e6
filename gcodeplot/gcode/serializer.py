"""
G-code serializer for gcodeplot

Inverse of the parser: commands back to their canonical text form.
"""

from collections.abc import Iterable

from gcodeplot import config

from .commands import Arc, Command, Comment, Home, LinearMove, PenState, RapidMove, TaggedCommand
from .utils import format_gcode_number as fmt


def format_command(command: Command) -> str:
    """
    Convert a command to its G-code text

    Examples:
        RapidMove(10, 0) -> "G0 X10 Y0"
        Arc(True, 0, 10, 0, 5) -> "G2 X0 Y10 I0 J5"
        PenState(True) -> "M280 P0 S50"
    """
    if isinstance(command, Home):
        return "G28"
    if isinstance(command, RapidMove):
        return f"G0 X{fmt(command.x)} Y{fmt(command.y)}"
    if isinstance(command, LinearMove):
        return f"G1 X{fmt(command.x)} Y{fmt(command.y)}"
    if isinstance(command, Arc):
        return (
            f"{command.head} X{fmt(command.x)} Y{fmt(command.y)} "
            f"I{fmt(command.i)} J{fmt(command.j)}"
        )
    if isinstance(command, PenState):
        s_value = config.PEN_DOWN_S if command.down else config.PEN_UP_S
        return f"M280 P0 S{s_value}"
    if isinstance(command, Comment):
        return f";{command.text}"
    raise TypeError(f"Not a G-code command: {command!r}")


def serialize(commands: Iterable[TaggedCommand | Command]) -> str:
    """
    Serialize a command list back to program text

    Consecutive commands tagged with the same source line share one output
    line, separated by a space; a newline is written only when the line
    tag changes. Untagged commands each get their own line.

    A Comment only reads back when it trails a command on its line: a
    comment-only line parses to no command, and anything written after a
    Comment on the same line becomes part of that comment.
    """
    out: list[str] = []
    last_line: int | None = None
    for entry in commands:
        if isinstance(entry, tuple):
            line, command = entry
        else:
            line, command = None, entry

        if out and (line is None or line != last_line):
            out.append("\n")
        elif out:
            out.append(" ")
        out.append(format_command(command))
        last_line = line
    return "".join(out)


def serialize_lines(commands: Iterable[Command]) -> list[str]:
    """One G-code line per command, without line grouping"""
    return [format_command(command) for command in commands]
