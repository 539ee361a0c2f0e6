"""
gcodeplot Python Package

Parse, transform and re-emit simple pen-plotter G-code, and resolve its
G2/G3 arcs into point sequences for drawing.

Key components:
- parse_program / parse_program_commentless: text to (line, command) pairs
- resolve_arc: arc command to polyline points
- serialize: commands back to text, keeping line grouping
- transform: scale then translate every coordinate
- GcodeInterpreter: loaded program plus toolpath replay
"""

from .gcode import (
    Arc,
    Comment,
    CoordinateTransform,
    GcodeInterpreter,
    GcodeParser,
    Home,
    LinearMove,
    PenState,
    RapidMove,
    TaggedCommand,
    __version__,
    current_point,
    format_command,
    parse,
    parse_program,
    parse_program_commentless,
    resolve_arc,
    serialize,
    transform,
)
from .utils.errors import GeometryWarning, ParseError

__all__ = [
    "__version__",
    "Arc",
    "Comment",
    "CoordinateTransform",
    "GcodeInterpreter",
    "GcodeParser",
    "GeometryWarning",
    "Home",
    "LinearMove",
    "ParseError",
    "PenState",
    "RapidMove",
    "TaggedCommand",
    "current_point",
    "format_command",
    "parse",
    "parse_program",
    "parse_program_commentless",
    "resolve_arc",
    "serialize",
    "transform",
]
