"""
G-code implementation for gcodeplot

Parses a small pen-plotter G-code dialect, resolves arcs into polylines and
writes programs back out.

Main components:
- commands.py: Command variants (Home, RapidMove, LinearMove, Arc, PenState, Comment)
- parser.py: G-code tokenization and parsing
- serializer.py: Commands back to text
- coordinates.py: Scale/translate transformation of programs
- state.py: Replay of the current point and pen state
- utils.py: Numeric helpers and the arc resolver
- interpreter.py: Toolpath interpreter
- files.py: Reading, writing and derived output files
"""

from .commands import (
    Arc,
    Command,
    Comment,
    Home,
    LinearMove,
    PenState,
    RapidMove,
    TaggedCommand,
)
from .coordinates import CoordinateTransform, transform, transform_command
from .interpreter import GcodeInterpreter, PathSegment, trace_toolpath
from .parser import GcodeParser, parse, parse_program, parse_program_commentless
from .serializer import format_command, serialize
from .state import PlotterState, ReplayStep, current_point, replay
from .utils import arc_step_count, resolve_arc, resolve_command_arc

__version__ = "0.3.1"
__all__ = [
    "Arc",
    "Command",
    "Comment",
    "Home",
    "LinearMove",
    "PenState",
    "RapidMove",
    "TaggedCommand",
    "CoordinateTransform",
    "transform",
    "transform_command",
    "GcodeInterpreter",
    "PathSegment",
    "trace_toolpath",
    "GcodeParser",
    "parse",
    "parse_program",
    "parse_program_commentless",
    "format_command",
    "serialize",
    "PlotterState",
    "ReplayStep",
    "current_point",
    "replay",
    "arc_step_count",
    "resolve_arc",
    "resolve_command_arc",
]
