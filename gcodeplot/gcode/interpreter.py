"""
Toolpath interpreter for gcodeplot

Replays a parsed program and turns it into polylines a viewer can draw:
straight segments for moves and Home, resolved point sequences for arcs,
each tagged with its source line and whether the pen was down.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import numpy as np

from gcodeplot import config
from gcodeplot.utils.errors import GeometryWarning, ParseError

from . import files
from .commands import Arc, Command, Comment, Home, LinearMove, PenState, RapidMove, TaggedCommand
from .parser import parse_program_commentless
from .state import PlotterState, final_state, replay
from .utils import resolve_command_arc

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PathSegment:
    """Polyline produced by one command"""

    line: int | None
    kind: str  # 'home', 'rapid', 'linear' or 'arc'
    points: np.ndarray = field(compare=False)
    pen_down: bool = False


def trace_toolpath(
    commands: list[TaggedCommand],
    tolerance: float = config.DEFAULT_TOLERANCE,
    warnings: list[GeometryWarning] | None = None,
) -> list[PathSegment]:
    """
    Convert a program into drawable segments

    Args:
        commands: (line, command) pairs in execution order
        tolerance: Squared-distance threshold for arc resolution
        warnings: Optional list that receives arc center diagnostics

    Returns:
        One PathSegment per moving command, in execution order
    """
    segments: list[PathSegment] = []
    for step in replay(commands):
        command = step.command
        if isinstance(command, Arc):
            points = resolve_command_arc(step.start, command, tolerance, step.line, warnings)
            segments.append(PathSegment(step.line, "arc", points, step.pen_down))
        elif isinstance(command, (Home, RapidMove, LinearMove)):
            kind = {Home: "home", RapidMove: "rapid", LinearMove: "linear"}[type(command)]
            points = np.array([step.start, step.end], dtype=float)
            segments.append(PathSegment(step.line, kind, points, step.pen_down))
        elif not isinstance(command, (PenState, Comment)):
            raise TypeError(f"Not a G-code command: {command!r}")
    return segments


class GcodeInterpreter:
    """Holds a loaded program plus commands added after it, and replays them"""

    def __init__(self, tolerance: float | None = None):
        """
        Args:
            tolerance: Squared-distance threshold, defaults to config.DEFAULT_TOLERANCE
        """
        self.tolerance = config.DEFAULT_TOLERANCE if tolerance is None else tolerance

        self.filename: Path | None = None
        self.commands: list[TaggedCommand] = []
        self.line_count = 0

        # Commands appended after the loaded file
        self.added: list[Command] = []

        # Error tracking
        self.errors: list[str] = []
        self.warnings: list[GeometryWarning] = []

    def load_program(self, program: str) -> bool:
        """
        Parse program text, replacing the loaded program

        Returns:
            True if the program parsed; on failure the previous program is kept
        """
        try:
            commands = parse_program_commentless(program)
        except ParseError as e:
            logger.error(str(e))
            self.errors.append(str(e))
            return False

        self.commands = commands
        self.line_count = len(program.split("\n"))
        self.errors = []
        return True

    def load_file(self, filepath: str | Path) -> bool:
        """
        Load a G-code program from file

        Returns:
            True if the file was read and parsed
        """
        try:
            program = Path(filepath).read_text(encoding="utf-8")
        except OSError as e:
            logger.error(f"Error loading file {filepath}: {e}")
            self.errors.append(f"Error loading file: {e}")
            return False

        if not self.load_program(program):
            return False
        self.filename = Path(filepath)
        logger.info(f"Loaded {len(self.commands)} commands from {filepath}")
        return True

    def reload(self) -> bool:
        """Re-read the current file"""
        if self.filename is None:
            self.errors.append("No file loaded")
            return False
        return self.load_file(self.filename)

    def append(self, command: Command) -> None:
        """Add a command after the loaded program"""
        self.added.append(command)

    def added_commands(self) -> list[TaggedCommand]:
        """
        Added commands tagged with the lines they get in the ``_added`` file:
        after the original text and the separator line
        """
        first = self.line_count + 1
        return [TaggedCommand(first + n, command) for n, command in enumerate(self.added)]

    def program(self) -> list[TaggedCommand]:
        """Loaded commands followed by added ones, in execution order"""
        return self.commands + self.added_commands()

    def toolpath(self) -> list[PathSegment]:
        """Replay the program into segments, refreshing ``warnings``"""
        self.warnings = []
        return trace_toolpath(self.program(), self.tolerance, self.warnings)

    @property
    def state(self) -> PlotterState:
        return final_state(self.program())

    @property
    def end_position(self) -> tuple[float, float]:
        """Current point after the whole program"""
        return self.state.position

    def save_added(self) -> Path:
        """
        Write the loaded file plus added commands to ``<basename>_added.gcode``

        Raises:
            RuntimeError: if no file is loaded
        """
        if self.filename is None:
            raise RuntimeError("No file loaded")
        return files.save_added(self.filename, self.added)

    def get_status(self) -> dict:
        """
        Get interpreter status

        Returns:
            Dictionary with status information
        """
        state = self.state
        return {
            "filename": str(self.filename) if self.filename else None,
            "commands": len(self.commands),
            "added": len(self.added),
            "position": state.position,
            "pen_down": state.pen_down,
            "errors": self.errors[-5:] if self.errors else [],  # Last 5 errors
        }
