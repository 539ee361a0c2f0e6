"""
Replay of a parsed program

The current point is never stored on a command. It is recomputed by folding
over the command list from the origin, in execution order, every time it is
needed. Home returns to the origin; PenState and Comment do not move.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import NamedTuple

from .commands import Command, Comment, Home, PenState, TaggedCommand, is_motion

Point = tuple[float, float]

ORIGIN: Point = (0.0, 0.0)


@dataclass(frozen=True)
class PlotterState:
    """Position and pen state between two commands"""

    position: Point = ORIGIN
    pen_down: bool = False

    def advance(self, command: Command) -> "PlotterState":
        """
        Return the state after executing a command

        Args:
            command: Command to execute

        Returns:
            New PlotterState; self is left unchanged
        """
        if isinstance(command, Home):
            return PlotterState(ORIGIN, self.pen_down)
        if is_motion(command):
            return PlotterState((command.x, command.y), self.pen_down)
        if isinstance(command, PenState):
            return PlotterState(self.position, command.down)
        if isinstance(command, Comment):
            return self
        raise TypeError(f"Not a G-code command: {command!r}")


class ReplayStep(NamedTuple):
    """One executed command with the point it started from and ended at"""

    line: int | None
    command: Command
    start: Point
    end: Point
    pen_down: bool


def _entries(commands: Iterable[TaggedCommand | Command]) -> Iterator[tuple[int | None, Command]]:
    for entry in commands:
        if isinstance(entry, tuple):
            yield entry[0], entry[1]
        else:
            yield None, entry


def replay(
    commands: Iterable[TaggedCommand | Command],
    initial: PlotterState | None = None,
) -> Iterator[ReplayStep]:
    """
    Walk a program in execution order

    Args:
        commands: (line, command) pairs or bare commands
        initial: State before the first command (origin, pen up by default)

    Yields:
        ReplayStep per command; ``pen_down`` is the pen state while the
        command executes
    """
    state = initial or PlotterState()
    for line, command in _entries(commands):
        after = state.advance(command)
        yield ReplayStep(line, command, state.position, after.position, state.pen_down)
        state = after


def final_state(
    commands: Iterable[TaggedCommand | Command],
    initial: PlotterState | None = None,
) -> PlotterState:
    """State after the whole program has run"""
    state = initial or PlotterState()
    for _, command in _entries(commands):
        state = state.advance(command)
    return state


def current_point(commands: Iterable[TaggedCommand | Command]) -> Point:
    """Position after the whole program has run, starting from the origin"""
    return final_state(commands).position
