"""
G-code command model for gcodeplot

The supported dialect is a closed set of command variants. Each variant is an
immutable dataclass; ``Command`` is their union and consumers dispatch on it
with ``isinstance``. Positional fields are in the file's native units.
"""

from dataclasses import dataclass
from typing import NamedTuple, Union


@dataclass(frozen=True)
class Home:
    """G28 - Return to the origin"""


@dataclass(frozen=True)
class RapidMove:
    """G0 - Rapid positioning to an absolute point"""

    x: float
    y: float


@dataclass(frozen=True)
class LinearMove:
    """G1 - Linear interpolation to an absolute point"""

    x: float
    y: float


@dataclass(frozen=True)
class Arc:
    """
    G2/G3 - Circular interpolation

    ``(x, y)`` is the absolute end point, ``(i, j)`` is the center offset
    relative to the arc's start point (the current point).
    """

    clockwise: bool
    x: float
    y: float
    i: float
    j: float

    @property
    def head(self) -> str:
        return "G2" if self.clockwise else "G3"


@dataclass(frozen=True)
class PenState:
    """M280 P0 S<n> - Pen servo; S at or above the threshold lowers the pen"""

    down: bool


@dataclass(frozen=True)
class Comment:
    """Trailing ``;`` comment, text without the leading semicolon"""

    text: str


Command = Union[Home, RapidMove, LinearMove, Arc, PenState, Comment]

# Moves that carry an absolute end point
MOTION_TYPES = (RapidMove, LinearMove, Arc)


class TaggedCommand(NamedTuple):
    """A command paired with its 0-based source line"""

    line: int
    command: Command


def is_motion(command: Command) -> bool:
    """True for commands that move to an explicit (x, y)"""
    return isinstance(command, MOTION_TYPES)
