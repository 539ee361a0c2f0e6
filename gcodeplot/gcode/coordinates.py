"""
Coordinate transformation for G-code programs

Applies a uniform scale followed by a translation to every positional field
of a program. Scale is applied before translation:

    pos' = pos * scale + translate

Arc center offsets (I, J) are relative to the arc's start point, so they are
scaled but never translated.
"""

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace

from .commands import Arc, Command, Comment, Home, LinearMove, PenState, RapidMove, TaggedCommand
from .utils import to_float32

Vector = tuple[float, float]


def _finite(u: float, v: float) -> Vector:
    """Round a transformed pair to float32, rejecting overflow"""
    result = to_float32(u), to_float32(v)
    if not all(math.isfinite(value) for value in result):
        raise ValueError(f"Transformed coordinate out of range: ({u:g}, {v:g})")
    return result


@dataclass(frozen=True)
class CoordinateTransform:
    """Uniform scale then translate"""

    scale: float = 1.0
    translate: Vector = (0.0, 0.0)

    @classmethod
    def from_args(
        cls, translate: Sequence[float] = (0.0, 0.0), scale: float = 1.0
    ) -> "CoordinateTransform":
        return cls(scale=float(scale), translate=(float(translate[0]), float(translate[1])))

    def apply_point(self, x: float, y: float) -> Vector:
        """Transform an absolute point"""
        tx, ty = self.translate
        return _finite(x * self.scale + tx, y * self.scale + ty)

    def apply_offset(self, i: float, j: float) -> Vector:
        """Transform a relative offset (scale only)"""
        return _finite(i * self.scale, j * self.scale)

    def apply(self, command: Command) -> Command:
        """
        Transform a single command

        Args:
            command: Any G-code command

        Returns:
            New command; Home, PenState and Comment are returned unchanged
        """
        if isinstance(command, (RapidMove, LinearMove)):
            x, y = self.apply_point(command.x, command.y)
            return replace(command, x=x, y=y)
        if isinstance(command, Arc):
            x, y = self.apply_point(command.x, command.y)
            i, j = self.apply_offset(command.i, command.j)
            return replace(command, x=x, y=y, i=i, j=j)
        if isinstance(command, (Home, PenState, Comment)):
            return command
        raise TypeError(f"Not a G-code command: {command!r}")

    def then(self, other: "CoordinateTransform") -> "CoordinateTransform":
        """
        Compose with a transform applied afterwards

        other(self(p)) = p * (s1 * s2) + (t1 * s2 + t2)
        """
        tx, ty = self.translate
        ox, oy = other.translate
        return CoordinateTransform(
            scale=self.scale * other.scale,
            translate=(tx * other.scale + ox, ty * other.scale + oy),
        )


def transform_command(
    command: Command, translate: Sequence[float] = (0.0, 0.0), scale: float = 1.0
) -> Command:
    """Scale then translate one command"""
    return CoordinateTransform.from_args(translate, scale).apply(command)


def transform(
    commands: Iterable[TaggedCommand],
    translate: Sequence[float] = (0.0, 0.0),
    scale: float = 1.0,
) -> list[TaggedCommand]:
    """
    Scale then translate every command of a program

    Args:
        commands: (line, command) pairs
        translate: (dx, dy) added after scaling
        scale: Uniform scale factor

    Returns:
        New list with the same order, count and line tags
    """
    mapping = CoordinateTransform.from_args(translate, scale)
    return [TaggedCommand(line, mapping.apply(command)) for line, command in commands]
