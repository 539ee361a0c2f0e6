"""
Utility functions for G-code processing

Numeric helpers shared by the parser and serializer, and the arc resolver
that turns a G2/G3 (end point + center offset) into a polyline.
"""

import logging
import math
from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray

from gcodeplot import config
from gcodeplot.utils.errors import GeometryWarning

from .commands import Arc

logger = logging.getLogger(__name__)

VectorLike = Sequence[float] | NDArray


def to_float32(value: float | str) -> float:
    """
    Round a value to IEEE-754 single precision

    Args:
        value: Number or numeric literal

    Returns:
        The nearest float32, as a Python float
    """
    with np.errstate(over="ignore"):
        return float(np.float32(value))


def format_gcode_number(value: float) -> str:
    """
    Format number for G-code output

    Produces the shortest text that reads back to the same float32,
    without trailing zeros or a dangling decimal point (10.0 -> "10").
    """
    return np.format_float_positional(np.float32(value), trim="-")


def arc_step_count(
    r2: float,
    step_scale: float | None = None,
    min_steps: int | None = None,
    max_steps: int | None = None,
) -> int:
    """
    Number of segments used to draw an arc of squared radius ``r2``

    steps = clamp(round(sqrt(r2) * step_scale), min_steps, max_steps)
    """
    step_scale = config.ARC_STEP_SCALE if step_scale is None else step_scale
    min_steps = config.ARC_MIN_STEPS if min_steps is None else min_steps
    max_steps = config.ARC_MAX_STEPS if max_steps is None else max_steps

    steps = math.floor(math.sqrt(max(r2, 0.0)) * step_scale + 0.5)
    return int(min(max(steps, min_steps), max_steps))


def rotate(vector: VectorLike, angle: float) -> np.ndarray:
    """Rotate a 2D vector counter-clockwise by ``angle`` radians"""
    x, y = float(vector[0]), float(vector[1])
    c, s = math.cos(angle), math.sin(angle)
    return np.array([x * c - y * s, x * s + y * c])


def angle_between(a: VectorLike, b: VectorLike) -> float:
    """
    Unsigned angle between two 2D vectors, in [0, pi]

    Zero when either vector has zero length.
    """
    cross = float(a[0]) * float(b[1]) - float(a[1]) * float(b[0])
    dot = float(a[0]) * float(b[0]) + float(a[1]) * float(b[1])
    return math.atan2(abs(cross), dot)


def _norm2(v: np.ndarray) -> float:
    return float(v @ v)


def check_arc_center(
    current: VectorLike,
    end: VectorLike,
    center_offset: VectorLike,
    tolerance: float = config.DEFAULT_TOLERANCE,
    line: int | None = None,
) -> GeometryWarning | None:
    """
    Validate that the declared center is equidistant from both endpoints

    Args:
        current: Arc start point
        end: Arc end point
        center_offset: (I, J), relative to the start point
        tolerance: Allowed difference between the squared radii
        line: Source line, carried into the diagnostic

    Returns:
        GeometryWarning if the squared radii differ by more than tolerance,
        None otherwise. A closed circle (end ~ start) is always consistent.
    """
    start = np.asarray(current, dtype=float)
    chord = np.asarray(end, dtype=float) - start
    if _norm2(chord) < tolerance:
        return None

    a = -np.asarray(center_offset, dtype=float)
    b = a + chord
    r2_start = _norm2(a)
    r2_end = _norm2(b)
    if abs(r2_start - r2_end) > tolerance:
        return GeometryWarning(line=line, start_radius2=r2_start, end_radius2=r2_end)
    return None


def resolve_arc(
    current: VectorLike,
    clockwise: bool,
    end: VectorLike,
    center_offset: VectorLike,
    tolerance: float = config.DEFAULT_TOLERANCE,
    line: int | None = None,
    warnings: list[GeometryWarning] | None = None,
) -> np.ndarray:
    """
    Approximate a G2/G3 arc with a polyline

    Args:
        current: Start point of the arc (the current point)
        clockwise: True for G2, False for G3
        end: Declared end point (X, Y)
        center_offset: (I, J) offset from the start point to the center
        tolerance: Squared-distance threshold for "equal" points
        line: Source line, only used for diagnostics
        warnings: Optional list that receives the center diagnostic

    Returns:
        Array of shape (steps + 1, 2). The first point is the start point,
        the last is the end point unless the center is inconsistent, in
        which case a warning is logged and the declared center is kept.
        A closed circle (end ~ start) runs counter-clockwise for G2 and G3.
    """
    start = np.asarray(current, dtype=float)
    offset = np.asarray(center_offset, dtype=float)
    chord = np.asarray(end, dtype=float) - start

    # a: center -> start
    a = -offset
    r2 = _norm2(a)
    steps = arc_step_count(r2)

    if _norm2(chord) < tolerance:
        # end ~ start: closed circle, always traced counter-clockwise
        angle_step = 2.0 * math.pi / steps
    else:
        warning = check_arc_center(start, start + chord, offset, tolerance, line)
        if warning is not None:
            logger.warning(str(warning))
            if warnings is not None:
                warnings.append(warning)

        # b: center -> end
        b = a + chord
        angle = angle_between(a, b)
        travel = -angle if clockwise else angle

        # Short branch is wrong when the opposite rotation lands closer to b
        miss = _norm2(rotate(a, travel) - b)
        if miss > tolerance and miss > _norm2(rotate(a, -travel) - b):
            angle = 2.0 * math.pi - angle
        angle_step = (-angle if clockwise else angle) / steps

    thetas = np.arange(steps + 1) * angle_step
    cos, sin = np.cos(thetas), np.sin(thetas)
    points = np.column_stack((a[0] * cos - a[1] * sin, a[0] * sin + a[1] * cos))
    return points + (start + offset)


def resolve_command_arc(
    current: VectorLike,
    arc: Arc,
    tolerance: float = config.DEFAULT_TOLERANCE,
    line: int | None = None,
    warnings: list[GeometryWarning] | None = None,
) -> np.ndarray:
    """Resolve an Arc command starting at ``current``"""
    return resolve_arc(
        current, arc.clockwise, (arc.x, arc.y), (arc.i, arc.j), tolerance, line, warnings
    )


def signed_area(points: NDArray) -> float:
    """
    Shoelace signed area of a polyline closed back to its first point

    Positive for counter-clockwise traversal, negative for clockwise.
    """
    pts = np.asarray(points, dtype=float)
    if len(pts) < 3:
        return 0.0
    x, y = pts[:, 0], pts[:, 1]
    return 0.5 * float(np.dot(x, np.roll(y, -1)) - np.dot(y, np.roll(x, -1)))
