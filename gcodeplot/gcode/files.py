"""
File helpers for G-code programs

Reading, writing and the derived output names used by the transform and
append operations. The parse/transform/serialize core never touches the
filesystem; everything that does lives here.
"""

import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

from gcodeplot import config

from .commands import Command, TaggedCommand
from .coordinates import transform
from .parser import parse
from .serializer import serialize, serialize_lines

logger = logging.getLogger(__name__)


def derived_path(path: str | Path, suffix: str) -> Path:
    """
    Replace the ``.gcode`` extension with a derived suffix

    Args:
        path: Source program path, must end in ``.gcode``
        suffix: e.g. ``_transformed.gcode``

    Raises:
        ValueError: if the path is not a .gcode file
    """
    path = Path(path)
    if not path.name.endswith(config.GCODE_SUFFIX):
        raise ValueError(f"Expected a {config.GCODE_SUFFIX} file, got '{path}'")
    stem = path.name[: -len(config.GCODE_SUFFIX)]
    return path.with_name(stem + suffix)


def read_program(path: str | Path, keep_comments: bool = True) -> list[TaggedCommand]:
    """Read and parse a program file (UTF-8)"""
    text = Path(path).read_text(encoding="utf-8")
    return parse(text, keep_comments=keep_comments)


def save_program(path: str | Path, commands: Iterable[TaggedCommand]) -> Path:
    """Write commands to a file, keeping their original line grouping"""
    path = Path(path)
    path.write_text(serialize(commands), encoding="utf-8")
    logger.info(f"Saved program to {path}")
    return path


def save_transformed(
    path: str | Path,
    translate: Sequence[float] = (0.0, 0.0),
    scale: float = 1.0,
) -> Path:
    """
    Transform a program file into ``<basename>_transformed.gcode``

    Args:
        path: Source .gcode file
        translate: (dx, dy) applied after scaling
        scale: Uniform scale factor

    Returns:
        Path of the written file
    """
    target = derived_path(path, config.TRANSFORMED_SUFFIX)
    commands = read_program(path, keep_comments=True)
    return save_program(target, transform(commands, translate, scale))


def save_added(path: str | Path, commands: Iterable[Command]) -> Path:
    """
    Write ``<basename>_added.gcode``: the original text, a separator
    comment line, then the new commands one per line

    The original file is left untouched.
    """
    path = Path(path)
    target = derived_path(path, config.ADDED_SUFFIX)
    original = path.read_text(encoding="utf-8")
    added = "\n".join(serialize_lines(commands))
    target.write_text(f"{original}\n{config.ADDED_SEPARATOR}\n{added}", encoding="utf-8")
    logger.info(f"Saved added commands to {target}")
    return target
