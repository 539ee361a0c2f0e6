"""
Error and diagnostic types for the gcodeplot pipeline.
Keep this focused and non-redundant; prefer built-ins where appropriate.
"""

from dataclasses import dataclass


class ParseError(ValueError):
    """G-code text could not be parsed (unexpected token, missing parameter, bad number).

    ``line`` and ``column`` are 0-based, matching the line tags of parsed
    commands; the message shows them 1-based.
    """

    def __init__(self, reason: str, line: int, column: int = 0, source_line: str = ""):
        self.reason = reason
        self.line = line
        self.column = column
        self.source_line = source_line
        super().__init__(f"Parse error at line {line + 1}, column {column + 1}: {reason}")

    def __str__(self):
        message = f"Parse error at line {self.line + 1}, column {self.column + 1}: {self.reason}"
        if self.source_line:
            message += f"\n  {self.source_line}\n  {' ' * self.column}^"
        return message


@dataclass(frozen=True)
class GeometryWarning:
    """Arc whose declared center is not equidistant from both endpoints.

    Non-fatal: the arc is still resolved around the declared center.
    """

    line: int | None
    start_radius2: float
    end_radius2: float

    @property
    def mismatch(self) -> float:
        return abs(self.start_radius2 - self.end_radius2)

    def __str__(self):
        where = f"line {self.line + 1}" if self.line is not None else "unknown line"
        return (
            f"Cannot draw arc in {where}, (I,J) is no center "
            f"(r^2 start={self.start_radius2:.6g}, end={self.end_radius2:.6g})"
        )
