"""
G-code Parser for gcodeplot

Tokenizes and parses G-code lines into command objects.
Supports a fixed dialect: G28, G0, G1, G2, G3 and M280 P0 S<n>, with
trailing ``;`` comments. Parsing a program fails on the first bad line.
"""

import logging
import math
import re

from gcodeplot import config
from gcodeplot.config import TRACE
from gcodeplot.utils.errors import ParseError

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
from .utils import to_float32

logger = logging.getLogger(__name__)


class GcodeParser:
    """G-code parser that tokenizes and validates lines"""

    # Regex patterns for parsing
    TOKEN_PATTERN = re.compile(r"\S+")
    HEAD_PATTERN = re.compile(r"^(?:G28|G0|G1|G2|G3|M280)$")
    PARAM_PATTERN = re.compile(r"^([XYIJPS])(.*)$")
    NUMBER_PATTERN = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)$")

    # Parameters each head accepts
    HEAD_PARAMETERS = {
        "G28": (),
        "G0": ("X", "Y"),
        "G1": ("X", "Y"),
        "G2": ("X", "Y", "I", "J"),
        "G3": ("X", "Y", "I", "J"),
        "M280": ("P", "S"),
    }

    # Parameters that must be present
    REQUIRED_PARAMETERS = {
        "G28": (),
        "G0": ("X", "Y"),
        "G1": ("X", "Y"),
        "G2": ("X", "Y", "I", "J"),
        "G3": ("X", "Y", "I", "J"),
        "M280": ("P", "S"),
    }

    def __init__(self, keep_comments: bool = True):
        """
        Args:
            keep_comments: Emit Comment entries for trailing comments
        """
        self.keep_comments = keep_comments

    def split_comment(self, line: str) -> tuple[str, str | None]:
        """Split a line into its code part and comment text (None if no comment)"""
        if ";" not in line:
            return line, None
        idx = line.index(";")
        return line[:idx], line[idx + 1 :]

    def tokenize(
        self, code: str, line_number: int, raw_line: str = ""
    ) -> list[tuple[str, int, list[tuple[str, int]]]]:
        """
        Group the tokens of one line into command invocations

        Returns:
            List of (head, column, [(parameter token, column), ...])
        """
        invocations: list[tuple[str, int, list[tuple[str, int]]]] = []
        for match in self.TOKEN_PATTERN.finditer(code):
            token, column = match.group(), match.start()
            if self.HEAD_PATTERN.match(token):
                invocations.append((token, column, []))
            elif invocations and self.PARAM_PATTERN.match(token):
                invocations[-1][2].append((token, column))
            else:
                raise ParseError(f"unexpected token '{token}'", line_number, column, raw_line)
        return invocations

    def parse_number(self, text: str, line_number: int, column: int, raw_line: str = "") -> float:
        """Parse a numeric literal as single precision"""
        if not self.NUMBER_PATTERN.match(text):
            raise ParseError(f"invalid number '{text}'", line_number, column, raw_line)
        value = to_float32(text)
        if not math.isfinite(value):
            raise ParseError(f"number out of range '{text}'", line_number, column, raw_line)
        return value

    def build_command(
        self,
        head: str,
        head_column: int,
        tokens: list[tuple[str, int]],
        line_number: int,
        raw_line: str = "",
    ) -> Command:
        """
        Create a command from a head and its parameter tokens

        Raises:
            ParseError: unexpected/duplicate/missing parameter or bad number
        """
        allowed = self.HEAD_PARAMETERS[head]
        params: dict[str, float] = {}
        for token, column in tokens:
            letter = token[0]
            if letter not in allowed:
                raise ParseError(
                    f"unexpected parameter '{letter}' for {head}", line_number, column, raw_line
                )
            if letter in params:
                raise ParseError(f"duplicate parameter '{letter}'", line_number, column, raw_line)
            params[letter] = self.parse_number(token[1:], line_number, column + 1, raw_line)

        for letter in self.REQUIRED_PARAMETERS[head]:
            if letter not in params:
                raise ParseError(
                    f"{head} requires parameter '{letter}'", line_number, head_column, raw_line
                )

        if head == "G28":
            return Home()
        if head == "G0":
            return RapidMove(params["X"], params["Y"])
        if head == "G1":
            return LinearMove(params["X"], params["Y"])
        if head in ("G2", "G3"):
            return Arc(
                clockwise=head == "G2",
                x=params["X"],
                y=params["Y"],
                i=params["I"],
                j=params["J"],
            )
        # M280: only servo P0 drives the pen
        if params["P"] != 0.0:
            raise ParseError(
                f"unsupported servo index P{params['P']:g}", line_number, head_column, raw_line
            )
        return PenState(down=params["S"] >= config.PEN_DOWN_THRESHOLD)

    def parse_line(self, line: str, line_number: int = 0) -> list[Command]:
        """
        Parse a single line of G-code into commands

        Args:
            line: Raw G-code line
            line_number: 0-based line index, used for error positions

        Returns:
            Commands in the order they appear. Blank and comment-only lines
            give an empty list; a trailing comment after commands becomes
            a final Comment entry when comments are kept.
        """
        raw_line = line.rstrip("\r\n")
        code, comment = self.split_comment(raw_line)

        commands: list[Command] = [
            self.build_command(head, column, tokens, line_number, raw_line)
            for head, column, tokens in self.tokenize(code, line_number, raw_line)
        ]

        if commands and comment is not None and self.keep_comments:
            commands.append(Comment(comment))

        if config.TRACE_ENABLED:
            logger.log(TRACE, "line %d: %r -> %r", line_number + 1, raw_line, commands)
        return commands

    def parse_program(self, program: str | list[str]) -> list[TaggedCommand]:
        """
        Parse a complete G-code program

        Args:
            program: Either a string with newlines or a list of lines

        Returns:
            List of (line, command) pairs in execution order

        Raises:
            ParseError: for the first malformed line; nothing is returned
        """
        if isinstance(program, str):
            lines = program.split("\n")
        else:
            lines = program

        all_commands: list[TaggedCommand] = []
        for line_number, line in enumerate(lines):
            for command in self.parse_line(line, line_number):
                all_commands.append(TaggedCommand(line_number, command))

        logger.debug("Parsed %d commands from %d lines", len(all_commands), len(lines))
        return all_commands


def parse_program(text: str | list[str]) -> list[TaggedCommand]:
    """Parse a program, keeping trailing comments as Comment entries"""
    return GcodeParser(keep_comments=True).parse_program(text)


def parse_program_commentless(text: str | list[str]) -> list[TaggedCommand]:
    """Parse a program, dropping comments"""
    return GcodeParser(keep_comments=False).parse_program(text)


def parse(text: str | list[str], keep_comments: bool = True) -> list[TaggedCommand]:
    """Parse a program in comment-preserving or comment-stripped mode"""
    return GcodeParser(keep_comments=keep_comments).parse_program(text)
