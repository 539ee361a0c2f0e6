"""
CLI entry point for the gcodeplot command.

    gcodeplot drawing.gcode transform -X 10 -y 5 -S 2
    gcodeplot drawing.gcode check -t 1e-4
"""

import argparse
import logging
import sys

from gcodeplot import config
from gcodeplot.config import TRACE
from gcodeplot.gcode import files
from gcodeplot.gcode.interpreter import GcodeInterpreter
from gcodeplot.utils.errors import ParseError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gcodeplot", description="Check and transform simple G-code.")
    parser.add_argument("input", metavar="INPUT", help="G-code file to use")

    # Verbose logging options
    parser.add_argument(
        "-v", "--verbose", action="count", default=0,
        help="Increase verbosity; -v=INFO, -vv=DEBUG, -vvv=TRACE",
    )
    parser.add_argument("-q", "--quiet", action="store_true", help="Enable quiet logging (WARNING level)")
    parser.add_argument(
        "--log-level", choices=["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set specific log level",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    transform = subparsers.add_parser(
        "transform",
        help="Transform all coordinates in the INPUT file.",
        description="Scale then translate every coordinate, writing <basename>_transformed.gcode.",
    )
    transform.add_argument("-X", dest="dx", type=float, help="Move along the X axis.")
    transform.add_argument("-Y", dest="dy", type=float, help="Move along the Y axis.")
    transform.add_argument("-x", dest="ndx", type=float, help="Move along the -X axis.")
    transform.add_argument("-y", dest="ndy", type=float, help="Move along the -Y axis.")
    transform.add_argument(
        "-S", "--scale", type=float, default=1.0,
        help="Scale everything. (Note: scaling happens before translation.)",
    )

    check = subparsers.add_parser("check", help="Parse the INPUT file and report arc problems.")
    check.add_argument(
        "-t", "--tolerance", type=float, default=config.DEFAULT_TOLERANCE,
        help=f"Tolerance for numeric errors in the file (default {config.DEFAULT_TOLERANCE:g}).",
    )
    check.add_argument("--strict", action="store_true", help="Exit with status 2 if any arc is inconsistent.")
    return parser


def resolve_log_level(args: argparse.Namespace) -> int:
    if args.log_level:
        if args.log_level == "TRACE":
            config.TRACE_ENABLED = True
            return TRACE
        return getattr(logging, args.log_level)
    if args.verbose >= 3:
        config.TRACE_ENABLED = True
        return TRACE
    if args.verbose >= 2:
        return logging.DEBUG
    if args.verbose == 1:
        return logging.INFO
    if args.quiet:
        return logging.WARNING
    return getattr(logging, config.LOG_LEVEL_DEFAULT)


def axis_offset(positive: float | None, negative: float | None) -> float:
    """-X/-Y win over -x/-y; the lowercase flags move along the negative axis"""
    if positive is not None:
        return positive
    if negative is not None:
        return -negative
    return 0.0


def run_transform(args: argparse.Namespace) -> int:
    translate = (axis_offset(args.dx, args.ndx), axis_offset(args.dy, args.ndy))
    target = files.save_transformed(args.input, translate, args.scale)
    print(target)
    return 0


def run_check(args: argparse.Namespace) -> int:
    interpreter = GcodeInterpreter(tolerance=args.tolerance)
    if not interpreter.load_file(args.input):
        for error in interpreter.errors:
            print(error, file=sys.stderr)
        return 1

    segments = interpreter.toolpath()
    drawn = sum(1 for segment in segments if segment.pen_down)
    x, y = interpreter.end_position
    print(f"{len(interpreter.commands)} commands, {len(segments)} segments ({drawn} drawn)")
    print(f"end position: X{x:g} Y{y:g}")
    for warning in interpreter.warnings:
        print(f"warning: {warning}")

    if args.strict and interpreter.warnings:
        return 2
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    # Parse arguments first to get logging level
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=resolve_log_level(args),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        if args.command == "transform":
            return run_transform(args)
        return run_check(args)
    except ParseError as e:
        print(e, file=sys.stderr)
        return 1
    except (OSError, ValueError) as e:
        logger.error(f"{args.command} failed: {e}")
        return 1


def main_entry():
    """Entry point for the gcodeplot command."""
    sys.exit(main())


if __name__ == "__main__":
    main_entry()
