"""Command line interface for plotting points along a quadratic Bezier curve."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, Sequence

from quadbez.bezier import ResampleSettings
from quadbez.common import (
    DEFAULT_POINTS_PER_LINE,
    DEFAULT_PRECISION,
    EQUIDISTANT_MIN_SAMPLES,
    EQUIDISTANT_OVERSAMPLING,
    BezierError,
    PlotAction,
)
from quadbez.geom import Point
from quadbez.plot import PlotConfig, render_run

logger = logging.getLogger(__name__)


def _action(text: str) -> PlotAction:
    try:
        return PlotAction.from_label(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _point(text: str) -> Point:
    try:
        return Point.parse(text, allow_negative=True)
    except BezierError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    actions = ", ".join(action.label for action in PlotAction if action is not PlotAction.NONE)
    parser = argparse.ArgumentParser(
        prog="quadbez",
        description="Plot points along a quadratic Bezier curve.",
        epilog="Points are given as 'X,Y', 'x:X,y:Y' or '{\"x\": X, \"y\": Y}'.",
    )
    parser.add_argument("--action", type=_action, default=PlotAction.NONE, help=f"One of: {actions}")
    parser.add_argument("--start-point", type=_point, help="Starting point of the curve")
    parser.add_argument("--control-point", type=_point, help="Control point of the curve")
    parser.add_argument("--end-point", type=_point, help="Ending point of the curve")
    parser.add_argument("--count", type=int, default=0, help="Number of segments (count + 1 points)")
    parser.add_argument("--precision", type=int, default=DEFAULT_PRECISION, help="Fractional digits")
    parser.add_argument("--per-line", type=int, default=DEFAULT_POINTS_PER_LINE, help="Points per output line")
    parser.add_argument(
        "--oversampling",
        type=int,
        default=EQUIDISTANT_OVERSAMPLING,
        help="Arc-length table subintervals per output segment",
    )
    parser.add_argument(
        "--min-samples",
        type=int,
        default=EQUIDISTANT_MIN_SAMPLES,
        help="Minimum number of arc-length table subintervals",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def parse_config(argv: Optional[Sequence[str]] = None) -> PlotConfig:
    """
    Parse and validate command line arguments into a PlotConfig.

    Exits with status 2 and the usage text when validation fails.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    problems: List[str] = PlotConfig.validate(
        args.action, args.start_point, args.control_point, args.end_point, args.count
    )
    if args.precision < 0:
        problems.append("--precision must not be negative.")
    if args.per_line < 1:
        problems.append("--per-line must be at least 1.")
    try:
        settings = ResampleSettings(oversampling=args.oversampling, min_samples=args.min_samples)
    except BezierError as exc:
        problems.append(str(exc))

    if problems:
        for problem in problems:
            logger.warning(problem)
        parser.error(" ".join(problems))

    return PlotConfig(
        action=args.action,
        start=args.start_point,
        control=args.control_point,
        end=args.end_point,
        count=args.count,
        precision=args.precision,
        points_per_line=args.per_line,
        settings=settings,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Parse arguments, run the configured action and print the points."""
    config = parse_config(argv)
    logger.debug("Configuration: %s", config.to_dict())
    header, body = render_run(config)
    print(header)
    print(body)
    return 0


if __name__ == "__main__":
    sys.exit(main())
