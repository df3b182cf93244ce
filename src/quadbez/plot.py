"""Session configuration and text rendering for point plotting actions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from quadbez.bezier import BezierCurve, ResampleSettings
from quadbez.common import DEFAULT_POINTS_PER_LINE, DEFAULT_PRECISION, PlotAction
from quadbez.geom import Point

###############################################################################
# PlotConfig
###############################################################################


@dataclass(frozen=True)
class PlotConfig:
    """Validated, immutable description of one plotting run.

    Attributes:
        action: The plotting action to run.
        start: Starting point of the curve.
        control: Control point of the curve.
        end: Ending point of the curve.
        count: Number of segments; count + 1 points are produced.
        precision: Fractional digits of rendered coordinates.
        points_per_line: Rendered points per output line.
        settings: Arc-length table resolution for equidistant resampling.
    """

    action: PlotAction = PlotAction.NONE
    start: Optional[Point] = None
    control: Optional[Point] = None
    end: Optional[Point] = None
    count: int = 0
    precision: int = DEFAULT_PRECISION
    points_per_line: int = DEFAULT_POINTS_PER_LINE
    settings: ResampleSettings = field(default_factory=ResampleSettings)

    @classmethod
    def validate(
        # pylint: disable=too-many-arguments,too-many-positional-arguments
        cls,
        action: PlotAction,
        start: Optional[Point],
        control: Optional[Point],
        end: Optional[Point],
        count: int,
    ) -> List[str]:
        """Return the list of problems preventing the given action from running."""
        if action is PlotAction.NONE:
            return []
        problems = []
        for name, point in (("--start-point", start), ("--control-point", control), ("--end-point", end)):
            if point is None:
                problems.append(f"{name} is required for the {action.label} action.")
        if count <= 0:
            problems.append(f"A positive --count is required for the {action.label} action.")
        return problems

    def run(self) -> List[Point]:
        """Compute the points of the configured action. NONE yields no points."""
        if self.action is PlotAction.QUADRATIC_BEZIER_PLOT_POINTS:
            return BezierCurve.plot_quadratic(self.start, self.control, self.end, self.count)
        if self.action is PlotAction.QUADRATIC_BEZIER_PLOT_POINTS_EQUIDISTANT:
            return BezierCurve.resample_quadratic_equidistant(
                self.start, self.control, self.end, self.count, self.settings
            )
        return []

    def to_dict(self) -> dict:
        """Convert the configuration to a dictionary."""
        return {
            "action": self.action.label,
            "start": self.start.to_dict() if self.start else None,
            "control": self.control.to_dict() if self.control else None,
            "end": self.end.to_dict() if self.end else None,
            "count": self.count,
            "precision": self.precision,
            "points_per_line": self.points_per_line,
            "settings": self.settings.to_dict(),
        }


###############################################################################
# Rendering
###############################################################################


def render_points(points: Sequence[Point], precision: int = DEFAULT_PRECISION, per_line: int = DEFAULT_POINTS_PER_LINE) -> str:
    """
    Render points as "[X, Y]" items, comma-separated, wrapped after every
    per_line-th point.

    Example:
        [0.000, 0.000], [2.500, 0.000], [5.000, 0.000], [7.500, 0.000],
        [10.000, 0.000]
    """
    lines: List[str] = []
    current: List[str] = []
    for point in points:
        current.append(f"[{point.format(precision)}]")
        if len(current) == per_line:
            lines.append(", ".join(current))
            current = []
    if current:
        lines.append(", ".join(current))
    return ",\n".join(lines)


def render_run(config: PlotConfig) -> Tuple[str, str]:
    """Run the configured action and return (header, body) text."""
    points = config.run()
    return f"**{config.action.label}**", render_points(points, config.precision, config.points_per_line)
