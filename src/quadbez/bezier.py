"""Quadratic Bezier curve evaluation and arc-length based resampling."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from quadbez.common import (
    EQUIDISTANT_MIN_SAMPLES,
    EQUIDISTANT_OVERSAMPLING,
    InvalidArgumentError,
)
from quadbez.geom import AvBox, GeomMath, Point, PointLike, as_point

logger = logging.getLogger(__name__)


###############################################################################
# ResampleSettings
###############################################################################


@dataclass(frozen=True)
class ResampleSettings:
    """Resolution of the arc-length table used for equidistant resampling.

    The table has ``max(count * oversampling, min_samples)`` subintervals, so the
    approximation error stays bounded independent of the requested count.

    Attributes:
        oversampling: Table subintervals per requested output segment.
        min_samples: Lower bound for the number of table subintervals.
    """

    oversampling: int = EQUIDISTANT_OVERSAMPLING
    min_samples: int = EQUIDISTANT_MIN_SAMPLES

    def __post_init__(self):
        for name in ("oversampling", "min_samples"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise InvalidArgumentError(f"{name} must be a positive integer, got {value!r}")

    def sample_count(self, count: int) -> int:
        """Number of table subintervals used for the given output count."""
        return max(count * self.oversampling, self.min_samples)

    def to_dict(self) -> dict:
        """Convert settings to a dictionary for serialization."""
        return {"oversampling": self.oversampling, "min_samples": self.min_samples}

    @classmethod
    def from_dict(cls, data: dict) -> "ResampleSettings":
        """Create ResampleSettings from a dictionary."""
        return cls(
            oversampling=data.get("oversampling", EQUIDISTANT_OVERSAMPLING),
            min_samples=data.get("min_samples", EQUIDISTANT_MIN_SAMPLES),
        )


DEFAULT_RESAMPLE_SETTINGS = ResampleSettings()


###############################################################################
# ArcLengthTable
###############################################################################


@dataclass(frozen=True, eq=False)
class ArcLengthTable:
    """Piecewise-linear approximation of arc length as a function of t.

    Attributes:
        params: Curve parameters, ascending from 0.0 to 1.0.
        lengths: Cumulative polyline length at each parameter, starting at 0.0.
    """

    params: NDArray[np.float64]
    lengths: NDArray[np.float64]

    def __len__(self) -> int:
        return len(self.params)

    @property
    def total_length(self) -> float:
        """float: Cumulative length at t = 1."""
        return float(self.lengths[-1])

    def invert(self, targets: ArrayLike) -> NDArray[np.float64]:
        """
        Map arc lengths to curve parameters.

        Each target is located by binary search in the cumulative length column
        and t is linearly interpolated inside the containing segment. A target
        lying exactly on a table boundary resolves to the lower-index segment,
        i.e. to the boundary parameter itself.

        Args:
            targets: Arc lengths, clipped to [0, total_length].

        Returns:
            NDArray[np.float64]: One parameter per target.
        """
        target_array = np.asarray(targets, dtype=np.float64)
        total = self.total_length
        if total <= 0.0:
            return np.zeros_like(target_array)

        clipped = np.clip(target_array, 0.0, total)
        upper = np.searchsorted(self.lengths, clipped, side="left")
        upper = np.clip(upper, 1, len(self.lengths) - 1)
        lower = upper - 1

        len_lower = self.lengths[lower]
        span = self.lengths[upper] - len_lower
        fraction = np.divide(
            clipped - len_lower,
            span,
            out=np.zeros_like(clipped),
            where=span > 0.0,
        )
        t_lower = self.params[lower]
        return t_lower + fraction * (self.params[upper] - t_lower)


###############################################################################
# BezierCurve
###############################################################################


class BezierCurve:
    """Class to handle linear and quadratic Bezier curve operations.

    All methods are stateless; control points are passed per call and never
    modified. Points may be given as Point instances or (x, y) sequences.
    """

    @staticmethod
    def _check_count(count: int, name: str = "count") -> None:
        if isinstance(count, bool) or not isinstance(count, (int, np.integer)) or count <= 0:
            raise InvalidArgumentError(f"{name} must be a positive integer, got {count!r}")

    @classmethod
    def _control_array(cls, *points: PointLike) -> NDArray[np.float64]:
        """Validate control points and stack them into an (n, 2) array."""
        converted = [as_point(point) for point in points]
        GeomMath.ensure_finite(*converted)
        return np.array([point.as_tuple() for point in converted], dtype=np.float64)

    @staticmethod
    def _evaluate_quadratic_array(control: NDArray[np.float64], t: NDArray[np.float64]) -> NDArray[np.float64]:
        """Evaluate B(t) for an array of parameters, returning shape (len(t), 2)."""
        omt = 1.0 - t
        w0 = omt * omt
        w1 = 2.0 * omt * t
        w2 = t * t
        result = np.empty((len(t), 2), dtype=np.float64)
        result[:, 0] = w0 * control[0, 0] + w1 * control[1, 0] + w2 * control[2, 0]
        result[:, 1] = w0 * control[0, 1] + w1 * control[1, 1] + w2 * control[2, 1]
        return result

    @staticmethod
    def _check_finite_result(xy: NDArray[np.float64]) -> NDArray[np.float64]:
        """Raise if finite control points produced an overflowing result."""
        if not np.all(np.isfinite(xy)):
            raise InvalidArgumentError("Curve evaluation overflowed to a non-finite coordinate")
        return xy

    @staticmethod
    def _to_points(xy: NDArray[np.float64]) -> List[Point]:
        return [Point(x, y) for x, y in xy.tolist()]

    ###########################################################################
    # Linear
    ###########################################################################

    @classmethod
    def evaluate_linear(cls, p0: PointLike, p1: PointLike, t: float) -> Point:
        """Return the point at parameter t on the line from p0 to p1."""
        control = cls._control_array(p0, p1)
        return Point(
            GeomMath.lerp(control[0, 0], control[1, 0], t),
            GeomMath.lerp(control[0, 1], control[1, 1], t),
        )

    @classmethod
    def plot_linear_equidistant(cls, p0: PointLike, p1: PointLike, count: int) -> List[Point]:
        """
        Return count + 1 equally spaced points from p0 to p1 (both included).

        A straight line is traversed at constant speed, so uniform parameter
        steps are already equidistant.
        """
        cls._check_count(count)
        control = cls._control_array(p0, p1)
        t = np.arange(count + 1, dtype=np.float64) / count
        xy = control[0] + np.outer(t, control[1] - control[0])
        xy[-1] = control[1]
        return cls._to_points(xy)

    @classmethod
    def linear_bounding_box(cls, p0: PointLike, p1: PointLike) -> AvBox:
        """Return the axis-aligned bounding box of the line from p0 to p1."""
        control = cls._control_array(p0, p1)
        return AvBox(
            xmin=float(control[:, 0].min()),
            ymin=float(control[:, 1].min()),
            xmax=float(control[:, 0].max()),
            ymax=float(control[:, 1].max()),
        )

    ###########################################################################
    # Quadratic
    ###########################################################################

    @classmethod
    def evaluate_quadratic(cls, start: PointLike, control: PointLike, end: PointLike, t: float) -> Point:
        """
        Evaluate the quadratic Bezier curve at parameter t.

        B(t) = (1-t)^2 * start + 2*(1-t)*t * control + t^2 * end

        Values of t outside [0, 1] extrapolate the curve without error.

        Args:
            start: Starting point.
            control: Control point.
            end: Ending point.
            t: Curve parameter.

        Returns:
            Point: The point on the curve; exactly start at t=0 and end at t=1.

        Raises:
            InvalidArgumentError: If a coordinate or t is not finite, or the
                result overflows.
        """
        if not math.isfinite(t):
            raise InvalidArgumentError(f"t must be finite, got {t!r}")
        points = cls._control_array(start, control, end)
        xy = cls._evaluate_quadratic_array(points, np.array([t], dtype=np.float64))
        return Point(*cls._check_finite_result(xy)[0])

    @classmethod
    def polygonize_quadratic_curve(
        cls, points: Sequence[PointLike], steps: int
    ) -> NDArray[np.float64]:
        """
        Polygonize a quadratic Bezier curve into uniform parameter steps.

        Args:
            points: The three control points (start, control, end).
            steps: Number of segments to divide the curve into.

        Returns:
            NDArray[np.float64] of shape (steps+1, 2) evaluated at t = index / steps.
        """
        cls._check_count(steps, "steps")
        if len(points) != 3:
            raise InvalidArgumentError(f"A quadratic curve needs 3 control points, got {len(points)}")
        control = cls._control_array(*points)
        t = np.arange(steps + 1, dtype=np.float64) / steps
        return cls._evaluate_quadratic_array(control, t)

    @classmethod
    def plot_quadratic(cls, start: PointLike, control: PointLike, end: PointLike, count: int) -> List[Point]:
        """Return count + 1 points at uniform parameter steps t = index / count."""
        return cls._to_points(cls.polygonize_quadratic_curve((start, control, end), count))

    @classmethod
    def build_arc_length_table(
        cls, start: PointLike, control: PointLike, end: PointLike, samples: int
    ) -> ArcLengthTable:
        """
        Sample the curve at samples + 1 uniform parameters and accumulate the
        distances between consecutive samples.

        Args:
            start: Starting point.
            control: Control point.
            end: Ending point.
            samples: Number of table subintervals.

        Returns:
            ArcLengthTable: Table starting at (0, 0) and ending at (1, total_length).
        """
        cls._check_count(samples, "samples")
        points = cls._control_array(start, control, end)
        params = np.linspace(0.0, 1.0, samples + 1, dtype=np.float64)
        curve = cls._evaluate_quadratic_array(points, params)

        deltas = np.diff(curve, axis=0)
        lengths = np.empty(samples + 1, dtype=np.float64)
        lengths[0] = 0.0
        np.cumsum(np.hypot(deltas[:, 0], deltas[:, 1]), out=lengths[1:])
        if not np.isfinite(lengths[-1]):
            raise InvalidArgumentError("Curve length overflows the floating point range")

        logger.debug("Arc-length table: %d subintervals, total length %.9g", samples, lengths[-1])
        return ArcLengthTable(params=params, lengths=lengths)

    @classmethod
    def quadratic_arc_length(
        cls,
        start: PointLike,
        control: PointLike,
        end: PointLike,
        samples: Optional[int] = None,
    ) -> float:
        """Polyline approximation of the total length of the curve."""
        if samples is None:
            samples = DEFAULT_RESAMPLE_SETTINGS.min_samples
        return cls.build_arc_length_table(start, control, end, samples).total_length

    @classmethod
    def resample_quadratic_equidistant_array(
        # pylint: disable=too-many-arguments,too-many-positional-arguments
        cls,
        start: PointLike,
        control: PointLike,
        end: PointLike,
        count: int,
        settings: Optional[ResampleSettings] = None,
    ) -> NDArray[np.float64]:
        """
        Resample the curve into count + 1 points spaced equally by arc length.

        Steps:
            1. Build an arc-length table with settings.sample_count(count) subintervals.
            2. Target lengths are total_length * index / count.
            3. Invert the table to get one parameter per target.
            4. Evaluate the curve at those parameters.

        A degenerate curve (all control points equal) has zero length and yields
        count + 1 copies of start.

        Returns:
            NDArray[np.float64] of shape (count+1, 2); the first row is exactly
            start and the last row is exactly end.

        Raises:
            InvalidArgumentError: If count is not a positive integer or a
                coordinate is not finite.
        """
        cls._check_count(count)
        if settings is None:
            settings = DEFAULT_RESAMPLE_SETTINGS
        points = cls._control_array(start, control, end)
        # Rounding in the table would give a tiny non-zero length for a single point
        if np.all(points == points[0]):
            logger.debug("Equidistant resampling: degenerate curve at %s", points[0].tolist())
            return np.tile(points[0], (count + 1, 1))

        table = cls.build_arc_length_table(start, control, end, settings.sample_count(count))
        total_length = table.total_length

        targets = total_length * np.arange(count + 1, dtype=np.float64) / count
        targets[-1] = total_length
        params = table.invert(targets)
        params[0] = 0.0
        params[-1] = 1.0

        logger.debug("Equidistant resampling: %d segments of length %.9g", count, total_length / count)
        return cls._evaluate_quadratic_array(points, params)

    @classmethod
    def resample_quadratic_equidistant(
        # pylint: disable=too-many-arguments,too-many-positional-arguments
        cls,
        start: PointLike,
        control: PointLike,
        end: PointLike,
        count: int,
        settings: Optional[ResampleSettings] = None,
    ) -> List[Point]:
        """Point-list variant of resample_quadratic_equidistant_array."""
        return cls._to_points(cls.resample_quadratic_equidistant_array(start, control, end, count, settings))

    @classmethod
    def quadratic_bounding_box(cls, start: PointLike, control: PointLike, end: PointLike) -> AvBox:
        """
        Return the tight axis-aligned bounding box of the curve for t in [0, 1].

        Besides the endpoints, each axis can reach an extremum where the
        derivative 2*((1-t)*(control-start) + t*(end-control)) vanishes.
        """
        points = cls._control_array(start, control, end)
        candidates = [0.0, 1.0]
        # Quarter-scaled differences cannot overflow for finite coordinates
        quarter = 0.25 * points
        for axis in (0, 1):
            lead = quarter[0, axis] - quarter[1, axis]
            denom = lead + (quarter[2, axis] - quarter[1, axis])
            if denom != 0.0:
                t_ext = lead / denom
                if 0.0 < t_ext < 1.0:
                    candidates.append(float(t_ext))
        xy = cls._evaluate_quadratic_array(points, np.array(candidates, dtype=np.float64))
        return AvBox(
            xmin=float(xy[:, 0].min()),
            ymin=float(xy[:, 1].min()),
            xmax=float(xy[:, 0].max()),
            ymax=float(xy[:, 1].max()),
        )
