"""Test module for quadbez.geom

The tests are run using pytest.
These tests ensure that all functions and interfaces in src/quadbez/geom.py
remain working correctly after changes and refactoring.
"""

import math

import numpy as np
import pytest

from quadbez.bezier import BezierCurve
from quadbez.common import InvalidArgumentError, PointFormatError
from quadbez.geom import AvBox, GeomMath, Point, as_point

###############################################################################
# GeomMath Tests
###############################################################################


class TestGeomMath:
    """Test class for GeomMath functionality."""

    def test_lerp(self):
        """Test scalar interpolation."""
        assert GeomMath.lerp(2.0, 6.0, 0.0) == 2.0
        assert GeomMath.lerp(2.0, 6.0, 0.25) == 3.0
        assert GeomMath.lerp(2.0, 6.0, 1.0) == 6.0

    def test_distance(self):
        """Test Euclidean distance."""
        assert GeomMath.distance((0, 0), (3, 4)) == 5.0

    def test_ensure_finite(self):
        """Non-finite coordinates raise."""
        GeomMath.ensure_finite(Point(1, 2), Point(-3, 4))
        with pytest.raises(InvalidArgumentError):
            GeomMath.ensure_finite(Point(1, 2), Point(math.nan, 4))


###############################################################################
# Point Tests
###############################################################################


class TestPointParse:
    """Test parsing points from text."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("1.5,-2", (1.5, -2.0)),
            ("  10 , 20  ", (10.0, 20.0)),
            ("+3.,.5", (3.0, 0.5)),
            ("[3, 4]", (3.0, 4.0)),
            ("(3,4)", (3.0, 4.0)),
            ("x:1.5, y:2", (1.5, 2.0)),
            ("y=2,x=1.5", (1.5, 2.0)),
            ("X:1,Y:2", (1.0, 2.0)),
            ("y:2, 1", (1.0, 2.0)),
            ('{"x": 1.5, "y": 2}', (1.5, 2.0)),
            ('{"Y": -1, "X": 4}', (4.0, -1.0)),
        ],
    )
    def test_valid(self, text, expected):
        """Test all accepted text forms."""
        assert Point.parse(text).as_tuple() == expected

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "   ",
            "1.5 2",
            "a,2",
            "1,",
            "1,2,3",
            "x:1,x:2",
            "nan,1",
            "1,inf",
            '{"x": 1}',
            '{"x": "a", "y": 2}',
            "{bad json}",
            "1_0,2",
            '{"x": true, "y": 2}',
            '{"x": 1, "y": false}',
            '{"x": "1.5", "y": 2}',
        ],
    )
    def test_invalid(self, text):
        """Malformed text raises PointFormatError."""
        with pytest.raises(PointFormatError):
            Point.parse(text)

    def test_negative_rejected(self):
        """allow_negative=False rejects negative components."""
        assert Point.parse("1,2", allow_negative=False) == Point(1, 2)
        with pytest.raises(PointFormatError):
            Point.parse("-1,2", allow_negative=False)
        with pytest.raises(PointFormatError):
            Point.parse("1,-0.5", allow_negative=False)

    def test_format_error_is_value_error(self):
        """PointFormatError can be handled as ValueError."""
        with pytest.raises(ValueError):
            Point.parse("oops")


class TestPoint:
    """Test Point value behavior."""

    def test_format(self):
        """Fixed fractional digits."""
        assert Point(2.5, 7.5).format() == "2.500, 7.500"
        assert Point(1.26, -3).format(1) == "1.3, -3.0"
        assert Point(10, 0).format(0) == "10, 0"
        assert str(Point(1, 2)) == "[1.000, 2.000]"

    def test_format_negative_precision(self):
        """Negative precision is rejected."""
        with pytest.raises(InvalidArgumentError):
            Point(1, 2).format(-1)

    def test_immutable(self):
        """Points cannot be modified."""
        point = Point(1, 2)
        with pytest.raises(AttributeError):
            point.x = 5.0

    def test_coordinates_are_floats(self):
        """ints and numpy scalars are stored as floats."""
        point = Point(1, np.float64(2.5))

        assert isinstance(point.x, float)
        assert isinstance(point.y, float)

    def test_helpers(self):
        """distance_to, lerp, dict conversion."""
        p0, p1 = Point(0, 0), Point(6, 8)

        assert p0.distance_to(p1) == 10.0
        assert p0.lerp(p1, 0.5) == Point(3, 4)
        assert Point.from_dict(p1.to_dict()) == p1
        assert not Point(math.inf, 0).is_finite()

    def test_as_point(self):
        """Sequences are converted, Points pass through."""
        point = Point(1, 2)

        assert as_point(point) is point
        assert as_point((1, 2)) == point
        with pytest.raises(InvalidArgumentError):
            as_point((1, 2, 3))


###############################################################################
# AvBox Tests
###############################################################################


class TestAvBox:
    """Test class for AvBox functionality."""

    def test_normalization(self):
        """Swapped coordinates are normalized."""
        box = AvBox(xmin=10, ymin=20, xmax=0, ymax=5)

        assert box.extent == (0, 5, 10, 20)
        assert box.width == 10
        assert box.height == 15
        assert box.centroid == Point(5, 12.5)

    def test_dict_round_trip(self):
        """to_dict / from_dict preserve the extent."""
        box = AvBox(1.0, 2.0, 3.0, 4.0)

        assert AvBox.from_dict(box.to_dict()).extent == box.extent

    def test_quadratic_bounding_box_peak(self):
        """The interior extremum is included."""
        box = BezierCurve.quadratic_bounding_box((0, 0), (5, 10), (10, 0))

        assert box.extent == pytest.approx((0.0, 0.0, 10.0, 5.0))

    def test_quadratic_bounding_box_contains_curve(self):
        """Every polygonized point lies inside the box, which is tight."""
        control_points = [(3.0, -1.0), (-6.0, 12.0), (9.0, 4.0)]
        box = BezierCurve.quadratic_bounding_box(*control_points)
        dense = BezierCurve.polygonize_quadratic_curve(control_points, 2000)

        for x, y in dense:
            assert box.contains(Point(x, y), tolerance=1e-9)
        assert box.xmin == pytest.approx(dense[:, 0].min(), abs=1e-4)
        assert box.xmax == pytest.approx(dense[:, 0].max(), abs=1e-4)
        assert box.ymin == pytest.approx(dense[:, 1].min(), abs=1e-4)
        assert box.ymax == pytest.approx(dense[:, 1].max(), abs=1e-4)

    def test_quadratic_bounding_box_degenerate(self):
        """A single point gives an empty box at that point."""
        box = BezierCurve.quadratic_bounding_box((2, 3), (2, 3), (2, 3))

        assert box.extent == (2.0, 3.0, 2.0, 3.0)


###############################################################################
# Linear Tests
###############################################################################


class TestLinear:
    """Test straight line helpers."""

    def test_evaluate_linear(self):
        """Points along a line."""
        assert BezierCurve.evaluate_linear((0, 0), (10, 20), 0.25) == Point(2.5, 5.0)
        assert BezierCurve.evaluate_linear((0, 0), (10, 20), 1.0) == Point(10, 20)

    def test_plot_linear_equidistant(self):
        """count + 1 equally spaced points."""
        result = BezierCurve.plot_linear_equidistant((0, 0), (3, 4), 5)
        xy = np.array([p.as_tuple() for p in result])
        spacing = np.hypot(*np.diff(xy, axis=0).T)

        assert len(result) == 6
        assert result[0] == Point(0, 0)
        assert result[-1] == Point(3, 4)
        assert np.allclose(spacing, 1.0)

    def test_plot_linear_invalid_count(self):
        """count must be positive."""
        with pytest.raises(InvalidArgumentError):
            BezierCurve.plot_linear_equidistant((0, 0), (3, 4), 0)

    def test_linear_bounding_box(self):
        """The box of a segment spans its endpoints in any order."""
        box = BezierCurve.linear_bounding_box((3, -1), (-2, 4))

        assert box.extent == (-2.0, -1.0, 3.0, 4.0)
        assert box.width == 5.0
        assert box.height == 5.0

    def test_linear_bounding_box_rejects_non_finite(self):
        """Non-finite endpoints are rejected."""
        with pytest.raises(InvalidArgumentError):
            BezierCurve.linear_bounding_box((0, 0), (float("inf"), 1))
