"""Handling 2D geometries: points, boxes and small math helpers"""

from __future__ import annotations

import json
import math
import re
from dataclasses import dataclass
from typing import Dict, Sequence, Tuple, Union

from quadbez.common import InvalidArgumentError, PointFormatError

# Component label (x or y) followed by ':' or '=', then the number
_LABELED_COMPONENT = re.compile(r"^\s*(?P<label>[xXyY])\s*[:=]\s*(?P<number>\S+)\s*$")


###############################################################################
# GeomMath
###############################################################################
class GeomMath:
    """Class to provide various static methods related to geometry handling."""

    @staticmethod
    def lerp(a: float, b: float, t: float) -> float:
        """Linear interpolation between two scalars."""
        return a + (b - a) * t

    @staticmethod
    def distance(p0: Sequence[float], p1: Sequence[float]) -> float:
        """Euclidean distance between two 2D points given as (x, y)."""
        return math.hypot(p1[0] - p0[0], p1[1] - p0[1])

    @staticmethod
    def ensure_finite(*points: Point) -> None:
        """
        Check that every coordinate of the given points is finite.

        Raises:
            InvalidArgumentError: If any coordinate is NaN or infinite.
        """
        for point in points:
            if not point.is_finite():
                raise InvalidArgumentError(f"Point {point} has non-finite coordinates")


###############################################################################
# Point
###############################################################################
@dataclass(frozen=True)
class Point:
    """
    Immutable 2D coordinate.

    Attributes:
        x (float): The x-coordinate.
        y (float): The y-coordinate.
    """

    x: float
    y: float

    def __post_init__(self):
        # Normalize ints and numpy scalars to plain floats
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))

    @classmethod
    def parse(cls, text: str, allow_negative: bool = True) -> Point:
        """
        Parse a point from its text form.

        Accepted forms:
            "1.5,-2"                 plain, optionally wrapped in [] or ()
            "x:1.5, y:2" / "y=2,x=1.5"  labeled, any order
            '{"x": 1.5, "y": 2}'     JSON object

        Args:
            text (str): The text to parse.
            allow_negative (bool): If False, negative components are rejected.

        Returns:
            Point: The parsed point.

        Raises:
            PointFormatError: If the text is malformed or violates allow_negative.
        """
        if text is None or not text.strip():
            raise PointFormatError("Empty point text")
        stripped = text.strip()

        if stripped.startswith("{") and stripped.endswith("}"):
            x, y = cls._parse_json(stripped)
        else:
            if stripped[0] + stripped[-1] in ("[]", "()"):
                stripped = stripped[1:-1]
            if "," not in stripped:
                raise PointFormatError(f"Missing ',' delimiter in point '{text}'")
            parts = stripped.split(",")
            if len(parts) != 2:
                raise PointFormatError(f"Expected exactly two components in point '{text}', got {len(parts)}")
            x, y = cls._parse_components(parts, text)

        if not (math.isfinite(x) and math.isfinite(y)):
            raise PointFormatError(f"Point '{text}' has non-finite components")
        if not allow_negative and (x < 0.0 or y < 0.0):
            raise PointFormatError(f"Negative components are not allowed in point '{text}'")
        return cls(x, y)

    @staticmethod
    def _parse_number(token: str, text: str) -> float:
        # float() also takes digit separators ("1_0"), which are not part of the point syntax
        if "_" in token:
            raise PointFormatError(f"Invalid number '{token.strip()}' in point '{text}'")
        try:
            return float(token.strip())
        except ValueError as exc:
            raise PointFormatError(f"Invalid number '{token.strip()}' in point '{text}'") from exc

    @classmethod
    def _parse_components(cls, parts: Sequence[str], text: str) -> Tuple[float, float]:
        """Parse two plain or labeled components into (x, y)."""
        values: Dict[str, float] = {}
        unlabeled = []
        for part in parts:
            match = _LABELED_COMPONENT.match(part)
            if match:
                label = match.group("label").lower()
                if label in values:
                    raise PointFormatError(f"Duplicate '{label}' component in point '{text}'")
                values[label] = cls._parse_number(match.group("number"), text)
            else:
                unlabeled.append(cls._parse_number(part, text))

        # Unlabeled numbers fill the remaining slots in x, y order
        for label in ("x", "y"):
            if label not in values and unlabeled:
                values[label] = unlabeled.pop(0)
        if "x" not in values or "y" not in values:
            raise PointFormatError(f"Point '{text}' needs both x and y components")
        return values["x"], values["y"]

    @classmethod
    def _parse_json(cls, text: str) -> Tuple[float, float]:
        """Parse a JSON object with x and y members."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise PointFormatError(f"Invalid JSON point '{text}'") from exc
        members = {str(key).lower(): value for key, value in data.items()}
        if "x" not in members or "y" not in members:
            raise PointFormatError(f"JSON point '{text}' needs both x and y members")
        for label in ("x", "y"):
            value = members[label]
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise PointFormatError(f"JSON point '{text}' has a non-numeric '{label}' member")
        return float(members["x"]), float(members["y"])

    def format(self, precision: int = 3) -> str:
        """
        Render both components with a fixed number of fractional digits.

        Args:
            precision (int): Number of fractional digits, must be >= 0.

        Returns:
            str: Text of the form "X, Y", e.g. "2.500, 7.500".
        """
        if precision < 0:
            raise InvalidArgumentError(f"precision must be >= 0, got {precision}")
        return f"{self.x:.{precision}f}, {self.y:.{precision}f}"

    def is_finite(self) -> bool:
        """True if both coordinates are neither NaN nor infinite."""
        return math.isfinite(self.x) and math.isfinite(self.y)

    def distance_to(self, other: Point) -> float:
        """Euclidean distance to another point."""
        return GeomMath.distance(self.as_tuple(), other.as_tuple())

    def lerp(self, other: Point, t: float) -> Point:
        """Point at fraction t on the straight line from this point to other."""
        return Point(GeomMath.lerp(self.x, other.x, t), GeomMath.lerp(self.y, other.y, t))

    def as_tuple(self) -> Tuple[float, float]:
        """The point as Tuple (x, y)."""
        return (self.x, self.y)

    @classmethod
    def from_dict(cls, data: dict) -> Point:
        """Create a Point instance from a dictionary."""
        return cls(x=data.get("x", 0.0), y=data.get("y", 0.0))

    def to_dict(self) -> dict:
        """Convert the Point instance to a dictionary."""
        return {"x": self.x, "y": self.y}

    def __str__(self):
        return f"[{self.format()}]"


PointLike = Union[Point, Sequence[float]]


def as_point(value: PointLike) -> Point:
    """Convert an (x, y) sequence to a Point, passing Points through unchanged."""
    if isinstance(value, Point):
        return value
    if len(value) != 2:
        raise InvalidArgumentError(f"Expected an (x, y) pair, got {len(value)} values")
    return Point(value[0], value[1])


###############################################################################
# AvBox
###############################################################################
@dataclass
class AvBox:
    """
    Represents a rectangular box with coordinates and dimensions.

    Attributes:
        xmin (float): The minimum x-coordinate.
        ymin (float): The minimum y-coordinate.
        xmax (float): The maximum x-coordinate.
        ymax (float): The maximum y-coordinate.
    """

    _xmin: float
    _ymin: float
    _xmax: float
    _ymax: float

    def __init__(self, xmin: float, ymin: float, xmax: float, ymax: float):
        self._xmin = xmin
        self._ymin = ymin
        self._xmax = xmax
        self._ymax = ymax

        # Normalize coordinates to ensure xmin <= xmax and ymin <= ymax
        if self._xmin > self._xmax:
            self._xmin, self._xmax = self._xmax, self._xmin
        if self._ymin > self._ymax:
            self._ymin, self._ymax = self._ymax, self._ymin

    @property
    def xmin(self) -> float:
        """float: The minimum x-coordinate."""
        return self._xmin

    @property
    def ymin(self) -> float:
        """float: The minimum y-coordinate."""
        return self._ymin

    @property
    def xmax(self) -> float:
        """float: The maximum x-coordinate."""
        return self._xmax

    @property
    def ymax(self) -> float:
        """float: The maximum y-coordinate."""
        return self._ymax

    @property
    def extent(self) -> Tuple[float, float, float, float]:
        """The extent of the box as Tuple (xmin, ymin, xmax, ymax)."""
        return self._xmin, self._ymin, self._xmax, self._ymax

    @property
    def width(self) -> float:
        """float: The width of the box."""
        return self._xmax - self._xmin

    @property
    def height(self) -> float:
        """float: The height of the box."""
        return self._ymax - self._ymin

    @property
    def centroid(self) -> Point:
        """The centroid of the box."""
        return Point((self._xmin + self._xmax) / 2, (self._ymin + self._ymax) / 2)

    def contains(self, point: Point, tolerance: float = 0.0) -> bool:
        """True if the point lies inside the box (borders included)."""
        return (
            self._xmin - tolerance <= point.x <= self._xmax + tolerance
            and self._ymin - tolerance <= point.y <= self._ymax + tolerance
        )

    @classmethod
    def from_dict(cls, data: dict) -> AvBox:
        """Create an AvBox instance from a dictionary."""
        return cls(
            xmin=data.get("xmin", 0.0),
            ymin=data.get("ymin", 0.0),
            xmax=data.get("xmax", 0.0),
            ymax=data.get("ymax", 0.0),
        )

    def to_dict(self) -> dict:
        """Convert the AvBox instance to a dictionary."""
        return {
            "xmin": self.xmin,
            "ymin": self.ymin,
            "xmax": self.xmax,
            "ymax": self.ymax,
        }

    def __str__(self):
        return (
            f"AvBox(xmin={self.xmin}, ymin={self.ymin}, "
            f"xmax={self.xmax}, ymax={self.ymax}, "
            f"width={self.width}, height={self.height})"
        )
