"""Central module containing exceptions, enums and tuning constants for curve processing."""

from __future__ import annotations

from enum import Enum, auto

###############################################################################
# Exceptions
###############################################################################


class BezierError(Exception):
    """Base exception for curve-related errors."""


class PointFormatError(BezierError, ValueError):
    """Raised when a point cannot be parsed from its text form."""


class InvalidArgumentError(BezierError, ValueError):
    """Raised when an invalid count, sample size or non-finite coordinate is supplied."""


###############################################################################
# Enums and Consts
###############################################################################


class PlotAction(Enum):
    """Enum to define the available point plotting actions."""

    NONE = auto()
    QUADRATIC_BEZIER_PLOT_POINTS = auto()
    QUADRATIC_BEZIER_PLOT_POINTS_EQUIDISTANT = auto()

    @property
    def label(self) -> str:
        """Display name of the action, e.g. ``QuadraticBezierPlotPoints``."""
        return "".join(part.capitalize() for part in self.name.split("_"))

    @classmethod
    def from_label(cls, text: str) -> PlotAction:
        """Look up an action by its display name, ignoring case.

        Raises:
            ValueError: If no action matches the given text.
        """
        wanted = text.strip().lower()
        for action in cls:
            if action.label.lower() == wanted:
                return action
        raise ValueError(f"Unrecognized action: {text}")


# Subintervals per requested output segment when building the arc-length table
EQUIDISTANT_OVERSAMPLING: int = 32

# Lower bound for the number of arc-length table subintervals
EQUIDISTANT_MIN_SAMPLES: int = 256

# Fractional digits used when rendering points
DEFAULT_PRECISION: int = 3

# Points printed per output line by the command line interface
DEFAULT_POINTS_PER_LINE: int = 4
