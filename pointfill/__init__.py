"""pointfill: point-marker fill patterns for polygons."""

__version__ = "0.1.0"

from .errors import (
    PatternError,
    InvalidBoundary,
    InvalidStyle,
    InvalidAspectRatio,
    LatticeTooLarge,
    UnknownPattern,
)
from .geometry import Point, Viewport
from .style import PatternStyle
from .renderable import PatternGroup, PointLayer
from .patterns import make_pattern, PatternTable, default_patterns

__all__ = [
    "PatternError",
    "InvalidBoundary",
    "InvalidStyle",
    "InvalidAspectRatio",
    "LatticeTooLarge",
    "UnknownPattern",
    "Point",
    "Viewport",
    "PatternStyle",
    "PatternGroup",
    "PointLayer",
    "make_pattern",
    "PatternTable",
    "default_patterns",
]
