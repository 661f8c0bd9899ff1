"""Style parameters for point patterns."""

import math
from dataclasses import dataclass, fields, replace as dataclass_replace
from typing import Any, Mapping

from .errors import InvalidStyle

MARKER_SHAPES = ("circle", "square", "diamond", "triangle", "cross", "plus")

LINETYPES = ("blank", "solid", "dashed", "dotted", "dotdash", "longdash", "twodash")

DEFAULT_SHAPE = "circle"
DEFAULT_ANGLE = 30.0  # degrees
DEFAULT_SPACING = 0.05  # normalized units
DEFAULT_DENSITY = 0.2  # fraction of spacing covered by a marker
DEFAULT_FILL = "#cccccc"
DEFAULT_COLOUR = "#333333"

# Alternative spellings accepted by PatternStyle.from_mapping
_ALIASES = {
    "color": "colour",
    "size": "linewidth",
    "xoffset": "x_offset",
    "yoffset": "y_offset",
}


@dataclass(frozen=True)
class PatternStyle:
    """
    Appearance and placement of a point pattern.

    Attributes:
        shape: Marker glyph, one of MARKER_SHAPES
        angle: Lattice rotation in degrees, any real (used modulo 90)
        spacing: Lattice step in normalized units; <= 0 means no pattern
        density: Marker diameter as a fraction of spacing, in [0, 1]
        fill: Marker fill colour
        colour: Marker outline colour
        alpha: Opacity in [0, 1]
        linewidth: Outline width
        linetype: Outline dash style, one of LINETYPES
        x_offset: Lattice origin shift along x, normalized units
        y_offset: Lattice origin shift along y, normalized units
    """
    shape: str = DEFAULT_SHAPE
    angle: float = DEFAULT_ANGLE
    spacing: float = DEFAULT_SPACING
    density: float = DEFAULT_DENSITY
    fill: str = DEFAULT_FILL
    colour: str = DEFAULT_COLOUR
    alpha: float = 1.0
    linewidth: float = 1.0
    linetype: str = "solid"
    x_offset: float = 0.0
    y_offset: float = 0.0

    def __post_init__(self):
        for name in ("angle", "spacing", "density", "alpha", "linewidth", "x_offset", "y_offset"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidStyle(f"{name} must be a number, got {value!r}")
            if not math.isfinite(value):
                raise InvalidStyle(f"{name} must be finite, got {value!r}")

        if self.shape not in MARKER_SHAPES:
            raise InvalidStyle(
                f"unknown shape {self.shape!r}, expected one of {', '.join(MARKER_SHAPES)}"
            )
        if self.linetype not in LINETYPES:
            raise InvalidStyle(
                f"unknown linetype {self.linetype!r}, expected one of {', '.join(LINETYPES)}"
            )
        if not 0 <= self.density <= 1:
            raise InvalidStyle(f"density must be in [0, 1], got {self.density}")
        if not 0 <= self.alpha <= 1:
            raise InvalidStyle(f"alpha must be in [0, 1], got {self.alpha}")
        if self.linewidth < 0:
            raise InvalidStyle(f"linewidth must not be negative, got {self.linewidth}")
        for name in ("fill", "colour"):
            if not isinstance(getattr(self, name), str) or not getattr(self, name):
                raise InvalidStyle(f"{name} must be a non-empty colour string")

    @property
    def effective_angle(self) -> float:
        """Rotation actually applied; the square lattice repeats every 90 degrees."""
        return self.angle % 90

    def replace(self, **changes: Any) -> "PatternStyle":
        """Copy with some fields changed, validated again."""
        return dataclass_replace(self, **changes)

    @classmethod
    def from_mapping(cls, params: Mapping[str, Any]) -> "PatternStyle":
        """Build a style from loosely named parameters.

        Keys may carry a ``pattern_`` prefix (``pattern_angle``) and a few
        aliases are understood (``color``, ``size``, ``xoffset``, ``yoffset``).
        Numeric fields given as strings are converted.

        Raises:
            InvalidStyle: on unknown keys or unconvertible values
        """
        known = {f.name: f for f in fields(cls)}
        kwargs = {}
        for key, value in params.items():
            name = key.lower().replace("-", "_")
            if name.startswith("pattern_"):
                name = name[len("pattern_"):]
            name = _ALIASES.get(name, name)
            if name not in known:
                raise InvalidStyle(f"unknown style parameter {key!r}")
            if name in kwargs:
                raise InvalidStyle(f"style parameter {name!r} given more than once")

            if known[name].type is float and isinstance(value, str):
                try:
                    value = float(value)
                except ValueError:
                    raise InvalidStyle(f"{key} must be a number, got {value!r}") from None
            kwargs[name] = value

        return cls(**kwargs)
