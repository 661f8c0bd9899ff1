"""Type definitions for pointfill geometry."""

from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np

from ..errors import InvalidBoundary


def as_xy(points) -> np.ndarray:
    """Coordinates of an iterable of points (pairs or Point) as an (N, 2) array."""
    if isinstance(points, np.ndarray):
        return points.astype(float).reshape(-1, 2)
    return np.asarray([tuple(p) for p in points], dtype=float).reshape(-1, 2)


@dataclass
class Point:
    """2D point."""
    x: float
    y: float

    def __iter__(self):
        yield self.x
        yield self.y


@dataclass(frozen=True)
class Viewport:
    """A user-space rectangle that boundaries are normalized against.

    Normalized coordinates put (0, 0) at the bottom-left corner and (1, 1) at
    the top-right one. User space follows SVG, so y points down and is flipped
    on the way in and out.
    """
    x: float
    y: float
    width: float
    height: float

    def __post_init__(self):
        if not (self.width > 0 and self.height > 0):
            raise InvalidBoundary(
                f"viewport must have a positive size, got {self.width}x{self.height}"
            )

    @classmethod
    def from_points(cls, points: Iterable[Sequence[float]]) -> "Viewport":
        """Bounding box of a set of user-space points."""
        xy = as_xy(points)
        if len(xy) == 0:
            raise InvalidBoundary("cannot build a viewport from no points")
        min_x, min_y = xy.min(axis=0)
        max_x, max_y = xy.max(axis=0)
        return cls(float(min_x), float(min_y), float(max_x - min_x), float(max_y - min_y))

    @property
    def aspect_ratio(self) -> float:
        """Width over height."""
        return self.width / self.height

    @property
    def snpc(self) -> float:
        """Length of the shorter side, the unit marker sizes are given in."""
        return min(self.width, self.height)

    def to_normalized(self, points) -> np.ndarray:
        xy = as_xy(points)
        return np.column_stack([
            (xy[:, 0] - self.x) / self.width,
            (self.y + self.height - xy[:, 1]) / self.height,
        ])

    def to_user(self, points) -> np.ndarray:
        xy = as_xy(points)
        return np.column_stack([
            self.x + xy[:, 0] * self.width,
            self.y + self.height - xy[:, 1] * self.height,
        ])
