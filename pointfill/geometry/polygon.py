"""Polygon operations for pointfill.

Boundaries are plain vertex sequences in normalized viewport coordinates;
shapely does the buffering and containment work.
"""

import logging
from typing import Sequence, Tuple, Union

import numpy as np
import shapely
from shapely.geometry import Polygon
from shapely.geometry.base import BaseGeometry

from ..errors import InvalidBoundary

logger = logging.getLogger(__name__)

Boundary = Union[Sequence[Sequence[float]], np.ndarray, Polygon]


def boundary_coordinates(boundary: Boundary) -> np.ndarray:
    """Validate a boundary and return its vertices as an (N, 2) array.

    A repeated closing vertex is dropped. No self-intersection check is made.

    Raises:
        InvalidBoundary: fewer than 3 distinct vertices, or vertices that are not
            finite (x, y) pairs.
    """
    if isinstance(boundary, Polygon):
        if boundary.is_empty:
            raise InvalidBoundary("a boundary needs at least 3 vertices, got 0")
        boundary = list(boundary.exterior.coords)

    try:
        xy = np.asarray([tuple(p) for p in boundary], dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidBoundary(f"boundary vertices must be (x, y) pairs: {e}") from e

    if xy.size == 0:
        xy = xy.reshape(0, 2)
    if xy.ndim != 2 or xy.shape[1] != 2:
        raise InvalidBoundary(f"boundary vertices must be (x, y) pairs, got shape {xy.shape}")
    if not np.isfinite(xy).all():
        raise InvalidBoundary("boundary vertices must be finite")

    if len(xy) > 1 and np.array_equal(xy[0], xy[-1]):
        xy = xy[:-1]

    distinct = len(np.unique(xy, axis=0))
    if distinct < 3:
        raise InvalidBoundary(f"a boundary needs at least 3 distinct vertices, got {distinct}")

    return xy


def make_polygon(boundary: Boundary) -> Polygon:
    """Build a shapely polygon from a boundary, validating it first."""
    return Polygon(boundary_coordinates(boundary))


def buffer_polygon(boundary: Union[Boundary, BaseGeometry], distance: float) -> BaseGeometry:
    """Offset a polygon by a signed distance.

    Positive distances dilate the polygon, negative ones erode it, both by a
    disc of radius |distance|. Eroding past the polygon's inradius gives an
    empty geometry rather than an error.
    """
    if isinstance(boundary, BaseGeometry):
        polygon = boundary
    else:
        polygon = make_polygon(boundary)

    if distance == 0:
        return polygon

    buffered = polygon.buffer(distance)
    if buffered.is_empty:
        logger.debug("buffer by %g collapsed the polygon", distance)
    return buffered


def rotate(
    points,
    angle_degrees: float,
    aspect_ratio: float,
    center: Tuple[float, float] = (0.5, 0.5),
) -> np.ndarray:
    """Rotate normalized points about a center so the visual angle is right.

    y is divided by the aspect ratio before the rotation and multiplied back
    afterwards, so on a non-square viewport the markers turn by
    `angle_degrees` as seen on screen, not in normalized coordinates.

    Args:
        points: (N, 2) array-like of normalized coordinates
        angle_degrees: Counter-clockwise rotation in degrees
        aspect_ratio: Viewport width over height
        center: Rotation center in normalized coordinates

    Returns:
        New (N, 2) array of rotated points
    """
    xy = np.asarray(points, dtype=float).reshape(-1, 2)
    if angle_degrees == 0 or len(xy) == 0:
        return xy.copy()

    angle_rad = np.radians(angle_degrees)
    cos_a = np.cos(angle_rad)
    sin_a = np.sin(angle_rad)

    cx = center[0]
    cy = center[1] / aspect_ratio

    # Translate to origin in aspect-free space
    dx = xy[:, 0] - cx
    dy = xy[:, 1] / aspect_ratio - cy

    x_new = dx * cos_a - dy * sin_a + cx
    y_new = (dx * sin_a + dy * cos_a + cy) * aspect_ratio

    return np.column_stack([x_new, y_new])


def contained(polygon: BaseGeometry, points) -> np.ndarray:
    """Boolean mask of the points lying inside or on the edge of a polygon."""
    xy = np.asarray(points, dtype=float).reshape(-1, 2)
    if polygon.is_empty or len(xy) == 0:
        return np.zeros(len(xy), dtype=bool)

    shapely.prepare(polygon)
    return np.asarray(shapely.covers(polygon, shapely.points(xy)), dtype=bool)
