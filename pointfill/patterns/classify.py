"""Sort lattice points by their distance to a boundary."""

import logging
from dataclasses import dataclass

import numpy as np
from shapely.geometry.base import BaseGeometry

from ..geometry.polygon import Boundary, buffer_polygon, contained, make_polygon

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Classification:
    """
    Lattice points split by their position relative to a boundary.

    Attributes:
        interior: Points covered by the boundary contracted by the radius
        band: Points covered by the expanded boundary but not the contracted one
        expanded: Boundary buffered outward by the radius
        contracted: Boundary buffered inward by the radius (may be empty)
    """
    interior: np.ndarray
    band: np.ndarray
    expanded: BaseGeometry
    contracted: BaseGeometry

    @property
    def candidates(self) -> np.ndarray:
        """All points within one radius of the boundary or inside it."""
        return np.concatenate([self.interior, self.band])


def classify(lattice, boundary: Boundary, radius: float) -> Classification:
    """Split lattice points into interior and boundary-band sets.

    Markers are finite glyphs, so a point whose center is within `radius`
    outside the boundary is still a candidate, while only points at least
    `radius` inside it are clear of the edge. Points beyond the expanded
    boundary are dropped. Containment includes the polygon edge.

    Args:
        lattice: (N, 2) array-like of points, same space as the boundary
        boundary: Polygon vertices or a shapely polygon
        radius: Tolerance distance; its sign is ignored

    Returns:
        Classification with disjoint interior and band sets
    """
    xy = np.asarray(lattice, dtype=float).reshape(-1, 2)
    polygon = boundary if isinstance(boundary, BaseGeometry) else make_polygon(boundary)
    radius = abs(radius)

    expanded = buffer_polygon(polygon, radius)
    contracted = buffer_polygon(polygon, -radius)

    inside_expanded = contained(expanded, xy)
    inside_contracted = np.zeros(len(xy), dtype=bool)
    inside_contracted[inside_expanded] = contained(contracted, xy[inside_expanded])

    band_mask = inside_expanded & ~inside_contracted

    logger.debug(
        "classified %d points: %d interior, %d band, %d discarded",
        len(xy), inside_contracted.sum(), band_mask.sum(), len(xy) - inside_expanded.sum(),
    )

    return Classification(
        interior=xy[inside_contracted],
        band=xy[band_mask],
        expanded=expanded,
        contracted=contracted,
    )
