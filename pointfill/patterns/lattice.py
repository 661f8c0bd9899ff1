"""Candidate lattice for point patterns.

The lattice is built in an isotropic space: x is normalized x, and
normalized y is isotropic y times the aspect ratio (width / height). A
square grid there is a square grid on screen.
"""

import logging
import math
from typing import Optional, Tuple

import numpy as np

from ..errors import LatticeTooLarge

logger = logging.getLogger(__name__)

# Narrowest range the lattice spans on either axis
MIN_LATTICE_EXTENT = 2.0

# Guard against spacings so small the lattice would exhaust memory
MAX_LATTICE_POINTS = 4_000_000

# (x_lo, x_hi, y_lo, y_hi) in isotropic space
Region = Tuple[float, float, float, float]


def fudge_factor(aspect_ratio: float) -> float:
    """Margin multiplier that grows as the viewport departs from square."""
    return max(aspect_ratio, 1.0 / aspect_ratio)


def lattice_bounds(
    spacing: float,
    aspect_ratio: float,
    radius: float,
    fudge_factor: float,
    region: Optional[Region] = None,
) -> Region:
    """Isotropic-space range (x_lo, x_hi, y_lo, y_hi) the lattice must span.

    Without a region the range holds [-margin, 1/aspect_ratio + margin] on
    both axes and the square around the pattern center that encloses the
    rotated viewport, so any rotation about that center still covers the
    whole viewport.

    With a region, the only part of the lattice that can land inside the
    expanded boundary once rotated, the range is that region padded by one
    step. The margin range is skipped there: it grows with the square of an
    extreme aspect ratio and adds nothing but discarded points.
    """
    if region is not None:
        x_lo, x_hi, y_lo, y_hi = region
        return (x_lo - spacing, x_hi + spacing, y_lo - spacing, y_hi + spacing)

    # One extra step leaves room for the origin shift
    margin = radius * fudge_factor + spacing
    cx, cy = 0.5, 0.5 / aspect_ratio
    half = max(MIN_LATTICE_EXTENT / 2, math.hypot(cx, cy) + margin)

    lo = -margin
    hi = 1.0 / aspect_ratio + margin
    return (
        min(lo, cx - half),
        max(hi, cx + half),
        min(lo, cy - half),
        max(hi, cy + half),
    )


def generate_lattice(
    spacing: float,
    aspect_ratio: float,
    radius: float,
    fudge_factor: float,
    origin: Tuple[float, float] = (0.0, 0.0),
    region: Optional[Region] = None,
) -> np.ndarray:
    """Generate a square grid of candidate points.

    Args:
        spacing: Step between neighbouring points along both axes
        aspect_ratio: Viewport width over height
        radius: Marker radius, widens the margin around the viewport
        fudge_factor: Margin multiplier, see fudge_factor()
        origin: Normalized point the grid passes through
        region: Isotropic-space box the lattice must cover, see lattice_bounds()

    Returns:
        (N, 2) array of isotropic-space points, rows of constant y in
        increasing order. Empty when spacing is not a positive number.

    Raises:
        LatticeTooLarge: if the grid would exceed MAX_LATTICE_POINTS
    """
    if not (spacing > 0 and math.isfinite(spacing)):
        logger.debug("spacing %r gives no lattice", spacing)
        return np.empty((0, 2))

    x_lo, x_hi, y_lo, y_hi = lattice_bounds(spacing, aspect_ratio, radius, fudge_factor, region)

    # Only the phase of the origin matters on a periodic grid
    ox = origin[0] % spacing
    oy = (origin[1] / aspect_ratio) % spacing

    i = np.arange(math.floor((x_lo - ox) / spacing), math.ceil((x_hi - ox) / spacing) + 1)
    j = np.arange(math.floor((y_lo - oy) / spacing), math.ceil((y_hi - oy) / spacing) + 1)

    count = len(i) * len(j)
    if count > MAX_LATTICE_POINTS:
        raise LatticeTooLarge(
            f"a {x_hi - x_lo:g} x {y_hi - y_lo:g} lattice at spacing {spacing:g} needs "
            f"{count} points (limit {MAX_LATTICE_POINTS})"
        )

    xs, ys = np.meshgrid(i * spacing + ox, j * spacing + oy)
    logger.debug("lattice of %d x %d points at spacing %g", len(i), len(j), spacing)
    return np.column_stack([xs.ravel(), ys.ravel()])
