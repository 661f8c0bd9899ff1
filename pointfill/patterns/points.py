"""Points pattern: a rotated grid of markers kept inside a boundary.

Markers are kept or dropped whole; nothing is clipped at the edge. Points
close to the edge (the band) are handed to a band treatment which by default
drops them, since a marker straddling the edge cannot be drawn correctly
without partial clipping.
"""

import logging
import math
from typing import Callable, List, Optional

import numpy as np
from shapely.geometry import Polygon

from ..errors import InvalidAspectRatio
from ..geometry.polygon import Boundary, make_polygon, rotate
from ..renderable import PatternGroup, PointLayer
from ..style import PatternStyle
from .classify import classify
from .lattice import Region, fudge_factor, generate_lattice

logger = logging.getLogger(__name__)

BandTreatment = Callable[[np.ndarray, PatternStyle, float], Optional[PointLayer]]


def suppress_band(band: np.ndarray, style: PatternStyle, size: float) -> Optional[PointLayer]:
    """Drop the markers near the edge."""
    return None


def band_as_interior(band: np.ndarray, style: PatternStyle, size: float) -> Optional[PointLayer]:
    """Draw the markers near the edge like the interior ones, overhang included."""
    return PointLayer("band", band, size, style)


def marker_radius(style: PatternStyle, aspect_ratio: float) -> float:
    """Marker radius in units of the viewport's shorter side."""
    radius = style.spacing * style.density / 2
    if aspect_ratio > 1:
        radius *= aspect_ratio
    return radius


def candidate_region(polygon: Polygon, radius: float, angle: float, aspect_ratio: float) -> Region:
    """Isotropic-space box of the lattice points that can matter.

    Any lattice point that lands within `radius` of the polygon after the
    vertical scaling and the rotation by `angle` starts inside this box.
    """
    min_x, min_y, max_x, max_y = polygon.bounds
    corners = [
        (min_x - radius, min_y - radius),
        (max_x + radius, min_y - radius),
        (max_x + radius, max_y + radius),
        (min_x - radius, max_y + radius),
    ]
    # Undo the rotation, then the vertical scaling
    unturned = rotate(corners, -angle, aspect_ratio)
    unturned[:, 1] /= aspect_ratio
    return (
        float(unturned[:, 0].min()),
        float(unturned[:, 0].max()),
        float(unturned[:, 1].min()),
        float(unturned[:, 1].max()),
    )


def make_pattern(
    style: PatternStyle,
    boundary: Boundary,
    aspect_ratio: float,
    legend_mode: bool = False,
    band_treatment: BandTreatment = suppress_band,
) -> PatternGroup:
    """
    Fill a boundary with a grid of point markers.

    Args:
        style: Pattern appearance and placement
        boundary: Closed polygon in normalized viewport coordinates
        aspect_ratio: Viewport width over height
        legend_mode: True when drawing a legend swatch; the caller supplies
            the swatch boundary and aspect ratio, generation is unchanged
        band_treatment: Turns the near-edge points into an optional layer

    Returns:
        PatternGroup with an "interior" layer and whatever the band treatment
        adds; empty when no marker fits

    Raises:
        InvalidBoundary: if the boundary has fewer than 3 vertices or is malformed
        InvalidAspectRatio: if aspect_ratio is not a positive finite number
        LatticeTooLarge: if the spacing is too small for the boundary
    """
    polygon = make_polygon(boundary)

    if not (aspect_ratio > 0 and math.isfinite(aspect_ratio)):
        raise InvalidAspectRatio(f"aspect ratio must be positive and finite, got {aspect_ratio!r}")

    logger.debug(
        "points pattern: spacing=%g density=%g angle=%g aspect_ratio=%g legend=%s",
        style.spacing, style.density, style.angle, aspect_ratio, legend_mode,
    )

    radius = marker_radius(style, aspect_ratio)
    if radius <= 0:
        # Zero spacing or zero density: markers would have no size
        logger.debug("radius %g gives no markers", radius)
        return PatternGroup.empty()

    lattice = generate_lattice(
        style.spacing,
        aspect_ratio,
        radius,
        fudge_factor(aspect_ratio),
        origin=(style.x_offset, style.y_offset),
        region=candidate_region(polygon, radius, style.effective_angle, aspect_ratio),
    )
    if len(lattice) == 0:
        return PatternGroup.empty()

    # Isotropic space to normalized coordinates, then turn about the center
    lattice[:, 1] *= aspect_ratio
    points = rotate(lattice, style.effective_angle, aspect_ratio)

    classification = classify(points, polygon, radius)

    size = 2 * radius
    layers: List[PointLayer] = []
    if len(classification.interior):
        layers.append(PointLayer("interior", classification.interior, size, style))

    band_layer = band_treatment(classification.band, style, size)
    if band_layer is not None and len(band_layer):
        layers.append(band_layer)

    return PatternGroup(tuple(layers))
