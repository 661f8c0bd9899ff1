"""Geometry utilities for pointfill."""

from .types import Point, Viewport
from .polygon import (
    boundary_coordinates,
    make_polygon,
    buffer_polygon,
    rotate,
    contained,
)

__all__ = [
    "Point",
    "Viewport",
    "boundary_coordinates",
    "make_polygon",
    "buffer_polygon",
    "rotate",
    "contained",
]
