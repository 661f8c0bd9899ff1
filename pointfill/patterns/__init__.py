"""Fill pattern generators."""

from .lattice import generate_lattice, fudge_factor
from .classify import classify, Classification
from .points import make_pattern, marker_radius, suppress_band, band_as_interior
from .registry import PatternTable, default_patterns

__all__ = [
    "generate_lattice",
    "fudge_factor",
    "classify",
    "Classification",
    "make_pattern",
    "marker_radius",
    "suppress_band",
    "band_as_interior",
    "PatternTable",
    "default_patterns",
]
