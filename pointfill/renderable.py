"""Renderable output of pattern generators.

A PatternGroup is what a generator hands to a rendering backend: zero or more
styled point layers in normalized viewport coordinates. An empty group is a
valid result meaning "nothing to draw".
"""

from dataclasses import dataclass, field
from typing import Iterator, Tuple

import numpy as np

from .style import PatternStyle


@dataclass(frozen=True, eq=False)
class PointLayer:
    """
    A set of markers sharing one style.

    Attributes:
        name: Layer role, e.g. "interior" or "band"
        points: (N, 2) array of marker centers in normalized coordinates
        size: Marker diameter, in units of the viewport's shorter side
        style: Appearance of the markers
    """
    name: str
    points: np.ndarray
    size: float
    style: PatternStyle

    def __len__(self) -> int:
        return len(self.points)


@dataclass(frozen=True)
class PatternGroup:
    """Drawable group of point layers."""
    layers: Tuple[PointLayer, ...] = field(default_factory=tuple)

    @classmethod
    def empty(cls) -> "PatternGroup":
        return cls(())

    @property
    def is_empty(self) -> bool:
        return all(len(layer) == 0 for layer in self.layers)

    def layer(self, name: str) -> PointLayer:
        for layer in self.layers:
            if layer.name == name:
                return layer
        raise KeyError(name)

    def __iter__(self) -> Iterator[PointLayer]:
        return iter(self.layers)

    def __len__(self) -> int:
        return len(self.layers)
