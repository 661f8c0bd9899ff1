"""
Pattern table mapping pattern names to generator functions.

A table is built once (usually with default_patterns()) and handed to
whatever renders shapes; there is no process-wide registry.
"""

from typing import Callable, Dict, Iterator, List, Optional

from ..errors import UnknownPattern
from ..geometry.polygon import Boundary
from ..renderable import PatternGroup
from ..style import PatternStyle
from .points import make_pattern

PatternGenerator = Callable[[PatternStyle, Boundary, float, bool], PatternGroup]


def _normalize_key(name: str) -> str:
    return name.replace("-", "_").lower()


class PatternTable:
    """
    Named pattern generators.

    Every generator takes (style, boundary, aspect_ratio, legend_mode) and
    returns a PatternGroup.
    """

    def __init__(self, generators: Optional[Dict[str, PatternGenerator]] = None):
        self._generators: Dict[str, PatternGenerator] = {}
        for name, generator in (generators or {}).items():
            self.register(name, generator)

    def register(self, name: str, generator: PatternGenerator) -> None:
        """
        Register a generator under a name, replacing any previous one.

        Raises:
            TypeError: If generator is not callable
        """
        if not callable(generator):
            raise TypeError(f"pattern generator for {name!r} must be callable")
        self._generators[_normalize_key(name)] = generator

    def unregister(self, name: str) -> None:
        self._generators.pop(_normalize_key(name), None)

    def get(self, name: str) -> PatternGenerator:
        """
        Look up a generator.

        Raises:
            UnknownPattern: If nothing is registered under the name
        """
        key = _normalize_key(name)
        if key not in self._generators:
            raise UnknownPattern(f"pattern {name!r} is not registered")
        return self._generators[key]

    def names(self) -> List[str]:
        return sorted(self._generators)

    def __contains__(self, name: str) -> bool:
        return _normalize_key(name) in self._generators

    def __len__(self) -> int:
        return len(self._generators)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())


def default_patterns() -> PatternTable:
    """A fresh table holding the built-in patterns."""
    return PatternTable({"points": make_pattern})
