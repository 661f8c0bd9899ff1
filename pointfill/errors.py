"""Exceptions raised by pointfill."""


class PatternError(Exception):
    """Base class for errors raised while generating a fill pattern."""


class InvalidBoundary(PatternError, ValueError):
    """The boundary is not a usable polygon (fewer than 3 vertices, malformed)."""


class InvalidStyle(PatternError, ValueError):
    """A style parameter is missing, unknown or out of range."""


class InvalidAspectRatio(PatternError, ValueError):
    """The aspect ratio is not a positive finite number."""


class LatticeTooLarge(PatternError):
    """The requested spacing would produce an unreasonably large lattice."""


class UnknownPattern(PatternError, KeyError):
    """No generator is registered under the requested name."""
