"""Small value types shared across the engine."""

from typing import NamedTuple


class Point(NamedTuple):
    x: float
    y: float

    def shifted(self, dx, dy):
        return Point(self.x + dx, self.y + dy)

    def offset_from(self, other):
        """Return the (dx, dy) that takes ``other`` to this point."""
        return Point(self.x - other.x, self.y - other.y)


class Size(NamedTuple):
    width: float
    height: float


class Bounds(NamedTuple):
    """Axis-aligned viewport rectangle in board space."""

    left: float
    top: float
    right: float
    bottom: float
