"""Edge types and the interlocking edge pattern for a rows x cols grid."""

import enum
import random
from dataclasses import dataclass

SIDES = ("top", "right", "bottom", "left")
OPPOSITE = {"top": "bottom", "right": "left", "bottom": "top", "left": "right"}


class EdgeType(enum.Enum):
    TAB = "tab"
    SLOT = "slot"
    FLAT = "flat"

    @property
    def sign(self):
        """Direction of the bulge: +1 outward, -1 inward, 0 straight."""
        return _SIGNS[self]

    @property
    def complement(self):
        return _COMPLEMENTS[self]


_SIGNS = {EdgeType.TAB: 1, EdgeType.SLOT: -1, EdgeType.FLAT: 0}
_COMPLEMENTS = {EdgeType.TAB: EdgeType.SLOT, EdgeType.SLOT: EdgeType.TAB, EdgeType.FLAT: EdgeType.FLAT}

# Pairs of edges that may sit against each other.
COMPATIBLE = frozenset({
    (EdgeType.TAB, EdgeType.SLOT),
    (EdgeType.SLOT, EdgeType.TAB),
    (EdgeType.FLAT, EdgeType.FLAT),
})


def edges_compatible(first, second):
    return (first, second) in COMPATIBLE


@dataclass(frozen=True)
class PieceShape:
    top: EdgeType = EdgeType.FLAT
    right: EdgeType = EdgeType.FLAT
    bottom: EdgeType = EdgeType.FLAT
    left: EdgeType = EdgeType.FLAT

    def __getitem__(self, side):
        if side not in SIDES:
            raise KeyError(side)
        return getattr(self, side)


def generate_edge_pattern(rows, cols, rng=None):
    """Return a rows x cols list of PieceShape with complementary shared edges.

    Every internal edge gets exactly one random draw. The piece to the
    left of (or above) the edge reads the draw as is, the piece on the
    other side reads its complement. Border sides are always flat.
    """
    if rows <= 0 or cols <= 0:
        raise ValueError(f"Grid must be at least 1x1, got {rows}x{cols}")
    rng = rng or random.Random()
    choices = (EdgeType.TAB, EdgeType.SLOT)

    # vertical[r][c]: edge between (r, c) and (r, c + 1)
    vertical = [[rng.choice(choices) for _ in range(cols - 1)] for _ in range(rows)]
    # horizontal[r][c]: edge between (r, c) and (r + 1, c)
    horizontal = [[rng.choice(choices) for _ in range(cols)] for _ in range(rows - 1)]

    shapes = []
    for r in range(rows):
        row = []
        for c in range(cols):
            row.append(PieceShape(
                top=EdgeType.FLAT if r == 0 else horizontal[r - 1][c].complement,
                right=EdgeType.FLAT if c == cols - 1 else vertical[r][c],
                bottom=EdgeType.FLAT if r == rows - 1 else horizontal[r][c],
                left=EdgeType.FLAT if c == 0 else vertical[r][c - 1].complement,
            ))
        shapes.append(row)
    return shapes
