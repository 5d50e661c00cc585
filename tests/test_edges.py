"""Edge pattern generation tests."""

from __future__ import annotations

import random

import pytest

from jigsaw_madness.edges import (OPPOSITE, SIDES, EdgeType, PieceShape, edges_compatible,
                                  generate_edge_pattern)


@pytest.mark.parametrize("rows,cols,seed", [(2, 2, 1), (3, 5, 7), (6, 4, 42), (1, 8, 3), (8, 1, 9)])
def test_shared_edges_are_complementary(rows: int, cols: int, seed: int) -> None:
    """Both sides of every internal edge fit together."""
    shapes = generate_edge_pattern(rows, cols, random.Random(seed))
    for r in range(rows):
        for c in range(cols):
            if c + 1 < cols:
                assert shapes[r][c].right.complement is shapes[r][c + 1].left
                assert edges_compatible(shapes[r][c].right, shapes[r][c + 1].left)
                assert shapes[r][c].right is not EdgeType.FLAT
            if r + 1 < rows:
                assert shapes[r][c].bottom.complement is shapes[r + 1][c].top
                assert edges_compatible(shapes[r][c].bottom, shapes[r + 1][c].top)
                assert shapes[r][c].bottom is not EdgeType.FLAT


def test_border_sides_are_flat() -> None:
    """Every side facing the outside of the grid is flat."""
    rows, cols = 4, 5
    shapes = generate_edge_pattern(rows, cols, random.Random(0))
    for c in range(cols):
        assert shapes[0][c].top is EdgeType.FLAT
        assert shapes[rows - 1][c].bottom is EdgeType.FLAT
    for r in range(rows):
        assert shapes[r][0].left is EdgeType.FLAT
        assert shapes[r][cols - 1].right is EdgeType.FLAT


def test_single_piece_is_all_flat() -> None:
    """A 1x1 grid is one flat rectangle."""
    assert generate_edge_pattern(1, 1) == [[PieceShape()]]


def test_one_draw_per_shared_edge() -> None:
    """The generator draws once per internal edge, not once per piece."""

    class CountingRandom(random.Random):
        calls = 0

        def choice(self, seq):
            CountingRandom.calls += 1
            return super().choice(seq)

    rows, cols = 3, 4
    generate_edge_pattern(rows, cols, CountingRandom(5))
    assert CountingRandom.calls == rows * (cols - 1) + (rows - 1) * cols


def test_invalid_grid_raises() -> None:
    """Empty grids are rejected."""
    with pytest.raises(ValueError):
        generate_edge_pattern(0, 3)
    with pytest.raises(ValueError):
        generate_edge_pattern(2, -1)


def test_compatibility_table() -> None:
    """Tab fits slot, flat fits flat, nothing else fits."""
    assert edges_compatible(EdgeType.TAB, EdgeType.SLOT)
    assert edges_compatible(EdgeType.SLOT, EdgeType.TAB)
    assert edges_compatible(EdgeType.FLAT, EdgeType.FLAT)
    assert not edges_compatible(EdgeType.TAB, EdgeType.TAB)
    assert not edges_compatible(EdgeType.SLOT, EdgeType.SLOT)
    assert not edges_compatible(EdgeType.TAB, EdgeType.FLAT)
    assert not edges_compatible(EdgeType.FLAT, EdgeType.SLOT)


def test_shape_lookup_by_side() -> None:
    """PieceShape can be read by side name."""
    shape = PieceShape(top=EdgeType.TAB, right=EdgeType.SLOT)
    assert [shape[s] for s in SIDES] == [EdgeType.TAB, EdgeType.SLOT, EdgeType.FLAT, EdgeType.FLAT]
    assert OPPOSITE["left"] == "right"
    with pytest.raises(KeyError):
        shape["middle"]
