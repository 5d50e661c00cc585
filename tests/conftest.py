"""Shared fixtures."""

from __future__ import annotations

import pytest

from jigsaw_madness.edges import PieceShape
from jigsaw_madness.geometry import Point, Size
from jigsaw_madness.pieces import Piece


@pytest.fixture
def make_piece():
    """Factory for hand-placed 100x100 pieces."""

    def _make(piece_id, position, shape=None, group_id=None, row=0, col=0, solved=None):
        position = Point(*position)
        return Piece(
            id=piece_id,
            row=row,
            col=col,
            shape=shape or PieceShape(),
            size=Size(100, 100),
            current_position=position,
            solved_position=Point(*(solved or position)),
            group_id=piece_id if group_id is None else group_id,
        )

    return _make
