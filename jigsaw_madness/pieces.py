"""Piece records and puzzle creation."""

import random
from dataclasses import dataclass, replace

from .edges import PieceShape, generate_edge_pattern
from .geometry import Point, Size
from .settings import TAB_RATIO


@dataclass(frozen=True)
class Piece:
    id: int
    row: int
    col: int
    shape: PieceShape
    size: Size
    current_position: Point
    solved_position: Point
    group_id: int
    is_solved: bool = False

    @property
    def width(self):
        return self.size.width

    @property
    def height(self):
        return self.size.height

    @property
    def offset(self):
        """Translation from the solved position to the current one."""
        return self.current_position.offset_from(self.solved_position)

    def moved_by(self, dx, dy):
        return replace(self, current_position=self.current_position.shifted(dx, dy))

    def moved_to(self, position):
        return replace(self, current_position=Point(*position))


def puzzle_dimensions(image_width, image_height, rows, cols, tab_ratio=TAB_RATIO):
    """Piece size and tab size for an image cut into rows x cols."""
    if rows <= 0 or cols <= 0:
        raise ValueError(f"Grid must be at least 1x1, got {rows}x{cols}")
    piece = Size(image_width / cols, image_height / rows)
    if image_width <= 0 or image_height <= 0:
        return piece, 0.0
    return piece, min(piece.width, piece.height) * tab_ratio


def create_pieces(rows, cols, piece_size, board_origin=(0, 0), rng=None, shapes=None):
    """Create every piece at its solved position, each in its own group.

    ``shapes`` overrides the random edge pattern (rows x cols of PieceShape).
    """
    piece_size = Size(*piece_size)
    if piece_size.width <= 0 or piece_size.height <= 0:
        raise ValueError(f"Piece size must be positive, got {piece_size}")
    if shapes is None:
        shapes = generate_edge_pattern(rows, cols, rng or random.Random())
    elif len(shapes) != rows or any(len(row) != cols for row in shapes):
        raise ValueError(f"Expected {rows}x{cols} shapes")
    ox, oy = board_origin

    pieces = []
    for r in range(rows):
        for c in range(cols):
            solved = Point(ox + c * piece_size.width, oy + r * piece_size.height)
            piece_id = len(pieces)
            pieces.append(Piece(
                id=piece_id,
                row=r,
                col=c,
                shape=shapes[r][c],
                size=piece_size,
                current_position=solved,
                solved_position=solved,
                group_id=piece_id,
            ))
    return tuple(pieces)
