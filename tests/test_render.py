"""Cut-outs and board drawing on off-screen surfaces."""

from __future__ import annotations

import random

import pygame
from PIL import Image

from jigsaw_madness import render
from jigsaw_madness.edges import EdgeType, PieceShape
from jigsaw_madness.engine import PuzzleEngine

BACKGROUND = (40, 40, 40)


def _picture(width=200, height=200):
    return Image.new("RGBA", (width, height), (200, 30, 30, 255))


def test_fit_image_preserves_aspect() -> None:
    """A wide picture is scaled to the target width and centred vertically."""
    scaled, rect = render.fit_image(Image.new("RGB", (400, 200)), (10, 20, 200, 200))
    assert scaled.size == (200, 100)
    assert rect == (10, 70, 200, 100)
    assert scaled.mode == "RGBA"


def test_cut_piece_is_masked_to_outline(make_piece) -> None:
    """Pixels inside the outline are opaque, the bleed around it is clear."""
    piece = make_piece(0, (0, 0), PieceShape(right=EdgeType.TAB))
    cut = render.cut_piece(_picture(), piece, 25)
    bleed = render.bleed_for(25)
    assert cut.size == (100 + 2 * bleed, 100 + 2 * bleed)
    assert cut.getpixel((bleed + 50, bleed + 50))[3] == 255
    assert cut.getpixel((2, 2))[3] == 0
    knob = (bleed + 100 + 20, bleed + 50)
    assert cut.getpixel(knob)[3] == 255


def test_draw_board_paints_pieces() -> None:
    """Every piece shows up on the surface at its current position."""
    engine = PuzzleEngine.create(1, 2, (100, 100), 25, rng=random.Random(3))
    engine.scatter({0: (50, 50), 1: (300, 50)})
    sprites = render.PieceSprites(_picture(), engine.pieces, engine.tab_size)
    screen = pygame.Surface((500, 300))
    screen.fill(BACKGROUND)
    render.draw_board(screen, engine, sprites)
    assert screen.get_at((100, 100))[:3] == (200, 30, 30)
    assert screen.get_at((350, 100))[:3] == (200, 30, 30)
    assert screen.get_at((250, 250))[:3] == BACKGROUND


def test_joined_pieces_have_no_seam() -> None:
    """The shared side of two merged pieces is not stroked."""
    engine = PuzzleEngine.create(1, 3, (100, 100), 25, rng=random.Random(3))
    engine.scatter({0: (50, 50), 1: (153, 50), 2: (300, 200)})
    assert engine.pointer_down((203, 100)) == 1
    engine.pointer_up()
    assert engine.piece(0).group_id == engine.piece(1).group_id
    sprites = render.PieceSprites(_picture(), engine.pieces, engine.tab_size)
    screen = pygame.Surface((400, 300))
    screen.fill(BACKGROUND)
    render.draw_board(screen, engine, sprites)
    # Seam at x = 150, away from the knob in the middle of the side.
    assert screen.get_at((150, 60))[:3] != render.OUTLINE_COLOR
    assert screen.get_at((100, 50))[:3] == render.OUTLINE_COLOR


def test_cut_lines_preview() -> None:
    """The preview strokes the outline of every piece at its solved spot."""
    engine = PuzzleEngine.create(2, 2, (100, 100), 25, board_origin=(20, 20), rng=random.Random(4))
    screen = pygame.Surface((300, 300))
    screen.fill(BACKGROUND)
    render.draw_cut_lines(screen, engine.pieces, engine.tab_size)
    assert screen.get_at((20, 60))[:3] == render.CUT_LINE_COLOR
    assert screen.get_at((70, 70))[:3] == BACKGROUND
