"""Drawing pieces with pygame; cut-outs are made with Pillow."""

import math

import numpy as np
import pygame
from PIL import Image, ImageChops, ImageDraw, ImageOps

from .contour import fill_polygon, piece_contour, stroke_runs

OUTLINE_COLOR = (0, 0, 0)
DRAG_OUTLINE_COLOR = (255, 215, 0)
CUT_LINE_COLOR = (255, 255, 255)
GHOST_ALPHA = 38


def fit_image(image, target_rect):
    """Scale ``image`` into ``target_rect`` keeping its aspect ratio, centred.

    Returns the scaled image and its (x, y, width, height) on screen.
    """
    x, y, width, height = target_rect
    scaled = ImageOps.contain(image.convert("RGBA"), (int(width), int(height)))
    new_x = x + (width - scaled.width) // 2
    new_y = y + (height - scaled.height) // 2
    return scaled, (new_x, new_y, scaled.width, scaled.height)


def bleed_for(tab_size):
    # The knob reaches a little past one tab size; two leave room for the stroke.
    return int(math.ceil(tab_size * 2))


def cut_piece(image, piece, tab_size):
    """RGBA cut-out of one piece, ``bleed_for(tab_size)`` pixels of margin on each side."""
    bleed = bleed_for(tab_size)
    w, h = piece.width, piece.height
    left = int(round(piece.col * w)) - bleed
    top = int(round(piece.row * h)) - bleed
    box_w = int(math.ceil(w)) + 2 * bleed
    box_h = int(math.ceil(h)) + 2 * bleed
    # Areas outside the image come back fully transparent.
    region = image.convert("RGBA").crop((left, top, left + box_w, top + box_h))

    poly = fill_polygon(piece_contour(w, h, piece.shape, tab_size)) + bleed
    mask = Image.new("L", region.size, 0)
    ImageDraw.Draw(mask).polygon([tuple(pt) for pt in poly], fill=255)
    region.putalpha(ImageChops.multiply(region.getchannel("A"), mask))
    return region


def to_surface(image):
    return pygame.image.frombytes(image.tobytes(), image.size, "RGBA")


class PieceSprites:
    """Cached pygame surfaces, one per piece, built from the fitted image."""

    def __init__(self, image, pieces, tab_size):
        self.tab_size = tab_size
        self.bleed = bleed_for(tab_size)
        self.surfaces = {p.id: to_surface(cut_piece(image, p, tab_size)) for p in pieces}

    def blit(self, screen, piece):
        x, y = piece.current_position
        screen.blit(self.surfaces[piece.id], (round(x) - self.bleed, round(y) - self.bleed))


def draw_outline(screen, engine, piece, color, width=1):
    """Stroke only the sides of ``piece`` not joined to a group mate."""
    x, y = piece.current_position
    runs = stroke_runs(engine.contour(piece.id), engine.connected_sides(piece.id))
    for run in runs:
        pygame.draw.lines(screen, color, False, (run + np.array([x, y])).tolist(), width)


def draw_board(screen, engine, sprites):
    """Draw every group bottom to top; solved groups get no outline."""
    pieces = engine.pieces
    dragging = engine.dragging_group
    for group_id in engine.render_order():
        members = [p for p in pieces if p.group_id == group_id]
        for p in members:
            sprites.blit(screen, p)
        if members[0].is_solved:
            continue
        color = DRAG_OUTLINE_COLOR if group_id == dragging else OUTLINE_COLOR
        for p in members:
            draw_outline(screen, engine, p, color, 2 if group_id == dragging else 1)


def draw_cut_lines(screen, pieces, tab_size, color=CUT_LINE_COLOR):
    """Outline every piece at its solved position (preview of the cut)."""
    for p in pieces:
        poly = fill_polygon(piece_contour(p.width, p.height, p.shape, tab_size)) + np.array(p.solved_position)
        pygame.draw.polygon(screen, color, poly.tolist(), 1)


def ghost_surface(image):
    """Faint copy of the picture to lay under the board."""
    surface = to_surface(image)
    surface.set_alpha(GHOST_ALPHA)
    return surface
