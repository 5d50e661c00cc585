"""Interactive pygame board driving a PuzzleEngine."""

import logging
import random

import pygame
from PIL import Image

from . import render
from .engine import PuzzleEngine
from .geometry import Bounds
from .pieces import puzzle_dimensions
from .settings import (DOUBLE_CLICK_MS, FPS, HEADER_RESERVED_SPACE, SCREEN_HEIGHT,
                       SCREEN_WIDTH)

logger = logging.getLogger(__name__)

SOLVED_RECT = ((SCREEN_WIDTH - SCREEN_WIDTH // 2) // 2,
               (SCREEN_HEIGHT - SCREEN_HEIGHT // 2) // 2,
               SCREEN_WIDTH // 2, SCREEN_HEIGHT // 2)
BOARD_BOUNDS = Bounds(0, HEADER_RESERVED_SPACE, SCREEN_WIDTH, SCREEN_HEIGHT)


def random_position_outside(solved_rect, piece_width, piece_height, rng, attempts=10):
    """Random top-left for a piece, preferring spots off the reference image."""
    sx, sy, sw, sh = solved_rect
    max_x = max(0, SCREEN_WIDTH - piece_width)
    max_y = max(HEADER_RESERVED_SPACE, SCREEN_HEIGHT - piece_height)
    x, y = 0, HEADER_RESERVED_SPACE
    for _ in range(attempts):
        x = rng.uniform(0, max_x)
        y = rng.uniform(HEADER_RESERVED_SPACE, max_y)
        overlaps = x < sx + sw and x + piece_width > sx and y < sy + sh and y + piece_height > sy
        if not overlaps or rng.random() < 0.1:
            break
    return x, y


class PuzzleApp:
    def __init__(self, image_path, rows, cols, seed=None):
        self.rng = random.Random(seed)
        picture, (ox, oy, width, height) = render.fit_image(Image.open(image_path), SOLVED_RECT)
        piece_size, tab_size = puzzle_dimensions(width, height, rows, cols)
        self.engine = PuzzleEngine.create(rows, cols, piece_size, tab_size,
                                          board_origin=(ox, oy), rng=self.rng)
        self.engine.on_solved(self._solved)
        self.solved_rect = (ox, oy, width, height)
        self.state = "preview"       # preview, playing
        self.show_win_message = False
        self._last_click = (-DOUBLE_CLICK_MS, None)

        self.screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        pygame.display.set_caption("Jigsaw Madness")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("arial", 72)
        self.sprites = render.PieceSprites(picture, self.engine.pieces, tab_size)
        self.ghost = render.ghost_surface(picture)

    def _solved(self, engine):
        self.show_win_message = True

    def start(self):
        positions = {
            p.id: random_position_outside(self.solved_rect, p.width, p.height, self.rng)
            for p in self.engine.pieces
        }
        self.engine.scatter(positions)
        self.state = "playing"
        logger.info("Scattered %d pieces", len(positions))

    # --- Events ---

    def handle_event(self, event):
        if self.state == "preview":
            if event.type in (pygame.MOUSEBUTTONDOWN, pygame.KEYDOWN):
                self.start()
            return
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            now = pygame.time.get_ticks()
            last_time, last_pos = self._last_click
            self._last_click = (now, event.pos)
            if now - last_time < DOUBLE_CLICK_MS and last_pos == event.pos:
                if self.engine.detach_at(event.pos) is not None:
                    self.show_win_message = False
                return
            self.engine.pointer_down(event.pos, BOARD_BOUNDS)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 3:
            if self.engine.detach_at(event.pos) is not None:
                self.show_win_message = False
        elif event.type == pygame.MOUSEMOTION:
            self.engine.pointer_move(event.pos)
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self.engine.pointer_up()
        elif event.type == pygame.WINDOWLEAVE:
            self.engine.pointer_cancel()

    # --- Drawing ---

    def draw(self):
        self.screen.fill((40, 40, 40))
        ox, oy = self.solved_rect[:2]
        self.screen.blit(self.ghost, (ox, oy))
        if self.state == "preview":
            self.draw_preview()
        else:
            render.draw_board(self.screen, self.engine, self.sprites)
        if self.show_win_message:
            text = self.font.render("Congratulations!", True, (255, 215, 0))
            sx, sy, sw, sh = self.solved_rect
            self.screen.blit(text, text.get_rect(center=(sx + sw // 2, sy + sh // 2)))

    def draw_preview(self):
        for p in self.engine.pieces:
            self.sprites.blit(self.screen, p)
        render.draw_cut_lines(self.screen, self.engine.pieces, self.engine.tab_size)

    def run(self):
        while True:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return
                self.handle_event(event)
            self.draw()
            pygame.display.flip()
            self.clock.tick(FPS)
