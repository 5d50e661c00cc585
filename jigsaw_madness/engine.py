"""The puzzle engine: owns the pieces and turns pointer events into moves."""

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from . import groups, hittest, snapping, win
from .contour import piece_contour
from .geometry import Point, Size
from .pieces import create_pieces
from .settings import EngineConfig

logger = logging.getLogger(__name__)

_UNBOUNDED = (float("-inf"), float("inf"), float("-inf"), float("inf"))


@dataclass
class DragSession:
    piece_id: int
    group_id: int
    start_pointer: Point
    start_positions: Dict[int, Point]
    limits: Tuple[float, float, float, float] = _UNBOUNDED   # min_dx, max_dx, min_dy, max_dy

    def clamp(self, dx, dy):
        min_dx, max_dx, min_dy, max_dy = self.limits
        return max(min_dx, min(dx, max_dx)), max(min_dy, min(dy, max_dy))


def drag_limits(members, bounds):
    """Largest delta box that keeps every member inside ``bounds``."""
    if bounds is None:
        return _UNBOUNDED
    min_dx, max_dx, min_dy, max_dy = _UNBOUNDED
    for p in members:
        x, y = p.current_position
        min_dx = max(min_dx, bounds.left - x)
        max_dx = min(max_dx, bounds.right - p.width - x)
        min_dy = max(min_dy, bounds.top - y)
        max_dy = min(max_dy, bounds.bottom - p.height - y)
    return min_dx, max_dx, min_dy, max_dy


@dataclass
class PuzzleEngine:
    """Single writer for the board state.

    ``pieces`` is an immutable tuple that is replaced as a whole on every
    change, so readers can hold on to a snapshot safely.
    """

    _pieces: Tuple
    tab_size: float
    config: EngineConfig = field(default_factory=EngineConfig)
    _drag: Optional[DragSession] = None
    _solved: bool = False
    _listeners: list = field(default_factory=list)

    @classmethod
    def create(cls, rows, cols, piece_size, tab_size, board_origin=(0, 0),
               rng=None, shapes=None, config=None):
        if tab_size < 0:
            raise ValueError(f"Tab size must not be negative, got {tab_size}")
        pieces = create_pieces(rows, cols, piece_size, board_origin, rng=rng, shapes=shapes)
        logger.info("Created %dx%d puzzle, piece %s, tab %.1f", rows, cols, Size(*piece_size), tab_size)
        return cls(pieces, float(tab_size), config or EngineConfig())

    # --- Read side ---

    @property
    def pieces(self):
        return self._pieces

    @property
    def is_solved(self):
        return self._solved

    @property
    def dragging_group(self):
        return self._drag.group_id if self._drag else None

    def piece(self, piece_id):
        for p in self._pieces:
            if p.id == piece_id:
                return p
        raise KeyError(piece_id)

    def membership(self):
        return groups.membership(self._pieces)

    def render_order(self):
        return hittest.render_order(self._pieces, self.dragging_group)

    def connected_sides(self, piece_id):
        return groups.connected_sides(self._pieces, self.piece(piece_id), self.config.touch_tolerance)

    def contour(self, piece_id):
        p = self.piece(piece_id)
        return piece_contour(p.width, p.height, p.shape, self.tab_size)

    def piece_at(self, point):
        return hittest.piece_at(self._pieces, point, self.tab_size, self.dragging_group,
                                self.config.hit_margin_ratio, self.config.curve_samples)

    def on_solved(self, callback):
        """Register ``callback(engine)`` for the solved transition."""
        self._listeners.append(callback)
        return callback

    # --- Setup ---

    def scatter(self, positions):
        """Place loose pieces before play; ``positions`` maps id -> (x, y)."""
        sizes = {gid: len(groups.group_members(self._pieces, gid)) for gid in groups.group_ids(self._pieces)}
        updated = []
        for p in self._pieces:
            if p.id in positions:
                if sizes[p.group_id] > 1:
                    raise ValueError(f"Piece {p.id} is part of a group and cannot be placed alone")
                p = p.moved_to(positions[p.id])
            updated.append(p)
        self._pieces = tuple(updated)

    # --- Pointer events ---

    def pointer_down(self, point, bounds=None):
        """Start dragging the group under ``point``; returns the piece id hit."""
        point = Point(*point)
        piece_id = self.piece_at(point)
        if piece_id is None:
            return None
        group_id = self.piece(piece_id).group_id
        members = groups.group_members(self._pieces, group_id)
        self._drag = DragSession(
            piece_id=piece_id,
            group_id=group_id,
            start_pointer=point,
            start_positions={p.id: p.current_position for p in members},
            limits=drag_limits(members, bounds),
        )
        return piece_id

    def pointer_move(self, point):
        """Move the dragged group with the pointer, clamped to the drag limits."""
        drag = self._drag
        if drag is None:
            return
        dx, dy = drag.clamp(point[0] - drag.start_pointer.x, point[1] - drag.start_pointer.y)
        self._pieces = tuple(
            p.moved_to(drag.start_positions[p.id].shifted(dx, dy)) if p.id in drag.start_positions else p
            for p in self._pieces
        )

    def pointer_up(self):
        """End the drag and try to snap the dropped group; True if it merged."""
        drag = self._drag
        if drag is None:
            return False
        self._drag = None
        pieces, proposal = snapping.try_group_snap(
            self._pieces, drag.group_id, self.config.snap_distance, self.config.touch_tolerance)
        if proposal is None:
            return False
        self._pieces = pieces
        self.evaluate_win()
        return True

    def pointer_cancel(self):
        """Drop the group where it is, without snapping."""
        self._drag = None

    # --- Detach ---

    def detach(self, piece_id):
        """Pull one piece out of its group; False when it was alone."""
        piece = self.piece(piece_id)
        if self._drag is not None and self._drag.group_id == piece.group_id:
            self._drag = None
        pieces = groups.split_group(self._pieces, piece_id, self.config.detach_offset,
                                    self.config.touch_tolerance)
        if pieces is self._pieces:
            return False
        self._pieces = pieces
        if self._solved:
            logger.info("Puzzle broken up again by detaching piece %s", piece_id)
            self._solved = False
        return True

    def detach_at(self, point):
        piece_id = self.piece_at(point)
        if piece_id is None or not self.detach(piece_id):
            return None
        return piece_id

    # --- Win ---

    def evaluate_win(self):
        pieces, solved = win.evaluate(self._pieces, self.config.touch_tolerance, self.config.snap_distance)
        if not solved:
            return False
        self._pieces = pieces
        if not self._solved:
            self._solved = True
            logger.info("Puzzle solved")
            for callback in list(self._listeners):
                callback(self)
        return True
