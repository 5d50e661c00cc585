"""Completion check."""

import logging
import math
from dataclasses import replace

from .settings import SNAP_DISTANCE, TOUCH_TOLERANCE

logger = logging.getLogger(__name__)


def is_complete(pieces, tolerance=TOUCH_TOLERANCE):
    """One group, and every piece shifted from its solved spot by the same offset."""
    if not pieces or len({p.group_id for p in pieces}) != 1:
        return False
    ox, oy = pieces[0].offset
    return all(
        abs(p.offset.x - ox) < tolerance and abs(p.offset.y - oy) < tolerance
        for p in pieces
    )


def evaluate(pieces, tolerance=TOUCH_TOLERANCE, board_snap=SNAP_DISTANCE):
    """Return ``(pieces, solved)``.

    A complete puzzle gets every piece marked solved. If the assembled
    block sits within ``board_snap`` of the reference area it is also
    moved exactly onto it; otherwise it stays where it was dropped.
    """
    if not is_complete(pieces, tolerance):
        return pieces, False
    ox, oy = pieces[0].offset
    on_board = math.hypot(ox, oy) < board_snap
    if on_board:
        solved = tuple(replace(p, current_position=p.solved_position, is_solved=True) for p in pieces)
    else:
        solved = tuple(replace(p, is_solved=True) for p in pieces)
    logger.debug("Puzzle complete, offset (%.1f, %.1f)%s", ox, oy, " snapped to board" if on_board else "")
    return solved, True
