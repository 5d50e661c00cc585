"""Snap detection and merge validation for a dropped group."""

import logging
from typing import NamedTuple

from .edges import OPPOSITE, edges_compatible
from .geometry import Point
from .groups import group_members, merge_groups
from .settings import SNAP_DISTANCE, TOUCH_TOLERANCE

logger = logging.getLogger(__name__)

# Where the other piece has to sit, in piece widths and heights, for a
# dragged side to meet it. Scan order matters.
_STEPS = (("right", 1, 0), ("left", -1, 0), ("bottom", 0, 1), ("top", 0, -1))

# (dragged side, other side, dx, dy)
RELATIONS = tuple((side, OPPOSITE[side], kx, ky) for side, kx, ky in _STEPS)


class SnapProposal(NamedTuple):
    piece_id: int
    target_id: int
    target_group: int
    delta: Point


def _gap(piece, other, kx, ky, position=None):
    x, y = position or piece.current_position
    return Point(
        other.current_position.x - (x + kx * piece.width),
        other.current_position.y - (y + ky * piece.height),
    )


def find_snap(pieces, group_id, snap_distance=SNAP_DISTANCE):
    """First compatible neighbour within ``snap_distance`` of the group.

    Dragged members are scanned in order, each against every piece of
    any other group, each pair through RELATIONS. The first hit wins,
    even if a closer one exists further down the scan.
    """
    dragged = group_members(pieces, group_id)
    others = [p for p in pieces if p.group_id != group_id]
    for piece in dragged:
        for other in others:
            for side, other_side, kx, ky in RELATIONS:
                gap = _gap(piece, other, kx, ky)
                if abs(gap.x) >= snap_distance or abs(gap.y) >= snap_distance:
                    continue
                if edges_compatible(piece.shape[side], other.shape[other_side]):
                    return SnapProposal(piece.id, other.id, other.group_id, gap)
    return None


def validate_merge(dragged, target, delta, tolerance=TOUCH_TOLERANCE):
    """Check every touching pair once ``dragged`` is moved by ``delta``.

    One incompatible pair anywhere on the boundary rejects the merge.
    """
    dx, dy = delta
    for piece in dragged:
        moved = piece.current_position.shifted(dx, dy)
        for other in target:
            for side, other_side, kx, ky in RELATIONS:
                gap = _gap(piece, other, kx, ky, moved)
                if abs(gap.x) < tolerance and abs(gap.y) < tolerance:
                    if not edges_compatible(piece.shape[side], other.shape[other_side]):
                        logger.debug("Merge rejected: piece %s %s vs piece %s %s",
                                     piece.id, side, other.id, other_side)
                        return False
    return True


def _overlap(a, b):
    ax, ay = a.current_position
    bx, by = b.current_position
    depth_x = min(ax + a.width, bx + b.width) - max(ax, bx)
    depth_y = min(ay + a.height, by + b.height) - max(ay, by)
    return depth_x, depth_y


def _edge_on(a, b, depth_x, depth_y, snap_distance):
    # Lined up on one axis and only slightly pushed in on the other.
    ax, ay = a.current_position
    bx, by = b.current_position
    if abs(ay - by) < snap_distance and depth_x < snap_distance:
        return True
    return abs(ax - bx) < snap_distance and depth_y < snap_distance


def is_obstructed(pieces, group_id, snap_distance=SNAP_DISTANCE, tolerance=TOUCH_TOLERANCE):
    """True when the group lies on top of a foreign piece.

    Any box intersection deeper than ``tolerance`` on both axes counts,
    except a shallow edge-on overlap with a piece lined up beside it,
    which is how a snap candidate is approached.
    """
    dragged = group_members(pieces, group_id)
    for piece in dragged:
        for other in pieces:
            if other.group_id == group_id:
                continue
            depth_x, depth_y = _overlap(piece, other)
            if depth_x <= tolerance or depth_y <= tolerance:
                continue
            if not _edge_on(piece, other, depth_x, depth_y, snap_distance):
                return True
    return False


def try_group_snap(pieces, group_id, snap_distance=SNAP_DISTANCE, tolerance=TOUCH_TOLERANCE):
    """Snap the dropped group onto a neighbour if the whole boundary fits.

    Returns ``(pieces, proposal)``. When nothing merges the very same
    tuple comes back with ``None``.
    """
    if is_obstructed(pieces, group_id, snap_distance, tolerance):
        logger.debug("Group %s dropped on an obstruction, no snap", group_id)
        return pieces, None
    proposal = find_snap(pieces, group_id, snap_distance)
    if proposal is None:
        return pieces, None
    dragged = group_members(pieces, group_id)
    target = group_members(pieces, proposal.target_group)
    if not validate_merge(dragged, target, proposal.delta, tolerance):
        return pieces, None
    return merge_groups(pieces, group_id, proposal.target_group, proposal.delta), proposal
