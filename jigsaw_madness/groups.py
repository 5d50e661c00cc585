"""Grouping of pieces into rigid clusters.

The piece tuple is the only state. Each operation returns a new tuple
and never mutates the one it was given, so a renderer holding the old
snapshot keeps seeing a consistent board.
"""

import logging
from collections import deque
from dataclasses import replace
from types import MappingProxyType

from .settings import DETACH_OFFSET, TOUCH_TOLERANCE

logger = logging.getLogger(__name__)


def membership(pieces):
    """Read-only piece id -> group id mapping."""
    return MappingProxyType({p.id: p.group_id for p in pieces})


def group_members(pieces, group_id):
    return [p for p in pieces if p.group_id == group_id]


def group_ids(pieces):
    return sorted({p.group_id for p in pieces})


def next_group_id(pieces):
    return max((p.group_id for p in pieces), default=-1) + 1


def are_touching(a, b, tolerance=TOUCH_TOLERANCE):
    """True when the two bounding boxes meet edge to edge.

    Shapes are ignored; only positions count.
    """
    dx = a.current_position.x - b.current_position.x
    dy = a.current_position.y - b.current_position.y
    w, h = a.width, a.height
    if abs(dy) < tolerance and (abs(dx + w) < tolerance or abs(dx - w) < tolerance):
        return True
    if abs(dx) < tolerance and (abs(dy + h) < tolerance or abs(dy - h) < tolerance):
        return True
    return False


def clusters(members, tolerance=TOUCH_TOLERANCE):
    """Split ``members`` into physically connected clusters (BFS).

    Clusters come out in the order of their first member.
    """
    visited = set()
    found = []
    for member in members:
        if member.id in visited:
            continue
        visited.add(member.id)
        cluster = []
        queue = deque([member])
        while queue:
            current = queue.popleft()
            cluster.append(current)
            for other in members:
                if other.id not in visited and are_touching(current, other, tolerance):
                    visited.add(other.id)
                    queue.append(other)
        found.append(cluster)
    return found


def merge_groups(pieces, source_group, target_group, adjust=(0, 0)):
    """Move every member of ``source_group`` into ``target_group``.

    Source members are translated by ``adjust`` on the way.
    """
    dx, dy = adjust
    merged = []
    for p in pieces:
        if p.group_id == source_group:
            p = replace(p, group_id=target_group, current_position=p.current_position.shifted(dx, dy))
        merged.append(p)
    logger.debug("Merged group %s into %s (adjust %.1f, %.1f)", source_group, target_group, dx, dy)
    return tuple(merged)


def split_group(pieces, piece_id, nudge=DETACH_OFFSET, tolerance=TOUCH_TOLERANCE):
    """Detach one piece from its group and re-cluster what is left.

    The detached piece gets a fresh group id and is nudged by ``nudge``
    on both axes. The remaining members are regrouped by physical
    adjacency: the first cluster keeps the old id, every further
    cluster gets a new one. Everything touched loses ``is_solved``.
    A piece that is alone in its group is left as it is.
    """
    by_id = {p.id: p for p in pieces}
    piece = by_id[piece_id]
    old_group = piece.group_id
    remaining = [p for p in pieces if p.group_id == old_group and p.id != piece_id]
    if not remaining:
        return pieces

    next_id = next_group_id(pieces)
    assigned = {piece_id: next_id}
    next_id += 1
    found = clusters(remaining, tolerance)
    for cluster in found[1:]:
        for member in cluster:
            assigned[member.id] = next_id
        next_id += 1

    updated = []
    for p in pieces:
        if p.id == piece_id:
            p = replace(p, group_id=assigned[p.id], is_solved=False,
                        current_position=p.current_position.shifted(nudge, nudge))
        elif p.group_id == old_group:
            p = replace(p, group_id=assigned.get(p.id, old_group), is_solved=False)
        updated.append(p)
    logger.debug("Detached piece %s from group %s, %d cluster(s) left", piece_id, old_group, len(found))
    return tuple(updated)


def connected_sides(pieces, piece, tolerance=TOUCH_TOLERANCE):
    """Per side, whether a member of the same group sits one piece away."""
    x, y = piece.current_position
    w, h = piece.width, piece.height
    mates = [p for p in pieces if p.group_id == piece.group_id and p.id != piece.id]

    def neighbour_at(tx, ty):
        return any(
            abs(m.current_position.x - tx) < tolerance and abs(m.current_position.y - ty) < tolerance
            for m in mates
        )

    return {
        "top": neighbour_at(x, y - h),
        "right": neighbour_at(x + w, y),
        "bottom": neighbour_at(x, y + h),
        "left": neighbour_at(x - w, y),
    }
