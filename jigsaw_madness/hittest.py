"""Mapping pointer positions to pieces."""

from .contour import contains, piece_contour
from .settings import CURVE_SAMPLES, HIT_MARGIN_RATIO


def render_order(pieces, dragging_group=None):
    """Group ids from bottom to top.

    Solved groups lie at the bottom, unsolved groups above them by
    ascending id, and the group being dragged on top of everything.
    """
    solved = {}
    for p in pieces:
        solved[p.group_id] = solved.get(p.group_id, True) and p.is_solved

    def key(group_id):
        return (group_id == dragging_group, not solved[group_id], group_id)

    return sorted(solved, key=key)


def piece_at(pieces, point, tab_size, dragging_group=None,
             margin_ratio=HIT_MARGIN_RATIO, samples=CURVE_SAMPLES):
    """Id of the topmost piece whose outline contains ``point``, else None."""
    px, py = point
    margin = tab_size * margin_ratio
    for group_id in reversed(render_order(pieces, dragging_group)):
        members = [p for p in pieces if p.group_id == group_id]
        for p in reversed(members):
            x, y = p.current_position
            if (px < x - margin or px > x + p.width + margin
                    or py < y - margin or py > y + p.height + margin):
                continue
            contour = piece_contour(p.width, p.height, p.shape, tab_size)
            if contains(contour, (px - x, py - y), samples):
                return p.id
    return None
