"""Piece outlines.

A contour is built once per (size, shape, tab size) as a sequence of
line and cubic Bezier segments in piece-local coordinates: the origin
is the top-left corner of the bounding box (protrusions excluded) and
the outline runs top -> right -> bottom -> left, ending back at the
origin. Three consumers read the same segments:

* ``fill_polygon``   - closed polyline for clip masks and filled drawing
* ``stroke_runs``    - polylines for the sides that are not joined to a
                       neighbour, so merged pieces show no seam
* ``contains``       - non-zero winding point test used by hit testing
"""

import functools
import math
from dataclasses import dataclass
from typing import NamedTuple, Tuple

import numpy as np

from .edges import SIDES, EdgeType
from .geometry import Point
from .settings import CURVE_SAMPLES

# Canonical knob over a 0..1 span. The second coordinate is the
# perpendicular offset in tab sizes; negative points away from the piece.
# A short neck, a bulge with an undercut on each side and a round dome.
_KNOB = (
    ("line", ((0.40, 0.0),)),
    ("curve", ((0.40, -0.2), (0.33, -0.5), (0.42, -0.9))),
    ("curve", ((0.45, -1.2), (0.55, -1.2), (0.58, -0.9))),
    ("curve", ((0.67, -0.5), (0.60, -0.2), (0.60, 0.0))),
    ("line", ((1.0, 0.0),)),
)
_STRAIGHT = (("line", ((1.0, 0.0),)),)

# Rotation of each side; the side starts at the given corner of a w x h box.
_SIDE_ANGLES = {"top": 0.0, "right": math.pi / 2, "bottom": math.pi, "left": math.pi * 1.5}


class Segment(NamedTuple):
    kind: str                       # "line" or "curve"
    points: Tuple[Point, ...]       # end point, or (control1, control2, end)

    @property
    def end(self):
        return self.points[-1]


@dataclass(frozen=True)
class Contour:
    width: float
    height: float
    tab_size: float
    sides: Tuple[Tuple[str, Point, Tuple[Segment, ...]], ...]   # (side, start, segments)

    @property
    def start(self):
        return self.sides[0][1]

    @property
    def end(self):
        return self.sides[-1][2][-1].end


def _side_origin(side, width, height):
    return {
        "top": Point(0.0, 0.0),
        "right": Point(width, 0.0),
        "bottom": Point(width, height),
        "left": Point(0.0, height),
    }[side]


def side_segments(side, edge_type, width, height, tab_size):
    """Map the canonical curve onto one side of the box."""
    length = width if side in ("top", "bottom") else height
    angle = _SIDE_ANGLES[side]
    cos, sin = math.cos(angle), math.sin(angle)
    # Exact quarter turns keep corners on integer coordinates.
    cos, sin = round(cos, 12), round(sin, 12)
    origin = _side_origin(side, width, height)
    sign = edge_type.sign
    template = _STRAIGHT if edge_type is EdgeType.FLAT else _KNOB

    def transform(u, v):
        v = v * sign
        return Point(
            origin.x + u * length * cos - v * tab_size * sin,
            origin.y + u * length * sin + v * tab_size * cos,
        )

    return tuple(Segment(kind, tuple(transform(u, v) for u, v in pts)) for kind, pts in template)


@functools.lru_cache(maxsize=512)
def piece_contour(width, height, shape, tab_size):
    """Return the closed Contour for a piece of the given box and shape."""
    sides = tuple(
        (side, _side_origin(side, width, height), side_segments(side, shape[side], width, height, tab_size))
        for side in SIDES
    )
    return Contour(width, height, tab_size, sides)


# --- Flattening ---

def _bezier(p0, p1, p2, p3, t):
    # B(t) = (1-t)^3 P0 + 3(1-t)^2 t P1 + 3(1-t) t^2 P2 + t^3 P3
    u = 1.0 - t
    coeffs = np.stack([u ** 3, 3 * u * u * t, 3 * u * t * t, t ** 3], axis=1)
    return coeffs @ np.array([p0, p1, p2, p3], dtype=float)


def flatten_side(start, segments, samples=CURVE_SAMPLES):
    """Polyline for one side, including its start point."""
    points = [np.array([start], dtype=float)]
    current = start
    t = np.linspace(0.0, 1.0, samples + 1)[1:]
    for seg in segments:
        if seg.kind == "line":
            points.append(np.array([seg.end], dtype=float))
        else:
            points.append(_bezier(current, *seg.points, t))
        current = seg.end
    return np.concatenate(points)


def fill_polygon(contour, samples=CURVE_SAMPLES):
    """Closed outline as an (N, 2) array; the first point is not repeated."""
    parts = [flatten_side(start, segs, samples)[:-1] for _, start, segs in contour.sides]
    return np.concatenate(parts)


def stroke_runs(contour, connected, samples=CURVE_SAMPLES):
    """Polylines covering only the sides whose ``connected[side]`` is false.

    Sides are walked in outline order. A connected side breaks the
    current run (the pen moves without drawing); consecutive drawn sides
    share their corner point so no gap or dot appears there. When both
    left and top are drawn the last run is joined onto the first.
    """
    runs = []
    current = None
    for side, start, segs in contour.sides:
        if connected[side]:
            current = None
            continue
        pts = flatten_side(start, segs, samples)
        if current is None:
            current = [pts]
            runs.append(current)
        else:
            current.append(pts[1:])
    runs = [np.concatenate(run) for run in runs]
    if len(runs) > 1 and not connected["top"] and not connected["left"]:
        runs[0] = np.concatenate([runs[-1], runs[0][1:]])
        runs.pop()
    return runs


# --- Containment ---

def contains(contour, point, samples=CURVE_SAMPLES):
    """Non-zero winding test in piece-local coordinates.

    Tabs count as inside, slots as outside.
    """
    poly = fill_polygon(contour, samples)
    return winding_number(poly, point) != 0


def winding_number(polygon, point):
    px, py = point
    x0, y0 = polygon[:, 0], polygon[:, 1]
    x1, y1 = np.roll(x0, -1), np.roll(y0, -1)
    is_left = (x1 - x0) * (py - y0) - (px - x0) * (y1 - y0)
    up = (y0 <= py) & (y1 > py) & (is_left > 0)
    down = (y0 > py) & (y1 <= py) & (is_left < 0)
    return int(np.count_nonzero(up)) - int(np.count_nonzero(down))
