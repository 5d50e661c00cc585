"""Jigsaw puzzle piece geometry and assembly engine."""

from .contour import Contour, contains, fill_polygon, piece_contour, stroke_runs
from .edges import EdgeType, PieceShape, edges_compatible, generate_edge_pattern
from .engine import PuzzleEngine
from .geometry import Bounds, Point, Size
from .pieces import Piece, create_pieces, puzzle_dimensions
from .settings import EngineConfig

__all__ = [
    "Bounds",
    "Contour",
    "EdgeType",
    "EngineConfig",
    "Piece",
    "PieceShape",
    "Point",
    "PuzzleEngine",
    "Size",
    "contains",
    "create_pieces",
    "edges_compatible",
    "fill_polygon",
    "generate_edge_pattern",
    "piece_contour",
    "puzzle_dimensions",
    "stroke_runs",
]
