"""Global settings for the puzzle engine and the pygame board."""

from dataclasses import dataclass

# --- Global Settings ---
SCREEN_WIDTH, SCREEN_HEIGHT = 1600, 900
FPS = 60
HEADER_RESERVED_SPACE = 60
DOUBLE_CLICK_MS = 400

# --- Engine Settings ---
SNAP_DISTANCE = 20          # max gap (px) on both axes for a snap candidate
TOUCH_TOLERANCE = 5         # "flush" tolerance for validation, adjacency and win
DETACH_OFFSET = 20          # nudge applied to a detached piece
TAB_RATIO = 0.25            # tab size relative to the smaller piece side
HIT_MARGIN_RATIO = 1.5      # bounding-box inflation for hit tests, in tab sizes
CURVE_SAMPLES = 16          # points per cubic segment when flattening


@dataclass(frozen=True)
class EngineConfig:
    """Tunables for one PuzzleEngine instance."""

    snap_distance: float = SNAP_DISTANCE
    touch_tolerance: float = TOUCH_TOLERANCE
    detach_offset: float = DETACH_OFFSET
    hit_margin_ratio: float = HIT_MARGIN_RATIO
    curve_samples: int = CURVE_SAMPLES
