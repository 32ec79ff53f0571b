from __future__ import annotations
import logging
import math
from attributes import parse_float

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 160
DEFAULT_HEIGHT = 120
# Circle and arc radii are scaled against this width, not the device width
REFERENCE_WIDTH = 160

def round_half_up(value: float):
    if not math.isfinite(value):
        return value
    return math.floor(value + 0.5)

def is_finite(*values) -> bool:
    return all(math.isfinite(v) for v in values)

def clamp(x, minx, maxx):
    return max(min(x, maxx), minx)

def floor_clamped(value: float, low: int, high: int) -> int:
    # Infinite values land on the bounds instead of raising
    if value <= low:
        return low
    if value >= high:
        return high
    return math.floor(value)

def parse_view_box(svg_text: str) -> tuple[float, float] | None:
    vb_pos = svg_text.find("viewBox=")
    if vb_pos < 0:
        return None

    quote1 = svg_text.find('"', vb_pos)
    quote2 = svg_text.find('"', quote1 + 1) if quote1 >= 0 else -1
    if quote2 < 0:
        return None

    parts = svg_text[quote1 + 1:quote2].split(" ")
    if len(parts) != 4:
        logger.debug("viewBox %r does not have four components", parts)
        return None

    width = parse_float(parts[2])
    height = parse_float(parts[3])
    if not is_finite(width, height) or width <= 0 or height <= 0:
        logger.debug("viewBox size %r x %r is unusable", parts[2], parts[3])
        return None
    return (width, height)

class CoordinateMapper:
    def __init__(self, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT,
                 view_box_width: float = None, view_box_height: float = None):
        self.width = width
        self.height = height
        self.view_box_width = float(width) if view_box_width is None else view_box_width
        self.view_box_height = float(height) if view_box_height is None else view_box_height

    def scale_x(self, x: float):
        return round_half_up(x * self.width / self.view_box_width)

    def scale_y(self, y: float):
        return round_half_up(y * self.height / self.view_box_height)

    def scale_point(self, x: float, y: float) -> tuple:
        return (self.scale_x(x), self.scale_y(y))

    def scale_radius(self, r: float) -> float:
        return r * (REFERENCE_WIDTH / self.view_box_width)
