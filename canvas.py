from __future__ import annotations
from functools import lru_cache
from typing import Tuple
import numpy as np
from PIL import Image, ImageDraw, ImageFont
from colors import TRANSPARENT, palette_rgb
from geometry import is_finite, round_half_up

class Font:
    def __init__(self, name: str, char_width: int, char_height: int):
        self.name = name
        self.char_width = char_width
        self.char_height = char_height

    def image_font(self):
        return _load_font(self.char_height)

    def __repr__(self):
        return f"Font({self.name!r}, {self.char_width}, {self.char_height})"

@lru_cache(maxsize=None)
def _load_font(size: int):
    return ImageFont.load_default(size=size)

FONT5 = Font('font5', 6, 5)
FONT8 = Font('font8', 6, 8)
FONT12 = Font('font12', 12, 12)

class Canvas:
    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.buffer = np.zeros((height, width), dtype=np.uint8)

    def get_pixel(self, x: int, y: int) -> int:
        if x < 0 or x >= self.width or y < 0 or y >= self.height:
            return TRANSPARENT
        return int(self.buffer[y, x])

    def set_pixel(self, x: int, y: int, color: int):
        if x < 0 or x >= self.width or y < 0 or y >= self.height:
            return
        self.buffer[y, x] = color

    def is_blank(self) -> bool:
        return not self.buffer.any()

    def fill_rect(self, x, y, w, h, color: int):
        if not is_finite(x, y, w, h) or w <= 0 or h <= 0:
            return
        x0 = max(0, int(x))
        y0 = max(0, int(y))
        x1 = min(self.width, int(x + w))
        y1 = min(self.height, int(y + h))
        if x0 >= x1 or y0 >= y1:
            return
        self.buffer[y0:y1, x0:x1] = color

    def draw_line(self, x0, y0, x1, y1, color: int):
        if not is_finite(x0, y0, x1, y1):
            return
        if max(x0, x1) < 0 or min(x0, x1) >= self.width:
            return
        if max(y0, y1) < 0 or min(y0, y1) >= self.height:
            return

        dx = float(x1) - float(x0)
        dy = float(y1) - float(y0)
        if not is_finite(dx, dy):
            mid_x = x0 / 2 + x1 / 2
            mid_y = y0 / 2 + y1 / 2
            self.draw_line(x0, y0, mid_x, mid_y, color)
            self.draw_line(mid_x, mid_y, x1, y1, color)
            return

        # Endpoints inside the canvas are kept exact; only clipped ends are moved
        ox, oy = float(x0), float(y0)
        clipped = self._clip_segment(ox, oy, dx, dy)
        if clipped is None:
            return
        t0, t1 = clipped
        if t0 > 0:
            x0, y0 = round_half_up(ox + t0 * dx), round_half_up(oy + t0 * dy)
        if t1 < 1:
            x1, y1 = round_half_up(ox + t1 * dx), round_half_up(oy + t1 * dy)
        x0, y0, x1, y1 = int(x0), int(y0), int(x1), int(y1)

        # Bresenham
        dx = abs(x1 - x0)
        dy = -abs(y1 - y0)
        sx = 1 if x0 < x1 else -1
        sy = 1 if y0 < y1 else -1
        err = dx + dy
        while True:
            self.set_pixel(x0, y0, color)
            if x0 == x1 and y0 == y1:
                break
            e2 = 2 * err
            if e2 >= dy:
                err += dy
                x0 += sx
            if e2 <= dx:
                err += dx
                y0 += sy

    def _clip_segment(self, x0: float, y0: float, dx: float, dy: float):
        """Liang-Barsky against the canvas grown by one pixel on each side.

        Returns the ``(t0, t1)`` parameter range of the visible part, or
        ``None`` when the segment misses the canvas.
        """
        t0, t1 = 0.0, 1.0
        edges = (
            (-dx, x0 + 1),
            (dx, self.width - x0),
            (-dy, y0 + 1),
            (dy, self.height - y0),
        )
        for p, q in edges:
            if p == 0:
                if q < 0:
                    return None
                continue
            t = q / p
            if p < 0:
                if t > t1:
                    return None
                t0 = max(t0, t)
            else:
                if t < t0:
                    return None
                t1 = min(t1, t)
        return (t0, t1)

    def fill_circle(self, cx, cy, r, color: int):
        if not is_finite(cx, cy, r) or r < 0:
            return
        cx, cy, r = int(cx), int(cy), int(r)

        x0 = max(0, cx - r)
        y0 = max(0, cy - r)
        x1 = min(self.width, cx + r + 1)
        y1 = min(self.height, cy + r + 1)
        if x0 >= x1 or y0 >= y1:
            return

        yy, xx = np.mgrid[y0:y1, x0:x1]
        mask = (xx - cx) ** 2 + (yy - cy) ** 2 <= r * r
        self.buffer[y0:y1, x0:x1][mask] = color

    def print_text(self, text: str, x, y, color: int, font: Font = FONT8):
        if not text or not is_finite(x, y):
            return
        # Glyphs are never wider or taller than twice the font height
        reach = 2 * font.char_height
        if x >= self.width or y >= self.height or y + reach < 0 or x + reach * len(text) < 0:
            return

        glyphs = Image.new('1', (self.width, self.height), 0)
        draw = ImageDraw.Draw(glyphs)
        draw.text((int(x), int(y)), text, fill=1, font=font.image_font())
        mask = np.array(glyphs, dtype=bool)
        self.buffer[mask] = color

    def draw_image(self, other: 'Canvas', dx: int, dy: int):
        # Transparent source pixels leave the destination untouched
        x0 = max(0, dx)
        y0 = max(0, dy)
        x1 = min(self.width, dx + other.width)
        y1 = min(self.height, dy + other.height)
        if x0 >= x1 or y0 >= y1:
            return

        src = other.buffer[y0 - dy:y1 - dy, x0 - dx:x1 - dx]
        dst = self.buffer[y0:y1, x0:x1]
        opaque = src != TRANSPARENT
        dst[opaque] = src[opaque]

    def to_rgb(self, background: Tuple[int, int, int] = (0, 0, 0)) -> np.ndarray:
        lookup = np.zeros((256, 3), dtype=np.uint8)
        for index in range(256):
            lookup[index] = palette_rgb(index, background)
        return lookup[self.buffer]

    def to_image(self, background: Tuple[int, int, int] = (0, 0, 0)) -> Image.Image:
        return Image.fromarray(self.to_rgb(background))
