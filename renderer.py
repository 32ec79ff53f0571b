from __future__ import annotations
import logging
import math
from typing import Optional
from attributes import get_string_attr, get_number_attr, parse_float
from canvas import Canvas, Font, FONT5, FONT8, FONT12
from colors import color_from_attr
from geometry import round_half_up, floor_clamped, is_finite, DEFAULT_WIDTH, DEFAULT_HEIGHT
from parser import TAG_KINDS, SKIPPED_KINDS, find_next_tag, get_tag_text, is_self_terminating
from path_data import draw_path
from svg_state import SVGState

logger = logging.getLogger(__name__)

DEFAULT_CURVE_STEPS = 10

# Checked in this order, so on equal distance the smaller font wins
FONT_SIZES = ((5, FONT5), (8, FONT8), (12, FONT12))

def select_font(font_size: float) -> Font:
    if not font_size > 0:
        return FONT8

    best_font = FONT8
    best_dist = None
    for size, font in FONT_SIZES:
        dist = abs(font_size - size)
        if best_dist is None or dist < best_dist:
            best_dist = dist
            best_font = font
    return best_font

class Renderer:
    """Streams through SVG markup and paints each supported element.

    No tree is built: the document text is scanned for the nearest supported
    tag, that tag is drawn, and scanning resumes after it. Groups are rendered
    by an independent ``Renderer`` over the group body and composited back.
    """

    def __init__(self, svg_text: str, smooth_curve_steps: Optional[int] = None,
                 width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT):
        self.width = width
        self.height = height
        self.smooth_curve_steps = smooth_curve_steps or DEFAULT_CURVE_STEPS
        self.text_height = 0

        self.svg_state = SVGState(svg_text, width, height)
        self.mapper = self.svg_state.mapper
        self.canvas = Canvas(width, height)

    @property
    def svg_text(self) -> str:
        return self.svg_state.text

    def render(self) -> Canvas:
        text = self.svg_text
        pos = 0
        while True:
            next_pos, kind = find_next_tag(text, pos, TAG_KINDS + SKIPPED_KINDS)
            if next_pos == -1:
                break

            logger.debug("<%s> at %d", kind, next_pos)
            pos = self._dispatch[kind](self, next_pos)
        return self.canvas

    def _scale_x(self, x: float):
        return self.mapper.scale_x(x)

    def _scale_y(self, y: float):
        return self.mapper.scale_y(y)

    def _parse_rect(self, start_pos: int) -> int:
        tag, end_pos = get_tag_text(self.svg_text, start_pos, ",")

        x = get_number_attr(tag, "x")
        y = get_number_attr(tag, "y")
        w = get_number_attr(tag, "width")
        h = get_number_attr(tag, "height")
        color = color_from_attr(tag, "fill")

        self.canvas.fill_rect(self._scale_x(x), self._scale_y(y), self._scale_x(w), self._scale_y(h), color)
        return end_pos

    def _parse_circle(self, start_pos: int) -> int:
        tag, end_pos = get_tag_text(self.svg_text, start_pos, ">")

        cx = get_number_attr(tag, "cx")
        cy = get_number_attr(tag, "cy")
        r = get_number_attr(tag, "r")
        color = color_from_attr(tag, "fill")

        radius = round_half_up(self.mapper.scale_radius(r))
        self.canvas.fill_circle(self._scale_x(cx), self._scale_y(cy), radius, color)
        return end_pos

    def _parse_line(self, start_pos: int) -> int:
        tag, end_pos = get_tag_text(self.svg_text, start_pos, ">")

        x1 = get_number_attr(tag, "x1")
        y1 = get_number_attr(tag, "y1")
        x2 = get_number_attr(tag, "x2")
        y2 = get_number_attr(tag, "y2")
        color = color_from_attr(tag, "stroke")

        self.canvas.draw_line(self._scale_x(x1), self._scale_y(y1),
                              self._scale_x(x2), self._scale_y(y2), color)
        return end_pos

    def _parse_ellipse(self, start_pos: int) -> int:
        tag, end_pos = get_tag_text(self.svg_text, start_pos, ",")

        cx = get_number_attr(tag, "cx")
        cy = get_number_attr(tag, "cy")
        rx = get_number_attr(tag, "rx")
        ry = get_number_attr(tag, "ry")
        color = color_from_attr(tag, "fill")

        if not is_finite(cx, cy, rx, ry) or ry < 0:
            return end_pos

        # One horizontal scanline per document-space row y = n - ry, n = 0, 1, ...
        # Only rows whose scaled y can land on the canvas are visited.
        k = self.mapper.height / self.mapper.view_box_height
        whole = math.floor(ry)
        last_row = 2 * whole + 1
        first = floor_clamped(-0.5 / k - cy + ry - 1, 0, last_row + 1)
        last = floor_clamped(self.height / k - cy + ry + 1, -1, last_row)

        for n in range(first, last + 1):
            y = (n - whole) - (ry - whole)
            if y > ry:
                break
            ratio = (y * y) / (ry * ry) if ry != 0 else math.nan
            w = round_half_up(rx * math.sqrt(1 - ratio)) if ratio <= 1 else math.nan
            self.canvas.draw_line(self._scale_x(cx - w), self._scale_y(cy + y),
                                  self._scale_x(cx + w), self._scale_y(cy + y), color)
        return end_pos

    def _parse_polyline(self, start_pos: int, closed: bool = False) -> int:
        tag, end_pos = get_tag_text(self.svg_text, start_pos, ",")

        points_str = get_string_attr(tag, "points")
        color = color_from_attr(tag, "stroke")

        coords = [parse_float(c) for c in points_str.strip().split(",")]

        def coord(i: int) -> float:
            return coords[i] if i < len(coords) else math.nan

        for i in range(0, len(coords) - 2, 2):
            self.canvas.draw_line(self._scale_x(coord(i)), self._scale_y(coord(i + 1)),
                                  self._scale_x(coord(i + 2)), self._scale_y(coord(i + 3)), color)

        if closed and len(coords) >= 4:
            self.canvas.draw_line(self._scale_x(coords[-2]), self._scale_y(coords[-1]),
                                  self._scale_x(coords[0]), self._scale_y(coords[1]), color)
        return end_pos

    def _parse_polygon(self, start_pos: int) -> int:
        return self._parse_polyline(start_pos, closed=True)

    def _parse_path(self, start_pos: int) -> int:
        tag, end_pos = get_tag_text(self.svg_text, start_pos, ">")

        d = get_string_attr(tag, "d")
        color = color_from_attr(tag, "stroke")

        draw_path(self.canvas, self.mapper, d, color, self.smooth_curve_steps)
        return end_pos

    def _parse_text(self, start_pos: int) -> int:
        text = self.svg_text
        end_pos = text.find("</text>", start_pos)
        if end_pos < 0:
            return len(text)

        tag_end = text.find(">", start_pos)
        tag = text[start_pos:start_pos + tag_end + 1]
        content = text[tag_end + 1:end_pos].strip()

        x = self._scale_x(get_number_attr(tag, "x"))
        y = self._scale_y(get_number_attr(tag, "y"))
        auto_position = x == 0 and y == 0
        if auto_position:
            y = self.text_height

        color = color_from_attr(tag, "fill")
        font = select_font(get_number_attr(tag, "font-size"))

        if auto_position:
            self.text_height += font.char_height
        self.canvas.print_text(content, x, y, color, font)
        return end_pos + len("</text>")

    def _parse_group(self, start_pos: int) -> int:
        text = self.svg_text
        end_tag = "</g>"
        end_pos = text.find(end_tag, start_pos)
        if end_pos < 0:
            return len(text)

        tag_end = text.find(">", start_pos)
        if tag_end < 0 or tag_end > end_pos:
            tag_end = end_pos

        # First </g> closes the group; nested groups are not balanced
        group_content = text[tag_end + 1:end_pos]
        sub_renderer = Renderer(group_content, self.smooth_curve_steps, self.width, self.height)
        sub_canvas = sub_renderer.render()

        self.canvas.draw_image(sub_canvas, 0, 0)
        return end_pos + len(end_tag)

    def _skip_defs(self, start_pos: int) -> int:
        text = self.svg_text
        tag_end = text.find(">", start_pos)
        if tag_end < 0:
            return len(text)
        if is_self_terminating(text[start_pos:tag_end + 1]):
            return tag_end + 1

        end_pos = text.find("</defs>", tag_end)
        if end_pos < 0:
            return len(text)
        return end_pos + len("</defs>")

    _dispatch = {
        'rect': _parse_rect,
        'circle': _parse_circle,
        'line': _parse_line,
        'ellipse': _parse_ellipse,
        'polyline': _parse_polyline,
        'polygon': _parse_polygon,
        'path': _parse_path,
        'text': _parse_text,
        'g': _parse_group,
        'defs': _skip_defs,
    }

def render_svg(svg_text: str, smooth_curve_steps: Optional[int] = None,
               width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT) -> Canvas:
    return Renderer(svg_text, smooth_curve_steps, width, height).render()
