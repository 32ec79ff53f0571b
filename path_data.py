from __future__ import annotations
import logging
import math
from typing import List
from attributes import parse_float
from curves import quadratic_bezier_points, cubic_bezier_points, arc_points, draw_chain
from geometry import CoordinateMapper, round_half_up

logger = logging.getLogger(__name__)

def tokenize_path(d: str) -> List[str]:
    return d.replace(",", " ").split()

def is_command_token(token: str) -> bool:
    return len(token) == 1 and "A" <= token.upper() <= "Z"

class PathCursor:
    """Per-path pen state, all coordinates in device space.

    ``control`` is the second control point of the last ``C``/``S`` segment
    and is only reflected when ``prev_command`` is one of those.
    """

    def __init__(self):
        self.x = 0
        self.y = 0
        self.start_x = 0
        self.start_y = 0
        self.control_x = 0
        self.control_y = 0
        self.prev_command = ""

    def move_to(self, x, y):
        self.x = x
        self.y = y

class PathInterpreter:
    def __init__(self, canvas, mapper: CoordinateMapper, color: int, steps: int):
        self.canvas = canvas
        self.mapper = mapper
        self.color = color
        self.steps = steps
        self.cursor = PathCursor()
        self.tokens: List[str] = []
        self.index = 0

    def _next_number(self) -> float:
        if self.index >= len(self.tokens):
            self.index += 1
            return math.nan
        token = self.tokens[self.index]
        self.index += 1
        return parse_float(token)

    def _next_point(self) -> tuple:
        x = self._next_number()
        y = self._next_number()
        return self.mapper.scale_point(x, y)

    def run(self, d: str):
        self.tokens = tokenize_path(d)
        self.index = 0
        self.cursor = PathCursor()

        while self.index < len(self.tokens):
            cmd = self.tokens[self.index]
            self.index += 1
            is_relative = "a" <= cmd <= "z"
            cmd = cmd.upper()

            handler = self.COMMANDS.get(cmd)
            if handler is None:
                self._skip_unsupported(cmd)
            else:
                handler(self, is_relative)
            self.cursor.prev_command = cmd

    def _skip_unsupported(self, cmd: str):
        logger.warning("Unsupported path command: %s", cmd)
        while self.index < len(self.tokens) and not is_command_token(self.tokens[self.index]):
            self.index += 1

    def _line_to(self, is_relative: bool, draw: bool):
        cursor = self.cursor
        x = self._next_number()
        y = self._next_number()
        if is_relative:
            x += cursor.x
            y += cursor.y
        x = self.mapper.scale_x(x)
        y = self.mapper.scale_y(y)
        if draw:
            self.canvas.draw_line(cursor.x, cursor.y, x, y, self.color)
        cursor.move_to(x, y)
        return x, y

    def move(self, is_relative: bool):
        x, y = self._line_to(is_relative, draw=False)
        self.cursor.start_x = x
        self.cursor.start_y = y

    def line(self, is_relative: bool):
        self._line_to(is_relative, draw=True)

    def horizontal(self, is_relative: bool):
        cursor = self.cursor
        x = self._next_number()
        if is_relative:
            x += cursor.x
        x = self.mapper.scale_x(x)
        self.canvas.draw_line(cursor.x, cursor.y, x, cursor.y, self.color)
        cursor.x = x

    def vertical(self, is_relative: bool):
        cursor = self.cursor
        y = self._next_number()
        if is_relative:
            y += cursor.y
        y = self.mapper.scale_y(y)
        self.canvas.draw_line(cursor.x, cursor.y, cursor.x, y, self.color)
        cursor.y = y

    def close(self, is_relative: bool):
        cursor = self.cursor
        self.canvas.draw_line(cursor.x, cursor.y, cursor.start_x, cursor.start_y, self.color)
        cursor.move_to(cursor.start_x, cursor.start_y)

    def cubic(self, is_relative: bool):
        cursor = self.cursor
        p1 = self._next_point()
        p2 = self._next_point()
        end = self._next_point()
        self._draw_cubic((cursor.x, cursor.y), p1, p2, end)

    def smooth_cubic(self, is_relative: bool):
        cursor = self.cursor
        if cursor.prev_command in ("C", "S"):
            p1 = (2 * cursor.x - cursor.control_x, 2 * cursor.y - cursor.control_y)
        else:
            p1 = (cursor.x, cursor.y)
        p2 = self._next_point()
        end = self._next_point()
        self._draw_cubic((cursor.x, cursor.y), p1, p2, end)

    def _draw_cubic(self, start, p1, p2, end):
        points = cubic_bezier_points(start, p1, p2, end, self.steps)
        draw_chain(self.canvas, start, points, self.color)
        self.cursor.control_x, self.cursor.control_y = p2
        self.cursor.move_to(*end)

    def quadratic(self, is_relative: bool):
        cursor = self.cursor
        p1 = self._next_point()
        end = self._next_point()
        start = (cursor.x, cursor.y)
        points = quadratic_bezier_points(start, p1, end, self.steps)
        draw_chain(self.canvas, start, points, self.color)
        cursor.move_to(*end)

    def arc(self, is_relative: bool):
        cursor = self.cursor
        rx = self._next_number()
        ry = self._next_number()
        # rotation, large-arc and sweep flags
        self.index += 3
        end = self._next_point()
        smaller = math.nan if math.isnan(rx) or math.isnan(ry) else min(rx, ry)
        radius = round_half_up(self.mapper.scale_radius(smaller))
        start = (cursor.x, cursor.y)
        points = arc_points(start, end, radius, self.steps)
        draw_chain(self.canvas, start, points, self.color)
        cursor.move_to(*end)

    COMMANDS = {
        "M": move,
        "L": line,
        "H": horizontal,
        "V": vertical,
        "Z": close,
        "C": cubic,
        "S": smooth_cubic,
        "Q": quadratic,
        "A": arc,
    }

def draw_path(canvas, mapper: CoordinateMapper, d: str, color: int, steps: int) -> PathCursor:
    interpreter = PathInterpreter(canvas, mapper, color, steps)
    interpreter.run(d)
    return interpreter.cursor
