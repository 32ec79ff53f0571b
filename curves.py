from __future__ import annotations
import math
from typing import List, Tuple
from geometry import round_half_up

Point = Tuple[float, float]

def quadratic_bezier_points(p0: Point, p1: Point, p2: Point, steps: int) -> List[Point]:
    if steps <= 0:
        return []
    points = []
    for t in range(steps + 1):
        u = t / steps
        x = (1 - u) * (1 - u) * p0[0] + 2 * (1 - u) * u * p1[0] + u * u * p2[0]
        y = (1 - u) * (1 - u) * p0[1] + 2 * (1 - u) * u * p1[1] + u * u * p2[1]
        points.append((round_half_up(x), round_half_up(y)))
    return points

def cubic_bezier_points(p0: Point, p1: Point, p2: Point, p3: Point, steps: int) -> List[Point]:
    if steps <= 0:
        return []
    points = []
    for t in range(steps + 1):
        u = t / steps
        a = (1 - u) ** 3
        b = 3 * (1 - u) ** 2 * u
        c = 3 * (1 - u) * u * u
        d = u * u * u
        x = a * p0[0] + b * p1[0] + c * p2[0] + d * p3[0]
        y = a * p0[1] + b * p1[1] + c * p2[1] + d * p3[1]
        points.append((round_half_up(x), round_half_up(y)))
    return points

def arc_points(p0: Point, p1: Point, radius: float, steps: int) -> List[Point]:
    # Circle through the chord midpoint; rotation and arc flags are not modelled
    cx = (p0[0] + p1[0]) / 2
    cy = (p0[1] + p1[1]) / 2
    angle_start = math.atan2(p0[1] - cy, p0[0] - cx)
    angle_end = math.atan2(p1[1] - cy, p1[0] - cx)

    if angle_end < angle_start:
        angle_end += 2 * math.pi

    points = []
    for t in range(1, steps + 1):
        angle = angle_start + (angle_end - angle_start) * (t / steps)
        x = cx + radius * math.cos(angle)
        y = cy + radius * math.sin(angle)
        points.append((round_half_up(x), round_half_up(y)))
    return points

def draw_chain(canvas, start: Point, points: List[Point], color: int):
    prev_x, prev_y = start
    for x, y in points:
        canvas.draw_line(prev_x, prev_y, x, y, color)
        prev_x, prev_y = x, y
