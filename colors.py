from __future__ import annotations
from attributes import get_string_attr, parse_hex

TRANSPARENT = 0
DEFAULT_COLOR = 1

# (rgb, palette index), scanned in this order so the first closest entry wins
PALETTE = (
    ((255, 255, 255), 1),   # white
    ((255, 33, 33), 2),     # red
    ((255, 147, 196), 3),   # pink
    ((255, 129, 53), 4),    # orange
    ((255, 246, 9), 5),     # yellow
    ((36, 156, 170), 6),    # teal
    ((120, 220, 82), 7),    # green
    ((0, 63, 173), 8),      # dark blue
    ((135, 242, 255), 9),   # light blue
    ((142, 46, 196), 10),   # purple
    ((164, 131, 159), 11),  # mauve
    ((92, 64, 156), 12),    # indigo
    ((229, 205, 196), 13),  # pale brown
    ((145, 70, 61), 14),    # deep brown
    ((0, 0, 0), 15),        # black
)

PALETTE_RGB = {index: rgb for rgb, index in PALETTE}

def parse_hex_color(hex_str: str) -> tuple[float, float, float]:
    if hex_str.startswith('#'):
        hex_str = hex_str[1:]

    r = parse_hex(hex_str[0:2])
    g = parse_hex(hex_str[2:4])
    b = parse_hex(hex_str[4:6])
    return (r, g, b)

def quantize(hex_str: str) -> int:
    if not hex_str:
        return DEFAULT_COLOR

    r, g, b = parse_hex_color(hex_str)

    # nan channels never compare lower, leaving the default index
    best_index = DEFAULT_COLOR
    best_dist = 999999
    for (pr, pg, pb), index in PALETTE:
        dr = pr - r
        dg = pg - g
        db = pb - b
        dist = dr * dr + dg * dg + db * db
        if dist < best_dist:
            best_dist = dist
            best_index = index
    return best_index

def color_from_attr(tag: str, attr_name: str) -> int:
    return quantize(get_string_attr(tag, attr_name))

def palette_rgb(index: int, background: tuple[int, int, int] = (0, 0, 0)) -> tuple[int, int, int]:
    if index == TRANSPARENT:
        return background
    return PALETTE_RGB.get(index, background)
