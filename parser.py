from __future__ import annotations
from typing import Iterable, Optional, Tuple

# Drawable kinds in dispatch order; on equal positions the earlier kind wins
TAG_KINDS = ('rect', 'circle', 'line', 'ellipse', 'polyline', 'polygon', 'path', 'text', 'g')
SKIPPED_KINDS = ('defs',)

def is_self_terminating(svg_value: str) -> bool:
    return svg_value.rstrip().endswith('/>')

def find_tag_pos(svg_text: str, from_pos: int, tag_name: str) -> int:
    from_pos = max(0, from_pos)

    plain = svg_text.find("<" + tag_name, from_pos)
    ns = svg_text.find(":" + tag_name, from_pos)
    if plain == -1:
        plain = svg_text.find("<" + tag_name.upper(), from_pos)
    if ns == -1:
        ns = svg_text.find(":" + tag_name.upper(), from_pos)

    if plain == -1:
        return ns
    if ns == -1:
        return plain
    return min(plain, ns)

def find_next_tag(svg_text: str, from_pos: int,
                  kinds: Iterable[str] = TAG_KINDS) -> Tuple[int, Optional[str]]:
    next_pos = -1
    next_kind = None
    for kind in kinds:
        pos = find_tag_pos(svg_text, from_pos, kind)
        if pos != -1 and (next_pos == -1 or pos < next_pos):
            next_pos = pos
            next_kind = kind
    return (next_pos, next_kind)

def tag_end(svg_text: str, start: int, terminator: str) -> int:
    end = svg_text.find(terminator, start)
    if end < 0:
        return len(svg_text)
    return end

def get_tag_text(svg_text: str, start: int, terminator: str) -> Tuple[str, int]:
    end = tag_end(svg_text, start, terminator)
    # Slice length is the terminator's absolute position, so for start > 0 the
    # tag text runs past the terminator. Comma-terminated tags rely on this to
    # see attributes that follow the first comma.
    return (svg_text[start:start + end], end)
