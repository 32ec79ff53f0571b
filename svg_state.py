from __future__ import annotations
import logging
import re
from attributes import get_string_attr, get_number_attr, format_number
from geometry import CoordinateMapper, parse_view_box, DEFAULT_WIDTH, DEFAULT_HEIGHT

logger = logging.getLogger(__name__)

DEFINABLE_TAGS = ('<circle', '<rect', '<path')
tag_name_pattern = re.compile(r'<[^\s/>]*')

def extract_definitions(svg_text: str) -> dict[str, str]:
    definitions = {}
    pos = 0
    while True:
        def_start = svg_text.find("<", pos)
        if def_start == -1:
            break
        def_end = svg_text.find(">", def_start)
        if def_end == -1:
            break

        tag = svg_text[def_start:def_end + 1]
        if any(name in tag for name in DEFINABLE_TAGS):
            def_id = get_string_attr(tag, "id")
            if len(def_id) > 0:
                definitions[def_id] = tag
        pos = def_end + 1
    return definitions

def inject_position(definition: str, x: float, y: float) -> str:
    # Overrides go right after the element name so attribute lookup finds them first
    match = tag_name_pattern.match(definition)
    insert_at = match.end() if match else 0
    overrides = f' x="{format_number(x)}" y="{format_number(y)}"'
    return definition[:insert_at] + overrides + definition[insert_at:]

def expand_uses(svg_text: str, definitions: dict[str, str]) -> str:
    pos = 0
    result = []
    while True:
        use_pos = svg_text.find("<use", pos)
        if use_pos == -1:
            result.append(svg_text[pos:])
            break

        use_end = svg_text.find(">", use_pos)
        if use_end == -1:
            result.append(svg_text[pos:])
            break

        tag = svg_text[use_pos:use_end + 1]
        href = get_string_attr(tag, "href")
        if href.startswith('#'):
            href = href[1:]
        x = get_number_attr(tag, "x")
        y = get_number_attr(tag, "y")

        result.append(svg_text[pos:use_pos])
        definition = definitions.get(href)
        if definition:
            result.append(inject_position(definition, x, y))
        else:
            logger.debug("Dropping <use> with unresolved href %r", href)

        pos = use_end + 1

    return "".join(result)

class SVGState:
    def __init__(self, svg_text: str, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT):
        self.width = width
        self.height = height

        definitions = extract_definitions(svg_text)
        self.text = expand_uses(svg_text, definitions)

        self.view_box_width = float(width)
        self.view_box_height = float(height)
        view_box = parse_view_box(self.text)
        if view_box is not None:
            self.view_box_width, self.view_box_height = view_box

        self.mapper = CoordinateMapper(width, height, self.view_box_width, self.view_box_height)

    @property
    def viewbox(self) -> tuple[float, float]:
        return (self.view_box_width, self.view_box_height)
