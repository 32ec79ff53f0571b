from __future__ import annotations
import logging
import math
import re

logger = logging.getLogger(__name__)

float_prefix_pattern = re.compile(r'^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)')
hex_prefix_pattern = re.compile(r'^\s*([-+]?)(?:0[xX])?([0-9a-fA-F]+)')

def parse_float(value: str) -> float:
    # Leading numeric prefix only, "10px" -> 10.0, "abc" -> nan
    if value is None:
        return math.nan
    match = float_prefix_pattern.match(value)
    if not match:
        return math.nan
    try:
        return float(match.group(1))
    except ValueError:
        return math.nan

def parse_hex(value: str) -> float:
    if value is None:
        return math.nan
    match = hex_prefix_pattern.match(value)
    if not match:
        return math.nan
    number = int(match.group(2), 16)
    if match.group(1) == '-':
        number = -number
    return float(number)

def format_number(value: float) -> str:
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'Infinity' if value > 0 else '-Infinity'
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))

def get_string_attr(tag: str, name: str) -> str:
    pos = tag.find(name + '=')
    if pos < 0:
        return ""

    quote1 = tag.find('"', pos)
    if quote1 < 0:
        return ""
    quote2 = tag.find('"', quote1 + 1)
    if quote2 < 0:
        return ""

    # Cut at the closing quote. Tag slices use a position-as-length quirk, but
    # values must not, or id/href lookups for <use> would never match.
    return tag[quote1 + 1:quote2].strip()

def get_number_attr(tag: str, name: str) -> float:
    value = get_string_attr(tag, name)
    if not value:
        return 0.0

    number = parse_float(value)
    if math.isnan(number):
        logger.debug("Attribute %s=%r is not numeric, using 0", name, value)
        return 0.0
    return number
