"""Shared fixtures for the rasterizer tests."""

import pytest

from geometry import CoordinateMapper


class RecordingCanvas:
    """Canvas stand-in that records draw calls instead of painting."""

    def __init__(self):
        self.lines = []

    def draw_line(self, x0, y0, x1, y1, color):
        self.lines.append((x0, y0, x1, y1, color))


@pytest.fixture
def recording_canvas():
    return RecordingCanvas()


@pytest.fixture
def identity_mapper():
    """160x120 device with no viewBox, so document and device coordinates match."""
    return CoordinateMapper(160, 120)
