"""Tests for the indexed raster canvas."""

import math

import numpy as np

from canvas import FONT12, Canvas


class TestPrimitives:
    def test_new_canvas_is_blank(self):
        canvas = Canvas(10, 8)
        assert canvas.is_blank()
        assert canvas.buffer.shape == (8, 10)

    def test_fill_rect(self):
        canvas = Canvas(20, 20)
        canvas.fill_rect(2, 3, 4, 5, 7)
        assert np.count_nonzero(canvas.buffer) == 20
        assert canvas.get_pixel(2, 3) == 7
        assert canvas.get_pixel(5, 7) == 7
        assert canvas.get_pixel(6, 3) == 0

    def test_fill_rect_is_clipped(self):
        canvas = Canvas(10, 10)
        canvas.fill_rect(-2, -2, 4, 4, 1)
        assert np.count_nonzero(canvas.buffer) == 4

    def test_degenerate_rects_are_ignored(self):
        canvas = Canvas(10, 10)
        canvas.fill_rect(1, 1, 0, 5, 1)
        canvas.fill_rect(1, 1, 5, -1, 1)
        canvas.fill_rect(math.nan, 1, 5, 5, 1)
        assert canvas.is_blank()

    def test_draw_line_includes_endpoints(self):
        canvas = Canvas(10, 10)
        canvas.draw_line(0, 0, 5, 3, 4)
        assert canvas.get_pixel(0, 0) == 4
        assert canvas.get_pixel(5, 3) == 4

    def test_horizontal_line(self):
        canvas = Canvas(10, 10)
        canvas.draw_line(0, 0, 5, 0, 2)
        assert np.count_nonzero(canvas.buffer) == 6

    def test_line_outside_canvas(self):
        canvas = Canvas(10, 10)
        canvas.draw_line(-5, -5, -1, -1, 2)
        canvas.draw_line(0, math.nan, 5, 5, 2)
        assert canvas.is_blank()

    def test_long_line_is_clipped_to_canvas(self):
        canvas = Canvas(10, 10)
        canvas.draw_line(-10**9, 5, 10**9, 5, 2)
        assert np.count_nonzero(canvas.buffer) == 10
        assert all(canvas.get_pixel(x, 5) == 2 for x in range(10))

    def test_long_diagonal_is_clipped_to_canvas(self):
        canvas = Canvas(10, 10)
        canvas.draw_line(-10**9, -10**9, 10**9, 10**9, 3)
        assert all(canvas.get_pixel(i, i) == 3 for i in range(10))
        assert np.count_nonzero(canvas.buffer) == 10

    def test_partly_visible_line_keeps_inner_endpoint(self):
        canvas = Canvas(10, 10)
        canvas.draw_line(-20, 4, 3, 4, 2)
        assert np.count_nonzero(canvas.buffer) == 4
        assert canvas.get_pixel(3, 4) == 2

    def test_fill_circle(self):
        canvas = Canvas(30, 30)
        canvas.fill_circle(10, 10, 3, 2)
        assert canvas.get_pixel(10, 10) == 2
        assert canvas.get_pixel(13, 10) == 2
        assert canvas.get_pixel(14, 10) == 0
        assert canvas.get_pixel(12, 12) == 2
        assert canvas.get_pixel(13, 13) == 0

    def test_zero_radius_circle_is_one_pixel(self):
        canvas = Canvas(5, 5)
        canvas.fill_circle(2, 2, 0, 3)
        assert np.count_nonzero(canvas.buffer) == 1


class TestComposition:
    def test_draw_image_skips_transparent_pixels(self):
        parent = Canvas(5, 5)
        parent.set_pixel(1, 1, 3)
        parent.set_pixel(2, 2, 4)
        child = Canvas(5, 5)
        child.set_pixel(1, 1, 5)

        parent.draw_image(child, 0, 0)
        assert parent.get_pixel(1, 1) == 5
        assert parent.get_pixel(2, 2) == 4

    def test_draw_image_with_offset(self):
        parent = Canvas(5, 5)
        child = Canvas(5, 5)
        child.set_pixel(0, 0, 6)
        parent.draw_image(child, 3, 4)
        assert parent.get_pixel(3, 4) == 6


class TestOutput:
    def test_print_text_paints_glyphs(self):
        canvas = Canvas(60, 20)
        canvas.print_text("Hi", 0, 0, 15, FONT12)
        assert not canvas.is_blank()
        assert set(np.unique(canvas.buffer)) <= {0, 15}

    def test_empty_text_paints_nothing(self):
        canvas = Canvas(20, 20)
        canvas.print_text("", 0, 0, 15)
        assert canvas.is_blank()

    def test_text_far_outside_canvas_is_skipped(self):
        canvas = Canvas(20, 20)
        canvas.print_text("Hi", 10**300, 5, 15)
        canvas.print_text("Hi", -10**300, 5, 15)
        canvas.print_text("Hi", 5, 10**300, 15)
        canvas.print_text("Hi", 5, -10**300, 15)
        assert canvas.is_blank()

    def test_to_rgb_uses_palette_and_background(self):
        canvas = Canvas(2, 1)
        canvas.set_pixel(0, 0, 2)
        rgb = canvas.to_rgb((1, 2, 3))
        assert rgb.shape == (1, 2, 3)
        assert tuple(rgb[0, 0]) == (255, 33, 33)
        assert tuple(rgb[0, 1]) == (1, 2, 3)

    def test_to_image(self):
        image = Canvas(4, 3).to_image()
        assert image.size == (4, 3)
        assert image.mode == "RGB"
