"""Tests for rounding, viewBox parsing and coordinate mapping."""

import math

import pytest

from geometry import CoordinateMapper, floor_clamped, parse_view_box, round_half_up


class TestRoundHalfUp:
    @pytest.mark.parametrize(
        "value,expected", [(2.5, 3), (2.4, 2), (-2.5, -2), (-2.6, -3), (0.5, 1), (7, 7)]
    )
    def test_rounding(self, value, expected):
        assert round_half_up(value) == expected

    def test_non_finite_passes_through(self):
        assert math.isnan(round_half_up(math.nan))
        assert round_half_up(math.inf) == math.inf


class TestFloorClamped:
    @pytest.mark.parametrize(
        "value,expected", [(3.7, 3), (-5.0, 0), (42.0, 10), (math.inf, 10), (-math.inf, 0)]
    )
    def test_bounds(self, value, expected):
        assert floor_clamped(value, 0, 10) == expected


class TestParseViewBox:
    def test_four_components(self):
        assert parse_view_box('<svg viewBox="0 0 100 50">') == (100.0, 50.0)

    def test_absent(self):
        assert parse_view_box('<svg width="10">') is None

    def test_comma_separated_is_ignored(self):
        assert parse_view_box('<svg viewBox="0,0,100,100">') is None

    def test_wrong_component_count(self):
        assert parse_view_box('<svg viewBox="0 0 100">') is None

    def test_zero_size_is_ignored(self):
        assert parse_view_box('<svg viewBox="0 0 0 100">') is None


class TestCoordinateMapper:
    def test_default_is_identity(self):
        mapper = CoordinateMapper(160, 120)
        assert mapper.scale_point(7, 9) == (7, 9)

    def test_view_box_scaling(self):
        mapper = CoordinateMapper(160, 120, 100, 100)
        assert mapper.scale_x(50) == 80
        assert mapper.scale_y(50) == 60

    def test_no_translation_term(self):
        mapper = CoordinateMapper(160, 120, 100, 100)
        assert mapper.scale_point(0, 0) == (0, 0)

    def test_radius_uses_reference_width(self):
        mapper = CoordinateMapper(320, 240, 100, 100)
        assert mapper.scale_radius(10) == 16.0
