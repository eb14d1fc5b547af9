"""Unit tests for drop position classification."""

import pytest

from formcanvas.config import Settings
from formcanvas.models.contracts.canvas import Point, Rect
from formcanvas.models.enums import DragSource, DropIntent
from formcanvas.services.position_classifier import classify

RECT = Rect(top=100, left=200, width=400, height=80)


def at(x_fraction: float, y_fraction: float) -> Point:
    return Point(x=RECT.left + RECT.width * x_fraction, y=RECT.top + RECT.height * y_fraction)


class TestHorizontalBands:
    @pytest.mark.parametrize("x", [0.0, 0.1, 0.34])
    def test_left_band(self, settings, x):
        """Pointer in the left 35% is LEFT regardless of y"""
        assert classify(at(x, 0.9), RECT, settings=settings) == DropIntent.LEFT

    @pytest.mark.parametrize("x", [0.66, 0.9, 1.0])
    def test_right_band(self, settings, x):
        """Pointer in the right 35% is RIGHT regardless of y"""
        assert classify(at(x, 0.1), RECT, settings=settings) == DropIntent.RIGHT

    def test_band_edges_fall_to_centre(self, settings):
        """Exactly 0.35 and 0.65 are inside the centre band"""
        assert classify(at(0.35, 0.2), RECT, settings=settings) == DropIntent.BEFORE
        assert classify(at(0.65, 0.8), RECT, settings=settings) == DropIntent.AFTER


class TestCentreBand:
    def test_upper_half_is_before(self, settings):
        assert classify(at(0.5, 0.25), RECT, settings=settings) == DropIntent.BEFORE

    def test_lower_half_is_after(self, settings):
        assert classify(at(0.5, 0.75), RECT, settings=settings) == DropIntent.AFTER

    def test_vertical_midpoint_is_after(self, settings):
        """y exactly at 0.5 is not < 0.5"""
        assert classify(at(0.5, 0.5), RECT, settings=settings) == DropIntent.AFTER


class TestCanvasGap:
    def test_gap_always_appends(self, settings):
        """is_empty_canvas_gap wins over any geometry"""
        intent = classify(at(0.0, 0.0), RECT, is_empty_canvas_gap=True, settings=settings)
        assert intent == DropIntent.APPEND_TO_CANVAS_END

    def test_missing_rect_appends(self, settings):
        assert classify(Point(x=5, y=5), None, settings=settings) == DropIntent.APPEND_TO_CANVAS_END


class TestEdgeCases:
    @pytest.mark.parametrize("source", [DragSource.PALETTE, DragSource.CANVAS, "canvas"])
    def test_drag_source_does_not_change_result(self, settings, source):
        assert classify(at(0.1, 0.5), RECT, drag_source=source, settings=settings) == DropIntent.LEFT

    @pytest.mark.parametrize(
        "rect",
        [
            Rect(top=0, left=0, width=0, height=0),
            Rect(top=0, left=0, width=-10, height=-10),
            Rect(top=0, left=0, width=float("nan"), height=float("inf")),
        ],
    )
    def test_degenerate_rect_is_after(self, settings, rect):
        """Zero, negative or non-finite extents map to the centre"""
        assert classify(Point(x=0, y=0), rect, settings=settings) == DropIntent.AFTER

    def test_pointer_outside_rect(self, settings):
        """Fractions outside [0, 1] still classify"""
        assert classify(Point(x=-50, y=0), RECT, settings=settings) == DropIntent.LEFT
        assert classify(Point(x=10_000, y=0), RECT, settings=settings) == DropIntent.RIGHT

    def test_thresholds_come_from_settings(self):
        """Narrower side bands widen the centre"""
        narrow = Settings(
            environment="testing",
            drop_left_threshold=0.1,
            drop_right_threshold=0.9,
            _env_file=None,
        )
        assert classify(at(0.2, 0.2), RECT, settings=narrow) == DropIntent.BEFORE
        assert classify(at(0.05, 0.2), RECT, settings=narrow) == DropIntent.LEFT
