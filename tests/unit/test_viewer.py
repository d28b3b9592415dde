"""Unit tests for the image viewer model."""

import pytest

from roboai.core.viewer import MAX_SCALE, MIN_SCALE, ViewerState, clamp_scale


class TestClampScale:
    @pytest.mark.parametrize(
        "value, expected",
        [(0.1, MIN_SCALE), (0.5, 0.5), (2.0, 2.0), (5.0, 5.0), (9.0, MAX_SCALE)],
    )
    def test_clamp(self, value, expected):
        assert clamp_scale(value) == expected


class TestViewerState:
    """Tests for ViewerState zoom and pan."""

    def test_closed_by_default(self):
        viewer = ViewerState()

        assert not viewer.is_open
        assert viewer.scale == 1.0
        assert (viewer.x, viewer.y) == (0.0, 0.0)

    def test_open_resets_view(self):
        viewer = ViewerState()
        viewer.open("gen-a-0")
        viewer.zoom_in()
        viewer.pan_by(30, -20)

        viewer.open("gen-a-1")

        assert viewer.image_ref == "gen-a-1"
        assert viewer.scale == 1.0
        assert (viewer.x, viewer.y) == (0.0, 0.0)

    def test_close(self):
        viewer = ViewerState()
        viewer.open("gen-a-0")
        viewer.zoom_in()

        viewer.close()

        assert not viewer.is_open
        assert viewer.scale == 1.0

    def test_button_zoom_steps(self):
        viewer = ViewerState()

        assert viewer.zoom_in() == 1.5
        assert viewer.zoom_out() == 1.0
        assert viewer.zoom_out() == 0.5

    def test_zoom_out_stops_at_minimum(self):
        viewer = ViewerState()
        for _ in range(5):
            viewer.zoom_out()
        assert viewer.scale == MIN_SCALE

    def test_zoom_in_stops_at_maximum(self):
        viewer = ViewerState()
        for _ in range(20):
            viewer.zoom_in()
        assert viewer.scale == MAX_SCALE

    def test_wheel_down_zooms_out(self):
        viewer = ViewerState()
        assert viewer.wheel(120) == pytest.approx(0.9)

    def test_wheel_up_zooms_in(self):
        viewer = ViewerState()
        assert viewer.wheel(-120) == pytest.approx(1.1)

    def test_wheel_zero_is_noop(self):
        viewer = ViewerState()
        assert viewer.wheel(0) == 1.0

    def test_wheel_respects_bounds(self):
        viewer = ViewerState(scale=MAX_SCALE)
        viewer.wheel(-1)
        assert viewer.scale == MAX_SCALE

        viewer = ViewerState(scale=MIN_SCALE)
        viewer.wheel(1)
        assert viewer.scale == MIN_SCALE

    def test_reset_keeps_image(self):
        viewer = ViewerState()
        viewer.open("gen-a-0")
        viewer.zoom_in()
        viewer.pan_by(10, 10)

        viewer.reset()

        assert viewer.is_open
        assert viewer.scale == 1.0
        assert (viewer.x, viewer.y) == (0.0, 0.0)

    def test_drag_moves_by_pointer_delta(self):
        viewer = ViewerState(x=10.0, y=5.0)

        viewer.begin_drag(100, 100)
        viewer.drag_to(130, 80)

        assert (viewer.x, viewer.y) == (40.0, -15.0)

    def test_drag_ignored_when_not_dragging(self):
        viewer = ViewerState()
        viewer.drag_to(50, 50)
        assert (viewer.x, viewer.y) == (0.0, 0.0)

    def test_end_drag(self):
        viewer = ViewerState()
        viewer.begin_drag(0, 0)
        viewer.end_drag()
        viewer.drag_to(10, 10)

        assert not viewer.is_dragging
        assert (viewer.x, viewer.y) == (0.0, 0.0)

    def test_zoom_percent(self):
        viewer = ViewerState(scale=1.5)
        assert viewer.zoom_percent == "150%"

    def test_css_transform(self):
        viewer = ViewerState(scale=2.0, x=12.0, y=-3.5)
        assert viewer.css_transform() == "translate(12px, -3.5px) scale(2)"
