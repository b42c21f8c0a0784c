"""Tests for the canvas viewport transform."""

import pytest

from goaltrack.services.calculations.canvas import CanvasView, Transform, clamp_scale


def test_centered_transform():
    t = CanvasView.centered(1440, 900)
    assert t.scale == 1.0
    assert t.x == pytest.approx(720 - (264 * 2 + 180))
    assert t.y == pytest.approx(450 - 120)


def test_ctrl_wheel_zooms_within_bounds():
    view = CanvasView()
    view.wheel(0, 10, ctrl=True)
    assert view.transform.scale == pytest.approx(0.9)
    view.wheel(0, -10, ctrl=True)
    assert view.transform.scale == pytest.approx(0.99)

    for _ in range(50):
        view.wheel(0, 10, ctrl=True)
    assert view.transform.scale == pytest.approx(0.2)
    for _ in range(50):
        view.wheel(0, -10, ctrl=True)
    assert view.transform.scale == pytest.approx(2.0)


def test_plain_wheel_pans_by_negated_delta():
    view = CanvasView(transform=Transform(x=10, y=20))
    view.wheel(5, -7)
    assert (view.transform.x, view.transform.y) == (5, 27)
    assert view.transform.scale == 1.0


def test_zoom_buttons_are_clamped():
    view = CanvasView()
    view.zoom_in()
    assert view.transform.scale == pytest.approx(1.2)
    for _ in range(10):
        view.zoom_in()
    assert view.transform.scale == 2.0
    for _ in range(20):
        view.zoom_out()
    assert view.transform.scale == 0.2


def test_drag_moves_transform():
    view = CanvasView(transform=Transform(x=100, y=50))
    view.press(200, 200, at_ms=0)
    view.move(260, 170)
    assert (view.transform.x, view.transform.y) == (160, 20)
    assert view.release(at_ms=500) is False
    view.move(0, 0)
    assert (view.transform.x, view.transform.y) == (160, 20)


def test_short_press_counts_as_click():
    view = CanvasView()
    view.press(10, 10, at_ms=1000)
    assert view.release(at_ms=1150) is True


def test_right_button_does_not_drag():
    view = CanvasView()
    view.press(10, 10, at_ms=0, button=2)
    view.move(50, 50)
    assert (view.transform.x, view.transform.y) == (0, 0)


def test_reset_and_focus():
    view = CanvasView.for_viewport(800, 600)
    view.zoom_in()
    view.reset(800, 600)
    assert view.transform == CanvasView.centered(800, 600)
    view.focus()
    assert view.transform == Transform()


def test_clamp_scale():
    assert clamp_scale(5) == 2.0
    assert clamp_scale(0.01) == 0.2
    assert clamp_scale(1.3) == 1.3
