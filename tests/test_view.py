import dataclasses

import mpmath
import pytest

from deepzoom.compute import pixel_offset
from deepzoom.reference import to_mpf
from deepzoom.view import (
    SetCenter,
    SetDepth,
    SetRadius,
    ViewState,
    ZoomAt,
    ZoomIn,
    ZoomOut,
    apply_action,
)


@pytest.fixture
def view():
    return ViewState.from_strings("-0.75", "0.1", radius=2.0, depth=500)


def test_defaults():
    v = ViewState()
    assert v.center_re == 0 and v.center_im == 0
    assert v.radius == 2.0
    assert v.depth == 1000
    assert v.precision_digits == 100


def test_view_is_immutable(view):
    with pytest.raises(dataclasses.FrozenInstanceError):
        view.radius = 1.0


def test_zoom_in_and_out(view):
    zoomed = apply_action(view, ZoomIn(), 100, 100)
    assert zoomed.radius == 1.0
    assert zoomed.center_re == view.center_re
    assert view.radius == 2.0
    assert apply_action(zoomed, ZoomOut(), 100, 100) == view


def test_set_radius_and_depth(view):
    assert apply_action(view, SetRadius(1e-20), 10, 10).radius == 1e-20
    changed = apply_action(view, SetDepth(2000), 10, 10)
    assert changed.depth == 2000
    assert changed.orbit_key() != view.orbit_key()


def test_radius_change_keeps_orbit_key(view):
    assert apply_action(view, ZoomIn(), 10, 10).orbit_key() == view.orbit_key()


def test_set_center_keeps_full_precision(view):
    digits = "0.12345678901234567890123456789012345678901234567890"
    moved = apply_action(view, SetCenter(digits, "-1e-40"), 10, 10)
    assert moved.center_re == to_mpf(digits)
    assert moved.center_im == to_mpf("-1e-40")
    assert moved.radius == view.radius


def test_zoom_at_center_pixel_only_halves_radius(view):
    zoomed = apply_action(view, ZoomAt(50, 50), 100, 100)
    assert zoomed.center_re == view.center_re
    assert zoomed.center_im == view.center_im
    assert zoomed.radius == 1.0


def test_zoom_at_corner_recenters():
    v = ViewState()
    # 100x50 window: shorter side is 50 pixels wide
    zoomed = apply_action(v, ZoomAt(0, 0), 100, 50)
    assert zoomed.center_re == -4
    assert zoomed.center_im == 2
    assert zoomed.radius == 1.0


def test_zoom_at_adds_in_full_precision():
    base = "0.3000000000000000000000000000000000000001"
    v = ViewState.from_strings(base, "0", radius=1e-50, depth=10)
    zoomed = apply_action(v, ZoomAt(75, 50), 100, 100)
    d0r, _ = pixel_offset(75, 50, 100, 100, 1e-50)
    with mpmath.workdps(100):
        expected = mpmath.mpf(base) + mpmath.mpf(d0r)
        # The tiny tail digit and the pixel step both survive
        assert zoomed.center_re - mpmath.mpf("0.3") > mpmath.mpf("1e-41")
    assert zoomed.center_re == expected
    assert zoomed.radius == 0.5e-50


def test_zoom_at_on_empty_viewport_is_ignored(view):
    assert apply_action(view, ZoomAt(0, 0), 0, 100) is view


@pytest.mark.parametrize("action", [SetRadius(0.0), SetRadius(-1.0), SetRadius(float("inf")),
                                    SetRadius(float("nan")), SetDepth(0)])
def test_invalid_results_are_rejected(view, action):
    with pytest.raises(ValueError):
        apply_action(view, action, 10, 10)


def test_unknown_action(view):
    with pytest.raises(TypeError):
        apply_action(view, "zoom", 10, 10)


def test_describe(view):
    text = view.describe()
    assert text.startswith("center: -0.75 + i 0.1")
    assert "depth: 500" in text


@pytest.mark.parametrize("action", [ZoomIn(), ZoomOut()])
def test_repeated_zoom_stops_at_float_limits(view, action):
    # Halving underflows to 0.0 and doubling overflows to inf eventually
    last = view
    with pytest.raises(ValueError):
        for _ in range(1200):
            last = apply_action(last, action, 10, 10)
    assert last.radius > 0
    assert mpmath.isfinite(last.radius)
