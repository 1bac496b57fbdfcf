from __future__ import annotations

import pytest

from domain.models import Point, Size
from domain.services.viewport_controller import (
    ViewportController,
    center_indicator_on,
    indicator_for_pan,
    overview_scale,
    pan_for_indicator,
)

CONTAINER = Size(400, 400)
DIAGRAM = Size(500, 440)


def _assert_consistent(controller: ViewportController) -> None:
    overview = controller.overview
    assert overview is not None
    assert overview.indicator_x == pytest.approx(-controller.pan.x * overview.scale)
    assert overview.indicator_y == pytest.approx(-controller.pan.y * overview.scale)


def test_overview_scale_fits_largest_ratio_and_reduces() -> None:
    assert overview_scale(DIAGRAM, CONTAINER) == pytest.approx(0.24)
    assert overview_scale(Size(1200, 900), CONTAINER) == pytest.approx(0.1)
    assert overview_scale(Size(1200, 900), CONTAINER, reduction=1.0) == pytest.approx(1 / 3)


def test_overview_is_skipped_when_diagram_fits() -> None:
    assert overview_scale(Size(300, 300), CONTAINER) is None
    assert overview_scale(Size(400, 400), CONTAINER) is None


def test_pan_and_indicator_are_inverse() -> None:
    pan = Point(-60, -20)

    indicator = indicator_for_pan(pan, 0.24)

    assert indicator == Point(pytest.approx(14.4), pytest.approx(4.8))
    assert pan_for_indicator(indicator, 0.24) == Point(pytest.approx(-60), pytest.approx(-20))


def test_center_indicator_on_moves_center_to_pointer() -> None:
    moved = center_indicator_on(Point(60, 50), Point(0, 0), Size(96, 96))

    assert moved == Point(12, 2)


def test_controller_defaults() -> None:
    controller = ViewportController(CONTAINER, DIAGRAM)

    assert controller.pannable
    assert controller.overview_enabled
    assert controller.pan == Point(0, 0)
    assert controller.viewport.pan == Point(0, 0)
    assert controller.indicator_size == Size(pytest.approx(96), pytest.approx(96))
    assert controller.overview_size == Size(pytest.approx(120), pytest.approx(105.6))
    _assert_consistent(controller)


def test_main_drag_is_clamped_and_updates_indicator() -> None:
    controller = ViewportController(CONTAINER, DIAGRAM)

    assert controller.drag_main(Point(-60, -20)) == Point(-60, -20)
    _assert_consistent(controller)

    assert controller.drag_main(Point(-900, 30)) == Point(-100, 0)
    _assert_consistent(controller)


def test_indicator_drag_pushes_pan_to_main() -> None:
    controller = ViewportController(CONTAINER, DIAGRAM)

    pan = controller.drag_indicator(Point(100, -5))

    assert pan == Point(pytest.approx(-100), 0)
    _assert_consistent(controller)


def test_overview_click_centers_indicator_then_clamps() -> None:
    controller = ViewportController(CONTAINER, DIAGRAM)

    pan = controller.click_overview(Point(60, 52.8))
    assert pan == Point(pytest.approx(-50), pytest.approx(-20))
    _assert_consistent(controller)

    pan = controller.click_overview(Point(0, 0))
    assert pan == Point(0, 0)
    _assert_consistent(controller)

    pan = controller.click_overview(Point(200, 200))
    assert pan == Point(pytest.approx(-100), pytest.approx(-40))
    _assert_consistent(controller)


def test_click_is_relative_to_current_indicator() -> None:
    controller = ViewportController(CONTAINER, DIAGRAM)
    controller.drag_main(Point(-50, -20))

    pan = controller.click_overview(Point(60, 52.8))

    assert pan == Point(pytest.approx(-50), pytest.approx(-20))


def test_frozen_axis_stays_put_through_overview() -> None:
    controller = ViewportController(CONTAINER, Size(1200, 300))

    assert controller.overview_enabled
    controller.click_overview(Point(100, 100))
    controller.drag_indicator(Point(30, 30))

    assert controller.pan.y == 0
    _assert_consistent(controller)


def test_controller_without_overview() -> None:
    controller = ViewportController(CONTAINER, Size(300, 300))

    assert not controller.pannable
    assert controller.overview is None
    assert controller.indicator_size is None
    assert controller.drag_main(Point(-100, -100)) == Point(0, 0)
    with pytest.raises(RuntimeError):
        controller.click_overview(Point(1, 1))


def test_overview_can_be_turned_off() -> None:
    controller = ViewportController(CONTAINER, DIAGRAM, overview_reduction=None)

    assert controller.pannable
    assert not controller.overview_enabled
    assert controller.drag_main(Point(-10, -10)) == Point(-10, -10)
