from __future__ import annotations

import logging

from domain.models import OverviewState, Point, Size, ViewportState
from domain.services.bounded_pan import clamp_indicator, clamp_pan, is_pannable

logger = logging.getLogger(__name__)

OVERVIEW_REDUCTION = 0.3


def overview_scale(
    diagram: Size, container: Size, reduction: float = OVERVIEW_REDUCTION
) -> float | None:
    """Scale that fits the whole diagram in the container, shrunk by ``reduction``.

    Returns ``None`` when the diagram already fits, in which case no overview
    is shown.
    """
    if not is_pannable(container, diagram):
        return None
    fit = 1 / max(diagram.width / container.width, diagram.height / container.height)
    if fit > 1:
        return None
    return fit * reduction


def indicator_for_pan(pan: Point, scale: float) -> Point:
    return Point(x=-pan.x * scale, y=-pan.y * scale)


def pan_for_indicator(indicator: Point, scale: float) -> Point:
    return Point(x=-indicator.x / scale, y=-indicator.y / scale)


def center_indicator_on(pointer: Point, indicator: Point, indicator_size: Size) -> Point:
    center = Point(
        x=indicator.x + indicator_size.width / 2,
        y=indicator.y + indicator_size.height / 2,
    )
    return Point(x=indicator.x + pointer.x - center.x, y=indicator.y + pointer.y - center.y)


class ViewportController:
    """Owns the pan offset of a diagram inside a fixed container.

    The overview indicator is always derived from the pan offset, so every
    interaction goes through ``_commit``.
    """

    def __init__(
        self,
        container: Size,
        diagram: Size,
        overview_reduction: float | None = OVERVIEW_REDUCTION,
    ) -> None:
        self.container = container
        self.diagram = diagram
        self.pannable = is_pannable(container, diagram)
        self.scale: float | None = None
        if overview_reduction is not None:
            self.scale = overview_scale(diagram, container, overview_reduction)
        if self.scale is None:
            logger.debug(
                "Overview disabled for diagram %.1fx%.1f in container %.1fx%.1f",
                diagram.width,
                diagram.height,
                container.width,
                container.height,
            )
        self._pan = Point(0.0, 0.0)

    @property
    def overview_enabled(self) -> bool:
        return self.scale is not None

    @property
    def pan(self) -> Point:
        return self._pan

    @property
    def viewport(self) -> ViewportState:
        return ViewportState(pan_x=self._pan.x, pan_y=self._pan.y)

    @property
    def overview(self) -> OverviewState | None:
        if self.scale is None:
            return None
        indicator = indicator_for_pan(self._pan, self.scale)
        return OverviewState(scale=self.scale, indicator_x=indicator.x, indicator_y=indicator.y)

    @property
    def indicator_size(self) -> Size | None:
        if self.scale is None:
            return None
        return Size(self.container.width * self.scale, self.container.height * self.scale)

    @property
    def overview_size(self) -> Size | None:
        if self.scale is None:
            return None
        return Size(self.diagram.width * self.scale, self.diagram.height * self.scale)

    def bound_main(self, proposed: Point) -> Point:
        return clamp_pan(proposed, self.container, self.diagram, self._pan)

    def bound_indicator(self, proposed: Point) -> Point:
        scale = self._require_scale()
        current = indicator_for_pan(self._pan, scale)
        return clamp_indicator(proposed, self.container, self.diagram, scale, current)

    def drag_main(self, proposed: Point) -> Point:
        return self._commit(proposed)

    def drag_indicator(self, proposed: Point) -> Point:
        scale = self._require_scale()
        indicator = self.bound_indicator(proposed)
        return self._commit(pan_for_indicator(indicator, scale))

    def click_overview(self, pointer: Point) -> Point:
        scale = self._require_scale()
        indicator = indicator_for_pan(self._pan, scale)
        moved = center_indicator_on(pointer, indicator, self.indicator_size)
        return self.drag_indicator(moved)

    def _commit(self, proposed: Point) -> Point:
        self._pan = self.bound_main(proposed)
        return self._pan

    def _require_scale(self) -> float:
        if self.scale is None:
            msg = "Overview is disabled for this diagram"
            raise RuntimeError(msg)
        return self.scale
