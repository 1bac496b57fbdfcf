from __future__ import annotations

import logging
from dataclasses import replace

from domain.models import ArrowShape, LayoutPlan, Point, RectShape, Shape, StoryTreeOptions
from domain.ports.layout import LayoutEngine
from domain.ports.surface import DrawingSurface, SurfaceFactory
from domain.services.viewport_controller import OVERVIEW_REDUCTION, ViewportController

logger = logging.getLogger(__name__)

BACKGROUND_GROUP = "background"
NODE_GROUP = "node_group"
PREVIEW_GROUP = "preview_group"
INDICATOR_GROUP = "slider"

MAIN_BACKGROUND_COLOR = "#c5e5f6"
PREVIEW_BACKGROUND_COLOR = "#f0f0f080"
INDICATOR_COLOR = "#cccccc80"
NODE_COLOR = "red"
EDGE_COLOR = "black"
EDGE_STROKE_WIDTH = 4.0


class StoryTree:
    """Leveled diagram of a shared-node tree on a fixed-size surface.

    The layout is computed once at construction. When the diagram is larger
    than the container the node group becomes draggable, and an overview
    surface with a draggable indicator is created through ``surface_factory``.
    """

    def __init__(
        self,
        options: StoryTreeOptions,
        layout_engine: LayoutEngine,
        surface_factory: SurfaceFactory,
        overview_reduction: float | None = OVERVIEW_REDUCTION,
    ) -> None:
        self.options = options
        self.plan: LayoutPlan = layout_engine.build_plan(options.root, options.container)
        self.controller = ViewportController(
            container=options.container,
            diagram=self.plan.extent.size,
            overview_reduction=overview_reduction,
        )
        self.surface: DrawingSurface = surface_factory(options.container)
        self.preview: DrawingSurface | None = None
        self._draw()
        if self.controller.overview_enabled:
            self.preview = surface_factory(self.controller.overview_size)
            self._draw_preview()
        else:
            logger.debug("Diagram fits the container, overview skipped")

    @property
    def draggable(self) -> bool:
        return self.controller.pannable

    def _draw(self) -> None:
        surface = self.surface
        surface.add_group(BACKGROUND_GROUP)
        surface.add_shape(
            BACKGROUND_GROUP,
            RectShape(
                position=Point(0, 0),
                size=surface.size,
                fill=MAIN_BACKGROUND_COLOR,
                role="background",
                listening=False,
            ),
        )
        surface.add_group(NODE_GROUP, position=self.controller.pan)
        self._draw_shapes()
        if self.controller.pannable:
            surface.set_draggable(NODE_GROUP, self.controller.bound_main)
            surface.on_drag_move(NODE_GROUP, self._on_main_drag)
        surface.redraw()

    def _draw_shapes(self) -> None:
        for node in self.plan.nodes:
            self.surface.add_shape(
                NODE_GROUP,
                RectShape(
                    position=node.position,
                    size=node.size,
                    fill=NODE_COLOR,
                    role="node",
                    label=node.id,
                ),
            )
        for edge in self.plan.edges:
            self.surface.add_shape(
                NODE_GROUP,
                ArrowShape(
                    start=edge.start,
                    end=edge.end,
                    stroke=EDGE_COLOR,
                    stroke_width=EDGE_STROKE_WIDTH,
                    source_id=edge.source_id,
                    target_id=edge.target_id,
                ),
            )

    def _draw_preview(self) -> None:
        preview = self._require_preview()
        controller = self.controller
        preview.add_group(BACKGROUND_GROUP)
        preview.add_shape(
            BACKGROUND_GROUP,
            RectShape(
                position=Point(0, 0),
                size=preview.size,
                fill=PREVIEW_BACKGROUND_COLOR,
                role="background",
                listening=False,
            ),
        )
        preview.add_group(PREVIEW_GROUP, scale=controller.scale)
        offset = self.plan.offset
        for shape in self.surface.shapes(NODE_GROUP):
            preview.add_shape(PREVIEW_GROUP, _translate(shape, -offset.x, -offset.y))

        preview.add_group(INDICATOR_GROUP, position=controller.overview.indicator)
        preview.add_shape(
            INDICATOR_GROUP,
            RectShape(
                position=Point(0, 0),
                size=controller.indicator_size,
                fill=INDICATOR_COLOR,
                role="indicator",
            ),
        )
        preview.set_draggable(INDICATOR_GROUP, controller.bound_indicator)
        preview.on_drag_move(INDICATOR_GROUP, self._on_indicator_drag)
        preview.on_click(self._on_preview_click)
        preview.redraw()

    def _on_main_drag(self, position: Point) -> None:
        self.controller.drag_main(position)
        if self.preview is not None:
            self._sync_indicator()

    def _on_indicator_drag(self, position: Point) -> None:
        self.controller.drag_indicator(position)
        self._sync_main()

    def _on_preview_click(self, pointer: Point) -> None:
        self.controller.click_overview(pointer)
        self._sync_indicator()
        self._sync_main()

    def _sync_indicator(self) -> None:
        preview = self._require_preview()
        preview.move_group(INDICATOR_GROUP, self.controller.overview.indicator)
        preview.redraw()

    def _sync_main(self) -> None:
        self.surface.move_group(NODE_GROUP, self.controller.pan)
        self.surface.redraw()

    def _require_preview(self) -> DrawingSurface:
        if self.preview is None:
            msg = "Overview surface is not available"
            raise RuntimeError(msg)
        return self.preview


def _translate(shape: Shape, dx: float, dy: float) -> Shape:
    if not dx and not dy:
        return shape
    if isinstance(shape, ArrowShape):
        return replace(
            shape,
            start=Point(shape.start.x + dx, shape.start.y + dy),
            end=Point(shape.end.x + dx, shape.end.y + dy),
        )
    return replace(shape, position=Point(shape.position.x + dx, shape.position.y + dy))
