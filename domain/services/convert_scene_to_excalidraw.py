from __future__ import annotations

import random
import uuid
from collections.abc import Sequence
from typing import Any

from domain.models import ArrowShape, ExcalidrawDocument, Point, RectShape, Shape, Size
from domain.services.story_tree import MAIN_BACKGROUND_COLOR

CUSTOM_DATA_KEY = "story_tree"
METADATA_SCHEMA_VERSION = "1.0"

Element = dict[str, Any]

_STROKE_COLOR = "#1e1e1e"
_NODE_BACKGROUND = "#ffc9c9"
_LABEL_FONT_SIZE = 20.0


class SceneToExcalidrawConverter:
    def __init__(self) -> None:
        self.namespace = uuid.uuid5(uuid.NAMESPACE_DNS, "story-tree")

    def convert(self, shapes: Sequence[Shape]) -> ExcalidrawDocument:
        elements: list[Element] = []
        element_index: dict[str, Element] = {}

        def add_element(element: Element) -> None:
            elements.append(element)
            element_index[element["id"]] = element

        for shape in shapes:
            if isinstance(shape, RectShape) and shape.role == "node" and shape.label:
                rect_id = self._stable_id("node", shape.label)
                add_element(self._rectangle_element(rect_id, shape))
                add_element(self._text_element(rect_id, shape))
        for shape in shapes:
            if isinstance(shape, ArrowShape):
                arrow = self._arrow_element(shape)
                add_element(arrow)
                self._bind_arrow(element_index, arrow)

        app_state = {
            "viewBackgroundColor": MAIN_BACKGROUND_COLOR,
            "gridSize": None,
            "currentItemFontFamily": 1,
            "currentItemFontSize": _LABEL_FONT_SIZE,
            "currentItemStrokeColor": _STROKE_COLOR,
        }
        return ExcalidrawDocument(elements=elements, app_state=app_state, files={})

    def _rectangle_element(self, element_id: str, shape: RectShape) -> Element:
        return self._base_shape(
            element_id=element_id,
            type_name="rectangle",
            position=shape.position,
            size=shape.size,
            extra={
                "strokeColor": shape.stroke or _STROKE_COLOR,
                "backgroundColor": _NODE_BACKGROUND,
                "fillStyle": "solid",
                "boundElements": [{"type": "text", "id": self._stable_id("node-text", shape.label)}],
            },
            metadata={"role": "node", "node_id": shape.label},
        )

    def _text_element(self, container_id: str, shape: RectShape) -> Element:
        text = shape.label or ""
        height = _LABEL_FONT_SIZE * 1.25
        center = Point(
            x=shape.position.x + shape.size.width / 2,
            y=shape.position.y + shape.size.height / 2,
        )
        return self._base_shape(
            element_id=self._stable_id("node-text", text),
            type_name="text",
            position=Point(center.x - shape.size.width / 2, center.y - height / 2),
            size=Size(shape.size.width, height),
            extra={
                "strokeColor": _STROKE_COLOR,
                "backgroundColor": "transparent",
                "fillStyle": "solid",
                "text": text,
                "originalText": text,
                "fontSize": _LABEL_FONT_SIZE,
                "fontFamily": 1,
                "textAlign": "center",
                "verticalAlign": "middle",
                "baseline": height / 2,
                "containerId": container_id,
                "lineHeight": 1.25,
            },
            metadata={"role": "node_label", "node_id": text},
        )

    def _arrow_element(self, shape: ArrowShape) -> Element:
        dx = shape.end.x - shape.start.x
        dy = shape.end.y - shape.start.y
        arrow_id = self._stable_id("arrow", shape.source_id or "", shape.target_id or "")
        start_binding = self._stable_id("node", shape.source_id) if shape.source_id else None
        end_binding = self._stable_id("node", shape.target_id) if shape.target_id else None
        return self._base_shape(
            element_id=arrow_id,
            type_name="arrow",
            position=shape.start,
            size=Size(abs(dx), abs(dy)),
            extra={
                "strokeColor": shape.stroke if shape.stroke.startswith("#") else _STROKE_COLOR,
                "backgroundColor": "transparent",
                "fillStyle": "solid",
                "strokeWidth": shape.stroke_width,
                "roundness": {"type": 2},
                "points": [[0, 0], [dx, dy]],
                "startBinding": (
                    {"elementId": start_binding, "focus": 0.0, "gap": 1} if start_binding else None
                ),
                "endBinding": (
                    {"elementId": end_binding, "focus": 0.0, "gap": 1} if end_binding else None
                ),
                "startArrowhead": None,
                "endArrowhead": "arrow",
            },
            metadata={
                "role": "edge",
                "source_id": shape.source_id,
                "target_id": shape.target_id,
            },
        )

    def _bind_arrow(self, element_index: dict[str, Element], arrow: Element) -> None:
        for key in ("startBinding", "endBinding"):
            binding = arrow.get(key)
            if not binding:
                continue
            target = element_index.get(binding["elementId"])
            if target is None:
                continue
            target.setdefault("boundElements", []).append({"type": "arrow", "id": arrow["id"]})

    def _base_shape(
        self,
        element_id: str,
        type_name: str,
        position: Point,
        size: Size,
        metadata: dict[str, Any],
        extra: dict[str, Any] | None = None,
    ) -> Element:
        element: Element = {
            "id": element_id,
            "type": type_name,
            "x": position.x,
            "y": position.y,
            "width": size.width,
            "height": size.height,
            "angle": 0,
            "strokeWidth": 1,
            "strokeStyle": "solid",
            "roughness": 0,
            "opacity": 100,
            "groupIds": [],
            "frameId": None,
            "roundness": None,
            "seed": self._rand_seed(),
            "version": 1,
            "versionNonce": self._rand_seed(),
            "isDeleted": False,
            "boundElements": [],
            "locked": False,
            "customData": {
                CUSTOM_DATA_KEY: {"schema_version": METADATA_SCHEMA_VERSION, **metadata}
            },
        }
        if extra:
            element.update(extra)
        return element

    def _stable_id(self, *parts: str) -> str:
        return str(uuid.uuid5(self.namespace, "|".join(parts)))

    def _rand_seed(self) -> int:
        return random.randint(1, 2**31 - 1)
