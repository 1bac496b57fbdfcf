from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from domain.models import Point, Shape, Size
from domain.ports.surface import BoundFunc, DrawingSurface, PointerHandler


@dataclass
class SceneGroup:
    group_id: str
    position: Point
    scale: float = 1.0
    shapes: list[Shape] = field(default_factory=list)
    bound: BoundFunc | None = None
    drag_handlers: list[PointerHandler] = field(default_factory=list)

    @property
    def draggable(self) -> bool:
        return self.bound is not None


class SceneSurface(DrawingSurface):
    """In-memory drawing surface.

    Keeps groups of shapes in insertion order and replays pointer input the
    way a scene-graph stage would: a drag proposes an absolute group position
    that passes through the group's bound function before it is committed.
    """

    def __init__(self, size: Size) -> None:
        if size.width <= 0 or size.height <= 0:
            msg = f"Surface size must be positive, got {size.width}x{size.height}"
            raise ValueError(msg)
        self._size = size
        self.groups: dict[str, SceneGroup] = {}
        self.redraw_count = 0
        self._click_handlers: list[PointerHandler] = []

    @property
    def size(self) -> Size:
        return self._size

    def add_group(self, group_id: str, position: Point = Point(0, 0), scale: float = 1.0) -> None:
        if group_id in self.groups:
            msg = f"Duplicate group_id: {group_id}"
            raise ValueError(msg)
        self.groups[group_id] = SceneGroup(group_id=group_id, position=position, scale=scale)

    def add_shape(self, group_id: str, shape: Shape) -> None:
        self._group(group_id).shapes.append(shape)

    def shapes(self, group_id: str) -> Sequence[Shape]:
        return tuple(self._group(group_id).shapes)

    def set_draggable(self, group_id: str, bound: BoundFunc) -> None:
        self._group(group_id).bound = bound

    def is_draggable(self, group_id: str) -> bool:
        return self._group(group_id).draggable

    def group_position(self, group_id: str) -> Point:
        return self._group(group_id).position

    def move_group(self, group_id: str, position: Point) -> None:
        self._group(group_id).position = position

    def on_drag_move(self, group_id: str, handler: PointerHandler) -> None:
        self._group(group_id).drag_handlers.append(handler)

    def on_click(self, handler: PointerHandler) -> None:
        self._click_handlers.append(handler)

    def redraw(self) -> None:
        self.redraw_count += 1

    def drag(self, group_id: str, proposed: Point) -> Point:
        group = self._group(group_id)
        if group.bound is None:
            return group.position
        group.position = group.bound(proposed)
        for handler in group.drag_handlers:
            handler(group.position)
        return group.position

    def click(self, pointer: Point) -> None:
        for handler in self._click_handlers:
            handler(pointer)

    def _group(self, group_id: str) -> SceneGroup:
        try:
            return self.groups[group_id]
        except KeyError:
            msg = f"Unknown group_id: {group_id}"
            raise KeyError(msg) from None
