from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Protocol

from domain.models import Point, Shape, Size

BoundFunc = Callable[[Point], Point]
PointerHandler = Callable[[Point], None]


class DrawingSurface(Protocol):
    @property
    def size(self) -> Size: ...

    def add_group(self, group_id: str, position: Point = Point(0, 0), scale: float = 1.0) -> None: ...

    def add_shape(self, group_id: str, shape: Shape) -> None: ...

    def shapes(self, group_id: str) -> Sequence[Shape]: ...

    def set_draggable(self, group_id: str, bound: BoundFunc) -> None: ...

    def group_position(self, group_id: str) -> Point: ...

    def move_group(self, group_id: str, position: Point) -> None: ...

    def on_drag_move(self, group_id: str, handler: PointerHandler) -> None: ...

    def on_click(self, handler: PointerHandler) -> None: ...

    def redraw(self) -> None: ...


SurfaceFactory = Callable[[Size], DrawingSurface]
