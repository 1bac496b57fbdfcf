from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

SpacingValue = Union[float, Tuple[float, float], List[float], None]


class GraphNode(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., min_length=1, validation_alias=AliasChoices("id", "uuid"))
    children: List[GraphNode] = Field(
        default_factory=list, validation_alias=AliasChoices("children", "next")
    )

    def to_graph_dict(self) -> dict:
        return {"id": self.id, "children": [child.to_graph_dict() for child in self.children]}


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Size:
    width: float
    height: float


@dataclass(frozen=True)
class Spacing:
    x: float = 0.0
    y: float = 0.0

    @classmethod
    def parse(cls, value: SpacingValue) -> Spacing:
        if value is None:
            return cls()
        if isinstance(value, (int, float)):
            if value < 0:
                msg = f"Spacing must be non-negative, got {value}"
                raise ValueError(msg)
            return cls(float(value), float(value))
        items = list(value)
        if len(items) != 2:
            msg = f"Spacing pair must have exactly two values, got {len(items)}"
            raise ValueError(msg)
        x, y = (float(item) for item in items)
        if x < 0 or y < 0:
            msg = f"Spacing must be non-negative, got ({x}, {y})"
            raise ValueError(msg)
        return cls(x, y)


@dataclass(frozen=True)
class RankedNode:
    id: str
    child_ids: Tuple[str, ...]
    rank: int


@dataclass(frozen=True)
class PositionedNode:
    id: str
    child_ids: Tuple[str, ...]
    rank: int
    x: float
    y: float
    width: float
    height: float

    @property
    def position(self) -> Point:
        return Point(self.x, self.y)

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)


@dataclass(frozen=True)
class DiagramExtent:
    width: float
    height: float

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)


@dataclass(frozen=True)
class EdgePlacement:
    source_id: str
    target_id: str
    start: Point
    end: Point


@dataclass(frozen=True)
class LayoutPlan:
    nodes: List[PositionedNode]
    edges: List[EdgePlacement]
    extent: DiagramExtent
    # Shift already applied to node coordinates to center them in the container.
    offset: Point = Point(0, 0)


@dataclass(frozen=True)
class ViewportState:
    pan_x: float = 0.0
    pan_y: float = 0.0

    @property
    def pan(self) -> Point:
        return Point(self.pan_x, self.pan_y)


@dataclass(frozen=True)
class OverviewState:
    scale: float
    indicator_x: float = 0.0
    indicator_y: float = 0.0

    @property
    def indicator(self) -> Point:
        return Point(self.indicator_x, self.indicator_y)


@dataclass(frozen=True)
class RectShape:
    position: Point
    size: Size
    fill: str
    role: str  # "background", "node" or "indicator"
    label: Optional[str] = None
    stroke: Optional[str] = None
    listening: bool = True


@dataclass(frozen=True)
class ArrowShape:
    start: Point
    end: Point
    stroke: str
    stroke_width: float
    source_id: Optional[str] = None
    target_id: Optional[str] = None
    role: str = "edge"


Shape = Union[RectShape, ArrowShape]


class StoryTreeOptions(BaseModel):
    width: float = Field(..., gt=0)
    height: float = Field(..., gt=0)
    root: GraphNode
    padding: Optional[Union[float, Tuple[float, float]]] = None
    gutter: Optional[Union[float, Tuple[float, float]]] = None

    @field_validator("padding", "gutter", mode="after")
    @classmethod
    def ensure_non_negative(
        cls, value: Optional[Union[float, Tuple[float, float]]]
    ) -> Optional[Union[float, Tuple[float, float]]]:
        Spacing.parse(value)
        return value

    @property
    def container(self) -> Size:
        return Size(self.width, self.height)


@dataclass(frozen=True)
class ExcalidrawDocument:
    elements: List[dict]
    app_state: dict
    files: dict

    def to_dict(self) -> dict:
        return {
            "type": "excalidraw",
            "version": 2,
            "source": "story-tree",
            "elements": self.elements,
            "appState": self.app_state,
            "files": self.files,
        }
