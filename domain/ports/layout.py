from __future__ import annotations

from typing import Protocol

from domain.models import GraphNode, LayoutPlan, Size


class LayoutEngine(Protocol):
    def build_plan(self, root: GraphNode, container: Size | None = None) -> LayoutPlan:
        ...
