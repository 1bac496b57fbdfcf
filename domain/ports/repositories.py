from __future__ import annotations

from pathlib import Path
from typing import Protocol

from domain.models import ExcalidrawDocument, GraphNode


class GraphRepository(Protocol):
    def load(self, path: Path) -> GraphNode: ...

    def save(self, root: GraphNode, path: Path) -> None: ...


class ExcalidrawRepository(Protocol):
    def save(self, document: ExcalidrawDocument, path: Path) -> None: ...
