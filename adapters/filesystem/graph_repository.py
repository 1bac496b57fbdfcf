from __future__ import annotations

from pathlib import Path

from adapters.filesystem.json_utils import load_json_object, write_json_atomic
from domain.models import GraphNode
from domain.ports.repositories import GraphRepository


class FileSystemGraphRepository(GraphRepository):
    """Reads graphs as nested ``{"id", "children"}`` JSON objects.

    A node that appears under several parents is written out once per
    parent; nodes sharing an id are treated as the same node by the layout.
    The ``root`` key of a full options payload is accepted as well.
    """

    def load(self, path: Path) -> GraphNode:
        data = load_json_object(path)
        if "root" in data and isinstance(data["root"], dict):
            data = data["root"]
        return GraphNode.model_validate(data)

    def save(self, root: GraphNode, path: Path) -> None:
        write_json_atomic(path, root.to_graph_dict())
