from __future__ import annotations

import json
from pathlib import Path

import pytest

from adapters.filesystem.graph_repository import FileSystemGraphRepository
from domain.models import GraphNode


def test_load_accepts_original_key_names(tmp_path: Path) -> None:
    path = tmp_path / "graph.json"
    path.write_text(
        json.dumps({"uuid": "1", "next": [{"uuid": "2", "next": []}]}),
        encoding="utf-8",
    )

    root = FileSystemGraphRepository().load(path)

    assert root.id == "1"
    assert [child.id for child in root.children] == ["2"]


def test_load_unwraps_options_payload(tmp_path: Path) -> None:
    path = tmp_path / "options.json"
    path.write_text(
        json.dumps({"width": 400, "height": 400, "root": {"id": "r", "children": [{"id": "a"}]}}),
        encoding="utf-8",
    )

    root = FileSystemGraphRepository().load(path)

    assert root.id == "r"


def test_save_and_load(tmp_path: Path) -> None:
    repo = FileSystemGraphRepository()
    root = GraphNode(id="r", children=[GraphNode(id="a"), GraphNode(id="b")])

    repo.save(root, tmp_path / "graph.json")

    assert repo.load(tmp_path / "graph.json") == root


def test_load_rejects_non_object(tmp_path: Path) -> None:
    path = tmp_path / "graph.json"
    path.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(ValueError):
        FileSystemGraphRepository().load(path)
