from __future__ import annotations

import os
from collections.abc import Generator
from typing import Any

import pytest

from adapters.layout.leveled import LayoutConfig
from domain.models import GraphNode, Size, Spacing


def _clear_story_tree_env() -> None:
    for key in list(os.environ):
        if key.startswith("STORY_TREE_"):
            os.environ.pop(key, None)


_clear_story_tree_env()


@pytest.fixture(autouse=True)
def clear_story_tree_env() -> Generator[None, None, None]:
    _clear_story_tree_env()
    yield
    _clear_story_tree_env()


@pytest.fixture
def shared_graph_payload() -> dict[str, Any]:
    return {
        "id": "1",
        "children": [
            {"id": "2", "children": [{"id": "5", "children": []}]},
            {"id": "3", "children": [{"id": "5", "children": []}]},
            {"id": "4", "children": [{"id": "5", "children": []}]},
        ],
    }


@pytest.fixture
def shared_graph(shared_graph_payload: dict[str, Any]) -> GraphNode:
    return GraphNode.model_validate(shared_graph_payload)


@pytest.fixture
def spaced_config() -> LayoutConfig:
    return LayoutConfig(node_size=Size(100, 80), padding=Spacing(50, 50), gutter=Spacing(50, 50))
