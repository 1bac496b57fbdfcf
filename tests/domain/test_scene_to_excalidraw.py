from __future__ import annotations

from typing import Any

from app.story_tree_wiring import build_story_tree
from domain.models import StoryTreeOptions
from domain.services.convert_scene_to_excalidraw import CUSTOM_DATA_KEY, SceneToExcalidrawConverter
from domain.services.story_tree import NODE_GROUP


def _convert(payload: dict[str, Any]) -> list[dict[str, Any]]:
    tree = build_story_tree(
        StoryTreeOptions(width=400, height=400, root=payload, gutter=50, padding=50)
    )
    return SceneToExcalidrawConverter().convert(tree.surface.shapes(NODE_GROUP)).elements


def test_nodes_become_labelled_rectangles(shared_graph_payload: dict[str, Any]) -> None:
    elements = _convert(shared_graph_payload)

    rectangles = [element for element in elements if element["type"] == "rectangle"]
    texts = {element["containerId"]: element for element in elements if element["type"] == "text"}
    assert [rect["customData"][CUSTOM_DATA_KEY]["node_id"] for rect in rectangles] == [
        "1",
        "2",
        "3",
        "4",
        "5",
    ]
    root = rectangles[0]
    assert (root["x"], root["y"], root["width"], root["height"]) == (200.0, 50.0, 100.0, 80.0)
    assert texts[root["id"]]["text"] == "1"


def test_arrows_are_bound_to_their_nodes(shared_graph_payload: dict[str, Any]) -> None:
    elements = _convert(shared_graph_payload)

    by_id = {element["id"]: element for element in elements}
    arrows = [element for element in elements if element["type"] == "arrow"]
    assert len(arrows) == 6
    for arrow in arrows:
        meta = arrow["customData"][CUSTOM_DATA_KEY]
        source = by_id[arrow["startBinding"]["elementId"]]
        target = by_id[arrow["endBinding"]["elementId"]]
        assert source["customData"][CUSTOM_DATA_KEY]["node_id"] == meta["source_id"]
        assert target["customData"][CUSTOM_DATA_KEY]["node_id"] == meta["target_id"]
        assert {"type": "arrow", "id": arrow["id"]} in source["boundElements"]
        assert arrow["points"][-1] == [
            arrow["points"][-1][0],
            target["y"] - source["y"] - source["height"],
        ]


def test_element_ids_are_stable(shared_graph_payload: dict[str, Any]) -> None:
    first = [element["id"] for element in _convert(shared_graph_payload)]
    second = [element["id"] for element in _convert(shared_graph_payload)]

    assert first == second
    assert len(set(first)) == len(first)
