from __future__ import annotations

import json
from pathlib import Path

from lzstring import LZString  # type: ignore[import-untyped]

from adapters.excalidraw.repository import FileSystemExcalidrawRepository, build_excalidraw_url
from domain.models import ExcalidrawDocument


def _document() -> ExcalidrawDocument:
    return ExcalidrawDocument(elements=[], app_state={"theme": "light"}, files={})


def test_url_payload_decodes_to_scene() -> None:
    url = build_excalidraw_url("https://excalidraw.com/#old", _document())

    base, encoded = url.split("#json=", 1)
    assert base == "https://excalidraw.com/"
    decoded = LZString().decompressFromEncodedURIComponent(encoded)
    assert json.loads(decoded) == _document().to_dict()


def test_save_writes_scene_json(tmp_path: Path) -> None:
    target = tmp_path / "out" / "tree.excalidraw"

    FileSystemExcalidrawRepository().save(_document(), target)

    payload = json.loads(target.read_text(encoding="utf-8"))
    assert payload["type"] == "excalidraw"
    assert payload["source"] == "story-tree"
    assert not target.with_suffix(".excalidraw.tmp").exists()
