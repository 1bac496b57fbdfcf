from __future__ import annotations

import json
from pathlib import Path
from typing import cast

from lzstring import LZString  # type: ignore[import-untyped]

from adapters.filesystem.json_utils import write_json_atomic
from domain.models import ExcalidrawDocument
from domain.ports.repositories import ExcalidrawRepository


class FileSystemExcalidrawRepository(ExcalidrawRepository):
    def save(self, document: ExcalidrawDocument, path: Path) -> None:
        write_json_atomic(path, document.to_dict())


def build_excalidraw_url(base_url: str, document: ExcalidrawDocument) -> str:
    payload = json.dumps(document.to_dict(), ensure_ascii=True, separators=(",", ":"))
    encoded = cast(str, LZString().compressToEncodedURIComponent(payload))
    return f"{base_url.split('#', 1)[0]}#json={encoded}"
