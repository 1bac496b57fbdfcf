from __future__ import annotations

from typing import Sequence


class StoryTreeError(ValueError):
    """Base error for invalid story tree input."""


class CyclicGraphError(StoryTreeError):
    def __init__(self, cycle: Sequence[str]) -> None:
        self.cycle = list(cycle)
        super().__init__(f"Cycle detected: {' -> '.join(self.cycle)}")
