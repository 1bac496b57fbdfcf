from __future__ import annotations

from adapters.layout.leveled import LeveledLayoutEngine
from adapters.scene.surface import SceneSurface
from app.config import AppSettings
from domain.models import StoryTreeOptions
from domain.ports.surface import SurfaceFactory
from domain.services.story_tree import StoryTree


def build_layout_engine(settings: AppSettings, options: StoryTreeOptions) -> LeveledLayoutEngine:
    config = settings.layout.to_layout_config(padding=options.padding, gutter=options.gutter)
    return LeveledLayoutEngine(config)


def build_story_tree(
    options: StoryTreeOptions,
    settings: AppSettings | None = None,
    surface_factory: SurfaceFactory = SceneSurface,
) -> StoryTree:
    settings = settings or AppSettings()
    layout = settings.layout
    return StoryTree(
        options,
        layout_engine=build_layout_engine(settings, options),
        surface_factory=surface_factory,
        overview_reduction=layout.overview_reduction if layout.overview_enabled else None,
    )
