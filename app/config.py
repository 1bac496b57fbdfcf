from __future__ import annotations

import json
import os
from pathlib import Path
from typing import ClassVar, Optional, Tuple, Union

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic_settings.sources import PydanticBaseSettingsSource, YamlConfigSettingsSource

from adapters.layout.leveled import LayoutConfig
from domain.models import Size, Spacing

DEFAULT_CONFIG_PATH = Path("config/story_tree.yaml")

SpacingSetting = Union[float, Tuple[float, float]]


def _parse_spacing_value(value: object) -> object:
    if not isinstance(value, str):
        return value
    raw = value.strip()
    if not raw:
        return 0.0
    if raw.startswith("["):
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            msg = f"Invalid spacing value: {value}"
            raise ValueError(msg) from exc
    if "," in raw:
        return [part.strip() for part in raw.split(",")]
    return raw


class LayoutSettings(BaseModel):
    node_width: float = Field(default=100.0, gt=0)
    node_height: float = Field(default=80.0, gt=0)
    padding: SpacingSetting = 0.0
    gutter: SpacingSetting = 0.0
    container_width: float = Field(default=400.0, gt=0)
    container_height: float = Field(default=400.0, gt=0)
    overview_enabled: bool = True
    overview_reduction: float = Field(default=0.3, gt=0, le=1)
    excalidraw_base_url: str = "https://excalidraw.com/"

    @field_validator("padding", "gutter", mode="before")
    @classmethod
    def normalize_spacing(cls, value: object) -> object:
        return _parse_spacing_value(value)

    @field_validator("padding", "gutter", mode="after")
    @classmethod
    def ensure_non_negative(cls, value: SpacingSetting) -> SpacingSetting:
        Spacing.parse(value)
        return value

    @property
    def node_size(self) -> Size:
        return Size(self.node_width, self.node_height)

    @property
    def container(self) -> Size:
        return Size(self.container_width, self.container_height)

    def to_layout_config(
        self,
        padding: Optional[SpacingSetting] = None,
        gutter: Optional[SpacingSetting] = None,
    ) -> LayoutConfig:
        return LayoutConfig(
            node_size=self.node_size,
            padding=Spacing.parse(self.padding if padding is None else padding),
            gutter=Spacing.parse(self.gutter if gutter is None else gutter),
        )


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="STORY_TREE_", env_nested_delimiter="__")

    layout: LayoutSettings = LayoutSettings()

    _yaml_path: ClassVar[Path | None] = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources: list[PydanticBaseSettingsSource] = [
            init_settings,
            env_settings,
            dotenv_settings,
            file_secret_settings,
        ]
        if cls._yaml_path:
            sources.append(YamlConfigSettingsSource(settings_cls, yaml_file=cls._yaml_path))
        return tuple(sources)


def load_settings(config_path: Path | None = None) -> AppSettings:
    env_path = os.getenv("STORY_TREE_CONFIG_PATH")
    resolved_path: Path | None = None

    if config_path is not None:
        resolved_path = config_path
    elif env_path:
        resolved_path = Path(env_path)
    elif DEFAULT_CONFIG_PATH.exists():
        resolved_path = DEFAULT_CONFIG_PATH

    previous = AppSettings._yaml_path
    try:
        if resolved_path is not None:
            if not resolved_path.exists():
                msg = f"Config file not found: {resolved_path}"
                raise FileNotFoundError(msg)
            AppSettings._yaml_path = resolved_path
        return AppSettings()
    finally:
        AppSettings._yaml_path = previous
