"""
Configuration schema and loader for the sprite generator.

Defines Pydantic models representing structured configuration sections,
a TOML-based config loader with validation support, and the merge step
that layers command-line overrides on top of a loaded config.
"""

from collections.abc import Callable, Iterable, Mapping
from pathlib import Path
from typing import Any

import tomlkit
from pydantic import BaseModel, Field, field_validator

from css_sprite_generator.config_defaults import (
    DEFAULT_CLASS_PREFIX,
    DEFAULT_CSS_NAME,
    DEFAULT_DIRECTION,
    DEFAULT_MAX_CANVAS_PIXELS,
    DEFAULT_ON_COLLISION,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_RESAMPLE,
    DEFAULT_SPACING,
    DEFAULT_SPRITE_NAME,
    DEFAULT_WORKERS,
)
from css_sprite_generator.packing import LayoutConfig, sanitize_fragment
from css_sprite_generator.type_defs import (
    CollisionPolicy,
    Direction,
    OutputNames,
    ResampleName,
)


class LayoutSettings(BaseModel):
    """Control how images are arranged on the sheet."""

    direction: Direction = Field(DEFAULT_DIRECTION)
    spacing: int = Field(DEFAULT_SPACING, ge=0)
    image_width: int | None = Field(None, gt=0)
    image_height: int | None = Field(None, gt=0)


class StylesheetSettings(BaseModel):
    """Control generated class names."""

    class_prefix: str = Field(DEFAULT_CLASS_PREFIX)

    @field_validator("class_prefix")
    @classmethod
    def _sanitize_prefix(cls, value: str) -> str:
        return sanitize_fragment(value, fallback=DEFAULT_CLASS_PREFIX)


class RenderSettings(BaseModel):
    """Control rasterization of the composite."""

    resample: ResampleName = Field(DEFAULT_RESAMPLE)
    max_canvas_pixels: int = Field(DEFAULT_MAX_CANVAS_PIXELS, ge=1)
    workers: int = Field(DEFAULT_WORKERS, ge=1)
    on_collision: CollisionPolicy = Field(DEFAULT_ON_COLLISION)


class OutputSettings(BaseModel):
    """Configure where the sheet and stylesheet are written."""

    output: str = Field(DEFAULT_OUTPUT_DIR)
    sprite_name: str = Field(DEFAULT_SPRITE_NAME, min_length=1)
    css_name: str = Field(DEFAULT_CSS_NAME, min_length=1)

    @field_validator("sprite_name")
    @classmethod
    def _ensure_png(cls, value: str) -> str:
        path = Path(value)
        return value if path.suffix.lower() == ".png" \
            else str(path.with_suffix(".png"))

    @field_validator("css_name")
    @classmethod
    def _ensure_css(cls, value: str) -> str:
        path = Path(value)
        return value if path.suffix.lower() == ".css" \
            else str(path.with_suffix(".css"))

    def names(self) -> OutputNames:
        """Return the artifact file names."""
        return OutputNames(sprite_name=self.sprite_name,
                           css_name=self.css_name)


class SpriteConfig(BaseModel):
    """
    Root configuration object combining all supported sections.

    Mirrors the structure of config.toml, grouping related parameters
    under logical categories.
    """

    # model_validate({}) populates every section from its Field defaults.
    layout: LayoutSettings = Field(
        default_factory=lambda: LayoutSettings.model_validate({}),
    )
    stylesheet: StylesheetSettings = Field(
        default_factory=lambda: StylesheetSettings.model_validate({}),
    )
    render: RenderSettings = Field(
        default_factory=lambda: RenderSettings.model_validate({}),
    )
    output: OutputSettings = Field(
        default_factory=lambda: OutputSettings.model_validate({}),
    )

    def to_layout_config(self) -> LayoutConfig:
        """Return the layout engine view of this config."""
        return LayoutConfig(
            direction=self.layout.direction,
            spacing=self.layout.spacing,
            target_width=self.layout.image_width,
            target_height=self.layout.image_height,
        )


class ConfigLoader:
    """
    Loads and parses a TOML configuration file into a typed config object.

    Falls back to defaults for any missing subsections or fields.
    """

    @staticmethod
    def load(path: str) -> SpriteConfig:
        """
        Load a sprite configuration from a TOML file.

        Returns a validated SpriteConfig instance based on the file
        contents.
        """
        config_path = Path(path)
        if not config_path.is_file():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)

        with config_path.open("r", encoding="utf-8") as f:
            doc = tomlkit.load(f)

        return SpriteConfig.model_validate(doc.unwrap())


# CLI argument name -> config section holding the field of the same name
_CLI_FIELD_SECTIONS: dict[str, str] = {
    "direction": "layout",
    "spacing": "layout",
    "image_width": "layout",
    "image_height": "layout",
    "class_prefix": "stylesheet",
    "resample": "render",
    "max_canvas_pixels": "render",
    "workers": "render",
    "on_collision": "render",
    "output": "output",
    "sprite_name": "output",
    "css_name": "output",
}


# Layout fields where None is a real value meaning "keep natural size"
CLEARABLE_LAYOUT_FIELDS: tuple[str, ...] = ("image_width", "image_height")


def clear_layout_fields(
    config: SpriteConfig,
    names: Iterable[str],
) -> SpriteConfig:
    """Return a copy of ``config`` with the given size overrides unset."""
    names = list(names)
    unknown = set(names) - set(CLEARABLE_LAYOUT_FIELDS)
    if unknown:
        msg = f"Cannot clear layout fields: {', '.join(sorted(unknown))}"
        raise ValueError(msg)
    layout = config.layout.model_copy(update=dict.fromkeys(names))
    return config.model_copy(update={"layout": layout})


def build_config_from_cli(
    values: Mapping[str, Any],
    base_config: SpriteConfig | None = None,
    loader: Callable[[str], SpriteConfig] = ConfigLoader.load,
) -> SpriteConfig:
    """
    Merge command-line values over a base configuration.

    Only keys present in ``values`` with a non-None value override the
    base. When no base is given and ``values["config"]`` names a file, it
    is loaded first; otherwise defaults are used. The merged result is
    validated again so CLI values obey the same constraints as TOML.
    """
    if base_config is None:
        config_path = values.get("config")
        base_config = (
            loader(config_path) if config_path
            else SpriteConfig.model_validate({})
        )

    data = base_config.model_dump()
    for key, section in _CLI_FIELD_SECTIONS.items():
        value = values.get(key)
        if value is not None:
            data[section][key] = value
    return SpriteConfig.model_validate(data)
