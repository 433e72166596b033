"""
Unit tests for the config module used in css_sprite_generator.

Covers:
- Successful loading of a valid config.toml
- Default fallbacks for missing values
- Error handling for missing files and invalid values
- Merging command-line overrides over a loaded configuration
"""
from pathlib import Path
from typing import Any

import pytest
import tomlkit
from pydantic import ValidationError

import css_sprite_generator.config as csg_config
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
from css_sprite_generator.packing import LayoutConfig


def create_toml_file(directory: Path, data: dict[str, Any]) -> str:
    """Write ``data`` as config.toml under ``directory``; return its path."""
    doc = tomlkit.document()
    doc.update(data)
    path = directory / "config.toml"
    path.write_text(tomlkit.dumps(doc), encoding="utf-8")
    return str(path)


def test_load_valid_config(tmp_path: Path) -> None:
    """Test that a well-formed config.toml loads successfully."""
    path = create_toml_file(tmp_path, {
        "layout": {"direction": "diagonal", "spacing": 4,
                   "image_width": 32, "image_height": 24},
        "stylesheet": {"class_prefix": "icon"},
        "render": {"resample": "lanczos", "workers": 3,
                   "on_collision": "error"},
        "output": {"output": "build", "sprite_name": "icons.png",
                   "css_name": "icons.css"},
    })
    cfg = csg_config.ConfigLoader.load(path)

    assert isinstance(cfg, csg_config.SpriteConfig)
    assert cfg.layout.direction == "diagonal"
    assert cfg.layout.spacing == 4  # noqa: PLR2004
    assert (cfg.layout.image_width, cfg.layout.image_height) == (32, 24)
    assert cfg.stylesheet.class_prefix == "icon"
    assert cfg.render.resample == "lanczos"
    assert cfg.render.workers == 3  # noqa: PLR2004
    assert cfg.render.on_collision == "error"
    assert cfg.output.output == "build"
    assert cfg.output.names().sprite_name == "icons.png"
    assert cfg.render.max_canvas_pixels == DEFAULT_MAX_CANVAS_PIXELS


def test_missing_file_raises() -> None:
    """Ensure FileNotFoundError is raised for nonexistent config."""
    with pytest.raises(FileNotFoundError, match="Config file not found"):
        csg_config.ConfigLoader.load("nonexistent_file.toml")


def test_partial_config_uses_defaults(tmp_path: Path) -> None:
    """ConfigLoader should fall back to defaults for missing sections."""
    path = create_toml_file(tmp_path, {"layout": {"spacing": 0}})
    cfg = csg_config.ConfigLoader.load(path)

    assert cfg.layout.spacing == 0
    assert cfg.layout.direction == DEFAULT_DIRECTION
    assert cfg.layout.image_width is None
    assert cfg.stylesheet.class_prefix == DEFAULT_CLASS_PREFIX
    assert cfg.render.resample == DEFAULT_RESAMPLE
    assert cfg.render.on_collision == DEFAULT_ON_COLLISION
    assert cfg.output.sprite_name == DEFAULT_SPRITE_NAME


def test_empty_config_matches_defaults(tmp_path: Path) -> None:
    path = create_toml_file(tmp_path, {})
    assert csg_config.ConfigLoader.load(path) == \
        csg_config.SpriteConfig.model_validate({})


class TestValidation:
    """Field constraints reject bad values."""

    def test_negative_spacing(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            csg_config.LayoutSettings(spacing=-1)
        assert "spacing" in str(exc_info.value)

    @pytest.mark.parametrize("field", ["image_width", "image_height"])
    def test_non_positive_image_size(self, field: str) -> None:
        with pytest.raises(ValidationError) as exc_info:
            csg_config.LayoutSettings.model_validate({field: 0})
        assert field in str(exc_info.value)

    def test_unknown_direction(self) -> None:
        with pytest.raises(ValidationError):
            csg_config.LayoutSettings.model_validate({"direction": "spiral"})

    def test_unknown_resample(self) -> None:
        with pytest.raises(ValidationError):
            csg_config.RenderSettings.model_validate({"resample": "cubic"})

    def test_zero_workers(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            csg_config.RenderSettings.model_validate({"workers": 0})
        assert "workers" in str(exc_info.value)

    def test_invalid_value_in_file(self, tmp_path: Path) -> None:
        path = create_toml_file(tmp_path, {"render": {"workers": -2}})
        with pytest.raises(ValidationError):
            csg_config.ConfigLoader.load(path)


class TestNormalisation:
    """Values that are corrected rather than rejected."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("icon", "icon"), ("My Icons!", "my-icons"), ("", "sprite"),
         ("---", "sprite")],
    )
    def test_class_prefix_is_sanitized(self, raw: str, expected: str) -> None:
        settings = csg_config.StylesheetSettings(class_prefix=raw)
        assert settings.class_prefix == expected

    def test_output_names_get_extensions(self) -> None:
        settings = csg_config.OutputSettings(sprite_name="icons",
                                             css_name="icons.txt")
        assert settings.sprite_name == "icons.png"
        assert settings.css_name == "icons.css"

    def test_uppercase_extensions_kept(self) -> None:
        settings = csg_config.OutputSettings(sprite_name="ICONS.PNG")
        assert settings.sprite_name == "ICONS.PNG"
        assert settings.css_name == DEFAULT_CSS_NAME


def test_to_layout_config() -> None:
    cfg = csg_config.SpriteConfig.model_validate({
        "layout": {"direction": "vertical", "spacing": 2, "image_height": 9},
    })
    assert cfg.to_layout_config() == LayoutConfig(
        direction="vertical", spacing=2, target_width=None, target_height=9,
    )


class TestBuildConfigFromCli:
    """Command-line values layered over a base configuration."""

    def test_defaults_without_config(self) -> None:
        cfg = csg_config.build_config_from_cli({})
        assert cfg.layout.spacing == DEFAULT_SPACING
        assert cfg.output.output == DEFAULT_OUTPUT_DIR
        assert cfg.render.workers == DEFAULT_WORKERS

    def test_overrides_win_over_base(self) -> None:
        base = csg_config.SpriteConfig.model_validate({
            "layout": {"spacing": 20, "direction": "vertical"},
        })
        cfg = csg_config.build_config_from_cli(
            {"spacing": 1, "class_prefix": "Nav Icons", "workers": 2},
            base_config=base,
        )
        assert cfg.layout.spacing == 1
        assert cfg.layout.direction == "vertical"
        assert cfg.stylesheet.class_prefix == "nav-icons"
        assert cfg.render.workers == 2  # noqa: PLR2004

    def test_none_values_are_ignored(self) -> None:
        base = csg_config.SpriteConfig.model_validate({
            "layout": {"image_width": 48},
        })
        cfg = csg_config.build_config_from_cli(
            {"image_width": None, "config": None}, base_config=base,
        )
        assert cfg.layout.image_width == 48  # noqa: PLR2004

    def test_unknown_keys_are_ignored(self) -> None:
        cfg = csg_config.build_config_from_cli(
            {"inputs": ["a.png"], "verbose": True},
        )
        assert cfg == csg_config.SpriteConfig.model_validate({})

    def test_loads_config_path_with_loader(self) -> None:
        """The ``config`` value is passed to the injected loader."""
        loaded = csg_config.SpriteConfig.model_validate({
            "output": {"output": "from-file"},
        })
        calls: list[str] = []

        def fake_loader(path: str) -> csg_config.SpriteConfig:
            calls.append(path)
            return loaded

        cfg = csg_config.build_config_from_cli(
            {"config": "custom.toml", "direction": "diagonal"},
            loader=fake_loader,
        )
        assert calls == ["custom.toml"]
        assert cfg.output.output == "from-file"
        assert cfg.layout.direction == "diagonal"

    def test_clear_layout_fields(self) -> None:
        base = csg_config.SpriteConfig.model_validate({
            "layout": {"image_width": 48, "image_height": 12, "spacing": 1},
        })
        cfg = csg_config.clear_layout_fields(base, ["image_width"])
        assert cfg.layout.image_width is None
        assert cfg.layout.image_height == 12  # noqa: PLR2004
        assert cfg.layout.spacing == 1
        assert base.layout.image_width == 48  # noqa: PLR2004

    def test_clear_layout_fields_rejects_required(self) -> None:
        base = csg_config.SpriteConfig.model_validate({})
        with pytest.raises(ValueError, match="spacing"):
            csg_config.clear_layout_fields(base, ["spacing"])

    def test_invalid_override_raises(self) -> None:
        with pytest.raises(ValidationError):
            csg_config.build_config_from_cli({"spacing": -3})

    def test_base_is_not_mutated(self) -> None:
        base = csg_config.SpriteConfig.model_validate({})
        csg_config.build_config_from_cli({"spacing": 99}, base_config=base)
        assert base.layout.spacing == DEFAULT_SPACING
