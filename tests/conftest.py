"""
Test configuration and shared fixtures for css_sprite_generator.

This module defines reusable pytest fixtures for building in-memory
images, encoded image bytes, SourceImage records, and configs. These
fixtures support all test modules in the test suite.

Note:
    This file is automatically loaded by pytest and should not be
    renamed.

"""
from __future__ import annotations

import io
import logging
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest
from PIL import Image

from css_sprite_generator.config import SpriteConfig
from css_sprite_generator.constants import COLOR_MODE_RGBA
from css_sprite_generator.logging_utils import logger
from css_sprite_generator.packing import SourceImage

_RGBA = tuple[int, int, int, int]

RED: _RGBA = (255, 0, 0, 255)
GREEN: _RGBA = (0, 255, 0, 255)
BLUE: _RGBA = (0, 0, 255, 255)


@pytest.fixture
def log_capture(
    caplog: pytest.LogCaptureFixture,
) -> Iterator[pytest.LogCaptureFixture]:
    """
    Route the package logger through caplog.

    The shared logger does not propagate to the root logger, so records
    never reach caplog's handler unless propagation is switched on.
    """
    previous = logger.propagate
    logger.propagate = True
    caplog.set_level(logging.DEBUG, logger=logger.name)
    try:
        yield caplog
    finally:
        logger.propagate = previous


@pytest.fixture
def sample_image() -> Image.Image:
    """Create a sample 50x50 opaque red RGBA image."""
    return Image.new(COLOR_MODE_RGBA, (50, 50), color=RED)


@pytest.fixture
def make_source_image() -> Callable[..., SourceImage]:
    """Build SourceImage records backed by solid-colour pixels."""

    def _make(
        image_id: str,
        size: tuple[int, int],
        color: _RGBA = RED,
    ) -> SourceImage:
        img = Image.new(COLOR_MODE_RGBA, size, color=color)
        return SourceImage.from_image(image_id, img, filename=f"{image_id}.png")

    return _make


@pytest.fixture
def make_image_bytes() -> Callable[..., bytes]:
    """Encode a solid-colour image in the requested format."""

    def _make(
        size: tuple[int, int] = (10, 10),
        color: _RGBA = RED,
        fmt: str = "PNG",
    ) -> bytes:
        img = Image.new(COLOR_MODE_RGBA, size, color=color)
        if fmt == "JPEG":
            img = img.convert("RGB")
        buf = io.BytesIO()
        img.save(buf, format=fmt)
        return buf.getvalue()

    return _make


@pytest.fixture
def make_image_file(
    tmp_path: Path,
    make_image_bytes: Callable[..., bytes],
) -> Callable[..., Path]:
    """Write a solid-colour image to tmp_path and return its path."""

    def _make(
        name: str,
        size: tuple[int, int] = (10, 10),
        color: _RGBA = RED,
        fmt: str = "PNG",
    ) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(make_image_bytes(size, color, fmt))
        return path

    return _make


@pytest.fixture
def make_sprite_config(tmp_path: Path) -> Callable[..., SpriteConfig]:
    """
    Build SpriteConfig instances with optional section overrides.

    Each config writes to an isolated output directory under tmp_path.
    """
    default_output = tmp_path / "sprites"

    def _build(
        *,
        layout: dict[str, Any] | None = None,
        stylesheet: dict[str, Any] | None = None,
        render: dict[str, Any] | None = None,
        output: dict[str, Any] | None = None,
    ) -> SpriteConfig:
        data: dict[str, Any] = {
            "layout": dict(layout or {}),
            "stylesheet": dict(stylesheet or {}),
            "render": dict(render or {}),
            "output": {"output": str(default_output), **(output or {})},
        }
        return SpriteConfig.model_validate(data)

    return _build
