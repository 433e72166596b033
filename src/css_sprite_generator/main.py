"""Top-level orchestration for sprite sheet generation."""

from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import PurePath
from typing import TYPE_CHECKING

import css_sprite_generator.image_io as csg_image_io
import css_sprite_generator.rasterizer as csg_rasterizer
import css_sprite_generator.stylesheet as csg_stylesheet
from css_sprite_generator.errors import InvalidConfigError
from css_sprite_generator.logging_utils import logger
from css_sprite_generator.packing import compute_plan

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Sequence

    from css_sprite_generator.config import SpriteConfig
    from css_sprite_generator.packing import PackingPlan, SourceImage
    from css_sprite_generator.type_defs import NamedImageBytes


@dataclass(frozen=True)
class SpriteResult:
    """Artifacts produced by one successful generation."""

    plan: PackingPlan
    png: bytes
    css: str


def generate_from_images(
    images: Sequence[SourceImage],
    config: SpriteConfig,
    *,
    show_progress: bool = False,
) -> SpriteResult:
    """
    Lay out, render, and describe already decoded images.

    The plan is computed once and shared by the rasterizer and the
    stylesheet emitter. Any failure propagates; nothing partial is
    returned.
    """
    start = time.perf_counter()
    plan = compute_plan(images, config.to_layout_config())
    logger.info(
        "Planned %d images (%s) on a %dx%d canvas",
        len(plan), config.layout.direction,
        plan.canvas_width, plan.canvas_height,
    )

    png = csg_rasterizer.render(
        images,
        plan,
        resample=config.render.resample,
        workers=config.render.workers,
        max_canvas_pixels=config.render.max_canvas_pixels,
        show_progress=show_progress,
    )
    # The stylesheet is served next to the sheet, so reference it by name.
    css = csg_stylesheet.emit(
        plan,
        class_prefix=config.stylesheet.class_prefix,
        image_url=PurePath(config.output.sprite_name).name,
    )

    elapsed = time.perf_counter() - start
    logger.info("Sprite sheet generated in %.2f seconds", elapsed)
    return SpriteResult(plan=plan, png=png, css=css)


def generate_sprite_sheet(
    named_images: Sequence[NamedImageBytes],
    config: SpriteConfig,
    *,
    show_progress: bool = False,
) -> SpriteResult:
    """
    Top level entry point: (filename, bytes) pairs in, artifacts out.

    Layout parameters are checked before any image is decoded so
    configuration mistakes surface without doing rendering work.
    """
    if not named_images:
        msg = "No images provided"
        raise InvalidConfigError(msg)
    config.to_layout_config().validate()

    images = csg_image_io.decode_images(
        named_images,
        on_collision=config.render.on_collision,
    )
    return generate_from_images(images, config, show_progress=show_progress)
