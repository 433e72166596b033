"""
Composite rendering for a computed PackingPlan.

Each source image is resized to its placement box when needed and copied
into a transparent RGBA buffer at the planned offset. The layout engine
guarantees placements never overlap, so each copy writes a disjoint
slice of the buffer and the order of writes does not matter. Decoding
and resampling can therefore fan out over a thread pool while the main
thread remains the only writer.
"""

from __future__ import annotations

import io
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING

import numpy as np
from PIL import Image
from tqdm import tqdm

from css_sprite_generator.config_defaults import (
    DEFAULT_MAX_CANVAS_PIXELS,
    DEFAULT_RESAMPLE,
    DEFAULT_WORKERS,
)
from css_sprite_generator.constants import (
    COLOR_MODE_RGBA,
    LARGE_CANVAS_WARN_PIXELS,
    PNG_FORMAT,
    RGBA_CHANNELS,
)
from css_sprite_generator.errors import (
    DecodeError,
    InvalidConfigError,
    RenderError,
)
from css_sprite_generator.logging_utils import logger

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Iterator, Sequence

    from css_sprite_generator.packing import (
        PackingPlan,
        Placement,
        SourceImage,
    )
    from css_sprite_generator.type_defs import ResampleName

RESAMPLE_FILTERS: dict[str, Image.Resampling] = {
    "nearest": Image.Resampling.NEAREST,
    "bilinear": Image.Resampling.BILINEAR,
    "bicubic": Image.Resampling.BICUBIC,
    "lanczos": Image.Resampling.LANCZOS,
}


def resolve_resample(name: str) -> Image.Resampling:
    """Map a filter name to the Pillow resampling constant."""
    try:
        return RESAMPLE_FILTERS[name]
    except KeyError as e:
        msg = (f"Unknown resample filter '{name}'. Expected one of: "
               f"{', '.join(RESAMPLE_FILTERS)}")
        raise InvalidConfigError(msg) from e


def fit_to_placement(
    image: Image.Image,
    placement: Placement,
    resample: Image.Resampling,
) -> Image.Image:
    """Return ``image`` in RGBA, resized to the placement box if needed."""
    if image.mode != COLOR_MODE_RGBA:
        image = image.convert(COLOR_MODE_RGBA)
    if image.size != placement.size():
        logger.debug(
            "Resizing %s from %dx%d to %dx%d",
            placement.image_id, image.width, image.height,
            placement.width, placement.height,
        )
        image = image.resize(placement.size(), resample)
    return image


def _prepare_tile(
    source: SourceImage,
    placement: Placement,
    resample: Image.Resampling,
) -> np.ndarray:
    """Produce the pixel block for one placement as an HxWx4 array."""
    if source.image is None:
        raise DecodeError(source.filename or source.image_id,
                          "no decoded pixel data")
    try:
        fitted = fit_to_placement(source.image, placement, resample)
        return np.asarray(fitted, dtype=np.uint8)
    except (OSError, ValueError) as e:
        raise DecodeError(source.filename or source.image_id, str(e)) from e


def allocate_canvas(
    plan: PackingPlan,
    max_canvas_pixels: int = DEFAULT_MAX_CANVAS_PIXELS,
) -> np.ndarray:
    """
    Allocate the fully transparent composite buffer for ``plan``.

    Raises:
        RenderError: If the canvas exceeds ``max_canvas_pixels`` or the
            buffer cannot be allocated.

    """
    width, height = plan.size()
    if plan.pixel_count > max_canvas_pixels:
        raise RenderError(
            width, height,
            f"exceeds the limit of {max_canvas_pixels} pixels",
        )
    if plan.pixel_count > LARGE_CANVAS_WARN_PIXELS:
        logger.warning(
            "Sprite sheet is large: %dx%d. Rendering may be slow.",
            width, height,
        )
    try:
        return np.zeros((height, width, RGBA_CHANNELS), dtype=np.uint8)
    except (MemoryError, ValueError) as e:
        raise RenderError(width, height, "buffer allocation failed") from e


def _check_plan_matches(
    images: Sequence[SourceImage],
    plan: PackingPlan,
) -> None:
    """Ensure ``plan`` was computed for exactly these images."""
    if len(images) != len(plan.placements):
        msg = (f"Plan has {len(plan.placements)} placements for "
               f"{len(images)} images")
        raise InvalidConfigError(msg)
    for source, placement in zip(images, plan.placements, strict=True):
        if source.image_id != placement.image_id:
            msg = (f"Plan order mismatch: expected '{source.image_id}', "
                   f"found '{placement.image_id}'")
            raise InvalidConfigError(msg)


def _iter_tiles(
    images: Sequence[SourceImage],
    plan: PackingPlan,
    resample: Image.Resampling,
    workers: int,
) -> Iterator[np.ndarray]:
    """Yield prepared tiles in plan order, optionally via a thread pool."""
    pairs = list(zip(images, plan.placements, strict=True))
    if workers <= 1:
        for source, placement in pairs:
            yield _prepare_tile(source, placement, resample)
        return

    with ThreadPoolExecutor(max_workers=workers) as pool:
        yield from pool.map(
            lambda pair: _prepare_tile(pair[0], pair[1], resample),
            pairs,
        )


def build_composite(  # noqa: PLR0913
    images: Sequence[SourceImage],
    plan: PackingPlan,
    *,
    resample: ResampleName = DEFAULT_RESAMPLE,
    workers: int = DEFAULT_WORKERS,
    max_canvas_pixels: int = DEFAULT_MAX_CANVAS_PIXELS,
    show_progress: bool = False,
) -> Image.Image:
    """
    Draw every image into a transparent canvas at its planned offset.

    Returns the composite as an RGBA PIL image. Any failure aborts the
    whole render and no partial canvas is returned.
    """
    _check_plan_matches(images, plan)
    resample_filter = resolve_resample(resample)
    canvas = allocate_canvas(plan, max_canvas_pixels)

    tiles = _iter_tiles(images, plan, resample_filter, workers)
    for placement, tile in zip(
        plan.placements,
        tqdm(tiles, total=len(plan), desc="Sprite Sheet",
             disable=not show_progress),
        strict=True,
    ):
        canvas[placement.y:placement.bottom,
               placement.x:placement.right] = tile

    return Image.fromarray(canvas)


def encode_png(image: Image.Image) -> bytes:
    """Encode an image as lossless PNG bytes."""
    buf = io.BytesIO()
    try:
        image.save(buf, format=PNG_FORMAT)
    except (OSError, ValueError) as e:
        raise RenderError(image.width, image.height, str(e)) from e
    return buf.getvalue()


def render(  # noqa: PLR0913
    images: Sequence[SourceImage],
    plan: PackingPlan,
    *,
    resample: ResampleName = DEFAULT_RESAMPLE,
    workers: int = DEFAULT_WORKERS,
    max_canvas_pixels: int = DEFAULT_MAX_CANVAS_PIXELS,
    show_progress: bool = False,
) -> bytes:
    """Render the composite for ``plan`` and return it as PNG bytes."""
    composite = build_composite(
        images,
        plan,
        resample=resample,
        workers=workers,
        max_canvas_pixels=max_canvas_pixels,
        show_progress=show_progress,
    )
    return encode_png(composite)
