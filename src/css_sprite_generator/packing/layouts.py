"""Layout engine: turn images plus layout parameters into a PackingPlan."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from css_sprite_generator.errors import InvalidConfigError
from css_sprite_generator.packing.core import (
    LayoutConfig,
    PackingPlan,
    Placement,
    SourceImage,
)

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Callable, Sequence

    _Sizes = list[tuple[int, int]]
    _LayoutFn = Callable[[list[str], _Sizes, int], PackingPlan]


def effective_size(
    image: SourceImage,
    config: LayoutConfig,
) -> tuple[int, int]:
    """
    Return the (width, height) an image occupies in the sheet.

    Targets replace the natural dimension independently, so aspect ratio
    is not preserved when only one of them is set.
    """
    width = config.target_width if config.target_width is not None \
        else image.width
    height = config.target_height if config.target_height is not None \
        else image.height
    return width, height


def grid_shape(count: int) -> tuple[int, int]:
    """Return (columns, rows) of the near-square grid for ``count`` cells."""
    if count <= 0:
        msg = "Grid needs at least one cell"
        raise ValueError(msg)
    cols = math.isqrt(count)
    if cols * cols < count:
        cols += 1
    rows = -(-count // cols)
    return cols, rows


def _layout_horizontal(
    ids: list[str],
    sizes: _Sizes,
    spacing: int,
) -> PackingPlan:
    """Place images left to right along the top edge."""
    placements: list[Placement] = []
    x = 0
    for image_id, (w, h) in zip(ids, sizes, strict=True):
        placements.append(Placement(image_id, x, 0, w, h))
        x += w + spacing
    canvas_w = sum(w for w, _ in sizes) + spacing * (len(sizes) - 1)
    canvas_h = max(h for _, h in sizes)
    return PackingPlan(canvas_w, canvas_h, tuple(placements))


def _layout_vertical(
    ids: list[str],
    sizes: _Sizes,
    spacing: int,
) -> PackingPlan:
    """Stack images top to bottom along the left edge."""
    placements: list[Placement] = []
    y = 0
    for image_id, (w, h) in zip(ids, sizes, strict=True):
        placements.append(Placement(image_id, 0, y, w, h))
        y += h + spacing
    canvas_w = max(w for w, _ in sizes)
    canvas_h = sum(h for _, h in sizes) + spacing * (len(sizes) - 1)
    return PackingPlan(canvas_w, canvas_h, tuple(placements))


def _layout_diagonal(
    ids: list[str],
    sizes: _Sizes,
    spacing: int,
) -> PackingPlan:
    """
    Fill a near-square grid row by row.

    Every cell is as large as the widest and the tallest image, so
    mixed sizes never overlap. Smaller images sit in the top left of
    their cell and leave the rest of it transparent.
    """
    cols, rows = grid_shape(len(sizes))
    cell_w = max(w for w, _ in sizes)
    cell_h = max(h for _, h in sizes)

    placements: list[Placement] = []
    for idx, (image_id, (w, h)) in enumerate(zip(ids, sizes, strict=True)):
        row, col = divmod(idx, cols)
        placements.append(Placement(
            image_id,
            col * (cell_w + spacing),
            row * (cell_h + spacing),
            w,
            h,
        ))
    canvas_w = cell_w * cols + spacing * (cols - 1)
    canvas_h = cell_h * rows + spacing * (rows - 1)
    return PackingPlan(canvas_w, canvas_h, tuple(placements))


_LAYOUTS: dict[str, _LayoutFn] = {
    "horizontal": _layout_horizontal,
    "vertical": _layout_vertical,
    "diagonal": _layout_diagonal,
}


def compute_plan(
    images: Sequence[SourceImage],
    config: LayoutConfig,
) -> PackingPlan:
    """
    Compute canvas size and per-image placements.

    Placements follow input order and never overlap. The result depends
    only on image sizes, ids and ``config``, never on pixel data.

    Raises:
        InvalidConfigError: If ``images`` is empty, ``config`` is out of
            range, or an image has a non-positive size.

    """
    if not images:
        msg = "No images provided"
        raise InvalidConfigError(msg)
    config.validate()

    ids: list[str] = []
    sizes: list[tuple[int, int]] = []
    for image in images:
        w, h = effective_size(image, config)
        if w <= 0 or h <= 0:
            msg = f"Image '{image.image_id}' has an empty size {w}x{h}"
            raise InvalidConfigError(msg)
        ids.append(image.image_id)
        sizes.append((w, h))

    return _LAYOUTS[config.direction](ids, sizes, config.spacing)
