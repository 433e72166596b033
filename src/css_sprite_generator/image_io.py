"""Image loading and decoding into SourceImage records."""
from __future__ import annotations

import io
from pathlib import Path
from typing import TYPE_CHECKING

from PIL import Image, UnidentifiedImageError

from css_sprite_generator.config_defaults import DEFAULT_ON_COLLISION
from css_sprite_generator.constants import (
    ACCEPTED_EXTENSIONS,
    ACCEPTED_FORMATS,
    COLOR_MODE_RGBA,
)
from css_sprite_generator.errors import DecodeError
from css_sprite_generator.logging_utils import logger
from css_sprite_generator.packing import (
    SourceImage,
    assign_identifiers,
    sanitize_identifier,
)

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Iterable, Sequence

    from css_sprite_generator.type_defs import (
        CollisionPolicy,
        NamedImageBytes,
    )


def decode_pixels(filename: str, data: bytes) -> Image.Image:
    """
    Decode raw image bytes into a fully loaded RGBA image.

    Animated GIFs contribute their first frame only.

    Args:
        filename: Name used in error messages.
        data: Encoded PNG, JPEG, or GIF bytes.

    Returns:
        PIL Image in RGBA mode, detached from the input buffer.

    Raises:
        DecodeError: If the bytes are not a supported, readable image.

    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            fmt = img.format
            img.seek(0)
            pixels = img.convert(COLOR_MODE_RGBA)
    except UnidentifiedImageError as e:
        raise DecodeError(filename, "not a recognized image") from e
    except (OSError, SyntaxError, ValueError,
            Image.DecompressionBombError) as e:
        raise DecodeError(filename, str(e)) from e

    if fmt not in ACCEPTED_FORMATS:
        raise DecodeError(filename, f"unsupported format {fmt}")
    return pixels


def decode_image(
    filename: str,
    data: bytes,
    image_id: str | None = None,
) -> SourceImage:
    """Decode one named buffer into a SourceImage."""
    pixels = decode_pixels(filename, data)
    logger.debug("Decoded %s: %dx%d", filename, pixels.width, pixels.height)
    return SourceImage.from_image(
        image_id or sanitize_identifier(filename),
        pixels,
        filename=filename,
    )


def decode_images(
    named_images: Sequence[NamedImageBytes],
    on_collision: CollisionPolicy = DEFAULT_ON_COLLISION,
) -> list[SourceImage]:
    """
    Decode an ordered list of (filename, bytes) pairs.

    Identifiers are assigned up front so a naming conflict fails before
    any decoding work is done.
    """
    ids = assign_identifiers(
        [name for name, _ in named_images],
        on_collision=on_collision,
    )
    return [
        decode_image(name, data, image_id=image_id)
        for (name, data), image_id in zip(named_images, ids, strict=True)
    ]


def load_image_file(path: str | Path) -> NamedImageBytes:
    """
    Read an image file from disk as a (filename, bytes) pair.

    Raises:
        FileNotFoundError: If the path does not point to a file.

    """
    file_path = Path(path)
    if not file_path.is_file():
        msg = f"Image file not found: '{path}'"
        raise FileNotFoundError(msg)
    return file_path.name, file_path.read_bytes()


def collect_image_paths(paths: Iterable[str | Path]) -> list[Path]:
    """
    Expand directories into their image files, keeping explicit files.

    Directory contents are sorted by name and filtered by extension;
    explicitly listed files are kept in the order given.
    """
    collected: list[Path] = []
    for entry in paths:
        path = Path(entry)
        if path.is_dir():
            found = sorted(
                p for p in path.iterdir()
                if p.is_file() and p.suffix.lower() in ACCEPTED_EXTENSIONS
            )
            if not found:
                logger.warning("No images found in directory: %s", path)
            collected.extend(found)
        else:
            collected.append(path)
    return collected


def load_image_files(paths: Iterable[str | Path]) -> list[NamedImageBytes]:
    """Read every image under ``paths`` as (filename, bytes) pairs."""
    return [load_image_file(p) for p in collect_image_paths(paths)]
