"""Helpers for managing output locations and persisted artifacts."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from css_sprite_generator.logging_utils import logger

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Callable

    from css_sprite_generator.main import SpriteResult
    from css_sprite_generator.type_defs import OutputNames

FALLBACK_OUTPUT_DIR = "sprite_output"


def setup_output_directory(
    output_path: str | Path,
    path_factory: Callable[[str], Path] = Path,
) -> Path:
    """
    Create the output directory if needed and return its path.

    Falls back to ``sprite_output`` in the working directory when the
    requested directory cannot be created.
    """
    resolved_path = path_factory(str(output_path))
    try:
        resolved_path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logger.error("Failed to create output directory: %s", exc)
        fallback_path = path_factory(FALLBACK_OUTPUT_DIR)
        fallback_path.mkdir(parents=True, exist_ok=True)
        logger.info("Using fallback directory: %s", fallback_path)
        return fallback_path
    return resolved_path


def save_outputs(
    result: SpriteResult,
    output_dir: Path,
    names: OutputNames,
) -> tuple[Path, Path]:
    """
    Persist the sheet and stylesheet from a generation.

    Returns the (sprite, css) paths that were written.
    """
    output_dir = setup_output_directory(output_dir)

    sprite_path = output_dir / names.sprite_name
    css_path = output_dir / names.css_name
    sprite_path.write_bytes(result.png)
    css_path.write_text(result.css, encoding="utf-8")

    logger.info("Sprite sheet saved to: %s", sprite_path)
    logger.info("Stylesheet saved to: %s", css_path)
    return sprite_path, css_path
