"""Input validation helpers for runtime configuration."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import css_sprite_generator.image_io as csg_image_io

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Iterable

    from css_sprite_generator.type_defs import NamedImageBytes


def validate_input_paths(paths: Iterable[str | Path]) -> list[Path]:
    """Ensure every input is an existing file or directory."""
    checked = [Path(p) for p in paths]
    if not checked:
        msg = "No input images given"
        raise ValueError(msg)
    for path in checked:
        if not path.exists():
            msg = f"Input not found: {path}"
            raise FileNotFoundError(msg)
    return checked


def load_inputs(paths: Iterable[str | Path]) -> list[NamedImageBytes]:
    """Validate input paths and read them as (filename, bytes) pairs."""
    return csg_image_io.load_image_files(validate_input_paths(paths))
