"""Public package exports for the CSS sprite generator."""

from __future__ import annotations

from .config import SpriteConfig
from .errors import (
    DecodeError,
    DuplicateIdentifierError,
    GenerationInProgressError,
    InvalidConfigError,
    RenderError,
    SpriteError,
)
from .main import SpriteResult, generate_from_images, generate_sprite_sheet
from .packing import (
    LayoutConfig,
    PackingPlan,
    Placement,
    SourceImage,
    compute_plan,
)
from .rasterizer import build_composite, render
from .session import SpriteSession
from .stylesheet import emit

__all__ = [
    "DecodeError",
    "DuplicateIdentifierError",
    "GenerationInProgressError",
    "InvalidConfigError",
    "LayoutConfig",
    "PackingPlan",
    "Placement",
    "RenderError",
    "SourceImage",
    "SpriteConfig",
    "SpriteError",
    "SpriteResult",
    "SpriteSession",
    "build_composite",
    "compute_plan",
    "emit",
    "generate_from_images",
    "generate_sprite_sheet",
    "render",
]
