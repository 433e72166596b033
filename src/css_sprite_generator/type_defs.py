"""
Defines shared type aliases for the sprite generator.

Centralizes reusable type hints to improve consistency and readability.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Direction = Literal["horizontal", "vertical", "diagonal"]
ResampleName = Literal["nearest", "bilinear", "bicubic", "lanczos"]
CollisionPolicy = Literal["suffix", "error"]
NamedImageBytes = tuple[str, bytes]

DIRECTION_CHOICES: tuple[Direction, ...] = (
    "horizontal",
    "vertical",
    "diagonal",
)
RESAMPLE_CHOICES: tuple[ResampleName, ...] = (
    "nearest",
    "bilinear",
    "bicubic",
    "lanczos",
)
COLLISION_CHOICES: tuple[CollisionPolicy, ...] = ("suffix", "error")


@dataclass(slots=True)
class OutputNames:
    """File names used when persisting a generated sheet."""

    sprite_name: str = "sprite.png"
    css_name: str = "sprite.css"
