"""
Layout engine split into data types, layout modes, and naming helpers.

The package exposes the most commonly used entry points directly so
callers can import from ``css_sprite_generator.packing``.
"""

from __future__ import annotations

from . import core, layouts, naming
from .core import (
    LayoutConfig,
    PackingPlan,
    Placement,
    SourceImage,
)
from .layouts import (
    compute_plan,
    effective_size,
    grid_shape,
)
from .naming import (
    assign_identifiers,
    sanitize_fragment,
    sanitize_identifier,
)

__all__ = [
    "LayoutConfig",
    "PackingPlan",
    "Placement",
    "SourceImage",
    "assign_identifiers",
    "compute_plan",
    "core",
    "effective_size",
    "grid_shape",
    "layouts",
    "naming",
    "sanitize_fragment",
    "sanitize_identifier",
]
