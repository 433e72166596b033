"""Stylesheet emission for a computed PackingPlan."""

from __future__ import annotations

from typing import TYPE_CHECKING

from css_sprite_generator.config_defaults import (
    DEFAULT_CLASS_PREFIX,
    DEFAULT_SPRITE_NAME,
)
from css_sprite_generator.constants import CONTAINER_SUFFIX, CSS_INDENT

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Sequence

    from css_sprite_generator.packing import PackingPlan, Placement


def css_rule(selector: str, declarations: Sequence[str]) -> str:
    """Format one rule block with one declaration per line."""
    body = "".join(f"{CSS_INDENT}{decl};\n" for decl in declarations)
    return f"{selector} {{\n{body}}}\n"


def container_rule(class_prefix: str, image_url: str) -> str:
    """Return the rule that attaches the sheet as a background image."""
    return css_rule(
        f".{class_prefix}-{CONTAINER_SUFFIX}",
        [
            f"background-image: url('{image_url}')",
            "background-repeat: no-repeat",
        ],
    )


def placement_rule(class_prefix: str, placement: Placement) -> str:
    """Return the rule that clips the sheet to one placement."""
    return css_rule(
        f".{class_prefix}-{placement.image_id}",
        [
            f"width: {placement.width}px",
            f"height: {placement.height}px",
            f"background-position: -{placement.x}px -{placement.y}px",
        ],
    )


def emit(
    plan: PackingPlan,
    class_prefix: str | None = DEFAULT_CLASS_PREFIX,
    image_url: str = DEFAULT_SPRITE_NAME,
) -> str:
    """
    Build the stylesheet for ``plan``.

    The container rule comes first, followed by one rule per placement
    in plan order. ``class_prefix`` is used verbatim and must already be
    a valid class name fragment; an empty prefix falls back to
    ``sprite``.
    """
    prefix = class_prefix or DEFAULT_CLASS_PREFIX
    rules = [container_rule(prefix, image_url)]
    rules.extend(placement_rule(prefix, p) for p in plan.placements)
    return "".join(rules)
