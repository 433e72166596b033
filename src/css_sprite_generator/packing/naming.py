"""Class identifier helpers derived from input filenames."""

from __future__ import annotations

import re
from pathlib import PurePath
from typing import TYPE_CHECKING

from css_sprite_generator.config_defaults import DEFAULT_ON_COLLISION
from css_sprite_generator.constants import (
    FALLBACK_IDENTIFIER,
    IDENTIFIER_SEPARATOR,
)
from css_sprite_generator.errors import (
    DuplicateIdentifierError,
    InvalidConfigError,
)
from css_sprite_generator.logging_utils import logger

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Iterable

    from css_sprite_generator.type_defs import CollisionPolicy

_NON_IDENTIFIER = re.compile(r"[^a-z0-9]")


def sanitize_fragment(text: str, fallback: str = FALLBACK_IDENTIFIER) -> str:
    """
    Reduce text to a lowercase ``[a-z0-9-]`` class name fragment.

    Every other character becomes a hyphen and hyphens at
    either end are dropped. Returns ``fallback`` if nothing is left.
    """
    cleaned = _NON_IDENTIFIER.sub(IDENTIFIER_SEPARATOR, text.lower())
    cleaned = cleaned.strip(IDENTIFIER_SEPARATOR)
    return cleaned or fallback


def sanitize_identifier(filename: str) -> str:
    """Derive a class identifier from a filename, ignoring its extension."""
    return sanitize_fragment(PurePath(filename).stem)


def assign_identifiers(
    filenames: Iterable[str],
    on_collision: CollisionPolicy = DEFAULT_ON_COLLISION,
) -> list[str]:
    """
    Return one unique identifier per filename, in order.

    With ``on_collision="suffix"`` a repeated identifier gets the
    smallest free numeric suffix starting at 2 (``logo``, ``logo-2``).
    With ``"error"`` the first repeat raises DuplicateIdentifierError.
    """
    if on_collision not in ("suffix", "error"):
        msg = f"Unknown collision policy '{on_collision}'"
        raise InvalidConfigError(msg)

    owners: dict[str, str] = {}
    identifiers: list[str] = []
    for filename in filenames:
        base = sanitize_identifier(filename)
        identifier = base
        if identifier in owners:
            if on_collision == "error":
                raise DuplicateIdentifierError(base, owners[base], filename)
            n = 2
            while f"{base}{IDENTIFIER_SEPARATOR}{n}" in owners:
                n += 1
            identifier = f"{base}{IDENTIFIER_SEPARATOR}{n}"
            logger.warning(
                "Identifier '%s' from '%s' already used by '%s'; using '%s'",
                base, filename, owners[base], identifier,
            )
        owners[identifier] = filename
        identifiers.append(identifier)
    return identifiers
