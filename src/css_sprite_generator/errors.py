"""
Exception hierarchy for sprite generation.

Every failure the generator raises on purpose derives from SpriteError,
so callers such as the CLI can report them without a traceback. The
concrete classes also inherit from the builtin a caller would expect
(ValueError for bad input, OSError for unreadable files).
"""

from __future__ import annotations


class SpriteError(Exception):
    """Base class for sprite generation failures."""


class InvalidConfigError(SpriteError, ValueError):
    """Layout parameters or the image set are unusable."""


class DuplicateIdentifierError(SpriteError, ValueError):
    """Two input files sanitize to the same class identifier."""

    def __init__(self, identifier: str, first: str, second: str) -> None:
        self.identifier = identifier
        self.filenames = (first, second)
        super().__init__(
            f"'{first}' and '{second}' both map to identifier "
            f"'{identifier}'",
        )


class DecodeError(SpriteError, OSError):
    """Image bytes could not be decoded."""

    def __init__(self, filename: str, reason: str) -> None:
        self.filename = filename
        self.reason = reason
        super().__init__(f"Could not decode image '{filename}': {reason}")


class RenderError(SpriteError):
    """The composite canvas could not be allocated or drawn."""

    def __init__(self, width: int, height: int, reason: str) -> None:
        self.width = width
        self.height = height
        self.reason = reason
        super().__init__(
            f"Cannot render a {width}x{height} sprite sheet ({reason}). "
            "Try fewer images or smaller image dimensions.",
        )


class GenerationInProgressError(SpriteError, RuntimeError):
    """A generation was started while another one is still running."""
