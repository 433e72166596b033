"""
Session state for interactive use of the generator.

A SpriteSession owns the pending image list, the active configuration,
and the artifacts of the last successful run. It allows at most one
generation in flight: a second call while one is running raises
GenerationInProgressError instead of queueing. A failed run re-raises
and keeps the previous artifacts available for saving.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import TYPE_CHECKING, Any

import css_sprite_generator.main as csg_main
import css_sprite_generator.runtime as csg_runtime
from css_sprite_generator.config import (
    CLEARABLE_LAYOUT_FIELDS,
    SpriteConfig,
    build_config_from_cli,
    clear_layout_fields,
)
from css_sprite_generator.errors import (
    GenerationInProgressError,
    InvalidConfigError,
    SpriteError,
)
from css_sprite_generator.logging_utils import logger

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Iterable

    from css_sprite_generator.main import SpriteResult
    from css_sprite_generator.type_defs import NamedImageBytes


class SpriteSession:
    """Mutable session holding inputs, settings, and the last result."""

    def __init__(self, config: SpriteConfig | None = None) -> None:
        self._config = config or SpriteConfig.model_validate({})
        self._images: list[NamedImageBytes] = []
        self._last_result: SpriteResult | None = None
        self._lock = threading.Lock()
        self._in_flight = False

    @property
    def config(self) -> SpriteConfig:
        """Active configuration."""
        return self._config

    @property
    def images(self) -> tuple[NamedImageBytes, ...]:
        """Pending (filename, bytes) inputs in generation order."""
        return tuple(self._images)

    @property
    def in_flight(self) -> bool:
        """True while a generation is running."""
        return self._in_flight

    @property
    def last_result(self) -> SpriteResult | None:
        """Artifacts from the most recent successful generation."""
        return self._last_result

    def _ensure_idle(self) -> None:
        if self._in_flight:
            msg = "A sprite sheet is already being generated"
            raise GenerationInProgressError(msg)

    def set_images(self, named_images: Iterable[NamedImageBytes]) -> None:
        """Replace the pending inputs."""
        with self._lock:
            self._ensure_idle()
            self._images = list(named_images)

    def add_images(self, named_images: Iterable[NamedImageBytes]) -> None:
        """Append inputs after the ones already pending."""
        with self._lock:
            self._ensure_idle()
            self._images.extend(named_images)

    def add_files(self, paths: Iterable[str | Path]) -> None:
        """Read image files or directories from disk and append them."""
        self.add_images(csg_runtime.load_inputs(paths))

    def clear_images(self) -> None:
        """Drop all pending inputs. The last result is kept."""
        with self._lock:
            self._ensure_idle()
            self._images.clear()

    def update_config(self, **overrides: Any) -> SpriteConfig:  # noqa: ANN401
        """
        Apply setting overrides such as ``spacing=4`` or ``direction=...``.

        Values are validated like CLI arguments; an invalid value raises
        pydantic's ValidationError and leaves the config unchanged.
        Passing ``image_width=None`` or ``image_height=None`` removes a
        forced size; ``None`` for any other setting is ignored.
        """
        cleared = [name for name in CLEARABLE_LAYOUT_FIELDS
                   if name in overrides and overrides[name] is None]
        with self._lock:
            self._ensure_idle()
            config = build_config_from_cli(
                overrides, base_config=self._config,
            )
            if cleared:
                config = clear_layout_fields(config, cleared)
            self._config = config
            return self._config

    def generate(self, *, show_progress: bool = False) -> SpriteResult:
        """
        Run one generation over the pending images.

        Raises:
            GenerationInProgressError: If another generation is running.
            InvalidConfigError: If no images are pending.
            SpriteError: Any decode or render failure, after which the
                previous result is still available.

        """
        with self._lock:
            self._ensure_idle()
            if not self._images:
                msg = "No images loaded"
                raise InvalidConfigError(msg)
            self._in_flight = True
            images = list(self._images)
            config = self._config

        try:
            result = csg_main.generate_sprite_sheet(
                images, config, show_progress=show_progress,
            )
        except SpriteError as exc:
            logger.error("Sprite generation failed: %s", exc)
            raise
        finally:
            with self._lock:
                self._in_flight = False

        self._last_result = result
        return result

    def save(self, output_dir: str | Path | None = None) -> tuple[Path, Path]:
        """
        Write the last result's sheet and stylesheet.

        Returns the (sprite, css) paths. Raises RuntimeError if nothing
        has been generated yet.
        """
        if self._last_result is None:
            msg = "Nothing to save; generate a sprite sheet first"
            raise RuntimeError(msg)
        target = Path(output_dir) if output_dir is not None \
            else Path(self._config.output.output)
        return csg_runtime.save_outputs(
            self._last_result,
            target,
            self._config.output.names(),
        )
