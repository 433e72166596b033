"""Core data types shared by the layout engine and its consumers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from css_sprite_generator.config_defaults import (
    DEFAULT_DIRECTION,
    DEFAULT_SPACING,
)
from css_sprite_generator.errors import InvalidConfigError
from css_sprite_generator.type_defs import DIRECTION_CHOICES

if TYPE_CHECKING:  # pragma: no cover
    from PIL import Image

    from css_sprite_generator.type_defs import Direction


@dataclass(frozen=True)
class SourceImage:
    """
    A decoded input image and the class identifier derived for it.

    Only ``image_id``, ``width`` and ``height`` matter to the layout
    engine. ``image`` holds the decoded RGBA pixels for the rasterizer
    and is excluded from equality so plans can be compared cheaply.
    """

    image_id: str
    width: int
    height: int
    image: Image.Image | None = field(default=None, compare=False,
                                      repr=False)
    filename: str = ""

    @classmethod
    def from_image(
        cls,
        image_id: str,
        image: Image.Image,
        filename: str = "",
    ) -> SourceImage:
        """Build a SourceImage sized from a PIL image."""
        return cls(
            image_id=image_id,
            width=image.width,
            height=image.height,
            image=image,
            filename=filename,
        )


@dataclass(frozen=True)
class LayoutConfig:
    """Layout parameters applied uniformly to every image."""

    direction: Direction = DEFAULT_DIRECTION
    spacing: int = DEFAULT_SPACING
    target_width: int | None = None
    target_height: int | None = None

    def validate(self) -> None:
        """Raise InvalidConfigError if any parameter is out of range."""
        if self.direction not in DIRECTION_CHOICES:
            msg = (f"Unknown direction '{self.direction}'. Expected one of: "
                   f"{', '.join(DIRECTION_CHOICES)}")
            raise InvalidConfigError(msg)
        if self.spacing < 0:
            msg = f"Spacing must be zero or positive, got {self.spacing}"
            raise InvalidConfigError(msg)
        for name, value in (("target_width", self.target_width),
                            ("target_height", self.target_height)):
            if value is not None and value <= 0:
                msg = f"{name} must be positive, got {value}"
                raise InvalidConfigError(msg)

    @property
    def forces_size(self) -> bool:
        """True when either target dimension overrides natural sizes."""
        return self.target_width is not None or self.target_height is not None


@dataclass(frozen=True)
class Placement:
    """Position and size of one image inside the composite."""

    image_id: str
    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        """Exclusive right edge."""
        return self.x + self.width

    @property
    def bottom(self) -> int:
        """Exclusive bottom edge."""
        return self.y + self.height

    def size(self) -> tuple[int, int]:
        """Return (width, height)."""
        return self.width, self.height

    def box(self) -> tuple[int, int, int, int]:
        """Return the (left, top, right, bottom) box used by Pillow."""
        return self.x, self.y, self.right, self.bottom

    def overlaps(self, other: Placement) -> bool:
        """Return True if the two boxes share at least one pixel."""
        return (self.x < other.right and other.x < self.right
                and self.y < other.bottom and other.y < self.bottom)


@dataclass(frozen=True)
class PackingPlan:
    """Canvas size plus one placement per input image, in input order."""

    canvas_width: int
    canvas_height: int
    placements: tuple[Placement, ...]

    def size(self) -> tuple[int, int]:
        """Return (canvas_width, canvas_height)."""
        return self.canvas_width, self.canvas_height

    @property
    def pixel_count(self) -> int:
        """Number of pixels in the composite canvas."""
        return self.canvas_width * self.canvas_height

    def contains(self, placement: Placement) -> bool:
        """Return True if the placement lies fully inside the canvas."""
        return (placement.x >= 0 and placement.y >= 0
                and placement.right <= self.canvas_width
                and placement.bottom <= self.canvas_height)

    def __len__(self) -> int:
        return len(self.placements)
