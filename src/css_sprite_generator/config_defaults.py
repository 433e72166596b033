"""Shared default values for user-facing configuration settings."""
from css_sprite_generator.type_defs import (
    CollisionPolicy,
    Direction,
    ResampleName,
)

# Layout
DEFAULT_DIRECTION: Direction = "horizontal"
DEFAULT_SPACING = 10

# Stylesheet
DEFAULT_CLASS_PREFIX = "sprite"

# Rendering
# Bilinear matches what a browser canvas uses for drawImage scaling.
DEFAULT_RESAMPLE: ResampleName = "bilinear"
DEFAULT_MAX_CANVAS_PIXELS = 100_000_000
DEFAULT_WORKERS = 1
DEFAULT_ON_COLLISION: CollisionPolicy = "suffix"

# Output
DEFAULT_OUTPUT_DIR = "out"
DEFAULT_SPRITE_NAME = "sprite.png"
DEFAULT_CSS_NAME = "sprite.css"
