"""
Constants used internally by the sprite generator.

These are implementation-level values that should not be overridden
via config files or CLI arguments.
"""

# Composite buffer
COLOR_MODE_RGBA = "RGBA"
RGBA_CHANNELS = 4

# Output encoding
PNG_FORMAT = "PNG"

# Decodable input formats as reported by Pillow, and the file
# extensions picked up when scanning a directory.
ACCEPTED_FORMATS = frozenset({"PNG", "JPEG", "GIF"})
ACCEPTED_EXTENSIONS = (".png", ".jpg", ".jpeg", ".gif")

# Identifier derivation
FALLBACK_IDENTIFIER = "image"
IDENTIFIER_SEPARATOR = "-"

# Canvas sizes above this many pixels still render but log a warning.
LARGE_CANVAS_WARN_PIXELS = 16_000_000

# Stylesheet formatting
CSS_INDENT = "  "
CONTAINER_SUFFIX = "container"
