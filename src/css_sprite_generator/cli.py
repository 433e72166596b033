"""CLI argument parsing and main entry point."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TYPE_CHECKING, TypeVar

from pydantic import ValidationError

import css_sprite_generator.config as csg_config
from css_sprite_generator.config_defaults import (
    DEFAULT_CLASS_PREFIX,
    DEFAULT_CSS_NAME,
    DEFAULT_DIRECTION,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_RESAMPLE,
    DEFAULT_SPACING,
    DEFAULT_SPRITE_NAME,
)
from css_sprite_generator.errors import SpriteError
from css_sprite_generator.logging_utils import logger, set_verbosity
from css_sprite_generator.runtime import resolve_project_version
from css_sprite_generator.session import SpriteSession
from css_sprite_generator.type_defs import (
    COLLISION_CHOICES,
    DIRECTION_CHOICES,
    RESAMPLE_CHOICES,
)

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Callable, Sequence

T = TypeVar("T")


def positive_int(text: str) -> int:
    """Parse a strictly positive integer."""
    try:
        value = int(text)
    except ValueError as exc:
        msg = "must be an integer"
        raise ValueError(msg) from exc
    if value <= 0:
        msg = "must be positive"
        raise ValueError(msg)
    return value


def non_negative_int(text: str) -> int:
    """Parse an integer that may be zero but not negative."""
    try:
        value = int(text)
    except ValueError as exc:
        msg = "must be an integer"
        raise ValueError(msg) from exc
    if value < 0:
        msg = "must not be negative"
        raise ValueError(msg)
    return value


def _wrap_validator(
    validator: Callable[[str], T],
) -> Callable[[str], T]:
    """Convert ``ValueError`` from a validator into ``ArgumentTypeError``."""

    def wrapper(text: str) -> T:
        try:
            return validator(text)
        except ValueError as exc:
            raise argparse.ArgumentTypeError(str(exc)) from exc

    return wrapper


def build_arg_parser() -> argparse.ArgumentParser:
    """Construct the argument parser for the command-line interface."""
    prog = "css-sprite-generator"
    p = argparse.ArgumentParser(
        prog=prog,
        description=(
            "Pack images into a single sprite sheet and write the matching "
            "CSS classes"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            f"{prog} icons/\n"
            f"{prog} a.png b.png c.gif --direction vertical --spacing 0\n"
            f"{prog} icons/ --direction diagonal --image-width 32 "
            "--image-height 32 --class-prefix icon\n\n"
            "Note:\n"
            "  Directories contribute their .png, .jpg, .jpeg and .gif "
            "files in name order."
        ),
    )
    p.add_argument(
        "inputs", nargs="*", metavar="PATH",
        help="Image files or directories, in sheet order")
    p.add_argument(
        "--version", action="version",
        version=f"%(prog)s {resolve_project_version()}")
    p.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging")

    layout = p.add_argument_group("layout")
    layout.add_argument(
        "--direction", choices=list(DIRECTION_CHOICES),
        help=f"Layout direction (default: {DEFAULT_DIRECTION})",
        default=argparse.SUPPRESS)
    layout.add_argument(
        "--spacing", type=_wrap_validator(non_negative_int),
        help=f"Pixels between images (default: {DEFAULT_SPACING})",
        default=argparse.SUPPRESS)
    layout.add_argument(
        "--image-width", type=_wrap_validator(positive_int),
        help="Resize every image to this width",
        default=argparse.SUPPRESS)
    layout.add_argument(
        "--image-height", type=_wrap_validator(positive_int),
        help="Resize every image to this height",
        default=argparse.SUPPRESS)

    css = p.add_argument_group("stylesheet")
    css.add_argument(
        "--class-prefix", type=str,
        help=f"CSS class prefix (default: {DEFAULT_CLASS_PREFIX})",
        default=argparse.SUPPRESS)
    css.add_argument(
        "--print-css", action="store_true",
        help="Also write the stylesheet to stdout")

    render = p.add_argument_group("rendering")
    render.add_argument(
        "--resample", choices=list(RESAMPLE_CHOICES),
        help=f"Resize filter (default: {DEFAULT_RESAMPLE})",
        default=argparse.SUPPRESS)
    render.add_argument(
        "--workers", type=_wrap_validator(positive_int),
        help="Threads used to decode and resize images",
        default=argparse.SUPPRESS)
    render.add_argument(
        "--max-canvas-pixels", type=_wrap_validator(positive_int),
        help="Refuse to render sheets larger than this many pixels",
        default=argparse.SUPPRESS)
    render.add_argument(
        "--on-collision", choices=list(COLLISION_CHOICES),
        help=(
            "What to do when two filenames give the same class name: "
            "append a number (suffix) or stop (error)"
        ),
        default=argparse.SUPPRESS)

    output = p.add_argument_group("output")
    output.add_argument(
        "--output", type=str,
        help=f"Output directory (default: {DEFAULT_OUTPUT_DIR})",
        default=argparse.SUPPRESS)
    output.add_argument(
        "--sprite-name", type=str,
        help=f"Sprite sheet file name (default: {DEFAULT_SPRITE_NAME})",
        default=argparse.SUPPRESS)
    output.add_argument(
        "--css-name", type=str,
        help=f"Stylesheet file name (default: {DEFAULT_CSS_NAME})",
        default=argparse.SUPPRESS)

    cfg = p.add_argument_group("config")
    cfg.add_argument(
        "--config", type=str,
        help="Path to config.toml file")
    cfg.add_argument(
        "--validate-config-only", action="store_true",
        help="Validate config file and exit without generating")

    return p


def log_parameters(
    inputs: Sequence[str],
    cfg: csg_config.SpriteConfig,
    args: argparse.Namespace,
) -> None:
    """Log all effective parameters."""
    logger.info("Inputs: %s", ", ".join(inputs))
    if getattr(args, "config", None):
        logger.info("Loaded config from: %s", args.config)
    logger.info("Output Directory: %s", cfg.output.output)
    logger.info("Direction: %s", cfg.layout.direction)
    logger.info("Spacing: %d", cfg.layout.spacing)
    logger.info("Image Size: %s x %s",
                cfg.layout.image_width or "(original)",
                cfg.layout.image_height or "(original)")
    logger.info("Class Prefix: %s", cfg.stylesheet.class_prefix)
    logger.info("Resample Filter: %s", cfg.render.resample)
    logger.info("Workers: %d", cfg.render.workers)


def run_from_args(args: argparse.Namespace) -> int:
    """Generate and save a sprite sheet from parsed arguments."""
    base_cfg: csg_config.SpriteConfig | None = None
    if args.config:
        base_cfg = csg_config.ConfigLoader.load(args.config)
        if args.validate_config_only:
            logger.info("Config %s validated successfully.", args.config)
            return 0

    cfg = csg_config.build_config_from_cli(vars(args), base_config=base_cfg)
    log_parameters(args.inputs, cfg, args)

    session = SpriteSession(cfg)
    session.add_files(args.inputs)
    result = session.generate(show_progress=True)
    session.save(Path(cfg.output.output))

    if args.print_css:
        sys.stdout.write(result.css)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command-line interface."""
    arg_parser = build_arg_parser()
    args = arg_parser.parse_args(argv)
    set_verbosity(args.verbose)

    if args.validate_config_only and not args.config:
        arg_parser.error("--validate-config-only requires --config")
    if not args.validate_config_only and not args.inputs:
        arg_parser.error("at least one image file or directory is required")

    try:
        return run_from_args(args)
    except (SpriteError, OSError, ValidationError) as exc:
        arg_parser.exit(2, f"{arg_parser.prog}: error: {exc}\n")


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
