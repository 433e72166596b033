"""
run_sprite_generator.py: CLI entry point.

Forwards execution to the CLI defined in
`src/css_sprite_generator/cli.py`, so the tool can be run from a
checkout without installing the package or touching PYTHONPATH.

Usage:
    python run_sprite_generator.py icons/ --direction vertical [options]

For help on available options, run:
    python run_sprite_generator.py --help
"""
import sys
# Source code in src/ subdirectory
from pathlib import Path
sys.path.insert(0, str(Path(__file__).resolve().parent / "src"))

import css_sprite_generator.cli as csg_cli

if __name__ == "__main__":
    raise SystemExit(csg_cli.main())
