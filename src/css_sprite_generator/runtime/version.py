"""Helpers for reporting the generator's version."""

from __future__ import annotations

import tomllib
from importlib import metadata as importlib_metadata
from pathlib import Path

from css_sprite_generator.logging_utils import logger

DISTRIBUTION_NAME = "css-sprite-generator"
UNKNOWN_VERSION = "0.0.0"


def _installed_version() -> str | None:
    """Return the version of the installed distribution, if any."""
    try:
        return importlib_metadata.version(DISTRIBUTION_NAME)
    except importlib_metadata.PackageNotFoundError:
        return None


def _source_tree_version(start: Path) -> str | None:
    """
    Read ``project.version`` from the nearest matching pyproject.toml.

    Only a pyproject whose ``project.name`` is this distribution counts,
    so running from inside another checkout does not borrow its version.
    """
    for parent in start.resolve().parents:
        pyproject_path = parent / "pyproject.toml"
        if not pyproject_path.is_file():
            continue
        try:
            with pyproject_path.open("rb") as handle:
                project = tomllib.load(handle).get("project", {})
        except (OSError, tomllib.TOMLDecodeError) as exc:
            logger.warning("Error reading %s: %s", pyproject_path, exc)
            return None
        if project.get("name") != DISTRIBUTION_NAME:
            continue
        version = project.get("version")
        if isinstance(version, str) and version.strip():
            return version.strip()
        return None
    return None


def resolve_project_version() -> str:
    """Return the installed version, else the source tree's, else 0.0.0."""
    return (
        _installed_version()
        or _source_tree_version(Path(__file__))
        or UNKNOWN_VERSION
    )
