"""Runtime utilities for input validation, output, and version helpers."""

from .output import save_outputs, setup_output_directory
from .validation import load_inputs, validate_input_paths
from .version import resolve_project_version

__all__ = [
    "load_inputs",
    "resolve_project_version",
    "save_outputs",
    "setup_output_directory",
    "validate_input_paths",
]
