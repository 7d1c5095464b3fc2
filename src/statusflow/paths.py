"""Workflow definition path resolution.

Uses environment variables when available, falls back to conventional
defaults.

Environment variables:
    STATUSFLOW_DEFINITIONS_DIR: directory of workflow files (default: ./workflows)
"""

from __future__ import annotations

import os
from pathlib import Path

_DEFAULT_DEFINITIONS_SUBDIR = "workflows"
DEFINITION_SUFFIXES = (".yaml", ".yml", ".json")


def definitions_dir() -> Path:
    """Return the directory holding workflow definition files."""
    env = os.environ.get("STATUSFLOW_DEFINITIONS_DIR")
    if env:
        return Path(env).expanduser()
    return Path.cwd() / _DEFAULT_DEFINITIONS_SUBDIR


def definition_path(name: str) -> Path:
    """Return the file for workflow ``name``.

    Tries each known suffix in order; when none exists the ``.yaml`` path
    is returned so the caller gets a meaningful FileNotFoundError.
    """
    base = definitions_dir()
    for suffix in DEFINITION_SUFFIXES:
        candidate = base / f"{name}{suffix}"
        if candidate.is_file():
            return candidate
    return base / f"{name}{DEFINITION_SUFFIXES[0]}"
