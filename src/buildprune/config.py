"""Configuration utilities for buildprune.

This module provides project root discovery and the ``[tool.buildprune]``
settings table read from pyproject.toml.
"""

from __future__ import annotations

import tomllib
from pathlib import Path

from buildprune.core.exceptions import ConfigurationError


SETTINGS_TABLE = "buildprune"

_SETTING_TYPES: dict[str, tuple[type, ...]] = {
    "ext": (str, list),
    "filter": (str,),
    "pattern": (str,),
    "verbose": (bool,),
}


def find_project_root(start: Path | None = None) -> Path:
    """Find the project root directory by walking up from start directory.

    Searches for marker files in the following priority order:
    1. pyproject.toml - Python project root
    2. .git - Version control root

    Args:
        start: Directory to start searching from. If None, uses current directory.

    Returns:
        Path to project root directory. Returns start directory if no markers found.
    """
    if start is None:
        start = Path.cwd()

    markers = ["pyproject.toml", ".git"]
    current = start.resolve()

    for parent in [current, *current.parents]:
        for marker in markers:
            if (parent / marker).exists():
                return parent

    return start.resolve()


def load_project_settings(root: Path) -> dict[str, object]:
    """Read the [tool.buildprune] table from root/pyproject.toml.

    Args:
        root: Project root directory.

    Returns:
        Settings keyed by name (ext, filter, pattern, verbose). Empty when
        the file or the table is absent.

    Raises:
        ConfigurationError: If the file is not valid TOML or the table holds
            unknown keys or values of the wrong type.

    Example:
        [tool.buildprune]
        ext = [".js", ".js.map"]
        verbose = true
    """
    pyproject = root / "pyproject.toml"
    if not pyproject.is_file():
        return {}

    try:
        with pyproject.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML in {pyproject}: {e}") from e

    table = data.get("tool", {}).get(SETTINGS_TABLE, {})
    if not isinstance(table, dict):
        raise ConfigurationError(
            f"[tool.{SETTINGS_TABLE}] in {pyproject} must be a table"
        )

    settings: dict[str, object] = {}
    for key, value in table.items():
        expected = _SETTING_TYPES.get(key)
        if expected is None:
            raise ConfigurationError(
                f"Unknown setting '{key}' in [tool.{SETTINGS_TABLE}]", option=key
            )
        if not isinstance(value, expected):
            names = " or ".join(t.__name__ for t in expected)
            raise ConfigurationError(
                f"[tool.{SETTINGS_TABLE}] {key} must be {names}", option=key
            )
        settings[key] = value

    return settings
