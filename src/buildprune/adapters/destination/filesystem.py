"""Filesystem adapter for the destination directory."""

from __future__ import annotations

import os
from pathlib import PurePosixPath, PureWindowsPath
from typing import TYPE_CHECKING

from wcmatch import glob as wcglob

from buildprune.core.exceptions import DestinationNotFoundError, EnumerationError
from buildprune.core.glob_utils import normalize_path


if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path


# Globstar, brace expansion and extglob groups; directories never match
GLOB_FLAGS = wcglob.GLOBSTAR | wcglob.BRACE | wcglob.EXTGLOB | wcglob.NODIR


class FilesystemDestination:
    """Destination adapter for local filesystem operations.

    Implements DestinationPort. Patterns use the wcmatch glob dialect
    (``**``, ``{a,b}``, ``@(x|y)``). Wildcards do not match a leading "."
    in a path segment unless include_hidden is set; segments spelled out
    literally, like ``.cache/*``, always match.
    """

    def __init__(self, include_hidden: bool = False) -> None:
        """Initialize the adapter.

        Args:
            include_hidden: If True, wildcards also match dotfiles and
                dot-directories.
        """
        self._flags = GLOB_FLAGS | (wcglob.DOTGLOB if include_hidden else 0)

    def list_files(self, root: Path, patterns: Sequence[str]) -> list[str]:
        """List files under root matching any of the glob patterns.

        Args:
            root: Directory to search.
            patterns: Glob patterns relative to root.

        Returns:
            Root-relative POSIX paths of matching files, sorted alphabetically.

        Raises:
            DestinationNotFoundError: If root does not exist or is not a directory.
            EnumerationError: If a pattern is absolute or invalid, or root
                cannot be read.
        """
        if not root.is_dir():
            raise DestinationNotFoundError(
                f"Directory not found: {root}",
                dest=root,
            )

        for pattern in patterns:
            if not _is_contained(pattern):
                raise EnumerationError(
                    f"Invalid pattern {pattern!r}: must stay inside {root}",
                    dest=root,
                )

        try:
            matches = wcglob.glob(
                list(patterns), root_dir=os.fspath(root), flags=self._flags
            )
        except ValueError as e:
            raise EnumerationError(
                f"Invalid pattern in {list(patterns)!r}: {e}", dest=root, cause=e
            ) from e
        except OSError as e:
            raise EnumerationError(
                f"Could not list {root}: {e}", dest=root, cause=e
            ) from e

        return sorted({normalize_path(os.fspath(match)) for match in matches})

    def remove(self, path: Path) -> None:
        """Delete a single file.

        Raises:
            FileNotFoundError: If the file is already gone.
            OSError: If the file cannot be removed.
        """
        path.unlink()


def _is_contained(pattern: str) -> bool:
    if PurePosixPath(pattern).is_absolute() or PureWindowsPath(pattern).anchor:
        return False
    return ".." not in PurePosixPath(normalize_path(pattern)).parts
