"""Produce SourceFile records from a directory tree."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from buildprune.adapters.destination.filesystem import FilesystemDestination
from buildprune.core.glob_utils import ALL_FILES_PATTERN
from buildprune.core.models import SourceFile


if TYPE_CHECKING:
    from collections.abc import Iterator


def iter_source_files(
    base: Path,
    pattern: str = ALL_FILES_PATTERN,
    *,
    read_contents: bool = False,
) -> Iterator[SourceFile]:
    """Yield a SourceFile for every file under base matching pattern.

    Files are yielded in sorted order with base as their base directory,
    so each record's relative path is its path below base.

    Args:
        base: Source root directory.
        pattern: Glob pattern relative to base.
        read_contents: If True, attach each file's bytes to the record.

    Raises:
        DestinationNotFoundError: If base does not exist.
    """
    root = Path(base).resolve()
    for name in FilesystemDestination().list_files(root, [pattern]):
        path = root / name
        contents = path.read_bytes() if read_contents else None
        yield SourceFile(path=path, base=root, contents=contents)
