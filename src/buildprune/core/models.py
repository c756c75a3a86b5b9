"""Core domain models for buildprune.

These models are pure Python with no I/O dependencies. They describe the
records flowing through a prune stage and the outcome of its flush phase.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Protocol, runtime_checkable

from buildprune.core.glob_utils import normalize_path


@runtime_checkable
class FileRecord(Protocol):
    """Anything flowing through a build pipeline that names a file.

    A record claims the path of ``path`` relative to ``base``.
    """

    base: str | os.PathLike[str]
    path: str | os.PathLike[str]


@dataclass(frozen=True, slots=True)
class SourceFile:
    """A source file flowing through a build pipeline.

    Attributes:
        path: Resolved path of the file.
        base: Base directory the file was matched from.
        contents: Optional file contents carried along by the pipeline.

    Example:
        >>> f = SourceFile(path=Path("/work/src/lib/a.ts"), base=Path("/work/src"))
        >>> f.relative
        'lib/a.ts'
    """

    path: Path
    base: Path
    contents: bytes | None = None

    @property
    def relative(self) -> str:
        """Path of the file relative to its base."""
        return relative_name(self)


def relative_name(record: FileRecord) -> str:
    """Return the base-relative path of a file record, OS separators."""
    return os.path.relpath(os.fspath(record.path), os.fspath(record.base))


class KeepSet:
    """Set of destination-relative paths claimed by current sources.

    Keys are separator-normalized so lookups match listing output on every
    platform. Inserting an existing key is a no-op.
    """

    def __init__(self, paths: Iterable[str] = ()) -> None:
        self._paths: set[str] = set()
        for path in paths:
            self.add(path)

    def add(self, path: str) -> None:
        """Claim a destination-relative path."""
        self._paths.add(normalize_path(path))

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and normalize_path(path) in self._paths

    def __len__(self) -> int:
        return len(self._paths)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._paths))

    def __repr__(self) -> str:
        return f"KeepSet({sorted(self._paths)!r})"


@dataclass(frozen=True, slots=True)
class DeletionResult:
    """Outcome of a single deletion attempt.

    Attributes:
        path: Destination-relative candidate path (POSIX separators).
        display_path: Path relative to the working directory, for reporting.
        success: Whether the file was removed.
        error: Failure reason if the deletion failed, None otherwise.
    """

    path: str
    display_path: str
    success: bool
    error: str | None = None


class StageState(Enum):
    """Lifecycle of a prune stage. There are no transitions back."""

    IDLE = "idle"
    CONSUMING = "consuming"
    FLUSHING = "flushing"
    DONE = "done"
    FAILED = "failed"
