"""Port interfaces for hexagonal architecture.

Ports define contracts that adapters must implement. The core domain
depends only on these protocols, never on concrete implementations.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Protocol, runtime_checkable


if TYPE_CHECKING:
    from concurrent.futures import Future
    from pathlib import Path


@runtime_checkable
class DestinationPort(Protocol):
    """Directory of previously generated build artifacts."""

    def list_files(self, root: Path, patterns: Sequence[str]) -> list[str]:
        """List files under root matching any of the glob patterns.

        Args:
            root: Directory to search.
            patterns: Glob patterns relative to root (e.g., "**/*.js").

        Returns:
            Root-relative POSIX paths of matching files (never directories),
            sorted and without duplicates.

        Raises:
            DestinationNotFoundError: If root does not exist.
            EnumerationError: If root cannot be listed.
        """
        ...

    def remove(self, path: Path) -> None:
        """Delete a single file.

        Raises:
            OSError: If the file cannot be removed.
        """
        ...


@runtime_checkable
class PruneReporter(Protocol):
    """Reports individual deletions to the user.

    The core domain uses this to report without depending on any
    specific UI library.
    """

    def deleted(self, display_path: str) -> None:
        """Report a file that was removed."""
        ...

    def failed(self, display_path: str, reason: str) -> None:
        """Report a file that could not be removed."""
        ...


class NullPruneReporter:
    """A PruneReporter that produces no output.

    Used as the default when verbose reporting is off.
    """

    def deleted(self, display_path: str) -> None:
        """Do nothing."""
        _ = display_path

    def failed(self, display_path: str, reason: str) -> None:
        """Do nothing."""
        _ = (display_path, reason)


@runtime_checkable
class ExecutorPort(Protocol):
    """Executor for running deletions concurrently.

    Abstracts over concurrent.futures executors to allow dependency injection
    and testing. The core domain uses this protocol instead of directly
    importing ThreadPoolExecutor, maintaining "concurrency at the edges".
    """

    def submit(
        self, fn: Callable[..., object], *args: object, **kwargs: object
    ) -> Future[object]:  # type: ignore[name-defined, unused-ignore]
        """Submit a function for execution.

        Returns:
            Future representing the pending result.
        """
        ...

    def __enter__(self) -> ExecutorPort:
        """Enter context manager."""
        ...

    def __exit__(
        self, exc_type: object, exc_val: object, exc_tb: object
    ) -> object | None:
        """Exit context manager."""
        ...
