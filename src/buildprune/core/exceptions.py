"""Domain exceptions for buildprune.

All library errors inherit from BuildpruneError, allowing callers to catch
any library exception with a single except clause. Each exception provides
a recovery_hint property with guidance on resolving the error.
"""

from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from pathlib import Path

    from buildprune.core.models import DeletionResult


class BuildpruneError(Exception):
    """Base class for all buildprune exceptions.

    Catch this to handle any error from the library.
    """

    @property
    def recovery_hint(self) -> str | None:
        """Optional guidance on how to resolve this error."""
        return None


class ConfigurationError(BuildpruneError):
    """Raised for invalid or conflicting options.

    Always raised before a stage consumes any input.

    Attributes:
        option: Name of the offending option, if one can be singled out.
    """

    def __init__(self, message: str, option: str | None = None) -> None:
        self.option = option
        super().__init__(message)

    @property
    def recovery_hint(self) -> str | None:
        """Point at the offending option."""
        if self.option:
            return f"Check the value passed for '{self.option}'"
        return None


class StageStateError(BuildpruneError):
    """Raised when a prune stage is run more than once."""

    pass


class MapperError(BuildpruneError):
    """Base class for failures of the caller-supplied map function.

    Attributes:
        relative_path: Source-relative path the mapper was called with.
    """

    def __init__(self, message: str, relative_path: str) -> None:
        self.relative_path = relative_path
        super().__init__(message)


class MapperContractError(MapperError):
    """Raised when the map function returns something other than str or list[str]."""

    @property
    def recovery_hint(self) -> str:
        """Describe the accepted return shapes."""
        return (
            "The map function must return a string or list of strings, "
            "or an awaitable resolving to one"
        )


class MapperExecutionError(MapperError):
    """Raised when the map function itself raises.

    Attributes:
        cause: The exception raised by the map function.
    """

    def __init__(
        self, message: str, relative_path: str, cause: BaseException | None = None
    ) -> None:
        self.cause = cause
        super().__init__(message, relative_path)


class FilterError(BuildpruneError):
    """Raised when the caller-supplied filter predicate raises.

    Attributes:
        path: Destination-relative candidate being evaluated.
        cause: The exception raised by the predicate.
    """

    def __init__(
        self, message: str, path: str, cause: BaseException | None = None
    ) -> None:
        self.path = path
        self.cause = cause
        super().__init__(message)


class EnumerationError(BuildpruneError):
    """Raised when the destination directory cannot be listed.

    No deletions are attempted once this is raised.

    Attributes:
        dest: The destination directory.
        cause: The underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        dest: Path,
        cause: BaseException | None = None,
    ) -> None:
        self.dest = dest
        self.cause = cause
        super().__init__(message)


class DestinationNotFoundError(EnumerationError):
    """Raised when the destination directory does not exist."""

    @property
    def recovery_hint(self) -> str:
        """Suggest creating the destination first."""
        return f"Create the destination directory or fix the path: {self.dest}"


class DeletionFailedError(BuildpruneError):
    """Raised after the flush phase when at least one deletion failed.

    Every deletion is attempted before this is raised.

    Attributes:
        failures: DeletionResult for every file that could not be removed.
    """

    def __init__(self, failures: list[DeletionResult]) -> None:
        self.failures = failures
        first = failures[0]
        message = f"{first.display_path}: {first.error}"
        if len(failures) > 1:
            message += f" (and {len(failures) - 1} more failed deletion(s))"
        super().__init__(message)

    @property
    def recovery_hint(self) -> str:
        """Suggest checking permissions on the failed paths."""
        return "Check that the listed files are writable and not in use"
