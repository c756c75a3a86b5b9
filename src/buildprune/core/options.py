"""Option resolution and validation for prune stages.

Turns the two accepted call shapes, ``(dest, options)`` and
``(options_with_dest)``, into a single validated PruneOptions. Every
violation raises ConfigurationError before any input is consumed.
"""

from __future__ import annotations

import inspect
import os
from collections.abc import Awaitable, Callable, Mapping
from concurrent.futures import Future
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from buildprune.core.exceptions import ConfigurationError
from buildprune.core.glob_utils import (
    ALL_FILES_PATTERN,
    ends_with_any,
    extension_pattern,
    replace_extension,
)


if TYPE_CHECKING:
    from buildprune.core.models import KeepSet


MappedPaths = str | list[str]
MapResult = MappedPaths | Awaitable[MappedPaths] | Future[MappedPaths]
Mapper = Callable[[str], MapResult]
PathFilter = Callable[[str], bool]

KNOWN_OPTIONS = frozenset({"map", "filter", "ext", "verbose"})


def identity(name: str) -> str:
    """Map a source-relative path to the same destination-relative path."""
    return name


def extension_mapper(extensions: tuple[str, ...]) -> Mapper:
    """Build a mapper producing one path per extension.

    Examples:
        >>> extension_mapper((".js", ".js.map"))("lib/a.ts")
        ['lib/a.js', 'lib/a.js.map']
    """

    def mapper(name: str) -> list[str]:
        return [replace_extension(name, ext) for ext in extensions]

    return mapper


@dataclass(frozen=True, slots=True)
class PruneOptions:
    """Validated, fully defaulted configuration for one prune stage.

    Attributes:
        dest: Absolute destination directory.
        mapper: Maps a source-relative path to destination-relative path(s).
        pattern: Candidate glob pattern relative to dest.
        filter: Optional caller predicate; only candidates it accepts are deleted.
        ext: Extensions the mapper was synthesized from, if any.
        verbose: Report every deletion attempt.
    """

    dest: Path
    mapper: Mapper = identity
    pattern: str = ALL_FILES_PATTERN
    filter: PathFilter | None = None
    ext: tuple[str, ...] | None = None
    verbose: bool = False

    @property
    def candidate_patterns(self) -> tuple[str, ...]:
        """Patterns handed to the destination listing.

        With extensions and no explicit pattern, listing is narrowed to
        files carrying one of the extensions.
        """
        if self.ext and self.pattern == ALL_FILES_PATTERN:
            return (extension_pattern(self.ext),)
        return (self.pattern,)

    def build_predicate(self, keep: KeepSet) -> PathFilter:
        """Compose the delete predicate for a candidate path.

        A candidate is deleted only when it is absent from the keep set and
        accepted by the caller filter. When extensions are set but listing
        could not be narrowed, the candidate must also end in one of them.
        """
        user_filter = self.filter

        def should_delete(name: str) -> bool:
            if name in keep:
                return False
            return user_filter is None or bool(user_filter(name))

        if self.ext and self.pattern != ALL_FILES_PATTERN:
            extensions = self.ext

            def should_delete_with_ext(name: str) -> bool:
                return ends_with_any(name, extensions) and should_delete(name)

            return should_delete_with_ext

        return should_delete


def resolve_options(
    dest: str | os.PathLike[str] | Mapping[str, object],
    options: Mapping[str, object] | None = None,
) -> PruneOptions:
    """Validate caller arguments and produce PruneOptions.

    Args:
        dest: Destination directory, or a mapping of options carrying "dest".
        options: Options mapping when dest is given positionally.

    Returns:
        The resolved PruneOptions.

    Raises:
        ConfigurationError: If arguments have the wrong shape or an option
            has the wrong type or conflicts with another.

    Example:
        >>> resolve_options("dist", {"ext": ".js"}).candidate_patterns
        ('**/*@(.js)',)
    """
    destination, options = _split_destination(dest, options)

    unknown = sorted(set(options) - KNOWN_OPTIONS)
    if unknown:
        raise ConfigurationError(
            f"Unknown option(s): {', '.join(unknown)}", option=unknown[0]
        )

    mapper: Mapper = identity
    pattern = ALL_FILES_PATTERN
    path_filter: PathFilter | None = None
    extensions: tuple[str, ...] | None = None
    verbose = False

    map_option = options.get("map")
    if map_option is not None:
        if not callable(map_option) or not _accepts_one_argument(map_option):
            raise ConfigurationError(
                "options.map must be a function of one argument", option="map"
            )
        if options.get("ext") is not None:
            raise ConfigurationError(
                "options.map and options.ext are incompatible", option="ext"
            )
        mapper = map_option

    filter_option = options.get("filter")
    if filter_option is not None:
        if isinstance(filter_option, str):
            if not filter_option:
                raise ConfigurationError(
                    "options.filter pattern must not be empty", option="filter"
                )
            pattern = filter_option
        elif callable(filter_option):
            path_filter = filter_option
        else:
            raise ConfigurationError(
                "options.filter must be a string or function", option="filter"
            )

    ext_option = options.get("ext")
    if ext_option is not None:
        extensions = _validate_extensions(ext_option)
        mapper = extension_mapper(extensions)

    verbose_option = options.get("verbose")
    if verbose_option is not None:
        if not isinstance(verbose_option, bool):
            raise ConfigurationError(
                "options.verbose must be a boolean", option="verbose"
            )
        verbose = verbose_option

    return PruneOptions(
        dest=Path(os.path.abspath(destination)),
        mapper=mapper,
        pattern=pattern,
        filter=path_filter,
        ext=extensions,
        verbose=verbose,
    )


def _split_destination(
    dest: object, options: object
) -> tuple[str, Mapping[str, object]]:
    """Resolve the two call shapes into (destination, options)."""
    if isinstance(dest, str | os.PathLike):
        if options is None:
            options = {}
        if not isinstance(options, Mapping):
            raise ConfigurationError("options must be a mapping", option="options")
        if "dest" in options:
            raise ConfigurationError(
                "options.dest should not be specified with a dest argument",
                option="dest",
            )
        destination: object = dest
    elif isinstance(dest, Mapping):
        if options is not None:
            raise ConfigurationError(
                "dest must be a string or path when options are passed separately",
                option="dest",
            )
        options = {key: value for key, value in dest.items() if key != "dest"}
        destination = dest.get("dest")
    else:
        raise ConfigurationError(
            "expected a dest string or path, or an options mapping", option="dest"
        )

    if isinstance(destination, os.PathLike):
        destination = os.fspath(destination)
    if not isinstance(destination, str):
        raise ConfigurationError(
            "options.dest or dest argument must be a string or path", option="dest"
        )
    if not destination:
        raise ConfigurationError("dest must not be empty", option="dest")

    return destination, options


def _validate_extensions(value: object) -> tuple[str, ...]:
    """Normalize options.ext to a non-empty tuple of non-empty strings."""
    if isinstance(value, str):
        value = [value]
    if (
        not isinstance(value, list | tuple)
        or not value
        or not all(isinstance(ext, str) and ext for ext in value)
    ):
        raise ConfigurationError(
            "options.ext must be a string or non-empty list of strings", option="ext"
        )
    return tuple(value)


def _accepts_one_argument(fn: Callable[..., object]) -> bool:
    """Check that fn can be called with a single positional argument."""
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        # Builtins without introspectable signatures
        return True
    try:
        signature.bind("name")
    except TypeError:
        return False
    return True
