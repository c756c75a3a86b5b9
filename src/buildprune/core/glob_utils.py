"""Pure utility functions for path and glob pattern handling.

These functions contain no I/O and are safe to use in the core domain.
"""

from __future__ import annotations

import os
import re
from collections.abc import Sequence


# Pattern matching every file, recursively, under a directory
ALL_FILES_PATTERN = "**/*"

# Last dot-delimited suffix of the final path segment, or nothing
_TRAILING_EXTENSION = re.compile(r"(\.[^./\\]*)?$")

# Characters with meaning in a wcmatch pattern using BRACE and EXTGLOB
_GLOB_SPECIAL = re.compile(r"([*?[{}()|])")


def normalize_path(path: str) -> str:
    """Convert OS-specific separators to forward slashes.

    On POSIX this is the identity; a backslash there is a valid
    filename character, not a separator.

    Examples:
        >>> normalize_path("lib/a.js")
        'lib/a.js'
    """
    if os.sep != "/":
        path = path.replace(os.sep, "/")
    if os.altsep and os.altsep != "/":
        path = path.replace(os.altsep, "/")
    return path


def replace_extension(name: str, ext: str) -> str:
    """Replace the trailing extension of a path, or append one if it has none.

    Only the last dot-delimited suffix of the final segment is replaced.

    Examples:
        >>> replace_extension("lib/a.ts", ".js")
        'lib/a.js'
        >>> replace_extension("a.min.ts", ".js")
        'a.min.js'
        >>> replace_extension("dir.d/readme", ".txt")
        'dir.d/readme.txt'
    """
    return _TRAILING_EXTENSION.sub(lambda _match: ext, name, count=1)


def extension_pattern(extensions: Sequence[str]) -> str:
    """Build one recursive extglob pattern matching files ending in any extension.

    Examples:
        >>> extension_pattern([".js", ".js.map"])
        '**/*@(.js|.js.map)'
    """
    alternatives = "|".join(_escape(ext) for ext in extensions)
    return f"{ALL_FILES_PATTERN}@({alternatives})"


def ends_with_any(name: str, extensions: Sequence[str]) -> bool:
    """Check if a path ends with one of the given extensions."""
    return any(name.endswith(ext) for ext in extensions)


def _escape(text: str) -> str:
    """Escape glob, brace and extglob metacharacters so text matches literally."""
    return _GLOB_SPECIAL.sub(r"[\1]", text)
