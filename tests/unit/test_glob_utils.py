"""Unit tests for path and glob utility functions."""

import os

import pytest

from buildprune.core.glob_utils import (
    ALL_FILES_PATTERN,
    ends_with_any,
    extension_pattern,
    normalize_path,
    replace_extension,
)


@pytest.mark.core
@pytest.mark.tra("Domain.GlobUtils")
class TestReplaceExtension:
    """Tests for replace_extension()."""

    @pytest.mark.parametrize(
        ("name", "ext", "expected"),
        [
            ("a.ts", ".js", "a.js"),
            ("lib/a.ts", ".js", "lib/a.js"),
            ("a.min.ts", ".js", "a.min.js"),
            ("1.old", ".new", "1.new"),
            ("2", ".new", "2.new"),
            ("4.old/four", ".new", "4.old/four.new"),
            ("a.", ".js", "a.js"),
            ("a.ts", ".js.map", "a.js.map"),
        ],
    )
    def test_replaces_last_suffix_of_final_segment(
        self, name: str, ext: str, expected: str
    ) -> None:
        """Only the final segment's last suffix changes; none is appended to."""
        assert replace_extension(name, ext) == expected

    def test_replacement_is_literal(self) -> None:
        """Regex replacement escapes in ext are not interpreted."""
        assert replace_extension("a.ts", r".\1") == r"a.\1"


@pytest.mark.core
@pytest.mark.tra("Domain.GlobUtils")
class TestExtensionPattern:
    """Tests for extension_pattern()."""

    def test_extensions_become_extglob_alternatives(self) -> None:
        """All extensions share one recursive extglob group."""
        assert extension_pattern([".js", ".js.map"]) == "**/*@(.js|.js.map)"

    def test_single_extension(self) -> None:
        """One extension still uses the group form."""
        assert extension_pattern([".css"]) == "**/*@(.css)"

    def test_metacharacters_are_escaped(self) -> None:
        """Glob, brace and group characters in an extension match literally."""
        assert extension_pattern([".[x]", ".a|b"]) == "**/*@(.[[]x]|.a[|]b)"

    def test_all_files_pattern(self) -> None:
        """The default candidate pattern lists everything recursively."""
        assert ALL_FILES_PATTERN == "**/*"


@pytest.mark.core
@pytest.mark.tra("Domain.GlobUtils")
class TestEndsWithAny:
    """Tests for ends_with_any()."""

    def test_matches_any_extension(self) -> None:
        """A name ending in one of the extensions matches."""
        assert ends_with_any("3.new", [".new", ".new.map"]) is True
        assert ends_with_any("3.new.map", [".new", ".new.map"]) is True

    def test_rejects_other_extensions(self) -> None:
        """A name ending in none of the extensions does not match."""
        assert ends_with_any("3.map", [".new", ".new.map"]) is False


@pytest.mark.core
@pytest.mark.tra("Domain.GlobUtils")
class TestNormalizePath:
    """Tests for normalize_path()."""

    def test_forward_slashes_unchanged(self) -> None:
        """POSIX-style paths are returned as is."""
        assert normalize_path("dir/a.js") == "dir/a.js"

    def test_os_separator_converted(self) -> None:
        """The platform separator becomes a forward slash."""
        assert normalize_path(os.path.join("dir", "a.js")) == "dir/a.js"
