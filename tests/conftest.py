"""Pytest configuration and shared fixtures.

This module registers custom markers for CI job separation and provides
shared fixtures for the test suite.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from buildprune.core.models import SourceFile


if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "core: Core models, options, and stage")
    config.addinivalue_line("markers", "destination: Destination adapters")
    config.addinivalue_line("markers", "reporting: Rich reporting integration")
    config.addinivalue_line("markers", "cli: CLI tests")
    config.addinivalue_line("markers", "e2e: End-to-end tests")
    config.addinivalue_line(
        "markers", "tra: Test Responsibility Anchor (TRA) - namespace.Anchor format"
    )
    config.addinivalue_line(
        "markers",
        "tier: Test tier for CI job separation (0=instant, 1=fast, 2=standard, 3=slow, 4=manual)",
    )


@pytest.fixture
def make_tree() -> Callable[[Path, Iterable[str]], None]:
    """Create empty files (and parent directories) below a root."""

    def _make(root: Path, files: Iterable[str]) -> None:
        for name in files:
            path = root / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text("")

    return _make


@pytest.fixture
def list_tree() -> Callable[[Path], list[str]]:
    """List every file below a root as sorted POSIX relative paths."""

    def _list(root: Path) -> list[str]:
        return sorted(
            p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_file()
        )

    return _list


@pytest.fixture
def records() -> Callable[[Path, Sequence[str]], list[SourceFile]]:
    """Build SourceFile records for relative names below a base directory."""

    def _records(base: Path, names: Sequence[str]) -> list[SourceFile]:
        return [SourceFile(path=base / name, base=base) for name in names]

    return _records


class FakeDestination:
    """In-memory DestinationPort recording removals."""

    def __init__(
        self,
        root: Path,
        files: Sequence[str] = (),
        failing: Sequence[str] = (),
        list_error: Exception | None = None,
    ) -> None:
        self.root = root
        self.files = sorted(files)
        self.failing = set(failing)
        self.list_error = list_error
        self.listed_patterns: list[tuple[str, ...]] = []
        self.removed: list[str] = []

    def list_files(self, root: Path, patterns: Sequence[str]) -> list[str]:
        self.listed_patterns.append(tuple(patterns))
        if self.list_error is not None:
            raise self.list_error
        return list(self.files)

    def remove(self, path: Path) -> None:
        name = path.relative_to(self.root).as_posix()
        if name in self.failing:
            raise PermissionError(13, "Permission denied", str(path))
        if name not in self.files:
            raise FileNotFoundError(2, "No such file or directory", str(path))
        self.removed.append(name)


@pytest.fixture
def fake_destination() -> type[FakeDestination]:
    """Factory for in-memory destination adapters."""
    return FakeDestination
