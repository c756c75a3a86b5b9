"""Tests validating that example code patterns work correctly.

These tests ensure the examples in the examples/ directory represent
working, copy-pasteable code patterns.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from buildprune import (
    ConfigurationError,
    DeletionFailedError,
    DestinationNotFoundError,
    StageState,
    find_project_root,
    iter_source_files,
    load_project_settings,
    prune,
)


@pytest.mark.core
class TestBasicUsage:
    """Tests for basic_usage.py example pattern."""

    def test_compile_loop_removes_stale_outputs(
        self, tmp_path: Path, make_tree, list_tree
    ) -> None:
        """Outputs written during the loop survive; stale ones do not."""
        make_tree(tmp_path, ["src/app.ts", "dist/old.js", "dist/index.html"])
        dist = tmp_path / "dist"

        stage = prune(dist, ext=".js")
        for record in stage.run(iter_source_files(tmp_path / "src", "**/*.ts")):
            (dist / Path(record.relative).with_suffix(".js")).write_text("")

        assert list_tree(dist) == ["app.js", "index.html"]
        assert [r.path for r in stage.results] == ["old.js"]


@pytest.mark.core
class TestErrorHandling:
    """Tests for error_handling.py example pattern."""

    def test_option_errors_are_immediate(self) -> None:
        """Conflicting options fail at construction."""
        with pytest.raises(ConfigurationError) as exc_info:
            prune("dist", {"map": lambda name: name, "ext": ".js"})

        assert exc_info.value.option == "ext"

    def test_missing_destination_is_recorded(self, tmp_path: Path) -> None:
        """The stage keeps the error that ended it."""
        (tmp_path / "src").mkdir()
        stage = prune(tmp_path / "dist", ext=".js")

        with pytest.raises(DestinationNotFoundError) as exc_info:
            stage.consume(iter_source_files(tmp_path / "src"))

        assert stage.state is StageState.FAILED
        assert stage.error is exc_info.value

    def test_failures_are_listed(
        self, tmp_path: Path, fake_destination
    ) -> None:
        """DeletionFailedError carries every failure."""
        from buildprune import PruneStage, SynchronousExecutor, resolve_options

        destination = fake_destination(
            tmp_path, files=["a.js", "b.js"], failing=["a.js", "b.js"]
        )
        stage = PruneStage(
            resolve_options(tmp_path), destination, executor=SynchronousExecutor()
        )

        with pytest.raises(DeletionFailedError) as exc_info:
            stage.consume([])

        assert [f.path for f in exc_info.value.failures] == ["a.js", "b.js"]


@pytest.mark.core
class TestAsyncPipeline:
    """Tests for async_pipeline.py example pattern."""

    def test_coroutine_map_function(
        self, tmp_path: Path, make_tree, list_tree
    ) -> None:
        """Awaited map results claim outputs."""
        make_tree(
            tmp_path,
            ["styles/a.scss", "dist/a.css", "dist/a.css.map", "dist/b.css"],
        )

        async def output_names(name: str) -> list[str]:
            await asyncio.sleep(0)
            stem = name.rsplit(".", 1)[0]
            return [f"{stem}.css", f"{stem}.css.map"]

        async def main() -> list[object]:
            stage = prune(tmp_path / "dist", map=output_names)
            files = iter_source_files(tmp_path / "styles")
            return [r async for r in stage.arun(files)]

        forwarded = asyncio.run(main())

        assert len(forwarded) == 1
        assert list_tree(tmp_path / "dist") == ["a.css", "a.css.map"]


@pytest.mark.core
class TestPyprojectSettings:
    """Tests for pyproject_settings.py example pattern."""

    def test_settings_drive_prune(self, tmp_path: Path, make_tree, list_tree) -> None:
        """Settings read from pyproject.toml are valid prune options."""
        make_tree(tmp_path, ["src/a.ts", "src/b.css", "dist/a.js", "dist/c.js"])
        (tmp_path / "pyproject.toml").write_text(
            '[tool.buildprune]\next = ".js"\npattern = "**/*.ts"\n'
        )

        root = find_project_root(tmp_path / "src")
        settings = load_project_settings(root)
        pattern = settings.pop("pattern", "**/*")
        prune(root / "dist", settings).consume(iter_source_files(root / "src", pattern))

        assert list_tree(tmp_path / "dist") == ["a.js"]
