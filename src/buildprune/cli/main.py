"""CLI commands for buildprune."""

from __future__ import annotations

from pathlib import Path

import typer

from buildprune.core.exceptions import BuildpruneError


app = typer.Typer(
    name="buildprune",
    help="Remove stale build outputs that no current source maps to.",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        from buildprune import __version__

        typer.echo(f"buildprune {__version__}")
        raise typer.Exit()


@app.callback()
def callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    """Remove stale build outputs that no current source maps to."""


@app.command()
def run(
    src: Path = typer.Argument(..., help="Source directory the build reads from."),
    dest: Path = typer.Argument(..., help="Destination directory to prune."),
    pattern: str | None = typer.Option(
        None,
        "--pattern",
        "-p",
        help="Glob selecting source files, relative to SRC. Defaults to '**/*'.",
    ),
    ext: list[str] | None = typer.Option(
        None,
        "--ext",
        "-e",
        help="Output extension each source maps to (repeatable), e.g. '.js'.",
    ),
    filter_pattern: str | None = typer.Option(
        None,
        "--filter",
        "-f",
        help="Glob restricting which files under DEST may be deleted.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Print every deleted file.",
    ),
) -> None:
    """Delete files under DEST that no file under SRC maps to."""
    from buildprune.adapters.source import iter_source_files
    from buildprune.config import find_project_root, load_project_settings
    from buildprune.core.glob_utils import ALL_FILES_PATTERN
    from buildprune.core.services import prune

    try:
        settings = load_project_settings(find_project_root())

        options: dict[str, object] = {}
        for key, value in (
            ("ext", ext or settings.get("ext")),
            ("filter", filter_pattern or settings.get("filter")),
            ("verbose", verbose or settings.get("verbose")),
        ):
            if value is not None:
                options[key] = value

        source_pattern = pattern or settings.get("pattern") or ALL_FILES_PATTERN
        assert isinstance(source_pattern, str)

        stage = prune(dest, options)
        results = stage.consume(iter_source_files(src, source_pattern))
    except BuildpruneError as e:
        typer.echo(f"Error: {e}", err=True)
        if e.recovery_hint:
            typer.echo(f"Hint: {e.recovery_hint}", err=True)
        raise typer.Exit(1) from None

    typer.echo(f"Pruned {len(results)} file(s) from {dest}")


def main() -> None:
    """Entry point for the CLI."""
    app()
