"""CLI for buildprune."""

from buildprune.cli.main import app, main


__all__ = ["app", "main"]
