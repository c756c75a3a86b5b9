"""Destination directory adapters."""

from buildprune.adapters.destination.filesystem import FilesystemDestination


__all__ = ["FilesystemDestination"]
