"""Source record producers."""

from buildprune.adapters.source.filesystem import iter_source_files


__all__ = ["iter_source_files"]
