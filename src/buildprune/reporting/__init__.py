"""Human-readable reporting adapters."""

from buildprune.reporting.rich_reporter import RichPruneReporter


__all__ = ["RichPruneReporter"]
