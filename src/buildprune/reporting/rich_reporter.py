"""Rich-based deletion reporter for terminal output."""

from __future__ import annotations

from rich.console import Console
from rich.text import Text

from buildprune.core.formatting import outcome_to_color


class RichPruneReporter:
    """Reporter printing one timestamped line per deletion attempt.

    Removed files are shown in yellow, failures in red with the reason.
    Safe to call from deletion worker threads.

    Example:
        stage = PruneStage.from_options(options, reporter=RichPruneReporter())
    """

    def __init__(self, console: Console | None = None) -> None:
        """Initialize the reporter.

        Args:
            console: Console to write to. Defaults to a new stdout console.
        """
        self._console = console if console is not None else Console(log_path=False)

    def deleted(self, display_path: str) -> None:
        """Report a removed file."""
        self._log(Text(display_path, style=outcome_to_color("deleted")))

    def failed(self, display_path: str, reason: str) -> None:
        """Report a file that could not be removed."""
        self._log(Text(f"{display_path}: {reason}", style=outcome_to_color("failed")))

    def _log(self, message: Text) -> None:
        self._console.log(Text("Prune:"), message)
