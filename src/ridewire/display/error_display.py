"""Error panels for analyses that could not produce a verdict.

Every failure is reduced to four fields (where it came from, what class of
error it is, the message, and what to try next) and shown in a red panel
on the shared stderr console.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.panel import Panel
from rich.table import Table

if TYPE_CHECKING:
    from rich.console import Console

MAX_MESSAGE_CHARS = 500


class ErrorDisplay:
    """Renders analysis failures as Rich panels.

    Args:
        console: Shared console, normally ``Console(stderr=True)`` so panels
            never mix with JSON written to stdout.
    """

    def __init__(self, console: Console) -> None:
        self.console = console

    def show_error(
        self,
        source: str,
        error_class: str,
        message: str,
        suggestion: str,
    ) -> None:
        """Print one error panel; *message* is cut to ``MAX_MESSAGE_CHARS``."""
        grid = Table.grid(padding=(0, 2))
        grid.add_column(style="bold", no_wrap=True)
        grid.add_column(overflow="fold")
        grid.add_row("Source", source)
        grid.add_row("Error Class", error_class)
        grid.add_row("Message", message[:MAX_MESSAGE_CHARS])
        grid.add_row("Suggestion", suggestion)

        self.console.print(Panel(grid, title="Analysis Error", border_style="red"))

    @staticmethod
    def format_analysis_error(error: Exception) -> tuple[str, str, str, str]:
        """Classify *error* for :meth:`show_error`.

        Unwraps :class:`~ridewire.pipeline.orchestrator.AnalysisFailedError`
        to reach the provider or validation error underneath.

        Returns:
            Tuple of ``(source, error_class, message, suggestion)``.
        """
        # Imported here: the pipeline package imports display for callbacks.
        from ridewire.agents.provider import ProviderError
        from ridewire.pipeline.orchestrator import AnalysisFailedError
        from ridewire.pipeline.retry import ERROR_SUGGESTIONS
        from ridewire.pipeline.validation import ReportValidationError

        cause = error.cause if isinstance(error, AnalysisFailedError) else error

        if isinstance(cause, ProviderError):
            return (
                cause.provider,
                cause.kind.value,
                str(error),
                ERROR_SUGGESTIONS[cause.kind],
            )
        if isinstance(cause, ReportValidationError):
            return (
                "request",
                "invalid_report",
                str(cause),
                "Include troubleCodes and vehicleInfo in the report JSON",
            )
        return (
            "unknown",
            type(cause).__name__,
            str(error),
            "Check diagnostics.jsonl in the log directory for details",
        )
