"""Rich console rendering of analysis progress, verdicts, and simulations.

``AnalysisDisplay`` implements the ``AnalysisCallback`` protocol.  All output
goes through a shared ``Console(stderr=True)`` so stdout stays clean for
``--json`` consumers.
"""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from ridewire.display.callbacks import AnalysisCallback
from ridewire.models.simulation import Simulation
from ridewire.models.verdict import ConsensusResult

_URGENCY_STYLES = {
    "low": "green",
    "medium": "yellow",
    "high": "red",
    "critical": "bold red",
}


class AnalysisDisplay(AnalysisCallback):
    """Prints one status line per lifecycle event and renders final results."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(stderr=True)

    # ------------------------------------------------------------------
    # AnalysisCallback
    # ------------------------------------------------------------------

    def on_provider_start(self, provider: str, role: str) -> None:
        self.console.print(f"[dim]Querying {role} provider[/dim] [cyan]{provider}[/cyan]")

    def on_provider_complete(
        self, provider: str, role: str, duration_seconds: float, confidence: float
    ) -> None:
        self.console.print(
            f"[green]✔[/green] {provider} ({role}) answered in "
            f"{duration_seconds:.1f}s, confidence {confidence:.2f}"
        )

    def on_provider_fail(
        self, provider: str, role: str, error_kind: str, message: str, suggestion: str
    ) -> None:
        self.console.print(
            f"[red]✖[/red] {provider} ({role}) failed: {error_kind}: {message[:200]}"
        )
        if suggestion:
            self.console.print(f"  [dim]{suggestion}[/dim]")

    def on_second_opinion(self, requested: bool, reasons: list[str]) -> None:
        if requested:
            self.console.print(f"[yellow]Second opinion:[/yellow] {'; '.join(reasons)}")

    def on_llm_call(
        self,
        provider: str,
        model: str,
        input_tokens: int | None,
        output_tokens: int | None,
    ) -> None:
        if input_tokens is not None or output_tokens is not None:
            self.console.print(
                f"[dim]{model}: {input_tokens or 0} in / {output_tokens or 0} out tokens[/dim]"
            )

    # ------------------------------------------------------------------
    # Result rendering
    # ------------------------------------------------------------------

    def show_result(self, result: ConsensusResult) -> None:
        """Render the consensus verdict as a two-column table."""
        verdict = result.verdict
        urgency = verdict.urgency.value
        style = _URGENCY_STYLES.get(urgency, "white")

        table = Table(title="Diagnostic Verdict", show_header=False, expand=True)
        table.add_column("Field", style="cyan", no_wrap=True)
        table.add_column("Value", style="white")
        table.add_row("Diagnosis", verdict.diagnosis)
        table.add_row("Root cause", verdict.root_cause)
        table.add_row("Confidence", f"{verdict.confidence:.2f}")
        table.add_row("Urgency", f"[{style}]{urgency}[/{style}]")
        table.add_row(
            "Estimated cost",
            f"${verdict.cost_range.min:,.0f} - ${verdict.cost_range.max:,.0f}",
        )
        table.add_row("Actions", "\n".join(f"- {a}" for a in verdict.actions) or "-")
        table.add_row("Parts", "\n".join(f"- {p}" for p in verdict.parts) or "-")
        table.add_row(
            "Source",
            f"{result.provider}"
            + (" (after second opinion)" if result.second_opinion else ""),
        )

        self.console.print()
        self.console.print(table)

    def show_simulation(self, simulation: Simulation) -> None:
        """Render the three simulation states side by side."""
        states = simulation.states
        columns = [states.current_broken, states.future_ignored, states.after_repair]

        table = Table(title="Vehicle Simulation", expand=True)
        table.add_column("", style="cyan", no_wrap=True)
        table.add_column("Now", style="red")
        table.add_column("If ignored", style="bold red")
        table.add_column("After repair", style="green")

        table.add_row("Status", *(s.status.value for s in columns))
        table.add_row("Timeframe", *(s.timeframe for s in columns))
        table.add_row(
            "Systems",
            *(", ".join(f"{sys.name} {sys.health}%" for sys in s.systems) for s in columns),
        )
        table.add_row("Efficiency", *(f"{s.metrics.efficiency}%" for s in columns))
        table.add_row("Reliability", *(f"{s.metrics.reliability}%" for s in columns))
        table.add_row("Safety", *(f"{s.metrics.safety}%" for s in columns))
        table.add_row("Cost per mile", *(s.metrics.cost_per_mile for s in columns))

        self.console.print()
        self.console.print(table)
        self.console.print(simulation.customer_explanation.summary)
