"""Typer CLI entry point for the ridewire diagnostics engine."""

import asyncio
import json
from datetime import UTC, datetime
from pathlib import Path

import typer
from dotenv import load_dotenv

load_dotenv()

app = typer.Typer(
    name="ridewire",
    help="Multi-LLM vehicle diagnostic consensus CLI",
    no_args_is_help=True,
)


_config_option = typer.Option(
    None,
    "--config",
    "-c",
    help="Path to configuration YAML file. Uses env vars if not provided.",
    exists=True,
)


def _load_json(path: Path) -> object:
    try:
        return json.loads(path.read_text())
    except json.JSONDecodeError as e:
        from ridewire.pipeline.validation import ReportValidationError

        raise ReportValidationError([f"{path.name} is not valid JSON: {e}"]) from e


@app.command()
def analyze(
    report: Path = typer.Argument(
        ...,
        help="Path to a fault report JSON file",
        exists=True,
    ),
    config: Path = _config_option,
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Print the result as JSON on stdout instead of a table",
    ),
    simulate: bool = typer.Option(
        False,
        "--simulate",
        help="Also build the current / if-ignored / after-repair simulation",
    ),
) -> None:
    """Diagnose a fault report with primary and (when needed) secondary providers."""
    from ridewire.config import Settings
    from ridewire.display.analysis_display import AnalysisDisplay
    from ridewire.display.error_display import ErrorDisplay
    from ridewire.pipeline.logging import setup_logging
    from ridewire.pipeline.orchestrator import DiagnosticOrchestrator
    from ridewire.pipeline.validation import validate_report

    display = AnalysisDisplay()
    error_display = ErrorDisplay(display.console)

    try:
        settings = Settings.from_yaml(config) if config else Settings.from_env()
    except ValueError as e:
        error_display.show_error(
            "config",
            "invalid_config",
            str(e),
            "Provide --config or set OPENAI_API_KEY and GEMINI_API_KEY",
        )
        raise typer.Exit(code=1) from None

    run_id = datetime.now(tz=UTC).strftime("%Y%m%dT%H%M%S")
    setup_logging(
        Path(settings.logging.log_dir),
        run_id,
        console=display.console,
        level=settings.logging.level,
    )

    try:
        fault_report = validate_report(_load_json(report))
        orchestrator = DiagnosticOrchestrator(settings.engine, callback=display)
        result = asyncio.run(orchestrator.analyze(fault_report))
    except KeyboardInterrupt:
        error_display.show_error(
            "analysis",
            "interrupted",
            "Analysis interrupted by user",
            "Re-run the same command",
        )
        raise typer.Exit(code=130) from None
    except Exception as e:
        source, error_class, message, suggestion = ErrorDisplay.format_analysis_error(e)
        error_display.show_error(source, error_class, message, suggestion)
        raise typer.Exit(code=1) from None

    simulation = None
    if simulate:
        from ridewire.simulation import VehicleSimulator

        simulation = VehicleSimulator().generate_simulation(
            result, fault_report.vehicle_info
        )

    if json_output:
        body = result.to_response()
        if simulation is not None:
            body["simulation"] = simulation.model_dump(mode="json")
        typer.echo(json.dumps(body, indent=2))
        return

    display.show_result(result)
    if simulation is not None:
        display.show_simulation(simulation)


@app.command("simulate")
def simulate_cmd(
    diagnostic: Path = typer.Argument(
        ...,
        help="JSON file with diagnosticResult and vehicleInfo",
        exists=True,
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Print the simulation as JSON on stdout instead of a table",
    ),
) -> None:
    """Build a three-state simulation from an existing diagnostic result.

    Example:
        ridewire analyze report.json --json > result.json
        ridewire simulate result.json
    """
    from pydantic import ValidationError
    from rich.console import Console

    from ridewire.display.analysis_display import AnalysisDisplay
    from ridewire.models.report import VehicleInfo
    from ridewire.models.verdict import Verdict
    from ridewire.pipeline.validation import ReportValidationError
    from ridewire.simulation import VehicleSimulator

    console = Console(stderr=True)
    try:
        payload = _load_json(diagnostic)
    except ReportValidationError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1) from None

    if not isinstance(payload, dict):
        console.print("[red]Error:[/red] Expected a JSON object")
        raise typer.Exit(code=1)

    # Accept the wrapped request shape as well as raw ``analyze --json`` output.
    verdict_data = payload.get("diagnosticResult") or payload.get("diagnostic") or payload
    vehicle_data = payload.get("vehicleInfo") or payload.get("vehicle_info") or {}

    try:
        verdict = Verdict.model_validate(verdict_data)
        vehicle_info = VehicleInfo.model_validate(vehicle_data)
    except ValidationError as e:
        console.print(f"[red]Error:[/red] Invalid diagnostic result: {e}")
        raise typer.Exit(code=1) from None

    simulation = VehicleSimulator().generate_simulation(verdict, vehicle_info)

    if json_output:
        typer.echo(json.dumps(simulation.model_dump(mode="json"), indent=2))
        return
    AnalysisDisplay(console).show_simulation(simulation)


if __name__ == "__main__":
    app()
