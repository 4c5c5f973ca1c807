"""Structured logging for diagnostic analyses.

Provides dual-sink logging via loguru:

- **Console sink**: Human-readable, colorized, shows the provider when one is
  in context.  When a shared Rich ``Console`` is provided, output routes
  through it so log lines and rendered tables do not interleave badly.
- **File sink**: JSON-structured JSONL written to
  ``{log_dir}/{run_id}/diagnostics.jsonl`` for programmatic parsing and audit.

Every provider attempt is logged, failures included, with its error kind.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console

    from ridewire.models.execution import ProviderAttempt


def setup_logging(
    log_dir: Path,
    run_id: str,
    console: Console | None = None,
    level: str = "INFO",
) -> Path:
    """Configure loguru sinks for one CLI run.

    Removes all existing handlers first to avoid duplicate output.

    Args:
        log_dir: Root directory for log storage.
        run_id: Unique identifier for this run.
        console: Optional shared Rich Console for output routing.
        level: Minimum level for the console sink.

    Returns:
        Path of the JSONL log file.
    """
    logger.remove()

    if console is not None:
        logger.add(
            lambda msg: console.print(msg, end="", highlight=False, markup=False),
            format="{time:HH:mm:ss} | {level: <8} | {message}",
            level=level,
            colorize=False,
        )
    else:
        # Console: human-readable with provider context
        logger.add(
            sys.stderr,
            format=(
                "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level>"
                " | <cyan>{extra[provider]}</cyan> | {message}"
            ),
            level=level,
            filter=lambda record: "provider" in record["extra"],
        )

        # Console: default handler for non-provider logs
        logger.add(
            sys.stderr,
            format=(
                "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level>"
                " | {message}"
            ),
            level=level,
            filter=lambda record: "provider" not in record["extra"],
        )

    # File: JSON structured
    log_file = log_dir / run_id / "diagnostics.jsonl"
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        str(log_file),
        format="{message}",
        serialize=True,
        level="DEBUG",
    )
    return log_file


def log_attempt(attempt: ProviderAttempt) -> None:
    """Log one provider attempt: INFO for success, WARNING for failure."""
    with logger.contextualize(provider=attempt.provider):
        if attempt.error_kind is None:
            logger.info(
                "Attempt {attempt} succeeded in {duration:.1f}s",
                attempt=attempt.attempt_number,
                duration=attempt.duration_seconds,
            )
        else:
            logger.warning(
                "Attempt {attempt} failed ({kind}) in {duration:.1f}s: {error}",
                attempt=attempt.attempt_number,
                kind=attempt.error_kind.value,
                duration=attempt.duration_seconds,
                error=(attempt.error or "")[:200],
            )


def log_llm_call(
    provider: str,
    model: str,
    input_tokens: int | None,
    output_tokens: int | None,
) -> None:
    """Log an LLM API call with token counts.

    Args:
        provider: Provider label that made the call.
        model: Model identifier (e.g. ``"gpt-4o"``).
        input_tokens: Prompt token count, if available.
        output_tokens: Completion token count, if available.
    """
    with logger.contextualize(provider=provider):
        logger.info(
            "LLM call: model={model} input_tokens={input_tokens} output_tokens={output_tokens}",
            model=model,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
        )


def log_second_opinion(requested: bool, reasons: list[str]) -> None:
    """Log the trigger decision for the secondary provider."""
    if requested:
        logger.info("Second opinion requested: {reasons}", reasons=", ".join(reasons))
    else:
        logger.info("Second opinion not needed")
