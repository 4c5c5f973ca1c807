"""Diagnostic orchestrator wiring prompt rendering, providers, and consensus.

Runs one analysis: render the fault report, score it with the primary
provider, decide whether a second opinion is needed, optionally score it with
the secondary provider, then resolve the two verdicts.  The trigger policy
lives here, not in the resolver, and its thresholds come from
:class:`~ridewire.config.EngineConfig`.

Calls are sequential by default.  When ``parallel_when_possible`` is set and
the trouble-code count alone already triggers a second opinion, both
providers are queried concurrently via ``asyncio.gather()``.
"""

import asyncio
import time

from loguru import logger

from ridewire.agents.prompt_builder import PromptBuilder
from ridewire.agents.provider import ProviderClient, ProviderError
from ridewire.config import EngineConfig, ProviderConfig
from ridewire.display.callbacks import AnalysisCallback
from ridewire.models.report import FaultReport
from ridewire.models.verdict import ConsensusResult, Verdict
from ridewire.pipeline.consensus import ConsensusResolver
from ridewire.pipeline.logging import log_attempt, log_llm_call, log_second_opinion
from ridewire.pipeline.retry import ERROR_SUGGESTIONS, score_with_retry


class AnalysisFailedError(Exception):
    """The single failure surfaced to callers when an analysis cannot finish.

    Attributes:
        cause: The underlying error, usually a
            :class:`~ridewire.agents.provider.ProviderError`.
    """

    def __init__(self, cause: Exception) -> None:
        self.cause = cause
        super().__init__(f"Diagnostic analysis failed: {cause}")


def second_opinion_reasons(
    report: FaultReport,
    primary: Verdict | None,
    config: EngineConfig,
) -> list[str]:
    """Return the trigger clauses that fire for *report*.

    With ``primary=None`` only the code-count clause can be evaluated, which
    is what lets the orchestrator start both providers up front.

    Returns:
        Empty list when no second opinion is needed.
    """
    reasons: list[str] = []
    if primary is not None and primary.confidence < config.trigger_confidence_threshold:
        reasons.append(
            f"primary confidence {primary.confidence:.2f} "
            f"< {config.trigger_confidence_threshold:.2f}"
        )
    if report.code_count > config.trigger_code_count_threshold:
        reasons.append(
            f"{report.code_count} trouble codes > {config.trigger_code_count_threshold}"
        )
    return reasons


class DiagnosticOrchestrator:
    """Runs the primary / secondary provider flow for one fault report at a time.

    Holds no per-request state, so one instance can serve concurrent
    ``analyze`` calls.

    Args:
        config: Engine configuration (providers and trigger thresholds).
        primary: Pre-built primary client; built from ``config.primary`` if
            omitted.
        secondary: Pre-built secondary client; built from ``config.secondary``
            if omitted.
        prompt_builder: Renderer for fault reports.
        callback: Optional lifecycle observer.
    """

    def __init__(
        self,
        config: EngineConfig,
        primary: ProviderClient | None = None,
        secondary: ProviderClient | None = None,
        prompt_builder: PromptBuilder | None = None,
        callback: AnalysisCallback | None = None,
    ) -> None:
        self.config = config
        self.prompt_builder = prompt_builder or PromptBuilder()
        system_prompt = self.prompt_builder.system_prompt()
        self.primary = primary or ProviderClient.from_config(config.primary, system_prompt)
        self.secondary = secondary or ProviderClient.from_config(
            config.secondary, system_prompt
        )
        self.callback = callback

    async def analyze(self, report: FaultReport) -> ConsensusResult:
        """Produce the consensus verdict for *report*.

        Raises:
            AnalysisFailedError: If the primary call fails, or the secondary
                call fails and ``degrade_on_secondary_failure`` is off.
        """
        logger.info(
            "Starting diagnostic analysis: {codes} for {make} {model}",
            codes=[tc.code for tc in report.trouble_codes],
            make=report.vehicle_info.make,
            model=report.vehicle_info.model,
        )
        query = self.prompt_builder.render(report)
        try:
            result = await self._run(report, query)
        except ProviderError as exc:
            logger.error("Diagnostic analysis failed: {error}", error=str(exc))
            raise AnalysisFailedError(exc) from exc

        logger.info(
            "Diagnostic analysis complete: provider={provider} confidence={confidence:.2f}"
            " urgency={urgency}",
            provider=result.provider,
            confidence=result.verdict.confidence,
            urgency=result.verdict.urgency.value,
        )
        return result

    async def _run(self, report: FaultReport, query: str) -> ConsensusResult:
        early_reasons = second_opinion_reasons(report, None, self.config)
        run_both = (
            self.config.consensus_enabled
            and self.config.parallel_when_possible
            and bool(early_reasons)
        )

        secondary_verdict: Verdict | None = None
        if run_both:
            self._announce_second_opinion(early_reasons)
            results = await asyncio.gather(
                self._score(self.primary, self.config.primary, query, "primary"),
                self._score_secondary(query),
                return_exceptions=True,
            )
            for outcome in results:
                if isinstance(outcome, BaseException):
                    raise outcome
            primary_verdict, secondary_verdict = results
        else:
            primary_verdict = await self._score(
                self.primary, self.config.primary, query, "primary"
            )
            reasons = (
                second_opinion_reasons(report, primary_verdict, self.config)
                if self.config.consensus_enabled
                else []
            )
            self._announce_second_opinion(reasons)
            if reasons:
                secondary_verdict = await self._score_secondary(query)

        return ConsensusResolver.resolve(
            primary_verdict,
            secondary_verdict,
            primary_name=self.primary.name,
            secondary_name=self.secondary.name,
        )

    def _announce_second_opinion(self, reasons: list[str]) -> None:
        log_second_opinion(bool(reasons), reasons)
        if self.callback:
            self.callback.on_second_opinion(bool(reasons), reasons)

    async def _score_secondary(self, query: str) -> Verdict | None:
        try:
            return await self._score(
                self.secondary, self.config.secondary, query, "secondary"
            )
        except ProviderError as exc:
            if not self.config.degrade_on_secondary_failure:
                raise
            logger.warning(
                "Secondary provider failed, continuing with primary only: {error}",
                error=str(exc),
            )
            return None

    async def _score(
        self,
        client: ProviderClient,
        provider_config: ProviderConfig,
        query: str,
        role: str,
    ) -> Verdict:
        """Score *query* with one provider, logging every attempt."""
        if self.callback:
            self.callback.on_provider_start(client.name, role)
        t0 = time.monotonic()
        try:
            verdict, response, attempts = await score_with_retry(
                client,
                query,
                max_attempts=provider_config.max_attempts,
                backoff_seconds=provider_config.backoff_seconds,
            )
        except ProviderError as exc:
            for attempt in exc.attempts:
                log_attempt(attempt)
            if self.callback:
                self.callback.on_provider_fail(
                    client.name,
                    role,
                    exc.kind.value,
                    exc.message[:500],
                    ERROR_SUGGESTIONS[exc.kind],
                )
            raise

        for attempt in attempts:
            log_attempt(attempt)
        log_llm_call(
            client.name, response.model, response.input_tokens, response.output_tokens
        )
        if self.callback:
            self.callback.on_llm_call(
                client.name, response.model, response.input_tokens, response.output_tokens
            )
            self.callback.on_provider_complete(
                client.name, role, time.monotonic() - t0, verdict.confidence
            )
        return verdict
