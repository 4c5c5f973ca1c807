"""Diagnostic orchestration, consensus, and request validation."""

from ridewire.pipeline.consensus import ConsensusResolver
from ridewire.pipeline.logging import (
    log_attempt,
    log_llm_call,
    log_second_opinion,
    setup_logging,
)
from ridewire.pipeline.orchestrator import (
    AnalysisFailedError,
    DiagnosticOrchestrator,
    second_opinion_reasons,
)
from ridewire.pipeline.retry import (
    ERROR_SUGGESTIONS,
    backoff_delay,
    is_retriable,
    score_with_retry,
)
from ridewire.pipeline.validation import ReportValidationError, validate_report

__all__ = [
    "ERROR_SUGGESTIONS",
    "AnalysisFailedError",
    "ConsensusResolver",
    "DiagnosticOrchestrator",
    "ReportValidationError",
    "backoff_delay",
    "is_retriable",
    "log_attempt",
    "log_llm_call",
    "log_second_opinion",
    "score_with_retry",
    "second_opinion_reasons",
    "setup_logging",
    "validate_report",
]
