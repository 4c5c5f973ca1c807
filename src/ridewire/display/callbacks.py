"""Progress callback protocol for diagnostic analysis lifecycle events.

Defines the ``AnalysisCallback`` Protocol that display implementations must
satisfy.  All hooks return nothing, so any concrete class (e.g.
``AnalysisDisplay``) can be used wherever an ``AnalysisCallback`` is expected.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class AnalysisCallback(Protocol):
    """Protocol for analysis progress callbacks.

    Implementations receive lifecycle events during one analysis: provider
    calls, the second-opinion decision, and terminal states.
    """

    def on_provider_start(self, provider: str, role: str) -> None:
        """Called before a provider is queried.

        Args:
            provider: Provider label (e.g. ``"openai"``).
            role: ``"primary"`` or ``"secondary"``.
        """
        ...

    def on_provider_complete(
        self, provider: str, role: str, duration_seconds: float, confidence: float
    ) -> None:
        """Called when a provider returned a valid verdict.

        Args:
            provider: Provider label.
            role: ``"primary"`` or ``"secondary"``.
            duration_seconds: Wall-clock time across all attempts.
            confidence: Confidence reported in the verdict.
        """
        ...

    def on_provider_fail(
        self, provider: str, role: str, error_kind: str, message: str, suggestion: str
    ) -> None:
        """Called when a provider call failed for good.

        Args:
            provider: Provider label.
            role: ``"primary"`` or ``"secondary"``.
            error_kind: ``"timeout"``, ``"transport"`` or ``"malformed"``.
            message: Human-readable error message.
            suggestion: Actionable fix suggestion.
        """
        ...

    def on_second_opinion(self, requested: bool, reasons: list[str]) -> None:
        """Called once the trigger condition has been evaluated.

        Args:
            requested: Whether the secondary provider is queried.
            reasons: Which trigger clauses fired (empty when not requested).
        """
        ...

    def on_llm_call(
        self,
        provider: str,
        model: str,
        input_tokens: int | None,
        output_tokens: int | None,
    ) -> None:
        """Called after each successful LLM API call."""
        ...
