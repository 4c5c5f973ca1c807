"""Opt-in bounded retry with exponential backoff for provider calls.

A provider call is a single attempt unless the provider is configured with
``max_attempts > 1``.  Not every failure is worth another request:

- **Timeout**: retried (the backend may have been momentarily slow)
- **Transport**: retried (connection resets, 5xx, rate limits)
- **Malformed**: NOT retried; the same prompt at low temperature tends to
  produce the same unusable reply
"""

import asyncio
import time
from datetime import UTC, datetime

from ridewire.agents.provider import ProviderClient, ProviderError
from ridewire.llm.base import LLMResponse
from ridewire.models.execution import ProviderAttempt, ProviderErrorKind
from ridewire.models.verdict import Verdict

# Actionable fix suggestions for each failure kind.
ERROR_SUGGESTIONS: dict[ProviderErrorKind, str] = {
    ProviderErrorKind.TIMEOUT: (
        "The provider did not answer in time. Raise timeout_seconds or enable "
        "retries with max_attempts > 1."
    ),
    ProviderErrorKind.TRANSPORT: (
        "The provider SDK reported an error. Check the API key, model name, "
        "network access, and provider status."
    ),
    ProviderErrorKind.MALFORMED: (
        "The provider reply did not match the verdict schema. Check the model "
        "supports JSON output and review the logged reply."
    ),
}


def is_retriable(kind: ProviderErrorKind) -> bool:
    """Return True for TIMEOUT and TRANSPORT, False for MALFORMED."""
    return kind in {ProviderErrorKind.TIMEOUT, ProviderErrorKind.TRANSPORT}


def backoff_delay(attempt: int, base_seconds: float) -> float:
    """Delay before retrying after failed attempt number *attempt* (1-indexed)."""
    return base_seconds * (2 ** (attempt - 1))


async def score_with_retry(
    client: ProviderClient,
    query: str,
    max_attempts: int = 1,
    backoff_seconds: float = 1.0,
) -> tuple[Verdict, LLMResponse, list[ProviderAttempt]]:
    """Score *query* with up to *max_attempts* attempts.

    Args:
        client: Provider to call.
        query: Rendered fault report.
        max_attempts: Total attempts; ``1`` disables retrying.
        backoff_seconds: Base delay, doubled after each failed attempt.

    Returns:
        Tuple of ``(verdict, raw_response, attempts)`` on success.

    Raises:
        ProviderError: The last failure, with ``attempts`` filled in, when
            the failure is not retriable or attempts are exhausted.
    """
    attempts: list[ProviderAttempt] = []

    for attempt_num in range(1, max_attempts + 1):
        t0 = time.monotonic()
        try:
            verdict, response = await client.score_with_response(query)
        except ProviderError as exc:
            attempts.append(
                ProviderAttempt(
                    provider=client.name,
                    attempt_number=attempt_num,
                    duration_seconds=time.monotonic() - t0,
                    error_kind=exc.kind,
                    error=exc.message[:500],
                    timestamp=datetime.now(tz=UTC),
                )
            )
            if not is_retriable(exc.kind) or attempt_num == max_attempts:
                exc.attempts = attempts
                raise
            await asyncio.sleep(backoff_delay(attempt_num, backoff_seconds))
            continue

        attempts.append(
            ProviderAttempt(
                provider=client.name,
                attempt_number=attempt_num,
                duration_seconds=time.monotonic() - t0,
                timestamp=datetime.now(tz=UTC),
            )
        )
        return verdict, response, attempts

    msg = "max_attempts must be at least 1"
    raise ValueError(msg)
