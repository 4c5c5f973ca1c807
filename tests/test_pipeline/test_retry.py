"""Tests for opt-in bounded retry of provider calls.

Verifies:
- Only timeout and transport failures are retried
- Backoff doubles per failed attempt
- Every attempt, failed or not, is recorded
"""

import asyncio
from unittest.mock import AsyncMock, patch

import pytest

from ridewire.agents.provider import ProviderClient, ProviderError
from ridewire.llm.base import LLMError
from ridewire.models.execution import ProviderErrorKind
from ridewire.pipeline.retry import (
    ERROR_SUGGESTIONS,
    backoff_delay,
    is_retriable,
    score_with_retry,
)


class TestRetryPolicy:
    def test_timeout_and_transport_are_retriable(self) -> None:
        assert is_retriable(ProviderErrorKind.TIMEOUT)
        assert is_retriable(ProviderErrorKind.TRANSPORT)

    def test_malformed_is_not_retriable(self) -> None:
        assert not is_retriable(ProviderErrorKind.MALFORMED)

    def test_backoff_doubles(self) -> None:
        assert [backoff_delay(n, 0.5) for n in (1, 2, 3)] == [0.5, 1.0, 2.0]

    def test_every_kind_has_a_suggestion(self) -> None:
        assert set(ERROR_SUGGESTIONS) == set(ProviderErrorKind)


class TestScoreWithRetry:
    def test_single_attempt_by_default(self, llm_factory) -> None:
        llm = llm_factory("openai", LLMError("openai", "connection reset"))
        client = ProviderClient(llm, system_prompt="")

        with pytest.raises(ProviderError) as exc_info:
            asyncio.run(score_with_retry(client, "q"))

        assert llm.generate.await_count == 1
        assert len(exc_info.value.attempts) == 1
        assert exc_info.value.attempts[0].error_kind is ProviderErrorKind.TRANSPORT

    def test_success_records_one_attempt(self, llm_factory, verdict_dict) -> None:
        client = ProviderClient(llm_factory("openai", verdict_dict()), system_prompt="")

        verdict, response, attempts = asyncio.run(score_with_retry(client, "q"))

        assert verdict.diagnosis == "Cylinder 1 misfire"
        assert response.model == "test-model"
        assert len(attempts) == 1
        assert attempts[0].error_kind is None
        assert attempts[0].provider == "openai"

    def test_transport_failure_then_success(self, llm_factory, verdict_dict) -> None:
        llm = llm_factory(
            "gemini", LLMError("gemini", "503 unavailable"), verdict_dict(confidence=0.6)
        )
        client = ProviderClient(llm, system_prompt="")

        with patch("ridewire.pipeline.retry.asyncio.sleep", new=AsyncMock()) as sleep:
            verdict, _, attempts = asyncio.run(
                score_with_retry(client, "q", max_attempts=3, backoff_seconds=2.0)
            )

        assert verdict.confidence == 0.6
        assert [a.attempt_number for a in attempts] == [1, 2]
        assert attempts[0].error_kind is ProviderErrorKind.TRANSPORT
        assert attempts[1].error_kind is None
        sleep.assert_awaited_once_with(2.0)

    def test_malformed_is_not_retried(self, llm_factory, verdict_dict) -> None:
        llm = llm_factory("openai", "garbage", verdict_dict())
        client = ProviderClient(llm, system_prompt="")

        with pytest.raises(ProviderError) as exc_info:
            asyncio.run(score_with_retry(client, "q", max_attempts=3, backoff_seconds=0))

        assert exc_info.value.kind is ProviderErrorKind.MALFORMED
        assert llm.generate.await_count == 1

    def test_exhausted_attempts_raise_last_error(self, llm_factory) -> None:
        llm = llm_factory(
            "openai",
            LLMError("openai", "timed out", timed_out=True),
            LLMError("openai", "timed out", timed_out=True),
        )
        client = ProviderClient(llm, system_prompt="")

        with patch("ridewire.pipeline.retry.asyncio.sleep", new=AsyncMock()) as sleep:
            with pytest.raises(ProviderError) as exc_info:
                asyncio.run(
                    score_with_retry(client, "q", max_attempts=2, backoff_seconds=1.0)
                )

        assert exc_info.value.kind is ProviderErrorKind.TIMEOUT
        assert len(exc_info.value.attempts) == 2
        sleep.assert_awaited_once_with(1.0)
