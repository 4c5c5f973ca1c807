"""Tests for the OpenAI and Gemini adapters and the provider registry.

SDK clients are replaced with mocks; no network access is needed.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import openai
import pytest
from google.genai import types

from ridewire.agents.provider import ProviderClient, ProviderError
from ridewire.config import ProviderConfig
from ridewire.llm.base import LLMError
from ridewire.llm.gemini import GeminiAdapter
from ridewire.llm.openai_adapter import OpenAIAdapter
from ridewire.llm.registry import ADAPTERS, create_llm
from ridewire.models.execution import ProviderErrorKind


@pytest.fixture
def openai_config() -> ProviderConfig:
    return ProviderConfig(
        provider="openai", api_key="sk-test", model="gpt-4o", timeout_seconds=12.5
    )


@pytest.fixture
def gemini_config() -> ProviderConfig:
    return ProviderConfig(
        provider="gemini", api_key="g-test", model="gemini-2.5-pro", timeout_seconds=20
    )


def _openai_completion(content: str, finish_reason: str = "stop") -> MagicMock:
    completion = MagicMock()
    completion.choices = [MagicMock()]
    completion.choices[0].message.content = content
    completion.choices[0].finish_reason = finish_reason
    completion.usage.prompt_tokens = 300
    completion.usage.completion_tokens = 90
    return completion


class TestOpenAIAdapter:
    def test_client_configured_without_sdk_retries(self, openai_config) -> None:
        with patch("ridewire.llm.openai_adapter.AsyncOpenAI") as mock_client:
            OpenAIAdapter(openai_config)
        mock_client.assert_called_once_with(
            api_key="sk-test", timeout=12.5, max_retries=0
        )

    def test_generate_requests_json_mode(self, openai_config) -> None:
        adapter = OpenAIAdapter(openai_config)
        adapter.client = MagicMock()
        adapter.client.chat.completions.create = AsyncMock(
            return_value=_openai_completion('{"diagnosis": "x"}')
        )

        response = asyncio.run(adapter.generate("system", "user"))

        kwargs = adapter.client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o"
        assert kwargs["temperature"] == 0.3
        assert kwargs["response_format"] == {"type": "json_object"}
        assert kwargs["messages"][0] == {"role": "system", "content": "system"}
        assert response.raw_text == '{"diagnosis": "x"}'
        assert response.input_tokens == 300
        assert response.output_tokens == 90
        assert response.finish_reason == "stop"
        assert response.truncated is False

    def test_length_cutoff_is_truncated(self, openai_config) -> None:
        adapter = OpenAIAdapter(openai_config)
        adapter.client = MagicMock()
        adapter.client.chat.completions.create = AsyncMock(
            return_value=_openai_completion('{"diagnosis": "x", "conf', "length")
        )

        response = asyncio.run(adapter.generate("system", "user"))

        assert response.truncated is True

    def test_timeout_is_flagged(self, openai_config) -> None:
        adapter = OpenAIAdapter(openai_config)
        adapter.client = MagicMock()
        request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        adapter.client.chat.completions.create = AsyncMock(
            side_effect=openai.APITimeoutError(request=request)
        )

        with pytest.raises(LLMError) as exc_info:
            asyncio.run(adapter.generate("system", "user"))
        assert exc_info.value.timed_out is True
        assert exc_info.value.provider == "openai"

    def test_connection_error_is_not_a_timeout(self, openai_config) -> None:
        adapter = OpenAIAdapter(openai_config)
        adapter.client = MagicMock()
        request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        adapter.client.chat.completions.create = AsyncMock(
            side_effect=openai.APIConnectionError(request=request)
        )

        with pytest.raises(LLMError) as exc_info:
            asyncio.run(adapter.generate("system", "user"))
        assert exc_info.value.timed_out is False


class TestGeminiAdapter:
    def test_generate_requests_json_mime_type(self, gemini_config) -> None:
        adapter = GeminiAdapter(gemini_config)
        reply = MagicMock()
        reply.text = '{"diagnosis": "x"}'
        reply.usage_metadata.prompt_token_count = 210
        reply.usage_metadata.candidates_token_count = 40
        reply.candidates = [MagicMock(finish_reason=types.FinishReason.STOP)]
        adapter.client = MagicMock()
        adapter.client.aio.models.generate_content = AsyncMock(return_value=reply)

        response = asyncio.run(adapter.generate("system", "user"))

        kwargs = adapter.client.aio.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "gemini-2.5-pro"
        assert kwargs["contents"] == "user"
        assert kwargs["config"].response_mime_type == "application/json"
        assert response.raw_text == '{"diagnosis": "x"}'
        assert response.input_tokens == 210
        assert response.finish_reason == "stop"

    def test_sdk_error_becomes_llm_error(self, gemini_config) -> None:
        adapter = GeminiAdapter(gemini_config)
        adapter.client = MagicMock()
        adapter.client.aio.models.generate_content = AsyncMock(
            side_effect=RuntimeError("quota exceeded")
        )

        with pytest.raises(LLMError) as exc_info:
            asyncio.run(adapter.generate("system", "user"))
        assert exc_info.value.provider == "gemini"
        assert "quota exceeded" in exc_info.value.message
        assert exc_info.value.timed_out is False

    def test_timeout_error_is_flagged(self, gemini_config) -> None:
        adapter = GeminiAdapter(gemini_config)
        adapter.client = MagicMock()
        adapter.client.aio.models.generate_content = AsyncMock(side_effect=TimeoutError())

        with pytest.raises(LLMError) as exc_info:
            asyncio.run(adapter.generate("system", "user"))
        assert exc_info.value.timed_out is True
        assert exc_info.value.message == "TimeoutError"

    @pytest.mark.parametrize(
        "exc",
        [
            httpx.ReadTimeout("timed out"),
            httpx.ConnectTimeout("connect timed out"),
        ],
    )
    def test_httpx_timeout_is_flagged(self, gemini_config, exc) -> None:
        adapter = GeminiAdapter(gemini_config)
        adapter.client = MagicMock()
        adapter.client.aio.models.generate_content = AsyncMock(side_effect=exc)

        with pytest.raises(LLMError) as exc_info:
            asyncio.run(adapter.generate("system", "user"))
        assert exc_info.value.timed_out is True
        assert exc_info.value.original_error is exc

    def test_httpx_timeout_scores_as_timeout(self, gemini_config) -> None:
        adapter = GeminiAdapter(gemini_config)
        adapter.client = MagicMock()
        adapter.client.aio.models.generate_content = AsyncMock(
            side_effect=httpx.ReadTimeout("timed out")
        )
        client = ProviderClient(adapter, system_prompt="")

        with pytest.raises(ProviderError) as exc_info:
            asyncio.run(client.score("q"))
        assert exc_info.value.kind is ProviderErrorKind.TIMEOUT
        assert exc_info.value.provider == "gemini"

    def test_http_status_error_is_not_a_timeout(self, gemini_config) -> None:
        request = httpx.Request("POST", "https://generativelanguage.googleapis.com")
        exc = httpx.HTTPStatusError(
            "503 unavailable", request=request, response=httpx.Response(503, request=request)
        )
        adapter = GeminiAdapter(gemini_config)
        adapter.client = MagicMock()
        adapter.client.aio.models.generate_content = AsyncMock(side_effect=exc)

        with pytest.raises(LLMError) as exc_info:
            asyncio.run(adapter.generate("system", "user"))
        assert exc_info.value.timed_out is False


class TestRegistry:
    def test_registry_is_closed_over_known_providers(self) -> None:
        assert set(ADAPTERS) == {"openai", "gemini"}

    def test_create_llm_picks_adapter(self, openai_config, gemini_config) -> None:
        assert isinstance(create_llm(openai_config), OpenAIAdapter)
        assert isinstance(create_llm(gemini_config), GeminiAdapter)

    def test_unknown_provider_rejected(self, openai_config) -> None:
        bogus = openai_config.model_copy(update={"provider": "anthropic"})
        with pytest.raises(ValueError, match="No LLM adapter registered"):
            create_llm(bogus)
