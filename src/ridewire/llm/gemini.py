"""Google Gemini adapter (``google-genai`` SDK, async via ``client.aio``)."""

import httpx
from google import genai
from google.genai import types

from ridewire.config import ProviderConfig
from ridewire.llm.base import BaseLLM, LLMError, LLMResponse


def _finish_reason(response: types.GenerateContentResponse) -> str | None:
    if not response.candidates or response.candidates[0].finish_reason is None:
        return None
    reason = response.candidates[0].finish_reason
    return str(getattr(reason, "value", reason)).lower()


class GeminiAdapter(BaseLLM):
    """Requests ``application/json`` output from ``generate_content``.

    The client-side deadline is passed to the SDK through ``HttpOptions``,
    which takes milliseconds.
    """

    def __init__(self, config: ProviderConfig) -> None:
        super().__init__(config)
        self.client = genai.Client(
            api_key=config.api_key,
            http_options=types.HttpOptions(timeout=int(config.timeout_seconds * 1000)),
        )

    @property
    def provider(self) -> str:  # noqa: D401
        """The provider identifier."""
        return "gemini"

    def _request_config(self, system_prompt: str) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            system_instruction=system_prompt,
            temperature=self.temperature,
            response_mime_type="application/json",
        )

    async def generate(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=user_prompt,
                config=self._request_config(system_prompt),
            )
        except Exception as exc:
            # google-genai surfaces httpx and API errors without a common base.
            raise LLMError(
                "gemini",
                str(exc) or type(exc).__name__,
                exc,
                timed_out=isinstance(exc, (TimeoutError, httpx.TimeoutException)),
            ) from exc

        usage = response.usage_metadata
        return LLMResponse(
            raw_text=response.text or "",
            model=self.model,
            input_tokens=usage.prompt_token_count if usage else None,
            output_tokens=usage.candidates_token_count if usage else None,
            finish_reason=_finish_reason(response),
        )
