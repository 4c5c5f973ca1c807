"""OpenAI Chat Completions adapter (``openai`` SDK, ``AsyncOpenAI``)."""

from openai import APIError, APITimeoutError, AsyncOpenAI

from ridewire.config import ProviderConfig
from ridewire.llm.base import BaseLLM, LLMError, LLMResponse


class OpenAIAdapter(BaseLLM):
    """Requests a JSON object from the Chat Completions endpoint.

    The SDK's built-in retry loop is switched off (``max_retries=0``) so one
    ``generate`` call is exactly one HTTP request.
    """

    def __init__(self, config: ProviderConfig) -> None:
        super().__init__(config)
        self.client = AsyncOpenAI(
            api_key=config.api_key,
            timeout=config.timeout_seconds,
            max_retries=0,
        )

    @property
    def provider(self) -> str:  # noqa: D401
        """The provider identifier."""
        return "openai"

    async def generate(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        try:
            completion = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=self.temperature,
                response_format={"type": "json_object"},
            )
        except APITimeoutError as exc:
            raise LLMError(
                "openai",
                f"Request timed out after {self.timeout_seconds:g}s",
                exc,
                timed_out=True,
            ) from exc
        except APIError as exc:
            raise LLMError("openai", f"{type(exc).__name__}: {exc}", exc) from exc

        choice = completion.choices[0] if completion.choices else None
        usage = completion.usage
        return LLMResponse(
            raw_text=(choice.message.content if choice else None) or "",
            model=self.model,
            input_tokens=usage.prompt_tokens if usage else None,
            output_tokens=usage.completion_tokens if usage else None,
            finish_reason=choice.finish_reason if choice else None,
        )
