"""Adapter interface shared by every remote scoring backend."""

from abc import ABC, abstractmethod

from pydantic import BaseModel

from ridewire.config import ProviderConfig


class LLMResponse(BaseModel):
    """One completed request, before the reply is parsed into a verdict.

    Attributes:
        raw_text: Reply body exactly as the SDK returned it.
        model: Model identifier the request was sent to.
        input_tokens: Prompt tokens billed, when the SDK reports usage.
        output_tokens: Completion tokens billed, when the SDK reports usage.
        finish_reason: Why generation stopped, normalised to lowercase
            (``"stop"``, ``"length"``, ``"max_tokens"``, ...).
    """

    raw_text: str
    model: str
    input_tokens: int | None = None
    output_tokens: int | None = None
    finish_reason: str | None = None

    @property
    def truncated(self) -> bool:
        """True when the backend stopped because it ran out of output tokens."""
        return self.finish_reason in {"length", "max_tokens"}


class LLMError(Exception):
    """An SDK call that did not produce a response.

    Attributes:
        provider: Adapter that raised (``"openai"`` or ``"gemini"``).
        message: Human-readable error description.
        original_error: The exception raised by the SDK, if any.
        timed_out: The SDK itself gave up waiting.  Lets callers report a
            timeout even when their own deadline had not yet expired.
    """

    def __init__(
        self,
        provider: str,
        message: str,
        original_error: Exception | None = None,
        *,
        timed_out: bool = False,
    ) -> None:
        self.provider = provider
        self.message = message
        self.original_error = original_error
        self.timed_out = timed_out
        super().__init__(f"[{provider}] {message}")


class BaseLLM(ABC):
    """Base class for provider adapters.

    Stores the model settings every backend needs; subclasses build their
    SDK client and implement ``provider`` and ``generate``.  Adapters request
    JSON output but do not interpret it.

    Args:
        config: Provider slot configuration.
    """

    def __init__(self, config: ProviderConfig) -> None:
        self.model = config.model
        self.temperature = config.temperature
        self.timeout_seconds = config.timeout_seconds

    @property
    @abstractmethod
    def provider(self) -> str:
        """Return the provider identifier (e.g. ``"openai"`` or ``"gemini"``)."""

    @abstractmethod
    async def generate(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        """Send one request and return the raw reply.

        Raises:
            LLMError: If the SDK raises for any reason.
        """
