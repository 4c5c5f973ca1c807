"""Provider client: one remote scoring call turned into a validated verdict.

``ProviderClient`` is the single capability every provider variant shares:
send a rendered query, receive a :class:`~ridewire.models.verdict.Verdict`.
The variant (OpenAI, Gemini) only decides which adapter carries the request.
Every failure is classified into one of three kinds:

- **timeout**: the call did not complete within ``timeout_seconds``
- **transport**: the SDK or the network raised
- **malformed**: the reply is not a JSON object or fails verdict validation
"""

import asyncio

from pydantic import ValidationError

from ridewire.config import ProviderConfig
from ridewire.llm.base import BaseLLM, LLMError, LLMResponse
from ridewire.llm.registry import create_llm
from ridewire.llm.response_parser import extract_json
from ridewire.models.execution import ProviderAttempt, ProviderErrorKind
from ridewire.models.verdict import Verdict


class ProviderError(Exception):
    """Raised when a provider call fails.

    Attributes:
        kind: Failure classification (timeout, transport, malformed).
        provider: Name of the provider that failed.
        message: Human-readable error description.
        original_error: The underlying exception, if any.
        attempts: Attempt records when the call went through the retry loop.
    """

    def __init__(
        self,
        kind: ProviderErrorKind,
        provider: str,
        message: str,
        original_error: Exception | None = None,
    ) -> None:
        self.kind = kind
        self.provider = provider
        self.message = message
        self.original_error = original_error
        self.attempts: list[ProviderAttempt] = []
        super().__init__(f"[{provider}] {kind.value}: {message}")


def parse_verdict(raw_text: str, provider: str) -> Verdict:
    """Parse a provider reply into a :class:`Verdict`.

    Raises:
        ProviderError: With kind ``malformed`` if the text holds no JSON
            object or the object violates the verdict schema.
    """
    data = extract_json(raw_text)
    if data is None:
        raise ProviderError(
            ProviderErrorKind.MALFORMED,
            provider,
            f"Response is not a JSON object: {raw_text[:200]!r}",
        )
    try:
        return Verdict.model_validate(data)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
            for err in exc.errors()
        )
        raise ProviderError(
            ProviderErrorKind.MALFORMED,
            provider,
            f"Response failed verdict validation: {problems}",
            original_error=exc,
        ) from exc


class ProviderClient:
    """Scores rendered queries against one remote LLM backend.

    A single attempt per call: no retry happens here.  Wrap calls in
    :func:`ridewire.pipeline.retry.score_with_retry` to opt into retries.

    Args:
        llm: Adapter for the remote backend.
        system_prompt: System message sent with every query.
        timeout_seconds: Bound on one call, enforced with ``asyncio.wait_for``.
        name: Label used in errors and logs.  Defaults to ``llm.provider``.
    """

    def __init__(
        self,
        llm: BaseLLM,
        system_prompt: str,
        timeout_seconds: float = 30.0,
        name: str | None = None,
    ) -> None:
        self.llm = llm
        self.system_prompt = system_prompt
        self.timeout_seconds = timeout_seconds
        self.name = name or llm.provider

    @classmethod
    def from_config(cls, config: ProviderConfig, system_prompt: str) -> "ProviderClient":
        """Build a client for the provider variant named in *config*."""
        return cls(
            llm=create_llm(config),
            system_prompt=system_prompt,
            timeout_seconds=config.timeout_seconds,
        )

    async def score(self, query: str) -> Verdict:
        """Send *query* and return the parsed verdict.

        Raises:
            ProviderError: On timeout, transport failure, or malformed reply.
        """
        verdict, _response = await self.score_with_response(query)
        return verdict

    async def score_with_response(self, query: str) -> tuple[Verdict, LLMResponse]:
        """Like :meth:`score`, but also return the raw response for logging."""
        try:
            response = await asyncio.wait_for(
                self.llm.generate(self.system_prompt, query),
                timeout=self.timeout_seconds,
            )
        except TimeoutError as exc:
            raise ProviderError(
                ProviderErrorKind.TIMEOUT,
                self.name,
                f"No response within {self.timeout_seconds:g}s",
                original_error=exc,
            ) from exc
        except LLMError as exc:
            kind = ProviderErrorKind.TIMEOUT if exc.timed_out else ProviderErrorKind.TRANSPORT
            raise ProviderError(
                kind,
                self.name,
                exc.message,
                original_error=exc,
            ) from exc

        if response.truncated:
            raise ProviderError(
                ProviderErrorKind.MALFORMED,
                self.name,
                f"Reply cut off by the backend (finish_reason={response.finish_reason})",
            )
        return parse_verdict(response.raw_text, self.name), response
