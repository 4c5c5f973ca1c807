"""Closed registry of provider variants.

Each name accepted by :class:`~ridewire.config.ProviderConfig` maps to one
adapter class.  Supporting another backend means adding an adapter here.
"""

from ridewire.config import ProviderConfig
from ridewire.llm.base import BaseLLM
from ridewire.llm.gemini import GeminiAdapter
from ridewire.llm.openai_adapter import OpenAIAdapter

ADAPTERS: dict[str, type[BaseLLM]] = {
    "openai": OpenAIAdapter,
    "gemini": GeminiAdapter,
}


def create_llm(config: ProviderConfig) -> BaseLLM:
    """Instantiate the adapter registered for ``config.provider``.

    Raises:
        ValueError: If no adapter is registered under that name.
    """
    try:
        adapter_cls = ADAPTERS[config.provider]
    except KeyError:
        msg = f"No LLM adapter registered for provider '{config.provider}'"
        raise ValueError(msg) from None
    return adapter_cls(config)
