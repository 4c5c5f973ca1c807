"""Prompt rendering and provider scoring."""

from ridewire.agents.prompt_builder import PromptBuilder
from ridewire.agents.provider import ProviderClient, ProviderError, parse_verdict

__all__ = ["PromptBuilder", "ProviderClient", "ProviderError", "parse_verdict"]
