"""LLM provider adapters for OpenAI and Gemini."""

from ridewire.llm.base import BaseLLM, LLMError, LLMResponse
from ridewire.llm.gemini import GeminiAdapter
from ridewire.llm.openai_adapter import OpenAIAdapter
from ridewire.llm.registry import ADAPTERS, create_llm
from ridewire.llm.response_parser import extract_json

__all__ = [
    "ADAPTERS",
    "BaseLLM",
    "GeminiAdapter",
    "LLMError",
    "LLMResponse",
    "OpenAIAdapter",
    "create_llm",
    "extract_json",
]
