"""Shared pytest fixtures for the ridewire test suite."""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from ridewire.config import EngineConfig, ProviderConfig
from ridewire.llm.base import LLMResponse
from ridewire.models.report import FaultReport
from ridewire.models.verdict import Verdict


def make_verdict_dict(**overrides: object) -> dict:
    """Return a provider reply body that validates as a Verdict."""
    data = {
        "diagnosis": "Cylinder 1 misfire",
        "rootCause": "Worn spark plug",
        "confidence": 0.9,
        "actions": ["Replace spark plug"],
        "costRange": {"min": 100, "max": 200},
        "urgency": "high",
        "parts": ["Spark plug"],
    }
    data.update(overrides)
    return data


def make_verdict(**overrides: object) -> Verdict:
    return Verdict.model_validate(make_verdict_dict(**overrides))


def make_response(body: dict | str, model: str = "test-model") -> LLMResponse:
    raw = body if isinstance(body, str) else json.dumps(body)
    return LLMResponse(raw_text=raw, model=model, input_tokens=120, output_tokens=80)


def make_llm(provider: str, *replies: object) -> MagicMock:
    """Fake adapter whose ``generate`` returns (or raises) *replies* in order.

    Dict and str replies are wrapped into an ``LLMResponse``; exceptions are
    raised as-is.
    """
    llm = MagicMock()
    llm.provider = provider
    llm.model = f"{provider}-model"
    effects = [
        r if isinstance(r, BaseException) else make_response(r) for r in replies
    ]
    llm.generate = AsyncMock(side_effect=effects)
    return llm


@pytest.fixture
def report_payload() -> dict:
    """Single-code P0300 report as it arrives on the wire."""
    return {
        "troubleCodes": [{"code": "P0300", "description": "Random misfire detected"}],
        "symptoms": ["Rough idle", "Hesitation on acceleration"],
        "vehicleInfo": {
            "make": "Toyota",
            "model": "Camry",
            "year": 2015,
            "mileage": 98000,
            "engine": "2.5L I4",
        },
        "sensorData": {"rpm": 750, "coolantTemp": 92},
    }


@pytest.fixture
def report(report_payload: dict) -> FaultReport:
    return FaultReport.model_validate(report_payload)


@pytest.fixture
def engine_config() -> EngineConfig:
    return EngineConfig(
        primary=ProviderConfig(provider="openai", api_key="test-openai-key", model="gpt-4o"),
        secondary=ProviderConfig(
            provider="gemini", api_key="test-gemini-key", model="gemini-2.5-pro"
        ),
    )


@pytest.fixture
def minimal_config_dict(tmp_path) -> dict:
    """Return a minimal configuration dictionary for testing."""
    return {
        "engine": {
            "primary": {
                "provider": "openai",
                "api_key": "test-openai-key",
                "model": "gpt-4o",
            },
            "secondary": {
                "provider": "gemini",
                "api_key": "test-gemini-key",
                "model": "gemini-2.5-pro",
            },
        },
        "logging": {"level": "DEBUG", "log_dir": str(tmp_path / "logs")},
    }


@pytest.fixture
def verdict_dict():
    """Factory for provider reply bodies; keyword overrides replace fields."""
    return make_verdict_dict


@pytest.fixture
def verdict_factory():
    """Factory for validated Verdict instances."""
    return make_verdict


@pytest.fixture
def llm_factory():
    """Factory for fake LLM adapters with scripted replies."""
    return make_llm
