"""Pydantic settings models for all configuration."""

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, model_validator

# Provider variants with a registered adapter (see ``ridewire.llm.registry``).
PROVIDER_NAMES: frozenset[str] = frozenset({"openai", "gemini"})


class ProviderConfig(BaseModel):
    """Configuration for one remote scoring backend.

    Attributes:
        provider: Registered provider variant (``"openai"`` or ``"gemini"``).
        api_key: API key for the provider SDK.
        model: Model identifier sent with every request.
        temperature: Sampling temperature; kept low so replies are reproducible.
        timeout_seconds: Upper bound on a single call before it is reported
            as a timeout.
        max_attempts: Total attempts per call.  ``1`` means no retry.
        backoff_seconds: Base delay for exponential backoff between attempts.
    """

    provider: str
    api_key: str
    model: str
    temperature: float = Field(default=0.3, ge=0.0, le=2.0)
    timeout_seconds: float = Field(default=30.0, gt=0)
    max_attempts: int = Field(default=1, ge=1)
    backoff_seconds: float = Field(default=1.0, ge=0)

    @model_validator(mode="after")
    def _check_provider(self) -> "ProviderConfig":
        if self.provider not in PROVIDER_NAMES:
            msg = (
                f"Unknown provider '{self.provider}' "
                f"(expected one of: {', '.join(sorted(PROVIDER_NAMES))})"
            )
            raise ValueError(msg)
        return self


class EngineConfig(BaseModel):
    """Diagnostic consensus engine settings.

    The trigger thresholds decide when the orchestrator asks the secondary
    provider for a second opinion: primary confidence strictly below
    ``trigger_confidence_threshold`` OR more than
    ``trigger_code_count_threshold`` trouble codes.
    """

    primary: ProviderConfig
    secondary: ProviderConfig
    trigger_confidence_threshold: float = Field(default=0.85, ge=0.0, le=1.0)
    trigger_code_count_threshold: int = Field(default=3, ge=0)
    consensus_enabled: bool = True
    parallel_when_possible: bool = False
    degrade_on_secondary_failure: bool = False


class LoggingConfig(BaseModel):
    """Log sink settings."""

    level: str = "INFO"
    log_dir: str = "./logs"


class Settings(BaseModel):
    """Root configuration model for the ridewire diagnostics engine."""

    engine: EngineConfig
    logging: LoggingConfig = LoggingConfig()

    @classmethod
    def from_yaml(cls, path: Path) -> "Settings":
        """Load and validate settings from a YAML configuration file.

        Environment variable substitution is supported for API keys and other
        sensitive values: if a YAML value starts with ``$``, the corresponding
        environment variable is resolved at load time.

        Args:
            path: Path to the YAML configuration file.

        Returns:
            Validated Settings instance.

        Raises:
            FileNotFoundError: If the YAML file does not exist.
            ValueError: If a referenced environment variable is not set.
        """
        raw = yaml.safe_load(path.read_text())
        resolved = _resolve_env_vars(raw)
        return cls.model_validate(resolved)

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables alone.

        Mirrors the default deployment: OpenAI answers first, Gemini gives
        the second opinion.  Model identifiers fall back to sensible
        defaults when ``OPENAI_MODEL`` / ``GEMINI_MODEL`` are unset.

        Raises:
            ValueError: If ``OPENAI_API_KEY`` or ``GEMINI_API_KEY`` is not set.
        """
        data = {
            "engine": {
                "primary": {
                    "provider": "openai",
                    "api_key": "$OPENAI_API_KEY",
                    "model": os.environ.get("OPENAI_MODEL", "gpt-4o"),
                },
                "secondary": {
                    "provider": "gemini",
                    "api_key": "$GEMINI_API_KEY",
                    "model": os.environ.get("GEMINI_MODEL", "gemini-2.5-pro"),
                },
            },
            "logging": {"level": os.environ.get("LOG_LEVEL", "INFO")},
        }
        return cls.model_validate(_resolve_env_vars(data))


def _resolve_env_vars(data: object) -> object:
    """Recursively resolve environment variable references in config data.

    Any string value starting with ``$`` is treated as an environment variable
    reference and replaced with the value of that variable.

    Args:
        data: Configuration data (dict, list, or scalar).

    Returns:
        Data with environment variable references resolved.

    Raises:
        ValueError: If a referenced environment variable is not set.
    """
    if isinstance(data, dict):
        return {k: _resolve_env_vars(v) for k, v in data.items()}
    if isinstance(data, list):
        return [_resolve_env_vars(item) for item in data]
    if isinstance(data, str) and data.startswith("$"):
        var_name = data[1:]
        value = os.environ.get(var_name)
        if value is None:
            msg = (
                f"Environment variable '{var_name}' is not set "
                f"(referenced as '{data}' in config)"
            )
            raise ValueError(msg)
        return value
    return data
