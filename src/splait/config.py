"""Runtime configuration for splait."""

import os
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from ._exceptions import ConfigurationError
from .constants import (
    DEFAULT_BASE_URL,
    DEFAULT_CURRENCY_SYMBOL,
    DEFAULT_MAX_COMPLETION_TOKENS,
    DEFAULT_MODEL,
    DEFAULT_TIMEOUT,
    MAX_INPUT_LENGTH,
)

# Environment variable consulted for each field by SplaitConfig.from_env()
ENV_VARS: dict[str, str] = {
    "api_key": "OPENAI_API_KEY",
    "model": "SPLAIT_MODEL",
    "base_url": "SPLAIT_BASE_URL",
    "timeout": "SPLAIT_TIMEOUT",
    "amount_precision": "SPLAIT_AMOUNT_PRECISION",
    "fallback_enabled": "SPLAIT_FALLBACK_ENABLED",
}


class SplaitConfig(BaseModel):
    """
    Configuration injected into the LLM client, the parser and the app.

    Example:
        SplaitConfig(api_key="sk-...", amount_precision=6)
        SplaitConfig.from_env()  # reads OPENAI_API_KEY, SPLAIT_* variables
    """

    api_key: str | None = None
    """LLM provider credential. Never logged."""

    model: str = DEFAULT_MODEL
    base_url: str = DEFAULT_BASE_URL
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    max_completion_tokens: int = Field(default=DEFAULT_MAX_COMPLETION_TOKENS, gt=0)

    amount_precision: int | None = Field(default=None, ge=0)
    """Fractional digits for every amount of every plan. None = no rounding."""

    fallback_enabled: bool = True
    """Run the regex extractor when the LLM call fails."""

    max_input_length: int = Field(default=MAX_INPUT_LENGTH, gt=0)
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL

    model_config = {"frozen": True}

    @classmethod
    def from_env(cls, **overrides: Any) -> "SplaitConfig":
        """
        Build a config from environment variables.

        Explicit keyword arguments win over the environment; fields with
        neither keep their defaults.

        Raises:
            ConfigurationError: If a value cannot be parsed
        """
        values: dict[str, Any] = {}
        for field, env_var in ENV_VARS.items():
            raw = os.environ.get(env_var)
            if raw:
                values[field] = raw
        values.update({k: v for k, v in overrides.items() if v is not None})

        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    def require_api_key(self) -> str:
        """
        Return the API key.

        Raises:
            ConfigurationError: If no key is configured
        """
        if not self.api_key:
            raise ConfigurationError("OpenAI API key not configured")
        return self.api_key
