"""Tests for SplaitConfig."""

import pytest
from pydantic import ValidationError

from splait import ConfigurationError, SplaitConfig


class TestDefaults:
    """Tests for default values."""

    def test_defaults(self) -> None:
        """Defaults match the provider and request limits."""
        config = SplaitConfig()

        assert config.api_key is None
        assert config.model == "gpt-4o-mini"
        assert config.base_url == "https://api.openai.com/v1"
        assert config.amount_precision is None
        assert config.fallback_enabled is True
        assert config.max_input_length == 500
        assert config.currency_symbol == "ETH"

    def test_frozen(self) -> None:
        """Config is immutable once built."""
        config = SplaitConfig(api_key="sk-test")
        with pytest.raises(ValidationError):
            config.api_key = "other"  # type: ignore[misc]

    def test_negative_precision_rejected(self) -> None:
        """Precision must be non-negative."""
        with pytest.raises(ValidationError):
            SplaitConfig(amount_precision=-1)

    def test_require_api_key(self) -> None:
        """A missing key is a configuration error."""
        with pytest.raises(ConfigurationError, match="API key not configured"):
            SplaitConfig().require_api_key()
        assert SplaitConfig(api_key="sk-test").require_api_key() == "sk-test"


class TestFromEnv:
    """Tests for SplaitConfig.from_env."""

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Environment variables fill unset fields."""
        monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
        monkeypatch.setenv("SPLAIT_MODEL", "gpt-4o")
        monkeypatch.setenv("SPLAIT_AMOUNT_PRECISION", "6")
        monkeypatch.setenv("SPLAIT_FALLBACK_ENABLED", "false")

        config = SplaitConfig.from_env()

        assert config.api_key == "sk-env"
        assert config.model == "gpt-4o"
        assert config.amount_precision == 6
        assert config.fallback_enabled is False

    def test_explicit_arguments_win(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Keyword arguments override the environment."""
        monkeypatch.setenv("OPENAI_API_KEY", "sk-env")

        config = SplaitConfig.from_env(api_key="sk-arg")

        assert config.api_key == "sk-arg"

    def test_unset_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Without variables the defaults apply."""
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        monkeypatch.delenv("SPLAIT_MODEL", raising=False)

        config = SplaitConfig.from_env()

        assert config.api_key is None
        assert config.model == "gpt-4o-mini"

    def test_invalid_value(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Unparseable values raise ConfigurationError."""
        monkeypatch.setenv("SPLAIT_TIMEOUT", "soon")

        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            SplaitConfig.from_env()
