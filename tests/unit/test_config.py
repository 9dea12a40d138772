"""Tests for configuration loading and validation."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from xiops_ai.config.loader import load_settings, substitute_env_vars
from xiops_ai.config.schema import DEFAULT_OLLAMA_URL, AISettings, LoggingConfig
from xiops_ai.models.analysis import Provider


class TestSubstituteEnvVars:
    """Test environment variable substitution."""

    def test_substitute_single_var(self, monkeypatch):
        """Test substituting a single environment variable."""
        monkeypatch.setenv("TEST_VAR", "test_value")
        result = substitute_env_vars("Value is ${TEST_VAR}")
        assert result == "Value is test_value"

    def test_substitute_multiple_vars(self, monkeypatch):
        """Test substituting multiple environment variables."""
        monkeypatch.setenv("VAR1", "value1")
        monkeypatch.setenv("VAR2", "value2")
        result = substitute_env_vars("${VAR1} and ${VAR2}")
        assert result == "value1 and value2"

    def test_missing_env_var_raises(self):
        """Test that missing environment variables raise ValueError."""
        with pytest.raises(ValueError, match="Environment variable MISSING not found"):
            substitute_env_vars("Value is ${MISSING}")

    def test_no_substitution_needed(self):
        """Test text without environment variables passes through unchanged."""
        result = substitute_env_vars("plain text without vars")
        assert result == "plain text without vars"


class TestAISettingsFromEnvironment:
    """Test reading settings from environment variables."""

    def test_defaults(self):
        """Nothing set means no provider and default endpoint."""
        settings = AISettings()
        assert settings.ai_provider is None
        assert settings.ai_api_key is None
        assert settings.ai_model is None
        assert settings.ai_max_tokens == 500
        assert settings.ollama_url == DEFAULT_OLLAMA_URL
        assert settings.is_configured is False

    def test_reads_all_variables(self, monkeypatch):
        """Every documented variable is picked up."""
        monkeypatch.setenv("AI_PROVIDER", "openai")
        monkeypatch.setenv("AI_API_KEY", "sk-primary")
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant")
        monkeypatch.setenv("OPENAI_API_KEY", "sk-openai")
        monkeypatch.setenv("AI_MODEL", "gpt-4.1-mini")
        monkeypatch.setenv("AI_MAX_TOKENS", "800")
        monkeypatch.setenv("OLLAMA_URL", "http://gpu-box:11434")

        settings = AISettings()

        assert settings.ai_provider == "openai"
        assert settings.ai_api_key == "sk-primary"
        assert settings.anthropic_api_key == "sk-ant"
        assert settings.openai_api_key == "sk-openai"
        assert settings.ai_model == "gpt-4.1-mini"
        assert settings.ai_max_tokens == 800
        assert settings.ollama_url == "http://gpu-box:11434"

    def test_blank_values_are_unset(self, monkeypatch):
        """Empty variables behave as if they were not exported."""
        monkeypatch.setenv("AI_PROVIDER", "")
        monkeypatch.setenv("AI_API_KEY", "  ")
        monkeypatch.setenv("OLLAMA_URL", "")

        settings = AISettings()

        assert settings.ai_provider is None
        assert settings.ai_api_key is None
        assert settings.ollama_url == DEFAULT_OLLAMA_URL

    def test_reads_dotenv_file(self, tmp_path: Path):
        """A .env file in the working directory is honored."""
        (tmp_path / ".env").write_text("AI_PROVIDER=local\n")
        assert AISettings().ai_provider == "local"

    def test_invalid_max_tokens_rejected(self, monkeypatch):
        """Token limits must be positive."""
        monkeypatch.setenv("AI_MAX_TOKENS", "0")
        with pytest.raises(ValidationError):
            AISettings()

    @pytest.mark.parametrize("value", ["", "   "])
    def test_blank_max_tokens_uses_default(self, monkeypatch, value):
        """An exported but empty AI_MAX_TOKENS means the default."""
        monkeypatch.setenv("AI_MAX_TOKENS", value)
        assert AISettings().ai_max_tokens == 500


class TestAISettingsResolution:
    """Test provider, key and model resolution."""

    def test_resolve_provider_unset(self):
        """No provider resolves to None."""
        assert AISettings().resolve_provider() is None

    def test_resolve_provider_alias(self):
        """Aliases resolve to the canonical backend."""
        assert AISettings(ai_provider="ChatGPT").resolve_provider() is Provider.OPENAI

    def test_resolve_provider_unknown(self):
        """Unrecognized names resolve to UNKNOWN."""
        assert AISettings(ai_provider="mistral").resolve_provider() is Provider.UNKNOWN

    def test_api_key_precedence(self):
        """AI_API_KEY beats the provider-specific variable."""
        settings = AISettings(ai_api_key="primary", anthropic_api_key="fallback")
        assert settings.resolve_api_key(Provider.CLAUDE) == "primary"

    def test_api_key_fallbacks(self):
        """Each hosted provider falls back to its own variable."""
        settings = AISettings(anthropic_api_key="ant", openai_api_key="oai")
        assert settings.resolve_api_key(Provider.CLAUDE) == "ant"
        assert settings.resolve_api_key(Provider.OPENAI) == "oai"
        assert settings.resolve_api_key(Provider.OLLAMA) is None

    @pytest.mark.parametrize(
        ("provider", "model"),
        [
            (Provider.CLAUDE, "claude-sonnet-4-20250514"),
            (Provider.OPENAI, "gpt-4o-mini"),
            (Provider.OLLAMA, "llama3.2"),
        ],
    )
    def test_default_models(self, provider, model):
        """Each provider has a default model."""
        assert AISettings().resolve_model(provider) == model

    def test_model_override(self):
        """AI_MODEL applies to whichever provider is selected."""
        assert AISettings(ai_model="qwen2.5").resolve_model(Provider.OLLAMA) == "qwen2.5"

    def test_masked_hides_keys(self):
        """The loggable summary never contains a full key."""
        settings = AISettings(ai_provider="claude", ai_api_key="sk-ant-abcdefghijklmnop")
        summary = settings.masked()
        assert summary["ai_provider"] == "claude"
        assert summary["ai_api_key"] == "sk-a...mnop"
        assert summary["openai_api_key"] is None


class TestLoadSettings:
    """Test load_settings."""

    def test_environment_only(self, monkeypatch):
        """Without a file, settings come from the environment."""
        monkeypatch.setenv("AI_PROVIDER", "ollama")
        assert load_settings().ai_provider == "ollama"

    def test_yaml_file(self, tmp_path: Path):
        """Values in a YAML file are loaded."""
        config = tmp_path / "xiops-ai.yaml"
        config.write_text(
            "ai_provider: claude\n"
            "ai_model: claude-3-5-haiku-20241022\n"
            "logging:\n"
            "  level: DEBUG\n"
            "  format: json\n"
        )

        settings = load_settings(config)

        assert settings.ai_provider == "claude"
        assert settings.ai_model == "claude-3-5-haiku-20241022"
        assert settings.logging.level == "DEBUG"
        assert settings.logging.format == "json"

    def test_yaml_env_substitution(self, tmp_path: Path, monkeypatch):
        """${VAR} references in the file are expanded."""
        monkeypatch.setenv("TEAM_CLAUDE_KEY", "sk-ant-team")
        config = tmp_path / "xiops-ai.yaml"
        config.write_text("ai_provider: claude\nai_api_key: ${TEAM_CLAUDE_KEY}\n")

        assert load_settings(config).ai_api_key == "sk-ant-team"

    def test_yaml_missing_env_var(self, tmp_path: Path):
        """Unresolvable references are an error."""
        config = tmp_path / "xiops-ai.yaml"
        config.write_text("ai_api_key: ${NOT_EXPORTED_ANYWHERE}\n")

        with pytest.raises(ValueError, match="NOT_EXPORTED_ANYWHERE"):
            load_settings(config)

    def test_file_beats_environment(self, tmp_path: Path, monkeypatch):
        """The file overrides environment variables."""
        monkeypatch.setenv("AI_PROVIDER", "openai")
        config = tmp_path / "xiops-ai.yaml"
        config.write_text("ai_provider: ollama\n")

        assert load_settings(config).ai_provider == "ollama"

    def test_overrides_win(self, tmp_path: Path, monkeypatch):
        """Explicit overrides beat both file and environment."""
        monkeypatch.setenv("AI_MODEL", "from-env")
        config = tmp_path / "xiops-ai.yaml"
        config.write_text("ai_provider: ollama\n")

        settings = load_settings(config, ai_provider="claude", ai_model="from-cli")

        assert settings.ai_provider == "claude"
        assert settings.ai_model == "from-cli"

    def test_none_overrides_ignored(self, monkeypatch):
        """Overrides left as None do not clear other sources."""
        monkeypatch.setenv("AI_PROVIDER", "gpt")
        assert load_settings(ai_provider=None).ai_provider == "gpt"

    def test_empty_file(self, tmp_path: Path):
        """An empty file is the same as no file."""
        config = tmp_path / "empty.yaml"
        config.write_text("")
        assert load_settings(config).ai_provider is None

    def test_missing_file(self, tmp_path: Path):
        """A missing file is reported."""
        with pytest.raises(FileNotFoundError, match="Configuration file not found"):
            load_settings(tmp_path / "nope.yaml")

    def test_non_mapping_file(self, tmp_path: Path):
        """The file must hold a mapping."""
        config = tmp_path / "list.yaml"
        config.write_text("- claude\n- openai\n")
        with pytest.raises(ValueError, match="must contain a mapping"):
            load_settings(config)

    def test_invalid_logging_level(self, tmp_path: Path):
        """Schema violations surface as ValidationError."""
        config = tmp_path / "bad.yaml"
        config.write_text("logging:\n  level: LOUD\n")
        with pytest.raises(ValidationError):
            load_settings(config)


class TestLoggingConfig:
    """Test LoggingConfig defaults."""

    def test_defaults(self):
        """Quiet console logging, no file."""
        config = LoggingConfig()
        assert config.level == "WARNING"
        assert config.format == "console"
        assert config.file.enabled is False
