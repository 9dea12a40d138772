"""Pydantic models for configuration schema."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..models.analysis import Provider
from ..utils.security import mask_config_value

DEFAULT_OLLAMA_URL = "http://localhost:11434"
DEFAULT_MAX_TOKENS = 500

DEFAULT_MODELS: dict[Provider, str] = {
    Provider.CLAUDE: "claude-sonnet-4-20250514",
    Provider.OPENAI: "gpt-4o-mini",
    Provider.OLLAMA: "llama3.2",
}


class FileLoggingConfig(BaseModel):
    """File logging configuration."""

    enabled: bool = False
    path: Path = Path("~/.xiops/logs/xiops-ai.log").expanduser()


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    format: Literal["json", "console"] = "console"
    file: FileLoggingConfig = FileLoggingConfig()


class AISettings(BaseSettings):
    """AI backend configuration.

    Field names double as the environment variable names (``AI_PROVIDER``,
    ``AI_API_KEY``, ``ANTHROPIC_API_KEY``, ``OPENAI_API_KEY``, ``AI_MODEL``,
    ``AI_MAX_TOKENS``, ``OLLAMA_URL``). Blank values count as unset.
    """

    ai_provider: str | None = None
    ai_api_key: str | None = None
    anthropic_api_key: str | None = None
    openai_api_key: str | None = None
    ai_model: str | None = None
    ai_max_tokens: int = Field(DEFAULT_MAX_TOKENS, ge=1, le=8192)
    ollama_url: str = DEFAULT_OLLAMA_URL
    logging: LoggingConfig = LoggingConfig()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
    )

    @field_validator(
        "ai_provider",
        "ai_api_key",
        "anthropic_api_key",
        "openai_api_key",
        "ai_model",
        mode="before",
    )
    @classmethod
    def blank_to_none(cls, v: object) -> object:
        """Treat empty and whitespace-only strings as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("ai_max_tokens", mode="before")
    @classmethod
    def default_blank_max_tokens(cls, v: object) -> object:
        """Fall back to the default limit for a blank value."""
        if isinstance(v, str) and not v.strip():
            return DEFAULT_MAX_TOKENS
        return v

    @field_validator("ollama_url", mode="before")
    @classmethod
    def default_blank_url(cls, v: object) -> object:
        """Fall back to the default endpoint for a blank URL."""
        if isinstance(v, str) and not v.strip():
            return DEFAULT_OLLAMA_URL
        return v

    @property
    def is_configured(self) -> bool:
        """Whether a provider has been selected at all."""
        return self.ai_provider is not None

    def resolve_provider(self) -> Provider | None:
        """Map the configured name onto a backend, None if unset."""
        if self.ai_provider is None:
            return None
        return Provider.from_name(self.ai_provider)

    def resolve_api_key(self, provider: Provider) -> str | None:
        """Return ``AI_API_KEY`` or the provider-specific fallback."""
        if self.ai_api_key:
            return self.ai_api_key
        if provider is Provider.CLAUDE:
            return self.anthropic_api_key
        if provider is Provider.OPENAI:
            return self.openai_api_key
        return None

    def resolve_model(self, provider: Provider) -> str:
        """Return ``AI_MODEL`` or the provider default."""
        return self.ai_model or DEFAULT_MODELS[provider]

    def masked(self) -> dict[str, str | None]:
        """Settings summary safe to log."""
        summary: dict[str, str | None] = {
            "ai_provider": self.ai_provider,
            "ai_model": self.ai_model,
            "ollama_url": self.ollama_url,
        }
        for key in ("ai_api_key", "anthropic_api_key", "openai_api_key"):
            value = getattr(self, key)
            summary[key] = mask_config_value(key, value) if value else None
        return summary
