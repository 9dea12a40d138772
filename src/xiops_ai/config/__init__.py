"""Configuration loading and validation."""

from .loader import load_settings, substitute_env_vars
from .schema import (
    DEFAULT_MODELS,
    DEFAULT_OLLAMA_URL,
    AISettings,
    FileLoggingConfig,
    LoggingConfig,
)

__all__ = [
    # Loader
    "load_settings",
    "substitute_env_vars",
    # Settings
    "AISettings",
    "LoggingConfig",
    "FileLoggingConfig",
    # Defaults
    "DEFAULT_MODELS",
    "DEFAULT_OLLAMA_URL",
]
