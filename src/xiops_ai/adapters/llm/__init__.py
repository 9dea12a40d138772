"""HTTP adapters for AI text-generation backends."""

from .http import BackendRequest, HTTPTextGenerator, extract_text
from .providers import (
    HOSTED_TIMEOUT,
    LOCAL_TIMEOUT,
    PROBE_TIMEOUT,
    claude_request,
    ollama_probe_url,
    ollama_request,
    openai_request,
)

__all__ = [
    "BackendRequest",
    "HTTPTextGenerator",
    "extract_text",
    "claude_request",
    "openai_request",
    "ollama_request",
    "ollama_probe_url",
    "HOSTED_TIMEOUT",
    "LOCAL_TIMEOUT",
    "PROBE_TIMEOUT",
]
