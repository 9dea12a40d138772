"""Request builders for the supported AI backends.

Each builder returns a ``BackendRequest`` matching the third-party API
contract exactly: endpoint, auth headers, body shape, timeout and the
JSON path that holds the generated text.
"""

from __future__ import annotations

from .http import BackendRequest

ANTHROPIC_MESSAGES_URL = "https://api.anthropic.com/v1/messages"
ANTHROPIC_VERSION = "2023-06-01"
OPENAI_CHAT_URL = "https://api.openai.com/v1/chat/completions"

HOSTED_TIMEOUT = 30.0
LOCAL_TIMEOUT = 60.0
PROBE_TIMEOUT = 2.0


def claude_request(prompt: str, api_key: str, model: str, max_tokens: int = 500) -> BackendRequest:
    """Anthropic Messages API request."""
    return BackendRequest(
        backend="claude",
        url=ANTHROPIC_MESSAGES_URL,
        headers={
            "x-api-key": api_key,
            "anthropic-version": ANTHROPIC_VERSION,
        },
        body={
            "model": model,
            "max_tokens": max_tokens,
            "messages": [{"role": "user", "content": prompt}],
        },
        response_path=("content", 0, "text"),
        timeout=HOSTED_TIMEOUT,
    )


def openai_request(prompt: str, api_key: str, model: str, max_tokens: int = 500) -> BackendRequest:
    """OpenAI Chat Completions request."""
    return BackendRequest(
        backend="openai",
        url=OPENAI_CHAT_URL,
        headers={"Authorization": f"Bearer {api_key}"},
        body={
            "model": model,
            "max_tokens": max_tokens,
            "messages": [{"role": "user", "content": prompt}],
        },
        response_path=("choices", 0, "message", "content"),
        timeout=HOSTED_TIMEOUT,
    )


def ollama_request(prompt: str, model: str, base_url: str) -> BackendRequest:
    """Ollama ``/api/generate`` request with streaming disabled."""
    return BackendRequest(
        backend="ollama",
        url=f"{base_url.rstrip('/')}/api/generate",
        body={
            "model": model,
            "prompt": prompt,
            "stream": False,
        },
        response_path=("response",),
        timeout=LOCAL_TIMEOUT,
    )


def ollama_probe_url(base_url: str) -> str:
    """Endpoint used to check that Ollama is running."""
    return f"{base_url.rstrip('/')}/api/tags"
