"""Shared test fixtures for xiops-ai."""

from __future__ import annotations

import io
from collections.abc import Callable, Iterator
from pathlib import Path

import httpx
import pytest
from rich.console import Console

from xiops_ai.adapters.llm.http import HTTPTextGenerator

FIXTURES_DIR = Path(__file__).parent / "fixtures"

AI_ENV_VARS = (
    "AI_PROVIDER",
    "AI_API_KEY",
    "ANTHROPIC_API_KEY",
    "OPENAI_API_KEY",
    "AI_MODEL",
    "AI_MAX_TOKENS",
    "OLLAMA_URL",
    "LOGGING",
)

SAMPLE_REPLY = """ISSUE: Container keeps crashing
CAUSE: Application exits immediately
FIX: Check container logs for the root cause
COMMAND: none"""

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep the developer's AI settings and .env file out of every test."""
    for name in AI_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def crashloop_events() -> str:
    """Load pod events for a container in CrashLoopBackOff."""
    return (FIXTURES_DIR / "events" / "crashloop.txt").read_text()


@pytest.fixture
def sample_reply() -> str:
    """A well-formed model reply with no suggested command."""
    return SAMPLE_REPLY


class RecordingTransport:
    """Records requests and answers them with a handler."""

    def __init__(self, handler: Handler) -> None:
        self.handler = handler
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def paths(self) -> list[str]:
        return [request.url.path for request in self.requests]


@pytest.fixture
def make_generator() -> Iterator[Callable[[Handler], tuple[HTTPTextGenerator, RecordingTransport]]]:
    """Build an HTTPTextGenerator whose HTTP traffic goes to a handler."""
    clients: list[httpx.Client] = []

    def factory(handler: Handler) -> tuple[HTTPTextGenerator, RecordingTransport]:
        transport = RecordingTransport(handler)
        client = httpx.Client(transport=httpx.MockTransport(transport))
        clients.append(client)
        return HTTPTextGenerator(client), transport

    yield factory

    for client in clients:
        client.close()


@pytest.fixture
def console_output() -> tuple[Console, io.StringIO]:
    """A colorless console writing to a buffer."""
    buffer = io.StringIO()
    console = Console(file=buffer, width=200, color_system=None, highlight=False)
    return console, buffer
