"""Provider selection and backend dispatch.

The dispatcher turns an error report into exactly one backend call:

1. Refuse early when no provider is configured
2. Resolve the provider name (aliases, any case) to a backend
3. Redact secrets and build the prompt
4. Check credentials (hosted) or liveness (local) before the real request
5. Send the request once and return the raw text

Every failure raises a subclass of ``AnalyzerError``; nothing is retried.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from ..adapters.llm.http import BackendRequest, HTTPTextGenerator
from ..adapters.llm.providers import (
    PROBE_TIMEOUT,
    claude_request,
    ollama_probe_url,
    ollama_request,
    openai_request,
)
from ..config.schema import AISettings
from ..interfaces.llm import TextGenerator
from ..models.analysis import Provider
from ..utils.errors import (
    BackendUnreachableError,
    MissingCredentialError,
    NoResultError,
    NotConfiguredError,
    UnknownProviderError,
)
from ..utils.logging import LogEventNames, log_context
from ..utils.security import RedactionError, SecretRedactor, SecurityError
from .prompt import XIOPS_COMMANDS, build_prompt

log = structlog.get_logger()

_KEY_ENV_FALLBACK = {
    Provider.CLAUDE: "ANTHROPIC_API_KEY",
    Provider.OPENAI: "OPENAI_API_KEY",
}

_PROVIDER_LABELS = {
    Provider.CLAUDE: "Claude",
    Provider.OPENAI: "OpenAI",
}


class ProviderDispatcher:
    """Selects and invokes the configured AI backend.

    Example:
        dispatcher = ProviderDispatcher()
        raw = dispatcher.analyze(events, "Pod: api-7f9c, Status: Pending", settings)

    Args:
        generator: Transport used for requests and probes. Defaults to
            ``HTTPTextGenerator``.
        redactor: Secret redactor applied to the error text and context.
        commands: Fix commands the prompt lists for the model.
    """

    def __init__(
        self,
        generator: TextGenerator | None = None,
        redactor: SecretRedactor | None = None,
        commands: Sequence[tuple[str, str]] = XIOPS_COMMANDS,
    ) -> None:
        self._generator = generator or HTTPTextGenerator()
        self._redactor = redactor or SecretRedactor()
        self._commands = commands

    def analyze(self, error_text: str, context: str, settings: AISettings) -> str:
        """
        Run one analysis through the configured backend.

        Args:
            error_text: Error message or events to analyze
            context: Where the error came from
            settings: Provider configuration, read once per call

        Returns:
            The backend's raw, non-empty text

        Raises:
            NotConfiguredError: No provider set
            UnknownProviderError: Provider name matches no backend
            MissingCredentialError: Hosted provider without an API key
            BackendUnreachableError: Local backend failed its liveness probe
            RequestFailedError: The request produced no usable text
            NoResultError: The backend returned empty text
            SecurityError: Secrets could not be redacted
        """
        provider = settings.resolve_provider()
        if provider is None:
            log.debug(LogEventNames.PROVIDER_NOT_CONFIGURED)
            raise NotConfiguredError("AI provider not configured (set AI_PROVIDER)")

        if provider is Provider.UNKNOWN:
            log.info(LogEventNames.PROVIDER_UNKNOWN, provider=settings.ai_provider)
            raise UnknownProviderError(settings.ai_provider or "")

        log.debug(LogEventNames.PROVIDER_SELECTED, provider=provider.value)

        prompt = build_prompt(
            self._redact(error_text),
            self._redact(context),
            self._commands,
        )
        with log_context(provider=provider.value, model=settings.resolve_model(provider)):
            request = self._prepare(provider, prompt, settings)
            text = self._generator.generate(request)
            if not text.strip():
                log.info(LogEventNames.LLM_EMPTY_RESPONSE)
                raise NoResultError(f"{provider.value} returned an empty response")

        return text

    def _redact(self, text: str) -> str:
        """Redact secrets, blocking the call if redaction fails."""
        try:
            redacted = self._redactor.redact(text)
        except RedactionError as e:
            log.error("redaction_failed_blocking_llm_call", error=str(e))
            raise SecurityError(f"Cannot send to AI backend: redaction failed: {e}") from e
        if redacted != text:
            log.info(LogEventNames.SENSITIVE_DATA_REDACTED)
        return redacted

    def _prepare(self, provider: Provider, prompt: str, settings: AISettings) -> BackendRequest:
        """Build the backend request, checking preconditions first."""
        model = settings.resolve_model(provider)

        if provider is Provider.OLLAMA:
            self._check_alive(settings.ollama_url)
            return ollama_request(prompt, model, settings.ollama_url)

        api_key = settings.resolve_api_key(provider)
        if not api_key:
            log.info(LogEventNames.CREDENTIAL_MISSING, provider=provider.value)
            raise MissingCredentialError(
                f"AI_API_KEY not set for {_PROVIDER_LABELS[provider]}",
                hint=f"Export AI_API_KEY or {_KEY_ENV_FALLBACK[provider]}",
            )

        if provider is Provider.CLAUDE:
            return claude_request(prompt, api_key, model, settings.ai_max_tokens)
        return openai_request(prompt, api_key, model, settings.ai_max_tokens)

    def _check_alive(self, base_url: str) -> None:
        """Fail fast when the local backend is not running."""
        if not self._generator.probe(ollama_probe_url(base_url), PROBE_TIMEOUT):
            log.info(LogEventNames.PROBE_FAILED, url=base_url)
            raise BackendUnreachableError(
                f"Ollama not running at {base_url}",
                hint="Start with: ollama serve",
            )
