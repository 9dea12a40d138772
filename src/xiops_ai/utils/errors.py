"""Exception hierarchy for the error analyzer.

Every failure of an analysis is non-fatal to the host program: the
ErrorAnalyzer facade catches ``AnalyzerError`` once, shows it as a warning
and reports "no analysis available". None of these errors is retried.
"""

from __future__ import annotations


class AnalyzerError(Exception):
    """Base exception for all analyzer errors.

    Attributes:
        hint: Optional operator guidance shown alongside the warning.
    """

    def __init__(self, message: str, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class NotConfiguredError(AnalyzerError):
    """No AI provider is configured."""


class UnknownProviderError(AnalyzerError):
    """The configured provider name does not map to a backend.

    Attributes:
        provider: The provider name as configured.
    """

    def __init__(self, provider: str) -> None:
        super().__init__(f"Unknown AI provider: {provider}")
        self.provider = provider


class MissingCredentialError(AnalyzerError):
    """A hosted provider was selected without an API key."""


class BackendUnreachableError(AnalyzerError):
    """The local backend did not answer its liveness probe."""


class RequestFailedError(AnalyzerError):
    """The generation request produced no usable text.

    Network errors, timeouts, non-2xx responses, malformed JSON and a
    missing response field all end up here.
    """


class NoResultError(AnalyzerError):
    """The backend answered with empty text."""


class InvalidSettingsError(AnalyzerError):
    """The AI settings in the environment or ``.env`` file do not validate."""
