"""ErrorAnalyzer facade.

Ties dispatcher, parser and presenter together and converts every analyzer
error into a warning, so callers can carry on without AI assistance.
"""

from __future__ import annotations

import structlog
from pydantic import ValidationError

from ..config.loader import load_settings
from ..config.schema import AISettings
from ..models.analysis import DEFAULT_CONTEXT, AnalysisRequest, AnalysisResult
from ..utils.errors import AnalyzerError, InvalidSettingsError, NotConfiguredError
from ..utils.logging import LogEventNames
from .dispatcher import ProviderDispatcher
from .presenter import Presenter
from .response_parser import parse

log = structlog.get_logger()


def _describe(error: ValidationError) -> str:
    """One-line summary of the fields that failed validation."""
    problems = [
        f"{'.'.join(str(part) for part in detail['loc'])}: {detail['msg']}"
        for detail in error.errors()
    ]
    return "; ".join(problems)


def _load_settings() -> AISettings:
    try:
        return load_settings()
    except ValidationError as e:
        log.info(LogEventNames.SETTINGS_INVALID, error=_describe(e))
        raise InvalidSettingsError(
            f"Invalid AI settings: {_describe(e)}",
            hint="Check AI_MAX_TOKENS and the other AI_* variables",
        ) from e


def is_configured(settings: AISettings | None = None) -> bool:
    """Whether an AI provider has been selected.

    Settings that fail validation count as not configured.
    """
    if settings is None:
        try:
            settings = _load_settings()
        except InvalidSettingsError:
            return False
    return settings.is_configured


class ErrorAnalyzer:
    """Analyze Kubernetes errors with the configured AI backend.

    Example:
        analyzer = ErrorAnalyzer()
        shown = analyzer.analyze_and_display(
            events, "Pod: api-7f9c, Status: CrashLoopBackOff, Namespace: prod"
        )

    Args:
        settings: Fixed settings. When None, settings are read from the
            environment at every call.
        dispatcher: Backend dispatcher.
        presenter: Output for analyses and warnings.
    """

    def __init__(
        self,
        settings: AISettings | None = None,
        dispatcher: ProviderDispatcher | None = None,
        presenter: Presenter | None = None,
    ) -> None:
        self._settings = settings
        self._dispatcher = dispatcher or ProviderDispatcher()
        self.presenter = presenter or Presenter()

    def _current_settings(self) -> AISettings:
        return self._settings if self._settings is not None else _load_settings()

    def analyze_raw(self, error_text: str, context: str = DEFAULT_CONTEXT) -> str | None:
        """Return the backend's raw reply, or None if no analysis is available."""
        request = AnalysisRequest(error_text=error_text, context=context or DEFAULT_CONTEXT)
        try:
            settings = self._current_settings()
            log.info(LogEventNames.ANALYSIS_START, provider=settings.ai_provider)
            raw = self._dispatcher.analyze(request.error_text, request.context, settings)
        except NotConfiguredError as e:
            log.info(LogEventNames.ANALYSIS_UNAVAILABLE, reason=type(e).__name__)
            return None
        except AnalyzerError as e:
            log.info(
                LogEventNames.ANALYSIS_UNAVAILABLE,
                reason=type(e).__name__,
                error=str(e),
            )
            self.presenter.warning(str(e), e.hint)
            return None

        log.info(LogEventNames.ANALYSIS_COMPLETE, chars=len(raw))
        return raw

    def analyze(self, error_text: str, context: str = DEFAULT_CONTEXT) -> AnalysisResult | None:
        """
        Analyze an error and parse the reply.

        Args:
            error_text: Error message or pod events
            context: Where the error came from

        Returns:
            Parsed fields, or None when no analysis is available
        """
        raw = self.analyze_raw(error_text, context)
        if raw is None:
            return None
        return parse(raw)

    def analyze_and_display(self, error_text: str, context: str = DEFAULT_CONTEXT) -> bool:
        """Analyze and show the result.

        Returns:
            True if an analysis was displayed
        """
        if not error_text.strip():
            return False
        result = self.analyze(error_text, context)
        if result is None:
            return False
        self.presenter.display(result)
        return True
