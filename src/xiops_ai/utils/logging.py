"""Structured logging for xiops-ai.

Logs go to stderr (and optionally a file) so they never mix with the
analysis printed on stdout. Every event passes through the secret redactor
before it is rendered, because pod events and settings can carry
credentials.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator, MutableMapping
from contextlib import contextmanager
from enum import StrEnum
from functools import cache
from pathlib import Path
from typing import Any

import structlog
from structlog.typing import Processor, WrappedLogger

from xiops_ai._version import __version__
from xiops_ai.utils.security import SecretRedactor

SERVICE_NAME = "xiops-ai"


class LogFormat(StrEnum):
    """Log output format options."""

    JSON = "json"
    CONSOLE = "console"


class LogLevel(StrEnum):
    """Log level options."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@cache
def _log_redactor() -> SecretRedactor:
    return SecretRedactor()


def sanitize_log_value(value: Any) -> Any:
    """Redact secrets in strings, recursing into dicts, lists and tuples."""
    if isinstance(value, str):
        return _log_redactor().redact(value)
    if isinstance(value, dict):
        return {key: sanitize_log_value(item) for key, item in value.items()}
    if isinstance(value, list | tuple):
        return type(value)(sanitize_log_value(item) for item in value)
    return value


def secret_sanitizer(
    logger: WrappedLogger,
    method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Structlog processor redacting secrets from every field of an event."""
    for key, value in event_dict.items():
        event_dict[key] = sanitize_log_value(value)
    return event_dict


def add_context_processor(
    logger: WrappedLogger,
    method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Tag every event with the service name and version."""
    event_dict.setdefault("service", SERVICE_NAME)
    event_dict.setdefault("version", __version__)
    return event_dict


def _renderer(log_format: LogFormat) -> Processor:
    if log_format == LogFormat.JSON:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=sys.stderr.isatty(),
        exception_formatter=structlog.dev.plain_traceback,
    )


def _handlers(file_path: Path | str | None, file_enabled: bool) -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if not (file_enabled and file_path):
        return handlers

    path = Path(file_path).expanduser()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path))
    except OSError as e:
        # stderr keeps working without the file
        print(f"xiops-ai: cannot write log file {path}: {e}", file=sys.stderr)
    return handlers


def configure_logging(
    level: LogLevel | str = LogLevel.WARNING,
    log_format: LogFormat | str = LogFormat.CONSOLE,
    file_path: Path | str | None = None,
    file_enabled: bool = False,
) -> None:
    """Configure structlog and the stdlib handlers behind it.

    Args:
        level: Minimum level, any case (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: ``json`` for log shippers, ``console`` for people
        file_path: Log file, used only when ``file_enabled`` is set
        file_enabled: Also write events to ``file_path``
    """
    level = LogLevel(str(level).upper())
    log_format = LogFormat(str(log_format).lower())

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            add_context_processor,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            secret_sanitizer,
            structlog.processors.format_exc_info,
            _renderer(log_format),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level.value),
        handlers=_handlers(file_path, file_enabled),
        force=True,
    )


@contextmanager
def log_context(**values: Any) -> Iterator[None]:
    """Attach ``values`` to every event logged inside the block.

    Example:
        with log_context(provider="ollama", model="llama3.2"):
            log.info(LogEventNames.LLM_REQUEST_START)
    """
    structlog.contextvars.bind_contextvars(**values)
    try:
        yield
    finally:
        structlog.contextvars.unbind_contextvars(*values)


class LogEventNames:
    """Event names shared across modules."""

    # Analysis lifecycle
    ANALYSIS_START = "analysis_start"
    ANALYSIS_COMPLETE = "analysis_complete"
    ANALYSIS_UNAVAILABLE = "analysis_unavailable"
    ANALYSIS_FIELDS_MISSING = "analysis_fields_missing"
    SETTINGS_INVALID = "settings_invalid"

    # Provider selection
    PROVIDER_SELECTED = "provider_selected"
    PROVIDER_NOT_CONFIGURED = "provider_not_configured"
    PROVIDER_UNKNOWN = "provider_unknown"
    CREDENTIAL_MISSING = "credential_missing"

    # Backend requests
    LLM_REQUEST_START = "llm_request_start"
    LLM_REQUEST_COMPLETE = "llm_request_complete"
    LLM_REQUEST_ERROR = "llm_request_error"
    LLM_EMPTY_RESPONSE = "llm_empty_response"
    PROBE_FAILED = "backend_probe_failed"

    SENSITIVE_DATA_REDACTED = "sensitive_data_redacted"

    HEALTH_CHECK_START = "health_check_start"
    HEALTH_CHECK_COMPLETE = "health_check_complete"
    HEALTH_CHECK_FAILED = "health_check_failed"
