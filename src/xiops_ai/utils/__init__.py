"""Utility functions and helpers.

This module provides various utilities for xiops-ai:
- errors: Analyzer exception hierarchy
- security: Secret redaction
- logging: Structured logging with secret sanitization
- health: Backend health checks (import from ``xiops_ai.utils.health``)
"""

from xiops_ai.utils.errors import (
    AnalyzerError,
    BackendUnreachableError,
    InvalidSettingsError,
    MissingCredentialError,
    NoResultError,
    NotConfiguredError,
    RequestFailedError,
    UnknownProviderError,
)
from xiops_ai.utils.logging import (
    LogEventNames,
    LogFormat,
    LogLevel,
    configure_logging,
    log_context,
)
from xiops_ai.utils.security import (
    RedactionError,
    SecretRedactor,
    SecurityError,
)

__all__ = [
    # Errors
    "AnalyzerError",
    "BackendUnreachableError",
    "InvalidSettingsError",
    "MissingCredentialError",
    "NoResultError",
    "NotConfiguredError",
    "RequestFailedError",
    "UnknownProviderError",
    # Logging
    "LogEventNames",
    "LogFormat",
    "LogLevel",
    "configure_logging",
    "log_context",
    # Security
    "RedactionError",
    "SecretRedactor",
    "SecurityError",
]
