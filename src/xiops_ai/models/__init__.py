"""Data models and transfer objects."""

from .analysis import (
    DEFAULT_CONTEXT,
    NO_COMMAND,
    PROVIDER_ALIASES,
    AnalysisRequest,
    AnalysisResult,
    Provider,
)

__all__ = [
    "DEFAULT_CONTEXT",
    "NO_COMMAND",
    "PROVIDER_ALIASES",
    "AnalysisRequest",
    "AnalysisResult",
    "Provider",
]
