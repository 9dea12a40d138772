"""xiops-ai: AI-assisted analysis of Kubernetes errors.

Example:
    from xiops_ai import ErrorAnalyzer

    analyzer = ErrorAnalyzer()
    result = analyzer.analyze(events, "Pod: api-7f9c, Status: CrashLoopBackOff")
    if result is not None:
        print(result.issue)
"""

from xiops_ai._version import __version__
from xiops_ai.core.analyzer import ErrorAnalyzer, is_configured
from xiops_ai.core.dispatcher import ProviderDispatcher
from xiops_ai.core.presenter import Presenter
from xiops_ai.core.response_parser import parse
from xiops_ai.models.analysis import AnalysisRequest, AnalysisResult, Provider

__all__ = [
    "__version__",
    "AnalysisRequest",
    "AnalysisResult",
    "ErrorAnalyzer",
    "Presenter",
    "Provider",
    "ProviderDispatcher",
    "is_configured",
    "parse",
]
