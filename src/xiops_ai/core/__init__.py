"""Core analysis logic."""

from .analyzer import ErrorAnalyzer, is_configured
from .dispatcher import ProviderDispatcher
from .presenter import Presenter
from .prompt import FIELD_NAMES, XIOPS_COMMANDS, build_prompt
from .response_parser import extract_field, parse

__all__ = [
    "ErrorAnalyzer",
    "ProviderDispatcher",
    "Presenter",
    "FIELD_NAMES",
    "XIOPS_COMMANDS",
    "build_prompt",
    "extract_field",
    "is_configured",
    "parse",
]
