"""Abstract interfaces for pluggable providers."""

from .llm import TextGenerator

__all__ = ["TextGenerator"]
