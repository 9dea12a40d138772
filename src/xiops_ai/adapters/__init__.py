"""Concrete implementations of provider interfaces."""

from .llm.http import HTTPTextGenerator

__all__ = ["HTTPTextGenerator"]
