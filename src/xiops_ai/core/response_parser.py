"""Lenient extraction of labeled fields from a model reply."""

from __future__ import annotations

import re

import structlog

from ..models.analysis import AnalysisResult
from ..utils.logging import LogEventNames
from .prompt import FIELD_NAMES

log = structlog.get_logger()

_FIELD_PATTERNS: dict[str, re.Pattern[str]] = {
    name: re.compile(rf"^{name}:\s*(.*)$", re.IGNORECASE) for name in FIELD_NAMES
}


def extract_field(raw_text: str, name: str) -> str | None:
    """Return the value of the first line starting with ``NAME:``.

    The label is matched case-insensitively at the very start of the line;
    whitespace after the colon is dropped. Returns None if no line matches.
    """
    pattern = _FIELD_PATTERNS.get(name.upper()) or re.compile(
        rf"^{re.escape(name)}:\s*(.*)$", re.IGNORECASE
    )
    for line in raw_text.splitlines():
        match = pattern.match(line)
        if match:
            return match.group(1)
    return None


def parse(raw_text: str) -> AnalysisResult:
    """
    Parse ISSUE, CAUSE, FIX and COMMAND out of free-form model output.

    Never raises: missing or mislabeled sections simply leave the field
    as None, and a reply with none of them yields an all-None result.
    ``COMMAND: none`` is kept verbatim; see
    ``AnalysisResult.suggested_command``.

    Args:
        raw_text: Text returned by the backend

    Returns:
        Parsed analysis
    """
    fields = {name.lower(): extract_field(raw_text, name) for name in FIELD_NAMES}
    result = AnalysisResult(**fields)

    missing = [name for name in FIELD_NAMES if fields[name.lower()] is None]
    if missing:
        log.debug(LogEventNames.ANALYSIS_FIELDS_MISSING, missing=missing)

    return result
