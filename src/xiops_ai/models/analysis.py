"""Data models for error analysis."""

from dataclasses import dataclass
from enum import StrEnum

DEFAULT_CONTEXT = "kubernetes deployment"

# Literal the model emits when it has no command to suggest
NO_COMMAND = "none"


class Provider(StrEnum):
    """Canonical AI backends."""

    CLAUDE = "claude"
    OPENAI = "openai"
    OLLAMA = "ollama"
    UNKNOWN = "unknown"

    @classmethod
    def from_name(cls, name: str) -> "Provider":
        """Resolve a configured provider name, aliases included.

        Matching is case-insensitive and ignores surrounding whitespace.
        Names that match no backend resolve to ``UNKNOWN``.
        """
        return PROVIDER_ALIASES.get(name.strip().lower(), cls.UNKNOWN)

    @property
    def is_hosted(self) -> bool:
        """Whether the backend is a hosted API that needs a credential."""
        return self in (Provider.CLAUDE, Provider.OPENAI)


PROVIDER_ALIASES: dict[str, Provider] = {
    "claude": Provider.CLAUDE,
    "anthropic": Provider.CLAUDE,
    "openai": Provider.OPENAI,
    "chatgpt": Provider.OPENAI,
    "gpt": Provider.OPENAI,
    "ollama": Provider.OLLAMA,
    "local": Provider.OLLAMA,
}


@dataclass(frozen=True)
class AnalysisRequest:
    """Error text and context for a single analysis."""

    error_text: str
    context: str = DEFAULT_CONTEXT


@dataclass(frozen=True)
class AnalysisResult:
    """Fields parsed from a model reply.

    A field is ``None`` when the reply had no line for it.
    """

    issue: str | None = None
    cause: str | None = None
    fix: str | None = None
    command: str | None = None

    @property
    def suggested_command(self) -> str | None:
        """The command to suggest, or None when the model suggested none."""
        if not self.command:
            return None
        if self.command.strip().strip("'\"`").lower() == NO_COMMAND:
            return None
        return self.command

    @property
    def is_empty(self) -> bool:
        """True if the reply contained none of the four fields."""
        return all(value is None for value in (self.issue, self.cause, self.fix, self.command))
