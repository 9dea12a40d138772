"""Tests for analysis data models."""

import dataclasses

import pytest

from xiops_ai.models.analysis import (
    DEFAULT_CONTEXT,
    AnalysisRequest,
    AnalysisResult,
    Provider,
)


class TestProvider:
    """Tests for provider name resolution."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("claude", Provider.CLAUDE),
            ("anthropic", Provider.CLAUDE),
            ("Claude", Provider.CLAUDE),
            ("openai", Provider.OPENAI),
            ("chatgpt", Provider.OPENAI),
            ("GPT", Provider.OPENAI),
            ("ollama", Provider.OLLAMA),
            ("LOCAL", Provider.OLLAMA),
            (" ollama ", Provider.OLLAMA),
        ],
    )
    def test_aliases(self, name: str, expected: Provider) -> None:
        """Aliases in any case resolve to their backend."""
        assert Provider.from_name(name) is expected

    @pytest.mark.parametrize("name", ["gemini", "bedrock", "", "claude-3"])
    def test_unknown_names(self, name: str) -> None:
        """Anything else is UNKNOWN."""
        assert Provider.from_name(name) is Provider.UNKNOWN

    def test_is_hosted(self) -> None:
        """Claude and OpenAI are hosted, Ollama is not."""
        assert Provider.CLAUDE.is_hosted
        assert Provider.OPENAI.is_hosted
        assert not Provider.OLLAMA.is_hosted
        assert not Provider.UNKNOWN.is_hosted


class TestAnalysisRequest:
    """Tests for AnalysisRequest."""

    def test_default_context(self) -> None:
        """Context defaults to a generic deployment description."""
        request = AnalysisRequest(error_text="boom")
        assert request.context == DEFAULT_CONTEXT == "kubernetes deployment"

    def test_is_immutable(self) -> None:
        """Requests cannot be modified after creation."""
        request = AnalysisRequest(error_text="boom", context="Pod: foo")
        with pytest.raises(dataclasses.FrozenInstanceError):
            request.error_text = "other"  # type: ignore[misc]


class TestAnalysisResult:
    """Tests for AnalysisResult."""

    def test_defaults_are_absent(self) -> None:
        """All fields default to None."""
        result = AnalysisResult()
        assert result.issue is None
        assert result.cause is None
        assert result.fix is None
        assert result.command is None
        assert result.is_empty

    def test_not_empty_with_any_field(self) -> None:
        """One present field makes the result non-empty."""
        assert not AnalysisResult(fix="restart").is_empty

    def test_empty_string_field_is_present(self) -> None:
        """An empty value still counts as a matched field."""
        assert not AnalysisResult(command="").is_empty

    @pytest.mark.parametrize("command", ["none", "None", "NONE", "'none'", " none ", "`none`"])
    def test_none_sentinel_suppressed(self, command: str) -> None:
        """The 'none' sentinel means no command was suggested."""
        assert AnalysisResult(command=command).suggested_command is None

    def test_absent_and_empty_command_suppressed(self) -> None:
        """No command and an empty command both suggest nothing."""
        assert AnalysisResult().suggested_command is None
        assert AnalysisResult(command="").suggested_command is None

    def test_real_command_suggested(self) -> None:
        """A real command is passed through verbatim."""
        result = AnalysisResult(command="xiops rollback")
        assert result.suggested_command == "xiops rollback"

    def test_command_mentioning_none_is_kept(self) -> None:
        """Only the bare sentinel is suppressed."""
        result = AnalysisResult(command="xiops deploy --cache none")
        assert result.suggested_command == "xiops deploy --cache none"
