"""Terminal rendering of analysis results."""

from __future__ import annotations

from rich.console import Console
from rich.text import Text

from ..models.analysis import AnalysisResult
from .response_parser import parse

INDENT = "   "


class Presenter:
    """Renders analyses and warnings to a rich Console.

    All styling goes through the injected console, so output can be sent to
    a file, captured in tests or stripped of color with ``no_color=True``.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(highlight=False)

    def display(self, result: AnalysisResult) -> None:
        """Show the fields present in ``result``.

        Empty fields are skipped; the suggested-command block is shown only
        when the model suggested a command other than ``none``.
        """
        out = self.console
        out.print()
        out.print(Text("🤖 AI Analysis:", style="bold magenta"))
        out.print()

        if result.issue:
            out.print(Text.assemble(INDENT, ("Issue:", "bold"), " ", (result.issue, "red")))
        if result.cause:
            out.print(Text.assemble(INDENT, ("Cause:", "bold"), " ", result.cause))
        if result.fix:
            out.print(Text.assemble(INDENT, ("Fix:", "bold"), " ", result.fix))

        command = result.suggested_command
        if command:
            out.print()
            out.print(Text.assemble(INDENT, ("Suggested command:", "bold")))
            out.print(Text.assemble(INDENT, (f"$ {command}", "cyan")))

        out.print()

    def display_raw(self, raw_text: str) -> bool:
        """Parse and display raw model output.

        Returns:
            False, without printing, when ``raw_text`` is empty
        """
        if not raw_text or not raw_text.strip():
            return False
        self.display(parse(raw_text))
        return True

    def warning(self, message: str, hint: str | None = None) -> None:
        """Show a non-fatal problem and, optionally, what to do about it."""
        self.console.print(Text.assemble(("⚠ ", "yellow"), (message, "yellow")))
        if hint:
            self.console.print(Text.assemble(("ℹ ", "blue"), hint))
