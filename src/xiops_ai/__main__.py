"""Command-line entry point for xiops-ai.

Reads Kubernetes error output (pod events, describe output, an error
message) from a file or stdin, asks the configured AI backend for an
analysis and prints it.

    kubectl describe pod api-7f9c | sed -n '/^Events:/,$ p' \\
        | xiops-ai --context "Pod: api-7f9c, Status: Pending"
"""

import argparse
import json
import sys
from pathlib import Path

import structlog
from pydantic import ValidationError
from rich.console import Console

from xiops_ai._version import __version__
from xiops_ai.models.analysis import DEFAULT_CONTEXT

log = structlog.get_logger()


def setup_logging(
    debug: bool = False,
    log_format: str = "console",
    file_path: Path | None = None,
    file_enabled: bool = False,
) -> None:
    """Configure structured logging with secret sanitization.

    Args:
        debug: Enable debug logging if True
        log_format: Output format ("json" or "console")
        file_path: Path to log file (if file logging enabled)
        file_enabled: Whether to enable file logging
    """
    from xiops_ai.utils.logging import LogFormat, LogLevel, configure_logging

    level = LogLevel.DEBUG if debug else LogLevel.WARNING

    configure_logging(
        level=level,
        log_format=LogFormat(log_format.lower()),
        file_path=file_path,
        file_enabled=file_enabled,
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed argument namespace
    """
    parser = argparse.ArgumentParser(
        prog="xiops-ai",
        description="Analyze Kubernetes errors with an AI backend (Claude, OpenAI or Ollama)",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "error_file",
        nargs="?",
        default="-",
        help="File with the error text or pod events (default: stdin)",
    )

    parser.add_argument(
        "--context",
        default=DEFAULT_CONTEXT,
        help=f"Where the error came from (default: {DEFAULT_CONTEXT!r})",
    )

    parser.add_argument(
        "-p",
        "--provider",
        help="AI provider, overrides AI_PROVIDER (claude, openai, ollama and aliases)",
    )

    parser.add_argument(
        "-m",
        "--model",
        help="Model name, overrides AI_MODEL",
    )

    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="Optional YAML configuration file",
    )

    parser.add_argument(
        "--raw",
        action="store_true",
        help="Print the model reply verbatim instead of the parsed fields",
    )

    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    parser.add_argument(
        "--format",
        choices=["json", "console"],
        default="console",
        help="Log output format (default: console)",
    )

    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )

    parser.add_argument(
        "--health-check",
        action="store_true",
        help="Check the AI backend configuration and exit",
    )

    return parser.parse_args(argv)


def read_error_text(source: str) -> str:
    """Read error text from a path, or from stdin for ``-``.

    Bytes that are not valid UTF-8 are replaced rather than rejected.
    """
    if source != "-":
        return Path(source).read_text(encoding="utf-8", errors="replace")
    buffer = getattr(sys.stdin, "buffer", None)
    if buffer is None:
        return sys.stdin.read()
    return buffer.read().decode("utf-8", errors="replace")


def run(args: argparse.Namespace, console: Console | None = None) -> int:
    """Run the analyzer for parsed CLI arguments.

    Returns:
        Exit code (0 when an analysis was shown or the backend is healthy)
    """
    from xiops_ai.config.loader import load_settings
    from xiops_ai.core.analyzer import ErrorAnalyzer
    from xiops_ai.core.presenter import Presenter
    from xiops_ai.utils.logging import configure_logging

    console = console or Console(highlight=False, no_color=args.no_color)

    try:
        settings = load_settings(args.config, ai_provider=args.provider, ai_model=args.model)
    except FileNotFoundError as e:
        log.error("configuration_file_not_found", path=str(args.config), error=str(e))
        return 1
    except (ValueError, ValidationError) as e:
        log.error("configuration_invalid", error=str(e))
        return 1

    if args.config is not None and not args.debug:
        configure_logging(
            level=settings.logging.level,
            log_format=settings.logging.format,
            file_path=settings.logging.file.path,
            file_enabled=settings.logging.file.enabled,
        )

    log.debug("settings_loaded", **settings.masked())

    if args.health_check:
        from xiops_ai.utils.health import HealthChecker

        report = HealthChecker(settings).run_all_checks()
        console.print_json(json.dumps(report.to_dict()))
        return 0 if report.healthy else 1

    try:
        error_text = read_error_text(args.error_file)
    except OSError as e:
        log.error("error_file_unreadable", path=args.error_file, error=str(e))
        return 1

    if not error_text.strip():
        log.warning("no_error_text")
        return 1

    analyzer = ErrorAnalyzer(settings=settings, presenter=Presenter(console))

    if args.raw:
        raw = analyzer.analyze_raw(error_text, args.context)
        if raw is None:
            return 1
        console.print(raw, markup=False)
        return 0

    return 0 if analyzer.analyze_and_display(error_text, args.context) else 1


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    setup_logging(debug=args.debug, log_format=args.format)

    try:
        return run(args)
    except KeyboardInterrupt:
        log.info("interrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
