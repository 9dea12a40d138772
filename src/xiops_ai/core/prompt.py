"""Prompt template for Kubernetes error analysis."""

from __future__ import annotations

from collections.abc import Sequence

# (command, description) pairs the model may suggest as a fix
XIOPS_COMMANDS: tuple[tuple[str, str], ...] = (
    ("xiops configmap", "Generate ConfigMap from .env (SECRET=NO vars)"),
    ("xiops spc", "Generate SecretProviderClass from .env (SECRET=YES vars)"),
    ("xiops spc sync", "Sync secrets to Azure Key Vault"),
    ("xiops deploy", "Deploy to AKS"),
    ("xiops rollback", "Rollback deployment"),
)

FIELD_NAMES: tuple[str, ...] = ("ISSUE", "CAUSE", "FIX", "COMMAND")

PROMPT_TEMPLATE = """You are a Kubernetes expert. Analyze this error and provide:
1. ISSUE: One line describing the problem
2. CAUSE: Why this happened
3. FIX: Step by step solution
4. COMMAND: The xiops command to fix it (if applicable)

Available xiops commands:
{commands}

Context: {context}

Error/Events:
{error_text}

Respond in this exact format:
ISSUE: <issue>
CAUSE: <cause>
FIX: <fix>
COMMAND: <command or 'none'>"""


def format_commands(commands: Sequence[tuple[str, str]]) -> str:
    """Render the command catalogue as a bullet list."""
    return "\n".join(f"- {command} - {description}" for command, description in commands)


def build_prompt(
    error_text: str,
    context: str,
    commands: Sequence[tuple[str, str]] = XIOPS_COMMANDS,
) -> str:
    """
    Build the analysis prompt.

    Args:
        error_text: Error message or pod events to analyze
        context: Short description of where the error came from
        commands: Commands the model may suggest

    Returns:
        Prompt text asking for ISSUE/CAUSE/FIX/COMMAND sections
    """
    return PROMPT_TEMPLATE.format(
        commands=format_commands(commands),
        context=context,
        error_text=error_text,
    )
