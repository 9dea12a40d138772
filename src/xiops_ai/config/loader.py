"""Configuration loader with YAML parsing and environment variable substitution."""

import os
import re
from pathlib import Path
from typing import Any

import yaml

from .schema import AISettings


def substitute_env_vars(text: str) -> str:
    """
    Replace ${VAR_NAME} patterns with environment variable values.

    Args:
        text: Text containing ${VAR_NAME} patterns

    Returns:
        Text with environment variables substituted

    Raises:
        ValueError: If a referenced environment variable is not found
    """

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        value = os.environ.get(var_name)
        if value is None:
            raise ValueError(f"Environment variable {var_name} not found")
        return value

    return re.sub(r"\$\{([^}]+)\}", replacer, text)


def load_settings(path: Path | None = None, **overrides: Any) -> AISettings:
    """
    Load settings from the environment, an optional YAML file and overrides.

    Precedence, highest first: explicit overrides (``None`` values are
    ignored), the YAML file, environment variables, defaults.

    Args:
        path: Optional path to a YAML configuration file
        **overrides: Field values that win over every other source

    Returns:
        Validated AISettings instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If environment variables are missing or the file is invalid
        ValidationError: If config doesn't match schema
    """
    values: dict[str, Any] = {}

    if path is not None:
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with path.open() as f:
            raw_yaml = f.read()

        config_dict = yaml.safe_load(substitute_env_vars(raw_yaml))
        if config_dict is None:
            config_dict = {}
        if not isinstance(config_dict, dict):
            raise ValueError(f"Configuration file {path} must contain a mapping")
        values.update(config_dict)

    values.update({key: value for key, value in overrides.items() if value is not None})

    return AISettings(**values)
