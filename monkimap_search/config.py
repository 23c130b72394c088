"""Configuration management for monkimap-search."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomli_w

from monkimap_search.exceptions import (
    ConfigParseError,
    ConfigValidationError,
)

# Renderings offered by `monkimap-search parse`
OUTPUT_FORMATS: tuple[str, ...] = ("text", "debug", "json", "table")


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    return Path.home() / ".config" / "monkimap-search" / "config.toml"


@dataclass
class Config:
    """Application configuration.

    Attributes:
        colored_output: Whether to use colored terminal output.
        output_format: Default rendering for parsed queries
            (one of ``OUTPUT_FORMATS``).
        show_positions: Whether parse errors show the query with a caret
            under the failing position.
        config_path: Path where config was loaded from (None if defaults).
    """

    colored_output: bool = True
    output_format: str = "text"
    show_positions: bool = True
    config_path: Path | None = None

    def validate(self) -> list[str]:
        """Validate configuration values.

        Returns:
            List of warning messages for non-fatal issues.

        Raises:
            ConfigValidationError: If a critical validation fails.
        """
        if self.output_format not in OUTPUT_FORMATS:
            raise ConfigValidationError(
                "output.format",
                self.output_format,
                f"must be one of {', '.join(OUTPUT_FORMATS)}",
            )
        return []


def load_config(config_path: Path | None = None) -> tuple[Config, list[str]]:
    """Load configuration from file or use defaults.

    Args:
        config_path: Explicit config file path. If None, uses default location.

    Returns:
        Tuple of (Config object, list of warning messages).

    Raises:
        ConfigParseError: If config file exists but has invalid syntax.
        ConfigValidationError: If config values are invalid.
    """
    warnings: list[str] = []

    if config_path is None:
        config_path = get_default_config_path()

    config_path = config_path.expanduser().resolve()

    if not config_path.exists():
        # Use defaults
        config = Config()
        warnings.append(f"No config file found at {config_path}. Using defaults.")
        return config, warnings + config.validate()

    # Load from file
    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(config_path, str(e)) from e

    config = _parse_config_dict(data, config_path)
    config_warnings = config.validate()

    return config, warnings + config_warnings


def _parse_config_dict(data: dict[str, Any], config_path: Path) -> Config:
    """Parse configuration dictionary into Config object."""
    config = Config(config_path=config_path)

    # Parse [display] section
    display = data.get("display", {})
    if "colored_output" in display:
        value = display["colored_output"]
        if not isinstance(value, bool):
            raise ConfigValidationError("display.colored_output", value, "must be a boolean")
        config.colored_output = value

    # Parse [output] section
    output = data.get("output", {})
    if "format" in output:
        value = output["format"]
        if not isinstance(value, str):
            raise ConfigValidationError("output.format", value, "must be a string")
        config.output_format = value

    if "show_positions" in output:
        value = output["show_positions"]
        if not isinstance(value, bool):
            raise ConfigValidationError("output.show_positions", value, "must be a boolean")
        config.show_positions = value

    return config


def save_config(config: Config, config_path: Path | None = None) -> None:
    """Save configuration to file.

    Args:
        config: Configuration to save.
        config_path: Path to save to. If None, uses config.config_path or default.
    """
    if config_path is None:
        config_path = config.config_path or get_default_config_path()

    config_path = config_path.expanduser().resolve()

    # Ensure directory exists
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data: dict[str, Any] = {
        "display": {
            "colored_output": config.colored_output,
        },
    }

    # Build [output] section (only if non-default values)
    output_data: dict[str, Any] = {}
    if config.output_format != "text":
        output_data["format"] = config.output_format
    if not config.show_positions:
        output_data["show_positions"] = False
    if output_data:
        data["output"] = output_data

    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
