"""Rich console output helpers for monkimap-search."""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

# Module-level debug flag (set by cli.py after argument parsing)
_debug_enabled: bool = False

# Custom theme for monkimap-search
THEME = Theme(
    {
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "filter.qualifier": "bold blue",
        "filter.value": "green",
        "caret": "bold red",
    }
)

# Global console instances
console = Console(theme=THEME, stderr=False)
error_console = Console(theme=THEME, stderr=True)


def set_verbosity(*, debug: bool = False) -> None:
    """Configure whether debug messages are printed.

    Called from the CLI entry point after argument parsing.
    """
    global _debug_enabled
    _debug_enabled = debug


def set_color(enabled: bool) -> None:
    """Enable or disable color on both console instances."""
    console.no_color = not enabled
    error_console.no_color = not enabled


def warning(message: str) -> None:
    """Print a warning message to stderr."""
    error_console.print(f"[warning]Warning:[/warning] {message}")


def error(message: str) -> None:
    """Print an error message to stderr."""
    error_console.print(f"[error]Error:[/error] {message}")


def success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/success]")


def debug(message: str) -> None:
    """Print a debug message only when debug mode is enabled."""
    if _debug_enabled:
        error_console.print(f"[warning]\\[DEBUG][/warning] {message}")


def show_error_position(text: str, position: int) -> None:
    """Print ``text`` with a caret under ``position`` to stderr.

    Markup in the query is not interpreted.
    """
    error_console.print(Text("  " + text))
    error_console.print(Text("  " + " " * position + "^", style="caret"))


def create_table(title: str | None = None, **kwargs: Any) -> Table:
    """Create a styled table.

    Args:
        title: Optional table title.
        **kwargs: Additional Table arguments.

    Returns:
        Rich Table instance.
    """
    return Table(title=title, **kwargs)
