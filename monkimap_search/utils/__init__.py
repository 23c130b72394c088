"""Utility modules for monkimap-search."""

from monkimap_search.utils.output import (
    console,
    error,
    success,
    warning,
)

__all__ = [
    "console",
    "error",
    "success",
    "warning",
]
