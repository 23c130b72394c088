"""Exception hierarchy for monkimap-search."""

from __future__ import annotations

from pathlib import Path


class MonkiMapSearchError(Exception):
    """Base exception for all monkimap-search errors.

    All exceptions in this package inherit from this class,
    allowing callers to catch all monkimap-search errors with
    a single except clause.
    """

    pass


# Configuration Errors
class ConfigError(MonkiMapSearchError):
    """Configuration-related errors."""

    pass


class ConfigParseError(ConfigError):
    """Configuration file has invalid syntax."""

    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Invalid config at {path}: {detail}")


class ConfigValidationError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: object, reason: str) -> None:
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid config value for '{key}': {reason}")


# Search Errors
class SearchParseError(MonkiMapSearchError):
    """Raised when a search query (or a single filter) cannot be parsed.

    Attributes:
        query: The text that was being parsed.
        position: 0-based offset of the failure in ``query``.
        expected: Human-readable descriptions of what would have been accepted
            at ``position``, e.g. ``("a qualifier keyword", "a word")``.
    """

    def __init__(
        self,
        query: str,
        position: int,
        expected: tuple[str, ...] = (),
        message: str | None = None,
    ) -> None:
        self.query = query
        self.position = position
        self.expected = expected
        if message is None:
            if expected:
                message = "expected " + " or ".join(expected)
            else:
                message = "unexpected input"
        self.message = message
        super().__init__(
            f"Failed to parse search query '{query}' at position {position}: {message}"
        )
