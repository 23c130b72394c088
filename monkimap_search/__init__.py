"""monkimap-search: parse and render MonkiMap search-bar queries."""

__version__ = "0.1.0"
