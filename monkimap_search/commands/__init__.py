"""Subcommands of the monkimap-search CLI."""
