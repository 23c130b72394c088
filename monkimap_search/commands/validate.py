"""Check whether a search query is well-formed."""

from __future__ import annotations

import click

from monkimap_search.cli import Context, pass_context
from monkimap_search.commands.parse import report_parse_error
from monkimap_search.exceptions import SearchParseError
from monkimap_search.search.parser import parse_query
from monkimap_search.utils.output import success

EXIT_VALID = 0
EXIT_INVALID = 1


@click.command("validate")
@click.argument("query", nargs=-1)
@pass_context
def cli(ctx: Context, query: tuple[str, ...]) -> None:
    """Exit with status 0 if QUERY parses, 1 otherwise.

    Multiple arguments are joined with spaces. An empty query is valid.
    With the global --quiet flag nothing is printed.

    \b
    Examples:
      monkimap-search validate "properties:feature/big_wall:true properties"
      monkimap-search -q validate "$SEARCH" && echo ok
    """
    query_string = " ".join(query)
    try:
        parse_query(query_string)
    except SearchParseError as e:
        if not ctx.quiet:
            show_position = ctx.config.show_positions if ctx.config is not None else True
            report_parse_error(e, show_position)
        raise SystemExit(EXIT_INVALID)

    if not ctx.quiet:
        success("Valid query")
    raise SystemExit(EXIT_VALID)
