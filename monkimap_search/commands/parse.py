"""Parse a search query and print how it was understood."""

from __future__ import annotations

import json

import click

from monkimap_search.cli import Context, pass_context
from monkimap_search.config import OUTPUT_FORMATS
from monkimap_search.exceptions import SearchParseError
from monkimap_search.search.ast_nodes import SearchQuery, Word
from monkimap_search.search.parser import parse_filter, parse_query
from monkimap_search.search.render import render, render_debug, to_dict
from monkimap_search.utils.output import (
    console,
    create_table,
    debug,
    error,
    show_error_position,
)

EXIT_SUCCESS = 0
EXIT_PARSE_ERROR = 1


def report_parse_error(e: SearchParseError, show_position: bool) -> None:
    """Print a parse error, optionally with a caret under the failing position."""
    error(f"Invalid search query: {e.message} (position {e.position})")
    if show_position:
        show_error_position(e.query, e.position)


@click.command("parse")
@click.argument("query", nargs=-1)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(list(OUTPUT_FORMATS)),
    default=None,
    help="Output format (default: from config, else text)",
)
@click.option(
    "--filter",
    "single_filter",
    is_flag=True,
    default=False,
    help="Parse QUERY as exactly one filter (no surrounding whitespace)",
)
@pass_context
def cli(
    ctx: Context,
    query: tuple[str, ...],
    output_format: str | None,
    single_filter: bool,
) -> None:
    """Parse a search query and print it back.

    QUERY is a search-bar string. Multiple arguments are joined with spaces.

    \b
    Syntax examples:
      monkimap-search parse "La Dame du Lac"
      monkimap-search parse '"La Dame du Lac"'
      monkimap-search parse kind:indoor_parkour_park images:1..10
      monkimap-search parse "created:>=2021-01-01 creator:@remi_bardon"
      monkimap-search parse properties:feature/big_wall:true

    \b
    Output formats:
      --format text    Canonical query text (default)
      --format debug   Tagged form, e.g. .kind(park)
      --format json    JSON array of filter objects
      --format table   One row per filter
    """
    config = ctx.config
    if output_format is None:
        output_format = config.output_format if config is not None else "text"
    show_position = config.show_positions if config is not None else True

    query_string = " ".join(query)
    debug(f"Parsing {query_string!r} as {'a filter' if single_filter else 'a query'}")

    try:
        if single_filter:
            parsed = SearchQuery.of(parse_filter(query_string))
        else:
            parsed = parse_query(query_string)
    except SearchParseError as e:
        report_parse_error(e, show_position)
        raise SystemExit(EXIT_PARSE_ERROR)

    if output_format == "text":
        click.echo(render(parsed))
    elif output_format == "debug":
        click.echo(render_debug(parsed))
    elif output_format == "json":
        click.echo(json.dumps(to_dict(parsed), indent=2))
    elif output_format == "table":
        _print_table(parsed)

    raise SystemExit(EXIT_SUCCESS)


def _print_table(query: SearchQuery) -> None:
    """Print one row per filter: its qualifier, value and tagged form."""
    table = create_table(show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Qualifier", style="filter.qualifier")
    table.add_column("Value", style="filter.value")
    table.add_column("Debug", style="dim")

    for i, f in enumerate(query.filters, start=1):
        text = render(f)
        if isinstance(f, Word) or text.startswith('"'):
            qualifier, value = "", text
        else:
            qualifier, _, value = text.partition(":")
        table.add_row(str(i), qualifier, value, render_debug(f))

    console.print(table)
