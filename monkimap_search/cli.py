"""Command-line interface for monkimap-search."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import click

from monkimap_search import __version__
from monkimap_search.config import Config, load_config
from monkimap_search.exceptions import ConfigError
from monkimap_search.utils.output import (
    error,
    set_color,
    set_verbosity,
    warning,
)


class Context:
    """Shared context for all commands."""

    def __init__(self) -> None:
        self.config: Config | None = None
        self.verbose: bool = False
        self.debug: bool = False
        self.quiet: bool = False


pass_context = click.make_pass_decorator(Context, ensure=True)


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=False, path_type=Path),
    help="Path to config file (default: ~/.config/monkimap-search/config.toml)",
)
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Disable colored output",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Enable verbose output",
)
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug output (implies --verbose)",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    default=False,
    help="Suppress non-error output",
)
@click.version_option(version=__version__, prog_name="monkimap-search")
@click.pass_context
def cli(
    ctx: click.Context,
    config: Path | None,
    no_color: bool,
    verbose: bool,
    debug: bool,
    quiet: bool,
) -> None:
    """monkimap-search: Parse and render MonkiMap search-bar queries.

    Queries mix plain keywords, "quoted phrases" and qualifiers such as
    kind:park, created:>=2021-01-01, images:1..10 or
    properties:feature/big_wall:true.

    Configuration is loaded from ~/.config/monkimap-search/config.toml by default.
    Use --config to specify an alternative configuration file.

    Examples:

        # Show how a query is understood
        monkimap-search parse --format debug "kind:park images:>3"

        # Check a query from a script
        monkimap-search -q validate "created:2021-01-01..2021-12-31"
    """
    # Initialize context
    ctx.ensure_object(Context)
    app_ctx = ctx.obj
    app_ctx.verbose = verbose or debug
    app_ctx.debug = debug
    app_ctx.quiet = quiet

    # Configure debug output for the output helpers
    set_verbosity(debug=debug)
    if debug:
        logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
        logging.getLogger("monkimap_search").setLevel(logging.DEBUG)

    # Configure color output: disabled by --no-color, NO_COLOR env, or config
    disable_color = no_color or os.environ.get("NO_COLOR") is not None

    if disable_color:
        set_color(False)

    # Load configuration
    try:
        loaded_config, warnings = load_config(config)
    except ConfigError as e:
        error(str(e))
        ctx.exit(1)
        return

    app_ctx.config = loaded_config

    # Apply config settings
    if not disable_color and not loaded_config.colored_output:
        set_color(False)

    # Missing config is normal for this tool, so only mention it when asked
    if app_ctx.verbose and not quiet:
        for warn in warnings:
            warning(warn)


def register_commands() -> None:
    """Attach the subcommands to the ``cli`` group."""
    from monkimap_search.commands import parse, validate

    cli.add_command(parse.cli)
    cli.add_command(validate.cli)


# Register commands on import
register_commands()
