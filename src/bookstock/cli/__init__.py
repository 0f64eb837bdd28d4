# ABOUTME: CLI package for Bookstock, built on Click.
# ABOUTME: Defines the root command group, logging setup, and registers subcommands.

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from bookstock.cli.commands import (
    config_cmd,
    import_cmd,
    ls_cmd,
    search_cmd,
    validate_cmd,
)


@click.group()
@click.version_option(package_name="bookstock")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Show debug logging.")
def cli(verbose: bool) -> None:
    """Bookstock - import Google Books metadata into a product catalog."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


cli.add_command(import_cmd.import_command)
cli.add_command(validate_cmd.validate)
cli.add_command(search_cmd.search)
cli.add_command(config_cmd.config)
cli.add_command(ls_cmd.ls)
