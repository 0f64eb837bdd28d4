# ABOUTME: Shared Click options for Bookstock CLI commands.
# ABOUTME: Provides reusable decorators for --db, --api-key and --delay.

from pathlib import Path

import click

from bookstock.core.importer import DEFAULT_DELAY
from bookstock.db.connection import DEFAULT_DB_PATH

db_option = click.option(
    "--db",
    "db_path",
    type=click.Path(path_type=Path),
    default=None,
    help=f"Path to catalog database (default: {DEFAULT_DB_PATH})",
)

api_key_option = click.option(
    "--api-key",
    "api_key",
    envvar="GOOGLE_BOOKS_API_KEY",
    default=None,
    help="Google Books API key (overrides the stored setting).",
)

delay_option = click.option(
    "--delay",
    type=click.FloatRange(min=0.0),
    default=DEFAULT_DELAY,
    show_default=True,
    help="Seconds to wait between items to respect API rate limits.",
)
