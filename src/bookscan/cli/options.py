# ABOUTME: Shared Click options for bookscan CLI commands.
# ABOUTME: Provides reusable decorators for the database path and lookup provider settings.

from pathlib import Path

import click

from bookscan.db.connection import DEFAULT_DB_PATH
from bookscan.lookup import PROVIDERS

db_option = click.option(
    "--db",
    "db_path",
    type=click.Path(path_type=Path),
    default=None,
    envvar="BOOKSCAN_DB",
    help=f"Path to library database (default: {DEFAULT_DB_PATH})",
)

provider_option = click.option(
    "--provider",
    type=click.Choice(PROVIDERS),
    default="google",
    show_default=True,
    envvar="BOOKSCAN_PROVIDER",
    help="Bibliographic service used to resolve ISBNs.",
)

api_key_option = click.option(
    "--api-key",
    default=None,
    envvar="BOOKSCAN_BOOKS_API_KEY",
    help="Google Books API key (optional).",
)

timeout_option = click.option(
    "--timeout",
    type=click.FloatRange(min=0.0, min_open=True),
    default=None,
    help="Give up on a lookup after this many seconds.",
)
