# ABOUTME: The `bookscan lookup` command for resolving an ISBN without saving it.
# ABOUTME: Prints the normalized summary returned by the configured lookup provider.

import asyncio

import click
from rich.console import Console

from bookscan.cli.options import api_key_option, provider_option
from bookscan.cli.render import summary_table
from bookscan.lookup import create_gateway
from bookscan.lookup.gateway import BookLookupError
from bookscan.lookup.http import BookscanHttpClient
from bookscan.lookup.types import BookSummary


async def _resolve(provider: str, api_key: str | None, isbn: str) -> BookSummary | None:
    async with BookscanHttpClient() as http_client:
        gateway = create_gateway(provider, http_client, api_key=api_key)
        return await gateway.resolve(isbn)


@click.command("lookup")
@click.argument("isbn")
@provider_option
@api_key_option
def lookup(isbn: str, provider: str, api_key: str | None) -> None:
    """Look up an ISBN and show what would be saved."""
    console = Console()

    try:
        summary = asyncio.run(_resolve(provider, api_key, isbn))
    except BookLookupError as exc:
        console.print(f"[red]Error: lookup failed: {exc}[/red]")
        raise SystemExit(1) from exc

    if summary is None:
        console.print(f"[yellow]No book found for {isbn}.[/yellow]")
        raise SystemExit(1)

    console.print(summary_table(summary))
