# ABOUTME: The `bookscan scan` command for scanning ISBNs into the catalog.
# ABOUTME: Drives a ScanCoordinator in single or batch mode from arguments or a barcode scanner on stdin.

import asyncio
import logging
import sys
from collections.abc import AsyncIterator
from pathlib import Path

import click
from rich.console import Console

from bookscan.cli.library import connect
from bookscan.cli.options import api_key_option, db_option, provider_option, timeout_option
from bookscan.cli.render import summaries_table, summary_table
from bookscan.core.coordinator import ScanCoordinator
from bookscan.core.scanner import extract_isbn, read_detections
from bookscan.core.state import ScanError, Success
from bookscan.db.catalog import BookCatalog, StoreError
from bookscan.db.store import RecordStore
from bookscan.lookup import create_gateway
from bookscan.lookup.http import BookscanHttpClient

logger = logging.getLogger(__name__)


async def _iter_codes(console: Console, isbns: tuple[str, ...]) -> AsyncIterator[str]:
    """Yield ISBNs from the command line, or from stdin when none were given."""
    if not isbns:
        async for code in read_detections(sys.stdin):
            yield code
        return
    for raw in isbns:
        code = extract_isbn(raw)
        if code is None:
            console.print(f"[yellow]Skipping {raw}: not an ISBN-13 barcode.[/yellow]")
            continue
        yield code


async def _scan_single(
    console: Console,
    coordinator: ScanCoordinator,
    codes: AsyncIterator[str],
    yes: bool,
) -> int:
    """Look up each code and confirm it individually. Returns the saved count."""
    saved = 0
    async for code in codes:
        await coordinator.on_scan_detected(code)
        match coordinator.state:
            case Success(summary=summary):
                console.print(summary_table(summary))
                if yes or click.confirm("Save this book?", default=True):
                    book_id = await coordinator.save_current()
                    console.print(f"[green]Saved as #{book_id}.[/green]")
                    saved += 1
                else:
                    coordinator.reset_state()
                    console.print("[dim]Skipped.[/dim]")
            case ScanError():
                console.print(f"[yellow]No book found for {code}.[/yellow]")
                coordinator.reset_state()
            case _:
                logger.debug("Scan of %s left coordinator in %s", code, coordinator.state)
    return saved


async def _scan_batch(
    console: Console,
    coordinator: ScanCoordinator,
    codes: AsyncIterator[str],
    yes: bool,
) -> int:
    """Collect every code into the buffer, then save them together."""
    async for code in codes:
        before = len(coordinator.buffer)
        accepted = await coordinator.on_scan_detected(code)
        if not accepted:
            console.print(f"[dim]{code}: already scanned.[/dim]")
        elif len(coordinator.buffer) == before:
            console.print(f"[yellow]No book found for {code}.[/yellow]")
        else:
            console.print(f"[dim]{code}: {len(coordinator.buffer)} book(s) collected.[/dim]")

    buffered = coordinator.buffer
    if not buffered:
        console.print("[yellow]No books collected.[/yellow]")
        return 0

    console.print(summaries_table(buffered))
    if not yes and not click.confirm(f"Save {len(buffered)} book(s)?", default=True):
        coordinator.set_batch_mode(True)
        console.print("[dim]Discarded.[/dim]")
        return 0

    ids = await coordinator.save_buffered()
    console.print(f"[green]Saved {len(ids)} book(s).[/green]")
    return len(ids)


async def _run_scan(
    console: Console,
    store: RecordStore,
    isbns: tuple[str, ...],
    *,
    provider: str,
    api_key: str | None,
    timeout: float | None,
    batch: bool,
    yes: bool,
) -> int:
    async with BookscanHttpClient() as http_client:
        gateway = create_gateway(provider, http_client, api_key=api_key)
        coordinator = ScanCoordinator(gateway, store, lookup_timeout=timeout)
        coordinator.set_batch_mode(batch)
        codes = _iter_codes(console, isbns)
        try:
            if batch:
                return await _scan_batch(console, coordinator, codes, yes)
            return await _scan_single(console, coordinator, codes, yes)
        finally:
            await coordinator.aclose()


@click.command("scan")
@click.argument("isbns", nargs=-1)
@db_option
@provider_option
@api_key_option
@timeout_option
@click.option(
    "--batch",
    is_flag=True,
    default=False,
    help="Collect every scanned book, then save them all at once.",
)
@click.option(
    "-y",
    "--yes",
    is_flag=True,
    default=False,
    help="Save without asking for confirmation.",
)
def scan(
    isbns: tuple[str, ...],
    db_path: Path | None,
    provider: str,
    api_key: str | None,
    timeout: float | None,
    batch: bool,
    yes: bool,
) -> None:
    """Scan ISBNs and save the books found to the catalog.

    ISBNs are taken from the arguments, or read one per line from stdin
    (the way a USB barcode scanner types them) when none are given.
    """
    if not isbns and not yes and not sys.stdin.isatty():
        # Confirmation prompts would consume the piped codes as answers.
        raise click.UsageError("Codes piped on stdin require --yes.")

    console = Console()
    conn = connect(console, db_path)
    try:
        store = RecordStore(BookCatalog(conn))
        saved = asyncio.run(
            _run_scan(
                console,
                store,
                isbns,
                provider=provider,
                api_key=api_key,
                timeout=timeout,
                batch=batch,
                yes=yes,
            )
        )
    except StoreError as exc:
        console.print(f"[red]Error: {exc}[/red]")
        raise SystemExit(1) from exc
    finally:
        conn.close()

    console.print(f"\n[dim]{saved} book(s) saved[/dim]")
