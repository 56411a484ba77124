# ABOUTME: CLI package for bookscan, built on Click.
# ABOUTME: Defines the root command group, logging setup, and registers subcommands.

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from bookscan.cli.commands import info_cmd, lookup_cmd, ls_cmd, rm_cmd, scan_cmd


@click.group()
@click.version_option(package_name="bookscan")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Show debug logging.")
def cli(verbose: bool) -> None:
    """bookscan - scan ISBN barcodes into a personal book catalog."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            datefmt="[%X]",
            handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        )


cli.add_command(scan_cmd.scan)
cli.add_command(lookup_cmd.lookup)
cli.add_command(ls_cmd.ls)
cli.add_command(info_cmd.info)
cli.add_command(rm_cmd.rm)
