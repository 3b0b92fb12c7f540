"""Main CLI entry point for copyid."""

import logging
import sys
from typing import Optional

import typer
from rich.console import Console

from src.cli.commands.copy_id import copy_id_command

app = typer.Typer(
    name="copyid",
    help="Install SSH public keys into a remote authorized_keys file",
    no_args_is_help=True,
    add_completion=False,
)
console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )


@app.command()
def copy_id(
    destination: str = typer.Argument(..., help="Remote destination (user@host)"),
    identity_file: Optional[str] = typer.Option(
        None, "-i", "--identity-file", help="Identity file, e.g. ~/.ssh/id_ed25519.pub"
    ),
    port: Optional[str] = typer.Option(None, "-p", "--port", help="Remote port"),
    options: Optional[list[str]] = typer.Option(
        None, "-o", "--option", help="Extra ssh -o option (repeatable)"
    ),
    dry_run: bool = typer.Option(
        False, "-n", "--dry-run", help="Show what would be installed"
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Debug logging"),
    json_flag: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Copy public keys to DESTINATION's ~/.ssh/authorized_keys."""
    _configure_logging(verbose)
    copy_id_command(
        destination, identity_file, port, options or [], dry_run, json_flag
    )


def main() -> None:
    """Entry point."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled[/yellow]")
        raise typer.Exit(130)
