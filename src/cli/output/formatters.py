"""Rich terminal output formatters."""

from rich.console import Console
from rich.markup import escape


def format_success(console: Console, message: str) -> None:
    """Display success message in green."""
    console.print(f"[green]{escape(message)}[/green]")


def format_error(console: Console, message: str, hint: str | None = None) -> None:
    """Display error message in red with optional hint."""
    console.print(f"[red]Error:[/red] {escape(message)}")
    if hint:
        console.print(f"[yellow]Hint:[/yellow] {escape(hint)}")


def format_warning(console: Console, message: str) -> None:
    """Display warning message in yellow."""
    console.print(f"[yellow]Warning:[/yellow] {escape(message)}")
