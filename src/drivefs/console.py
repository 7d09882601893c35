"""Console output for the command line."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from drivefs.config import Settings


class Output:
    """Rich-based status and table output for CLI commands."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize output.

        Args:
            console: Console to print to. Defaults to stdout.
        """
        self.console = console or Console()

    def show_success(self, message: str) -> None:
        """Show success message.

        Args:
            message: Message to display.
        """
        self.console.print(f"[green]✓[/green] {message}")

    def show_error(self, message: str) -> None:
        """Show error message.

        Args:
            message: Message to display.
        """
        self.console.print(f"[red]✗[/red] {message}")

    def show_warning(self, message: str) -> None:
        """Show warning message.

        Args:
            message: Message to display.
        """
        self.console.print(f"[yellow]![/yellow] {message}")

    def show_text(self, text: str) -> None:
        """Print file content verbatim, without markup processing."""
        self.console.print(text, markup=False, highlight=False, end="")

    def show_settings(self, settings: Settings) -> None:
        """Display settings table.

        Args:
            settings: Settings to display.
        """
        table = Table(title="drivefs settings")
        table.add_column("Setting", style="cyan")
        table.add_column("Value")

        for name, value in settings.model_dump().items():
            table.add_row(name, "" if value is None else str(value))

        self.console.print(table)
