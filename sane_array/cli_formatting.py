"""Rich CLI formatting helpers for sane commands."""

from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console()
error_console = Console(stderr=True)


def print_records(name: str, headers, file_size: int):
    """Print one table row per record header."""
    table = Table(title=f"SANE File Info: {name}", border_style="cyan", padding=(0, 1))
    table.add_column("#", justify="right", style="dim")
    table.add_column("Type", style="bold")
    table.add_column("Shape")
    table.add_column("Payload", justify="right", style="green")
    for i, header in enumerate(headers):
        table.add_row(
            str(i),
            header.data_type.name.lower(),
            str(header.shape),
            f"{header.data_length:,} bytes",
        )
    console.print(table)
    console.print(f"  [dim]{table.row_count} record(s), {file_size:,} bytes[/dim]")


def print_written(paths):
    """Print the files written by a command."""
    table = Table(title="Written", border_style="cyan", show_header=False, padding=(0, 2))
    table.add_column("Name", style="dim")
    table.add_column("Path", style="bold")
    for name, path in paths:
        table.add_row(name, str(path))
    console.print(table)


def print_error(message: str):
    error_console.print(f"[bold red]Error:[/bold red] {escape(message)}")
