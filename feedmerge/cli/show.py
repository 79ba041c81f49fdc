"""Show command implementation."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from ..config import Config
from ..snapshot import SnapshotStore

console = Console()


def show_command(
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Config file (default: ./feedmerge.yaml)",
    ),
    limit: int = typer.Option(20, "--limit", "-n", help="Records to list", min=0),
) -> None:
    """Show the currently published collection."""
    config = Config(config_path)
    output_path = config.output_path
    snapshot = SnapshotStore(output_path).read()

    if snapshot is None:
        console.print(f"[red]No readable collection at {output_path}. Run 'feedmerge build' first.[/red]")
        raise typer.Exit(1)

    counts = {}
    for record in snapshot.items:
        counts[record.category.value] = counts.get(record.category.value, 0) + 1

    console.print(f"[bold]{output_path}[/bold]")
    console.print(f"Records: {len(snapshot.items)}")
    if snapshot.legacy_layout:
        console.print("[yellow]Stored as a bare list (legacy layout)[/yellow]")
    for category, count in sorted(counts.items()):
        console.print(f"  {category}: {count}")

    if not snapshot.items or limit == 0:
        return

    table = Table(title="Latest Records")
    table.add_column("Date", style="yellow")
    table.add_column("Type", style="magenta")
    table.add_column("Source", style="cyan")
    table.add_column("Title")

    for record in snapshot.items[:limit]:
        table.add_row(
            record.timestamp.strftime("%Y-%m-%d %H:%M"),
            record.category.value,
            record.origin,
            record.title,
        )

    console.print(table)
