"""Build command implementation."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from ..config import Config
from ..pipeline import PipelineOrchestrator
from ..snapshot import Strictness

console = Console()


def build_command(
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Config file (default: ./feedmerge.yaml)",
    ),
    max_items: Optional[int] = typer.Option(
        None,
        "--max-items",
        help="Maximum records in the published collection",
        min=0,
    ),
    min_videos: Optional[int] = typer.Option(
        None,
        "--min-videos",
        help="Minimum videos reserved in the collection",
        min=0,
    ),
    strictness: Optional[Strictness] = typer.Option(
        None,
        "--strictness",
        help="Policy when the build yields no records",
        case_sensitive=False,
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file (default from config)",
    ),
) -> None:
    """Fetch all sources and publish the merged collection."""
    try:
        config = Config(config_path)

        orchestrator = PipelineOrchestrator(config)
        success = orchestrator.run(
            max_items=max_items,
            min_reserved=min_videos,
            strictness=strictness,
            output_path=output,
        )

        if not success:
            raise typer.Exit(1)

    except typer.Exit:
        raise
    except KeyboardInterrupt:
        console.print("\n[yellow]Build interrupted by user[/yellow]")
        raise typer.Exit(1)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Build failed: {e}[/red]")
        raise typer.Exit(1)
