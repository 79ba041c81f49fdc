"""Sources management commands."""

from pathlib import Path
from typing import Optional

import httpx
import typer
from rich.console import Console
from rich.table import Table

from ..config import Config, SourceConfig, SourcesListing, load_channels, load_sources, save_sources
from ..models import Category

console = Console()
sources_app = typer.Typer(help="Manage feed sources")

CONFIG_OPTION = typer.Option(
    None,
    "--config",
    "-c",
    help="Config file (default: ./feedmerge.yaml)",
)


def _load_listing(config: Config, missing_ok: bool = False) -> SourcesListing:
    try:
        return load_sources(config.sources_path)
    except FileNotFoundError:
        if missing_ok:
            return SourcesListing()
        console.print("[red]Sources file not found. Run 'feedmerge init' first.[/red]")
        raise typer.Exit(1)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)


@sources_app.command("list")
def sources_list(config_path: Optional[Path] = CONFIG_OPTION) -> None:
    """List all configured sources."""
    config = Config(config_path)
    listing = _load_listing(config)
    channels = load_channels(config.channels_path)

    if not listing.all and not channels:
        console.print("[yellow]No sources configured.[/yellow]")
        return

    table = Table(title="Configured Sources")
    table.add_column("Name", style="cyan")
    table.add_column("Category", style="magenta")
    table.add_column("Region", style="green")
    table.add_column("Enabled", style="yellow")
    table.add_column("URL", style="blue")

    for source in listing.all:
        table.add_row(
            source.name,
            source.category.value,
            source.region,
            "✓" if source.enabled else "✗",
            source.url,
        )
    for channel_id in channels:
        table.add_row(channel_id, Category.VIDEO.value, "-", "✓", "YouTube channel")

    console.print(table)


@sources_app.command("add")
def sources_add(
    name: str = typer.Option(..., "--name", "-n", help="Source name"),
    url: str = typer.Option(..., "--url", "-u", help="RSS/Atom feed URL"),
    category: Category = typer.Option(
        Category.ARTICLE,
        "--category",
        help="Source category (article, podcast)",
    ),
    region: str = typer.Option("GLOBAL", "--region", "-r", help="Region tag"),
    config_path: Optional[Path] = CONFIG_OPTION,
) -> None:
    """Add a new feed source."""
    config = Config(config_path)
    listing = _load_listing(config, missing_ok=True)

    if any(s.name == name or s.url == url for s in listing.all):
        console.print(f"[red]Source '{name}' or URL already exists.[/red]")
        raise typer.Exit(1)

    try:
        new_source = SourceConfig(name=name, url=url, category=category, region=region)
    except ValueError as e:
        console.print(f"[red]Invalid source: {e}[/red]")
        raise typer.Exit(1)

    if new_source.category == Category.PODCAST:
        listing.podcasts.append(new_source)
    else:
        listing.articles.append(new_source)
    save_sources(listing, config.sources_path)

    console.print(f"[green]✅ Added source: {name}[/green]")


@sources_app.command("remove")
def sources_remove(
    name: str = typer.Argument(..., help="Source name to remove"),
    config_path: Optional[Path] = CONFIG_OPTION,
) -> None:
    """Remove a source."""
    config = Config(config_path)
    listing = _load_listing(config)

    original_count = len(listing.all)
    listing.articles = [s for s in listing.articles if s.name != name]
    listing.podcasts = [s for s in listing.podcasts if s.name != name]

    if len(listing.all) == original_count:
        console.print(f"[red]Source '{name}' not found.[/red]")
        raise typer.Exit(1)

    save_sources(listing, config.sources_path)
    console.print(f"[green]✅ Removed source: {name}[/green]")


@sources_app.command("test")
def sources_test(
    name: Optional[str] = typer.Argument(None, help="Source name to test (or test all)"),
    config_path: Optional[Path] = CONFIG_OPTION,
) -> None:
    """Test feed connectivity."""
    config = Config(config_path)
    sources = _load_listing(config).all

    if name:
        sources = [s for s in sources if s.name == name]
        if not sources:
            console.print(f"[red]Source '{name}' not found.[/red]")
            raise typer.Exit(1)

    with httpx.Client(timeout=10.0, follow_redirects=True) as client:
        for source in sources:
            if not source.enabled:
                console.print(f"[yellow]⚠️  {source.name}: Disabled[/yellow]")
                continue

            try:
                response = client.get(source.url)
                response.raise_for_status()
                console.print(f"[green]✅ {source.name}: OK ({response.status_code})[/green]")
            except httpx.HTTPError as e:
                console.print(f"[red]❌ {source.name}: Failed - {e}[/red]")
