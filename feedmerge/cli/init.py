"""Init command implementation."""

from pathlib import Path
from typing import List

import typer
from rich.console import Console
from rich.panel import Panel

from ..config import ConfigModel, SourceConfig, SourcesListing, save_channels, save_config, save_sources
from ..config.loader import DEFAULT_CONFIG_NAME
from ..models import Category

console = Console()


def create_default_sources() -> SourcesListing:
    """Create a starter listing of article and podcast feeds."""
    return SourcesListing(
        articles=[
            SourceConfig(
                name="Hacker News",
                url="https://hnrss.org/frontpage",
                category=Category.ARTICLE,
            ),
            SourceConfig(
                name="Ars Technica",
                url="https://feeds.arstechnica.com/arstechnica/index",
                category=Category.ARTICLE,
            ),
        ],
        podcasts=[
            SourceConfig(
                name="Talk Python To Me",
                url="https://talkpython.fm/episodes/rss",
                category=Category.PODCAST,
            ),
        ],
    )


def create_default_channels() -> List[str]:
    """Create a starter list of YouTube channel ids."""
    return ["UCsBjURrPoezykLs9EqgamOA"]


def init_command(
    directory: Path = typer.Option(
        Path("."),
        "--dir",
        "-d",
        help="Directory to initialize",
    ),
    seed_sources: bool = typer.Option(
        True,
        "--seed-sources/--no-seed-sources",
        help="Seed a starter set of sources",
    ),
    force: bool = typer.Option(False, "--force", help="Overwrite existing files"),
) -> None:
    """Create feedmerge.yaml, sources.yaml and youtube_channels.json."""
    console.print(Panel.fit("📰 feedmerge - Initialization", style="bold blue"))

    directory.mkdir(parents=True, exist_ok=True)
    config = ConfigModel()
    config_path = directory / DEFAULT_CONFIG_NAME
    sources_path = directory / config.sources_path
    channels_path = directory / config.channels_path

    existing = [p for p in (config_path, sources_path, channels_path) if p.exists()]
    if existing and not force:
        for path in existing:
            console.print(f"[red]Already exists: {path}[/red]")
        console.print("Use --force to overwrite.")
        raise typer.Exit(1)

    save_config(config, config_path)
    console.print(f"✅ Created config: {config_path}")

    listing = create_default_sources() if seed_sources else SourcesListing()
    save_sources(listing, sources_path)
    console.print(f"✅ Created sources: {sources_path} ({len(listing.all)} feeds)")

    channels = create_default_channels() if seed_sources else []
    save_channels(channels, channels_path)
    console.print(f"✅ Created channels: {channels_path} ({len(channels)} channels)")

    console.print(
        Panel(
            f"[green]✅ feedmerge initialized![/green]\n\n"
            f"Configuration: {config_path}\n"
            f"Sources: {sources_path}\n"
            f"Channels: {channels_path}\n\n"
            f"Next steps:\n"
            f"1. Set YouTube API key: [bold]export YT_API_KEY=your_key[/bold]\n"
            f"2. Run: [bold]feedmerge build[/bold]",
            style="green",
        )
    )
