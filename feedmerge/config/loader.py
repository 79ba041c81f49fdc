"""Configuration loader."""

import json
import os
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import ValidationError
from rich.console import Console

from ..models import Category
from .models import ConfigModel, SourceConfig, SourcesListing

console = Console()

DEFAULT_CONFIG_NAME = "feedmerge.yaml"

# Listing sections and the category their entries default to
SECTIONS = {
    "articles": Category.ARTICLE,
    "podcasts": Category.PODCAST,
}


class Config:
    """Configuration manager."""

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """Initialize config manager."""
        if config_path is None:
            config_path = Path.cwd() / DEFAULT_CONFIG_NAME
        self.config_path = Path(config_path)
        self._config: Optional[ConfigModel] = None

    @property
    def config(self) -> ConfigModel:
        """Get loaded config, or defaults when no config file exists."""
        if self._config is None:
            if self.config_path.exists():
                self._config = load_config(self.config_path)
            else:
                self._config = ConfigModel()
        return self._config

    @property
    def base_dir(self) -> Path:
        return self.config_path.parent

    def resolve(self, path: str) -> Path:
        """Resolve a configured path against the config file's directory."""
        resolved = Path(path).expanduser()
        if not resolved.is_absolute():
            resolved = self.base_dir / resolved
        return resolved

    @property
    def sources_path(self) -> Path:
        return self.resolve(self.config.sources_path)

    @property
    def channels_path(self) -> Path:
        return self.resolve(self.config.channels_path)

    @property
    def output_path(self) -> Path:
        return self.resolve(self.config.output_path)

    @property
    def stats_path(self) -> Optional[Path]:
        if not self.config.stats_path:
            return None
        return self.resolve(self.config.stats_path)

    def get_youtube_api_key(self) -> Optional[str]:
        """Get the YouTube API key from the first configured environment variable set."""
        for name in self.config.youtube.api_key_env:
            value = os.environ.get(name)
            if value:
                return value
        return None


def load_config(config_path: Path) -> ConfigModel:
    """Load configuration from YAML file."""
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(config_path, encoding="utf-8") as f:
            config_data = yaml.safe_load(f)

        if config_data is None:
            config_data = {}

        return ConfigModel(**config_data)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in config file: {e}")
    except (TypeError, ValidationError) as e:
        raise ValueError(f"Invalid configuration: {e}")


def _load_section(entries, default_category: Category) -> List[SourceConfig]:
    if not isinstance(entries, list):
        return []

    sources = []
    for source_data in entries:
        if not isinstance(source_data, dict):
            console.print(f"[yellow]Skipping invalid source entry: {source_data!r}[/yellow]")
            continue
        data = {"category": default_category, **source_data}
        if data.get("region") is None:
            data.pop("region", None)
        try:
            sources.append(SourceConfig(**data))
        except ValidationError as e:
            console.print(
                f"[yellow]Skipping invalid source {source_data.get('name', 'unknown')}: {e}[/yellow]"
            )
    return sources


def load_sources(sources_path: Path) -> SourcesListing:
    """Load article and podcast sources from YAML file."""
    if not sources_path.exists():
        raise FileNotFoundError(f"Sources file not found: {sources_path}")

    try:
        with open(sources_path, encoding="utf-8") as f:
            sources_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in sources file: {e}")

    if not isinstance(sources_data, dict):
        return SourcesListing()

    return SourcesListing(
        **{
            section: _load_section(sources_data.get(section), category)
            for section, category in SECTIONS.items()
        }
    )


def load_channels(channels_path: Path) -> List[str]:
    """Load YouTube channel ids; an unreadable file means no channels."""
    try:
        entries = json.loads(channels_path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return []

    if not isinstance(entries, list):
        return []

    channels = []
    for entry in entries:
        channel_id = entry if isinstance(entry, str) else None
        if isinstance(entry, dict):
            channel_id = entry.get("channelId")
        if channel_id:
            channels.append(channel_id)
    return channels


def save_config(config: ConfigModel, config_path: Path) -> None:
    """Save configuration to YAML file."""
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(config.model_dump(mode="json"), f, default_flow_style=False, sort_keys=False)


def save_sources(listing: SourcesListing, sources_path: Path) -> None:
    """Save sources to YAML file."""
    sources_path.parent.mkdir(parents=True, exist_ok=True)

    sources_data = {
        section: [
            s.model_dump(mode="json", exclude={"category"})
            if s.category == category
            else s.model_dump(mode="json")
            for s in getattr(listing, section)
        ]
        for section, category in SECTIONS.items()
    }

    with open(sources_path, "w", encoding="utf-8") as f:
        yaml.dump(sources_data, f, default_flow_style=False, sort_keys=False)


def save_channels(channels: List[str], channels_path: Path) -> None:
    """Save YouTube channel ids to JSON file."""
    channels_path.parent.mkdir(parents=True, exist_ok=True)
    channels_path.write_text(json.dumps(channels, indent=2) + "\n", encoding="utf-8")
