"""Configuration management for feedmerge."""

from .loader import (
    Config,
    load_channels,
    load_config,
    load_sources,
    save_channels,
    save_config,
    save_sources,
)
from .models import (
    BuildConfig,
    ConfigModel,
    FetchConfig,
    SourceConfig,
    SourcesListing,
    YouTubeConfig,
)

__all__ = [
    "BuildConfig",
    "Config",
    "ConfigModel",
    "FetchConfig",
    "SourceConfig",
    "SourcesListing",
    "YouTubeConfig",
    "load_channels",
    "load_config",
    "load_sources",
    "save_channels",
    "save_config",
    "save_sources",
]
