"""Source fetching: feeds and video channels."""

from .models import FetchResult
from .rss_fetcher import RSSFetcher, parse_feed, print_fetch_summary
from .youtube_fetcher import YouTubeFetcher

__all__ = [
    "FetchResult",
    "RSSFetcher",
    "YouTubeFetcher",
    "parse_feed",
    "print_fetch_summary",
]
