"""RSS/Atom feed fetcher with concurrent processing."""

import asyncio
from typing import List, Optional

import feedparser
import httpx
from rich.console import Console

from ..config import FetchConfig, SourceConfig
from ..models import ArticleRaw, Category, PodcastRaw
from .http import fetch_text
from .models import FetchResult

console = Console()

RAW_TYPES = {
    Category.ARTICLE: ArticleRaw,
    Category.PODCAST: PodcastRaw,
}


def parse_feed(text: str, source: SourceConfig) -> FetchResult:
    """Parse feed markup into raw items for ``source``."""
    feed = feedparser.parse(text)

    if feed.bozo and not feed.entries:
        return FetchResult(
            source_name=source.name,
            source_url=source.url,
            category=source.category,
            success=False,
            error=f"Invalid feed: {feed.bozo_exception}",
        )

    raw_type = RAW_TYPES[source.category]
    items = [
        raw_type(origin=source.name, region=source.region, data=dict(entry))
        for entry in feed.entries
    ]
    return FetchResult(
        source_name=source.name,
        source_url=source.url,
        category=source.category,
        success=True,
        items=items,
        item_count=len(items),
    )


class RSSFetcher:
    """Fetch and parse article and podcast feeds."""

    def __init__(
        self,
        config: Optional[FetchConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialize feed fetcher.

        Args:
            config: Timeout, retry and concurrency settings
            transport: Optional httpx transport (used by tests)
        """
        self.config = config or FetchConfig()
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.config.timeout,
            follow_redirects=True,
            headers={"User-Agent": self.config.user_agent},
            transport=self.transport,
        )

    async def fetch_feed(self, client: httpx.AsyncClient, source: SourceConfig) -> FetchResult:
        """Fetch and parse a single feed; failures yield an unsuccessful result."""
        try:
            text = await fetch_text(
                client,
                source.url,
                retries=self.config.retries,
                backoff=self.config.backoff,
                timeout=self.config.timeout,
            )
            return parse_feed(text, source)
        except httpx.HTTPError as e:
            error = f"HTTP error: {e}"
        except asyncio.TimeoutError:
            error = f"Timed out after {self.config.timeout}s"
        except Exception as e:
            error = f"Unexpected error: {e}"

        return FetchResult(
            source_name=source.name,
            source_url=source.url,
            category=source.category,
            success=False,
            error=error,
        )

    async def fetch_all_feeds(self, sources: List[SourceConfig]) -> List[FetchResult]:
        """Fetch all enabled feeds concurrently; results keep the listing order."""
        enabled_sources = [s for s in sources if s.enabled]

        if not enabled_sources:
            return []

        semaphore = asyncio.Semaphore(self.config.max_concurrent)

        async with self._client() as client:

            async def fetch_with_semaphore(source: SourceConfig) -> FetchResult:
                async with semaphore:
                    return await self.fetch_feed(client, source)

            tasks = [fetch_with_semaphore(source) for source in enabled_sources]
            return list(await asyncio.gather(*tasks))


def print_fetch_summary(results: List[FetchResult], title: str = "Feed Summary") -> None:
    """Print summary of fetch results."""
    total_items = sum(r.item_count for r in results)
    successful = sum(1 for r in results if r.success)
    failed = len(results) - successful

    console.print(f"\n[bold]{title}:[/bold]")
    console.print(f"  Sources fetched: {len(results)}")
    console.print(f"  Successful: [green]{successful}[/green]")
    console.print(f"  Failed: [red]{failed}[/red]")
    console.print(f"  Total items: {total_items}")

    if failed > 0:
        console.print(f"\n[bold red]Failed sources:[/bold red]")
        for result in results:
            if not result.success:
                console.print(f"  - {result.source_name}: {result.error}")
