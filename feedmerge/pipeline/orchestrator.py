"""Pipeline orchestrator that runs a complete feed build."""

import asyncio
import json
import time
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pendulum
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from ..config import Config, SourcesListing, load_channels, load_sources
from ..ingestion import FetchResult, RSSFetcher, YouTubeFetcher, print_fetch_summary
from ..merge import MergeEngine
from ..models import Collection, RawItem
from ..ranking import QuotaAllocator
from ..snapshot import GuardDecision, SnapshotGuard, SnapshotStore, Strictness, atomic_write_text

console = Console()


class PipelineStage:
    """Represents a pipeline stage."""

    def __init__(self, name: str, description: str):
        self.name = name
        self.description = description
        self.start_time: Optional[float] = None
        self.end_time: Optional[float] = None
        self.success = False
        self.error: Optional[str] = None
        self.stats: Dict = {}

    def start(self):
        """Mark stage as started."""
        self.start_time = time.time()

    def complete(self, stats: Optional[Dict] = None):
        """Mark stage as completed successfully."""
        self.end_time = time.time()
        self.success = True
        if stats:
            self.stats.update(stats)

    def fail(self, error: str):
        """Mark stage as failed."""
        self.end_time = time.time()
        self.success = False
        self.error = error

    @property
    def duration(self) -> float:
        """Get stage duration in seconds."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0


def concat_items(results: List[FetchResult]) -> List[RawItem]:
    """Flatten fetch results in their declared order."""
    items: List[RawItem] = []
    for result in results:
        if result.success:
            items.extend(result.items)
    return items


class PipelineOrchestrator:
    """Orchestrates fetch, merge and publish for one build run."""

    def __init__(
        self,
        config: Config,
        rss_fetcher: Optional[RSSFetcher] = None,
        youtube_fetcher: Optional[YouTubeFetcher] = None,
    ):
        """
        Initialize pipeline orchestrator.

        Args:
            config: Configuration manager
            rss_fetcher: Feed fetcher (default: built from config)
            youtube_fetcher: Video fetcher (default: built when an API key is set)
        """
        self.config = config
        self.rss_fetcher = rss_fetcher or RSSFetcher(config.config.fetch)
        self.youtube_fetcher = youtube_fetcher
        if self.youtube_fetcher is None:
            api_key = config.get_youtube_api_key()
            if api_key:
                self.youtube_fetcher = YouTubeFetcher(
                    api_key, config.config.youtube, config.config.fetch
                )
        self.stages = [
            PipelineStage("sources", "Loading source listings"),
            PipelineStage("fetch", "Fetching feeds and channels"),
            PipelineStage("merge", "Merging, deduplicating and ranking"),
            PipelineStage("publish", "Publishing collection"),
        ]
        self.collection: Optional[Collection] = None
        self.decision: Optional[GuardDecision] = None
        self.total_start_time: Optional[float] = None

    async def _fetch_all(
        self,
        listing: SourcesListing,
        channels: List[str],
    ) -> Tuple[List[FetchResult], List[FetchResult]]:
        """Fan out all fetches; each group keeps its declared order."""
        feeds = self.rss_fetcher.fetch_all_feeds(listing.all)
        if self.youtube_fetcher is not None and channels:
            videos = self.youtube_fetcher.fetch_all_channels(channels)
        else:
            videos = _no_results()
        feed_results, video_results = await asyncio.gather(feeds, videos)
        return feed_results, video_results

    def _save_stage_stats(self, stats_path: Path):
        """Save pipeline stage statistics."""
        stats = {
            "pipeline": {
                "total_duration": time.time() - self.total_start_time if self.total_start_time else 0,
                "completed_at": pendulum.now("UTC").to_iso8601_string(),
                "outcome": self.decision.outcome.value if self.decision else None,
                "success": self.decision.success if self.decision else False,
            },
            "stages": {},
        }

        for stage in self.stages:
            stats["stages"][stage.name] = {
                "duration": stage.duration,
                "success": stage.success,
                "error": stage.error,
                "stats": stage.stats,
            }

        atomic_write_text(stats_path, json.dumps(stats, indent=2) + "\n")

    def _print_summary(self, output_path: Path):
        """Print pipeline execution summary."""
        total_duration = time.time() - self.total_start_time if self.total_start_time else 0

        table = Table(title="Build Summary")
        table.add_column("Stage", style="cyan")
        table.add_column("Status", style="bold")
        table.add_column("Duration", style="yellow")
        table.add_column("Details", style="dim")

        for stage in self.stages:
            status = "[green]✓[/green]" if stage.success else "[red]✗[/red]"
            duration = f"{stage.duration:.1f}s" if stage.duration > 0 else "-"

            details = ""
            if stage.success and stage.stats:
                if stage.name == "sources":
                    details = f"{stage.stats.get('feeds', 0)} feeds, {stage.stats.get('channels', 0)} channels"
                elif stage.name == "fetch":
                    details = f"{stage.stats.get('raw_items', 0)} items, {stage.stats.get('failed_sources', 0)} failed sources"
                elif stage.name == "merge":
                    details = f"{stage.stats.get('selected', 0)} selected, {stage.stats.get('duplicates', 0)} duplicates"
                elif stage.name == "publish":
                    details = f"{stage.stats.get('outcome', '')}: {stage.stats.get('count', 0)} records"
            elif not stage.success:
                details = stage.error or "Failed"

            table.add_row(stage.name.title(), status, duration, details)

        console.print("\n")
        console.print(table)

        if self.decision is not None and self.decision.success:
            console.print(Panel(
                f"[green]✅ Build finished: {self.decision.outcome.value}[/green]\n\n"
                f"Records: {self.decision.count}\n"
                f"Duration: {total_duration:.1f} seconds\n"
                f"Output: {output_path}",
                style="green",
            ))
        else:
            failed_stages = [s.name for s in self.stages if not s.success]
            console.print(Panel(
                f"[red]❌ Build failed![/red]\n\n"
                f"Failed stages: {', '.join(failed_stages) or 'none'}\n"
                f"Duration: {total_duration:.1f} seconds\n"
                f"Output: {output_path}",
                style="red",
            ))

    def run(
        self,
        max_items: Optional[int] = None,
        min_reserved: Optional[int] = None,
        strictness: Optional[Strictness] = None,
        output_path: Optional[Path] = None,
    ) -> bool:
        """
        Run the complete build.

        Returns:
            True if the run is considered successful, False otherwise
        """
        self.total_start_time = time.time()
        build = self.config.config.build
        max_items = build.max_items if max_items is None else max_items
        min_reserved = build.min_reserved if min_reserved is None else min_reserved
        strictness = strictness or build.strictness_on_empty
        output_path = output_path or self.config.output_path

        console.print(Panel.fit(
            f"📰 feedmerge build\n"
            f"Max items: {max_items} • Reserved {build.privileged_category.value}: {min_reserved} "
            f"• On empty: {Strictness(strictness).value}",
            style="bold blue",
        ))

        store = SnapshotStore(output_path)
        prior = store.read()

        try:
            self._execute_pipeline(store, prior, max_items, min_reserved, strictness)
        finally:
            stats_path = self.config.stats_path
            if stats_path is not None:
                self._save_stage_stats(stats_path)
            self._print_summary(output_path)

        return self.decision is not None and self.decision.success

    def _execute_pipeline(self, store, prior, max_items, min_reserved, strictness) -> None:
        """Execute the pipeline stages."""
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            TimeElapsedColumn(),
            console=console,
        ) as progress:

            # Stage 1: Load source listings
            stage = self.stages[0]
            task = progress.add_task(stage.description, total=1)
            stage.start()

            try:
                allocator = QuotaAllocator(
                    max_items=max_items,
                    min_reserved=min_reserved,
                    privileged_category=self.config.config.build.privileged_category,
                    fill_from_all_categories=self.config.config.build.fill_from_all_categories,
                )
                listing = load_sources(self.config.sources_path)
                channels = load_channels(self.config.channels_path)
                if self.youtube_fetcher is None and channels:
                    console.print("[dim]No YouTube API key set; skipping video channels[/dim]")

                stage.complete({
                    "feeds": len(listing.enabled),
                    "channels": len(channels),
                    "has_prior": prior is not None,
                })
                progress.advance(task, 1)

            except (FileNotFoundError, ValueError) as e:
                stage.fail(str(e))
                return

            # Stage 2: Fetch feeds and channels
            stage = self.stages[1]
            progress.remove_task(task)
            task = progress.add_task(stage.description, total=1)
            stage.start()

            feed_results, video_results = asyncio.run(self._fetch_all(listing, channels))
            results = feed_results + video_results
            raw_items = concat_items(results)

            stage.complete({
                "total_sources": len(results),
                "failed_sources": sum(1 for r in results if not r.success),
                "raw_items": len(raw_items),
            })
            progress.advance(task, 1)

            # Stage 3: Merge
            stage = self.stages[2]
            progress.remove_task(task)
            task = progress.add_task(stage.description, total=1)
            stage.start()

            engine = MergeEngine(allocator)
            self.collection = engine.merge(raw_items)
            stage.complete(engine.stats.model_dump())
            progress.advance(task, 1)

            # Stage 4: Publish through the snapshot guard
            stage = self.stages[3]
            progress.remove_task(task)
            task = progress.add_task(stage.description, total=1)
            stage.start()

            try:
                self.decision = SnapshotGuard(strictness).apply(self.collection, prior, store)
            except OSError as e:
                stage.fail(f"Write failed: {e}")
                return

            stage_stats = {
                "outcome": self.decision.outcome.value,
                "action": self.decision.action.value,
                "count": self.decision.count,
            }
            if self.decision.success:
                stage.complete(stage_stats)
            else:
                stage.stats.update(stage_stats)
                stage.fail(self.decision.warning or "Empty build")
            progress.advance(task, 1)

        if results and any(not r.success for r in results):
            print_fetch_summary(results, title="Fetch Summary")
        if self.decision.warning:
            console.print(f"[yellow]Warning: {self.decision.warning}[/yellow]")


async def _no_results() -> List[FetchResult]:
    return []
