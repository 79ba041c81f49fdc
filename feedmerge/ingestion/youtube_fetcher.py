"""YouTube channel fetcher using the Data API search endpoint."""

import asyncio
from typing import List, Optional

import httpx
import pendulum

from ..config import FetchConfig, YouTubeConfig
from ..models import Category, VideoRaw
from .http import fetch_json
from .models import FetchResult


class YouTubeFetcher:
    """Fetch recent uploads for a list of channels."""

    def __init__(
        self,
        api_key: str,
        config: Optional[YouTubeConfig] = None,
        fetch_config: Optional[FetchConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_key = api_key
        self.config = config or YouTubeConfig()
        self.fetch_config = fetch_config or FetchConfig()
        self.transport = transport

    def _params(self, channel_id: str, now: pendulum.DateTime) -> dict:
        published_after = now.subtract(days=self.config.lookback_days)
        return {
            "key": self.api_key,
            "channelId": channel_id,
            "part": "snippet",
            "maxResults": str(self.config.max_results),
            "order": "date",
            "type": "video",
            "publishedAfter": published_after.in_timezone("UTC").to_iso8601_string(),
        }

    async def fetch_channel(
        self,
        client: httpx.AsyncClient,
        channel_id: str,
        now: Optional[pendulum.DateTime] = None,
    ) -> FetchResult:
        """Fetch one channel's recent videos; failures yield an unsuccessful result."""
        now = now or pendulum.now("UTC")
        try:
            payload = await fetch_json(
                client,
                self.config.api_url,
                params=self._params(channel_id, now),
                retries=self.fetch_config.retries,
                backoff=self.fetch_config.backoff,
                timeout=self.fetch_config.timeout,
            )
        except httpx.HTTPError as e:
            error = f"HTTP error: {e}"
        except asyncio.TimeoutError:
            error = f"Timed out after {self.fetch_config.timeout}s"
        except ValueError as e:
            error = f"Invalid response: {e}"
        except Exception as e:
            error = f"Unexpected error: {e}"
        else:
            entries = payload.get("items") if isinstance(payload, dict) else None
            items = [
                VideoRaw(origin="YouTube", data=entry)
                for entry in entries or []
                if isinstance(entry, dict)
            ]
            return FetchResult(
                source_name=channel_id,
                source_url=channel_id,
                category=Category.VIDEO,
                success=True,
                items=items,
                item_count=len(items),
            )

        return FetchResult(
            source_name=channel_id,
            source_url=channel_id,
            category=Category.VIDEO,
            success=False,
            error=error,
        )

    async def fetch_all_channels(self, channel_ids: List[str]) -> List[FetchResult]:
        """Fetch all channels concurrently; results keep the listing order."""
        if not channel_ids:
            return []

        semaphore = asyncio.Semaphore(self.fetch_config.max_concurrent)
        now = pendulum.now("UTC")

        async with httpx.AsyncClient(
            timeout=self.fetch_config.timeout,
            headers={"User-Agent": self.fetch_config.user_agent},
            transport=self.transport,
        ) as client:

            async def fetch_with_semaphore(channel_id: str) -> FetchResult:
                async with semaphore:
                    return await self.fetch_channel(client, channel_id, now)

            tasks = [fetch_with_semaphore(channel_id) for channel_id in channel_ids]
            return list(await asyncio.gather(*tasks))
