"""HTTP helpers with a small retry budget."""

import asyncio
from typing import Any, Dict, Optional

import httpx


async def _get_with_retries(
    client: httpx.AsyncClient,
    url: str,
    params: Optional[Dict[str, Any]] = None,
    retries: int = 2,
    backoff: float = 0.4,
    timeout: Optional[float] = None,
) -> httpx.Response:
    """GET ``url``; retry on transport, status and timeout errors, re-raising the last one.

    ``timeout`` bounds each whole attempt, body included.
    """
    attempt = 0
    while True:
        try:
            response = await asyncio.wait_for(client.get(url, params=params), timeout)
            response.raise_for_status()
            return response
        except (httpx.HTTPError, asyncio.TimeoutError):
            if attempt >= retries:
                raise
            attempt += 1
            await asyncio.sleep(backoff * attempt)


async def fetch_text(
    client: httpx.AsyncClient,
    url: str,
    retries: int = 2,
    backoff: float = 0.4,
    timeout: Optional[float] = None,
) -> str:
    response = await _get_with_retries(
        client, url, retries=retries, backoff=backoff, timeout=timeout
    )
    return response.text


async def fetch_json(
    client: httpx.AsyncClient,
    url: str,
    params: Optional[Dict[str, Any]] = None,
    retries: int = 2,
    backoff: float = 0.4,
    timeout: Optional[float] = None,
) -> Any:
    response = await _get_with_retries(
        client, url, params=params, retries=retries, backoff=backoff, timeout=timeout
    )
    return response.json()
