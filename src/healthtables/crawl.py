"""Fetching and caching of source pages."""

import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import date
from pathlib import Path
from typing import AsyncIterator, Optional

import httpx

from .config import settings
from .sources import Scraper, Source

logger = logging.getLogger(__name__)


class CacheMissError(FileNotFoundError):
    """Raised when a page for a past date was never crawled."""

    pass


class Crawler:
    """Fetches crawl targets and keeps a per-date copy on disk."""

    def __init__(
        self,
        cache_dir: Optional[Path] = None,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.cache_dir = Path(cache_dir or settings.cache_dir)
        self.timeout = timeout or settings.request_timeout_seconds
        self.user_agent = user_agent or settings.user_agent
        self._client = client

    def cache_path(self, source: Source, day: date, name: str) -> Path:
        return self.cache_dir / source.key / day.isoformat() / f"{name}.html"

    async def crawl(self, source: Source, scraper: Scraper, day: date, live: bool) -> dict[str, str]:
        """
        Get every page a scraper needs.

        Live crawls fetch the pages and cache them; otherwise the cached
        copies for ``day`` are read.

        Returns:
            Page HTML keyed by crawl target name
        """
        if not live:
            return {
                t.name: await asyncio.to_thread(self._read_cached, source, day, t.name)
                for t in scraper.crawl
            }

        pages = {}
        async with self._client_session() as client:
            for target in scraper.crawl:
                logger.info(f"Crawling {source.key} {target.name}: {target.url}")
                response = await client.get(target.url)
                response.raise_for_status()
                pages[target.name] = response.text
                await asyncio.to_thread(self._write_cached, source, day, target.name, response.text)
        return pages

    @asynccontextmanager
    async def _client_session(self) -> AsyncIterator[httpx.AsyncClient]:
        # A client passed in by the caller stays open after the crawl.
        if self._client is not None:
            yield self._client
            return
        async with httpx.AsyncClient(
            timeout=self.timeout,
            headers={"User-Agent": self.user_agent},
            follow_redirects=True,
        ) as client:
            yield client

    def _read_cached(self, source: Source, day: date, name: str) -> str:
        path = self.cache_path(source, day, name)
        if not path.exists():
            raise CacheMissError(f"No cached {name} page for {source.key} on {day.isoformat()} ({path})")
        return path.read_text(encoding="utf-8")

    def _write_cached(self, source: Source, day: date, name: str, html: str) -> None:
        path = self.cache_path(source, day, name)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(html, encoding="utf-8")
