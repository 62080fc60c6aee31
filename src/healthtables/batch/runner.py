"""Bounded-concurrency crawl-then-scrape over many sources and dates."""

import asyncio
import logging
import time
from datetime import date, timedelta
from typing import Optional

from ..config import settings
from ..crawl import Crawler
from ..sources import Source
from .models import BatchResult, JobResult, JobStatus
from .status import StatusBoard, StatusReporter

logger = logging.getLogger(__name__)


def get_dates(start: Optional[date] = None, end: Optional[date] = None, today: Optional[date] = None) -> list[date]:
    """
    Dates to generate.

    With no start date only today is generated; otherwise every day from
    ``start`` through ``end`` (default today), inclusive.
    """
    today = today or date.today()
    if start is None:
        return [today]
    end = end or today
    if end < start:
        raise ValueError(f"End date {end.isoformat()} is before start date {start.isoformat()}")
    return [start + timedelta(days=n) for n in range((end - start).days + 1)]


class BatchRunner:
    """Runs one isolated job per source and date under a concurrency limit."""

    def __init__(
        self,
        sources: list[Source],
        crawler: Optional[Crawler] = None,
        max_concurrency: Optional[int] = None,
        status_interval_seconds: Optional[float] = None,
        live: bool = False,
    ):
        self.sources = sources
        self.crawler = crawler or Crawler()
        self.max_concurrency = max(
            1, settings.max_concurrency if max_concurrency is None else max_concurrency
        )
        self.live = live
        self.board = StatusBoard()
        self.reporter = StatusReporter(
            self.board,
            status_interval_seconds or settings.status_interval_seconds,
        )

    async def run(self, dates: list[date]) -> BatchResult:
        """Generate every source for every date, one date at a time."""
        batch = BatchResult()
        for day in dates:
            for result in await self.run_date(day):
                batch.add(result)
        logger.info(
            f"Batch finished: {len(batch.succeeded)} succeeded, {len(batch.failed)} failed"
        )
        return batch

    async def run_date(self, day: date) -> list[JobResult]:
        """Run all sources for one date; a failing source does not stop the others."""
        self.board.reset(day, [s.key for s in self.sources])
        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def _task(source: Source) -> JobResult:
            async with semaphore:
                return await self.run_job(source, day)

        self.reporter.start()
        try:
            results = await asyncio.gather(*[_task(s) for s in self.sources])
        finally:
            await self.reporter.stop()
        return list(results)

    async def run_job(self, source: Source, day: date) -> JobResult:
        """Crawl then scrape a single source, recording failure instead of raising."""
        started = time.monotonic()
        try:
            scraper = source.scraper_for(day)

            self.board.set(source.key, JobStatus.CRAWLING)
            pages = await self.crawler.crawl(source, scraper, day, live=self.live)

            self.board.set(source.key, JobStatus.SCRAPING)
            locations = await asyncio.to_thread(scraper.scrape, pages, day)
        except Exception as e:
            logger.exception(f"Source {source.key} failed for {day.isoformat()}: {e}")
            self.board.set(source.key, JobStatus.FAILED)
            return JobResult(
                source=source.key,
                date=day,
                status=JobStatus.FAILED,
                error=f"{type(e).__name__}: {e}",
                duration_ms=(time.monotonic() - started) * 1000,
            )

        self.board.set(source.key, JobStatus.DONE)
        return JobResult(
            source=source.key,
            date=day,
            status=JobStatus.DONE,
            locations=locations,
            duration_ms=(time.monotonic() - started) * 1000,
        )
