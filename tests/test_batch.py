"""Tests for the batch driver, status reporting and result files."""

import asyncio
import json
import time
from datetime import date, datetime

import pytest

from healthtables.batch import (
    BatchResult,
    BatchRunner,
    JobResult,
    JobStatus,
    ResultWriter,
    StatusBoard,
    get_dates,
)
from healthtables.crawl import Crawler
from healthtables.sources import CrawlTarget, FriendlySource, Scraper, Source, us_or


def make_source(key, scrape, start=date(2020, 1, 1)) -> Source:
    return Source(
        key=key,
        country="iso1:US",
        friendly=FriendlySource(name=key, url=f"https://example.com/{key}"),
        scrapers=[
            Scraper(
                start_date=start,
                crawl=[CrawlTarget(name="table", url=f"https://example.com/{key}")],
                scrape=scrape,
            )
        ],
    )


class StubCrawler:
    """Crawler stand-in that tracks how many crawls run at once."""

    def __init__(self, delay: float = 0.01):
        self.delay = delay
        self.in_flight = 0
        self.max_in_flight = 0
        self.calls = []

    async def crawl(self, source, scraper, day, live):
        self.calls.append((source.key, day, live))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
        finally:
            self.in_flight -= 1
        return {"table": f"<page {source.key}>"}


def ok_scrape(pages, day):
    return [{"county": "A County", "cases": 1}]


def failing_scrape(pages, day):
    raise ValueError("table changed shape")


def slow_scrape(pages, day):
    time.sleep(0.3)
    return ok_scrape(pages, day)


class TestGetDates:
    """Test date range generation."""

    def test_today_only_without_start(self):
        assert get_dates(today=date(2020, 5, 5)) == [date(2020, 5, 5)]

    def test_range_to_today(self):
        dates = get_dates(date(2020, 5, 1), today=date(2020, 5, 3))
        assert dates == [date(2020, 5, 1), date(2020, 5, 2), date(2020, 5, 3)]

    def test_range_with_end(self):
        dates = get_dates(date(2020, 5, 1), date(2020, 5, 2), today=date(2020, 6, 1))
        assert dates == [date(2020, 5, 1), date(2020, 5, 2)]

    def test_end_before_start(self):
        with pytest.raises(ValueError):
            get_dates(date(2020, 5, 2), date(2020, 5, 1))


class TestStatusBoard:
    """Test status tracking and rendering."""

    def test_reset_marks_all_pending(self):
        board = StatusBoard()
        board.reset(date(2020, 5, 1), ["a", "b"])
        assert board.get("a") == JobStatus.PENDING
        assert board.counts()[JobStatus.PENDING] == 2

    def test_render_orders_by_status(self):
        board = StatusBoard()
        board.reset(date(2020, 5, 1), ["pend", "done-src", "crawl-src", "bad"])
        board.set("done-src", JobStatus.DONE)
        board.set("crawl-src", JobStatus.CRAWLING)
        board.set("bad", JobStatus.FAILED)

        text = board.render(now=datetime(2020, 5, 1, 9, 30, 0))
        lines = text.splitlines()

        assert lines[1] == "  Current status for 2020-05-01 (09:30:00)"
        body = [line.split(":")[0].strip() for line in lines[2:-1]]
        assert body == ["crawl-src", "done-src", "bad", "pend"]
        assert lines[0] == lines[-1] == "-" * len(lines[1])

    def test_empty_board_renders_nothing(self):
        assert StatusBoard().render() == ""


class TestBatchRunner:
    """Test isolated, bounded-concurrency jobs."""

    @pytest.mark.asyncio
    async def test_failure_is_isolated(self):
        sources = [make_source("good", ok_scrape), make_source("bad", failing_scrape)]
        runner = BatchRunner(sources, crawler=StubCrawler(), max_concurrency=2, status_interval_seconds=0.01)

        batch = await runner.run([date(2020, 5, 1)])

        results = {r.source: r for r in batch.results[date(2020, 5, 1)]}
        assert results["good"].status == JobStatus.DONE
        assert results["good"].locations == [{"county": "A County", "cases": 1}]
        assert results["bad"].status == JobStatus.FAILED
        assert results["bad"].error == "ValueError: table changed shape"
        assert runner.board.get("bad") == JobStatus.FAILED
        assert runner.board.get("good") == JobStatus.DONE

    @pytest.mark.asyncio
    async def test_concurrency_ceiling(self):
        crawler = StubCrawler(delay=0.02)
        sources = [make_source(f"s{i}", ok_scrape) for i in range(6)]
        runner = BatchRunner(sources, crawler=crawler, max_concurrency=2, status_interval_seconds=0.01)

        batch = await runner.run([date(2020, 5, 1)])

        assert crawler.max_in_flight == 2
        assert len(batch.succeeded) == 6

    @pytest.mark.asyncio
    async def test_slow_scrape_does_not_hold_up_siblings(self):
        """Test that parsing in one job leaves the event loop free for the others."""
        sources = [make_source("slow", slow_scrape), make_source("fast", ok_scrape)]
        runner = BatchRunner(sources, crawler=StubCrawler(delay=0.01), max_concurrency=2, status_interval_seconds=0.01)

        batch = await runner.run([date(2020, 5, 1)])

        results = {r.source: r for r in batch.results[date(2020, 5, 1)]}
        assert results["slow"].status == JobStatus.DONE
        assert results["fast"].duration_ms < 200

    def test_zero_concurrency_clamps_to_one(self):
        runner = BatchRunner([], crawler=StubCrawler(), max_concurrency=0)
        assert runner.max_concurrency == 1

    @pytest.mark.asyncio
    async def test_every_date_runs_every_source(self):
        crawler = StubCrawler(delay=0)
        sources = [make_source("a", ok_scrape), make_source("b", ok_scrape)]
        runner = BatchRunner(sources, crawler=crawler, max_concurrency=5, status_interval_seconds=0.01)

        batch = await runner.run([date(2020, 5, 1), date(2020, 5, 2)])

        assert sorted(batch.results) == [date(2020, 5, 1), date(2020, 5, 2)]
        assert len(crawler.calls) == 4
        assert all(live is False for _, _, live in crawler.calls)

    @pytest.mark.asyncio
    async def test_source_without_scraper_fails_alone(self):
        sources = [make_source("late", ok_scrape, start=date(2021, 1, 1)), make_source("a", ok_scrape)]
        runner = BatchRunner(sources, crawler=StubCrawler(delay=0), status_interval_seconds=0.01)

        batch = await runner.run([date(2020, 5, 1)])

        assert [r.source for r in batch.failed] == ["late"]
        assert "NoScraperError" in batch.failed[0].error

    @pytest.mark.asyncio
    async def test_oregon_from_cache(self, cached_oregon_page, scrape_date):
        """Test a real source end to end, reading its page from the crawl cache."""
        runner = BatchRunner(
            [us_or.source],
            crawler=Crawler(cache_dir=cached_oregon_page),
            status_interval_seconds=0.01,
        )

        batch = await runner.run([scrape_date])

        assert batch.failed == []
        result = batch.succeeded[0]
        assert result.locations[0]["county"] == "Baker County"

    @pytest.mark.asyncio
    async def test_cache_miss_marks_failed(self, tmp_path, scrape_date):
        runner = BatchRunner([us_or.source], crawler=Crawler(cache_dir=tmp_path), status_interval_seconds=0.01)

        batch = await runner.run([scrape_date])

        assert "CacheMissError" in batch.failed[0].error


class TestResultWriter:
    """Test flat file output."""

    def test_writes_locations_and_report(self, tmp_path):
        day = date(2020, 5, 1)
        batch = BatchResult()
        batch.add(JobResult(source="a", date=day, status=JobStatus.DONE, locations=[{"county": "X County", "cases": 2}]))
        batch.add(JobResult(source="b", date=day, status=JobStatus.FAILED, error="ValueError: boom"))

        writer = ResultWriter(tmp_path / "out")
        written = writer.write(batch)

        assert written == [writer.locations_path(day), writer.report_path(day)]
        locations = json.loads(writer.locations_path(day).read_text())
        assert locations == [{"county": "X County", "cases": 2, "source": "a", "date": "2020-05-01"}]
        report = json.loads(writer.report_path(day).read_text())
        assert report["a"]["status"] == "done"
        assert report["a"]["locations"] == 1
        assert report["b"] == {"status": "failed", "locations": 0, "error": "ValueError: boom", "duration_ms": 0.0}
