"""Tests for page crawling and caching."""

import httpx
import pytest
import pytest_asyncio

from healthtables.crawl import CacheMissError, Crawler
from healthtables.sources import CrawlTarget, us_or


@pytest.fixture
def seen_requests():
    return []


@pytest_asyncio.fixture
async def mock_client(oregon_page, seen_requests):
    """An httpx client answering every request with the Oregon page."""

    def handler(request: httpx.Request) -> httpx.Response:
        seen_requests.append(request)
        if "missing" in str(request.url):
            return httpx.Response(404, text="not found")
        return httpx.Response(200, text=oregon_page)

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    yield client
    await client.aclose()


class TestCrawler:
    """Test live crawls and cache reads."""

    @pytest.mark.asyncio
    async def test_live_crawl_fetches_and_caches(
        self, tmp_path, mock_client, seen_requests, oregon_page, scrape_date
    ):
        crawler = Crawler(cache_dir=tmp_path, client=mock_client)
        scraper = us_or.source.scraper_for(scrape_date)

        pages = await crawler.crawl(us_or.source, scraper, scrape_date, live=True)

        assert pages == {"table": oregon_page}
        assert len(seen_requests) == 1
        cached = crawler.cache_path(us_or.source, scrape_date, "table")
        assert cached == tmp_path / "us-or" / "2020-04-01" / "table.html"
        assert cached.read_text(encoding="utf-8") == oregon_page

    @pytest.mark.asyncio
    async def test_cached_crawl_reads_disk(self, cached_oregon_page, oregon_page, scrape_date):
        crawler = Crawler(cache_dir=cached_oregon_page)
        scraper = us_or.source.scraper_for(scrape_date)

        pages = await crawler.crawl(us_or.source, scraper, scrape_date, live=False)

        assert pages == {"table": oregon_page}

    @pytest.mark.asyncio
    async def test_cache_miss_raises(self, tmp_path, scrape_date):
        crawler = Crawler(cache_dir=tmp_path)
        scraper = us_or.source.scraper_for(scrape_date)

        with pytest.raises(CacheMissError):
            await crawler.crawl(us_or.source, scraper, scrape_date, live=False)

    @pytest.mark.asyncio
    async def test_http_errors_propagate(self, tmp_path, mock_client, scrape_date):
        scraper = us_or.source.scraper_for(scrape_date).model_copy(
            update={"crawl": [CrawlTarget(name="table", url="https://example.com/missing")]}
        )
        crawler = Crawler(cache_dir=tmp_path, client=mock_client)

        with pytest.raises(httpx.HTTPStatusError):
            await crawler.crawl(us_or.source, scraper, scrape_date, live=True)
        assert not (tmp_path / "us-or").exists()

    @pytest.mark.asyncio
    async def test_borrowed_client_stays_open(self, tmp_path, mock_client, scrape_date):
        crawler = Crawler(cache_dir=tmp_path, client=mock_client)
        scraper = us_or.source.scraper_for(scrape_date)

        await crawler.crawl(us_or.source, scraper, scrape_date, live=True)

        assert not mock_client.is_closed
