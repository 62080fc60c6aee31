"""Data models for source configuration."""

from datetime import date
from typing import Any, Callable, Optional

from pydantic import BaseModel, Field

# Scrape functions take the crawled pages (by crawl target name) and the
# date being scraped, and return location rows.
ScrapeFunc = Callable[[dict[str, str], date], list[dict[str, Any]]]


class NoScraperError(Exception):
    """Raised when a source has no scraper active for a date."""

    pass


class UnknownSourceError(KeyError):
    """Raised when a source key is not registered."""

    pass


class CrawlTarget(BaseModel):
    """A page a scraper needs."""

    name: str = "default"
    url: str
    type: str = "page"


class FriendlySource(BaseModel):
    """Human-facing description of where the data comes from."""

    name: str
    url: str


class Scraper(BaseModel):
    """One generation of a source's scraping logic."""

    start_date: date
    crawl: list[CrawlTarget]
    scrape: ScrapeFunc


class Source(BaseModel):
    """A data source: one region's reporting pages and how to read them."""

    key: str
    country: str
    state: Optional[str] = None
    aggregate: str = "county"
    priority: int = 0
    friendly: FriendlySource
    maintainers: list[str] = Field(default_factory=list)
    scrapers: list[Scraper]

    def scraper_for(self, day: date) -> Scraper:
        """The most recent scraper whose start date is on or before ``day``."""
        active = [s for s in self.scrapers if s.start_date <= day]
        if not active:
            raise NoScraperError(f"Source {self.key} has no scraper for {day.isoformat()}")
        return max(active, key=lambda s: s.start_date)

    def summary(self) -> dict:
        return {
            "key": self.key,
            "country": self.country,
            "state": self.state,
            "aggregate": self.aggregate,
            "priority": self.priority,
            "friendly": self.friendly.model_dump(),
            "scrapers": [s.start_date.isoformat() for s in self.scrapers],
        }
