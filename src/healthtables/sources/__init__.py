"""Per-region source configuration."""

from .models import (
    CrawlTarget,
    FriendlySource,
    Scraper,
    Source,
    NoScraperError,
    UnknownSourceError,
)
from .helpers import (
    parse_number,
    add_county,
    require_properties,
    tested_negative_applied,
    sum_data,
    assert_totals_are_reasonable,
    add_empty_regions,
    TotalsMismatchError,
    MissingColumnError,
)
from .registry import get_sources, get_source

__all__ = [
    "CrawlTarget",
    "FriendlySource",
    "Scraper",
    "Source",
    "NoScraperError",
    "UnknownSourceError",
    "parse_number",
    "add_county",
    "require_properties",
    "tested_negative_applied",
    "sum_data",
    "assert_totals_are_reasonable",
    "add_empty_regions",
    "TotalsMismatchError",
    "MissingColumnError",
    "get_sources",
    "get_source",
]
