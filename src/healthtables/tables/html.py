"""HTML table extraction."""

import logging
import re
from typing import Optional

from bs4 import BeautifulSoup, Tag

from .models import Table, TableNotFoundError

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


def cell_text(cell: Tag) -> str:
    """Text of a cell with whitespace collapsed."""
    return _WHITESPACE.sub(" ", cell.get_text(" ")).strip()


def _colspan(cell: Tag) -> int:
    try:
        return max(1, int(cell.get("colspan", 1)))
    except (TypeError, ValueError):
        return 1


def find_table(
    soup: BeautifulSoup,
    contains: Optional[str] = None,
    selector: Optional[str] = None,
    index: int = 0,
) -> Tag:
    """
    Pick a table from a parsed page.

    Args:
        soup: Parsed page
        contains: Only consider tables whose text contains this string
        selector: CSS selector used instead of ``<table>`` lookup
        index: Which of the candidate tables to return

    Raises:
        TableNotFoundError: no candidate table at ``index``
    """
    candidates = soup.select(selector) if selector else soup.find_all("table")
    if contains:
        candidates = [t for t in candidates if contains in t.get_text(" ")]

    if index >= len(candidates):
        raise TableNotFoundError(
            f"No table found (contains={contains!r}, selector={selector!r}, index={index}); "
            f"{len(candidates)} candidates"
        )
    return candidates[index]


def table_to_rows(table: Tag) -> list[list[str]]:
    """Flatten a ``<table>`` into rows of cell strings, expanding colspans."""
    rows = []
    for tr in table.find_all("tr"):
        cells = []
        for cell in tr.find_all(["th", "td"]):
            cells.extend([cell_text(cell)] * _colspan(cell))
        if any(cells):
            rows.append(cells)
    return rows


def normalize_table(
    html: str,
    contains: Optional[str] = None,
    selector: Optional[str] = None,
    index: int = 0,
) -> Table:
    """Parse a page and return one of its tables as a grid of strings."""
    soup = BeautifulSoup(html, "lxml")
    table = table_to_rows(find_table(soup, contains=contains, selector=selector, index=index))
    logger.debug(f"Extracted table with {len(table)} rows")
    return Table(rows=table)
