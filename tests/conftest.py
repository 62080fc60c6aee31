"""Pytest configuration and shared fixtures."""

from datetime import date
from pathlib import Path

import pytest

OREGON_PAGE = """
<html>
  <body>
    <table>
      <tr><td>Updated daily</td><td>Page notes</td></tr>
    </table>
    <table>
      <tr>
        <th>County</th>
        <th>Cases<sup>1</sup></th>
        <th>Total deaths<sup>2</sup></th>
        <th>Negative<sup>3</sup></th>
        <th>Percent of state</th>
      </tr>
      <tr><td>Baker</td><td>1</td><td>0</td><td>10</td><td>20%</td></tr>
      <tr><td>Benton</td><td>4</td><td>0</td><td>1,050</td><td>80%</td></tr>
      <tr><td>Total</td><td>5</td><td>0</td><td>1,060</td><td>100%</td></tr>
    </table>
  </body>
</html>
"""


@pytest.fixture
def oregon_page() -> str:
    """A county table shaped like the Oregon Health Authority page."""
    return OREGON_PAGE


@pytest.fixture
def scrape_date() -> date:
    return date(2020, 4, 1)


@pytest.fixture
def cached_oregon_page(tmp_path: Path, oregon_page: str, scrape_date: date) -> Path:
    """Write the Oregon page into a crawl cache and return the cache root."""
    cache_dir = tmp_path / "cache"
    page_dir = cache_dir / "us-or" / scrape_date.isoformat()
    page_dir.mkdir(parents=True)
    (page_dir / "table.html").write_text(oregon_page, encoding="utf-8")
    return cache_dir
