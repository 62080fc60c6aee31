"""Oregon Health Authority county table."""

import logging
from datetime import date
from typing import Any

from ..mapping import SchemaProperty, create_record, property_column_indices
from ..tables import normalize_table
from .helpers import (
    add_county,
    add_empty_regions,
    assert_totals_are_reasonable,
    parse_number,
    require_properties,
    sum_data,
    tested_negative_applied,
)
from .models import CrawlTarget, FriendlySource, Scraper, Source

logger = logging.getLogger(__name__)

MAPPING = {
    "cases": ["cases", "positive"],
    "county": "county",
    "deaths": "deaths",
    "testedNegative": "negative",
    None: "percent",
}

ALL_COUNTIES = [
    "Baker County",
    "Benton County",
    "Clackamas County",
    "Clatsop County",
    "Columbia County",
    "Coos County",
    "Crook County",
    "Curry County",
    "Deschutes County",
    "Douglas County",
    "Gilliam County",
    "Grant County",
    "Harney County",
    "Hood River County",
    "Jackson County",
    "Jefferson County",
    "Josephine County",
    "Klamath County",
    "Lake County",
    "Lane County",
    "Lincoln County",
    "Linn County",
    "Malheur County",
    "Marion County",
    "Morrow County",
    "Multnomah County",
    "Polk County",
    "Sherman County",
    "Tillamook County",
    "Umatilla County",
    "Union County",
    "Wallowa County",
    "Wasco County",
    "Washington County",
    "Wheeler County",
    "Yamhill County",
]

COUNTY = SchemaProperty.COUNTY
CASES = SchemaProperty.CASES
DEATHS = SchemaProperty.DEATHS
TESTED_NEGATIVE = SchemaProperty.TESTED_NEGATIVE


def scrape_county_table(pages: dict[str, str], day: date) -> list[dict[str, Any]]:
    """County rows plus a state total, checked against the totals row."""
    table = normalize_table(pages["table"], contains="County")

    # Heading row first, totals row last.
    indices = property_column_indices(table.headings, MAPPING)
    require_properties(indices, COUNTY, CASES)

    counties = []
    for row in table.body(skip_totals=True):
        data = create_record(indices, row)
        counties.append(
            tested_negative_applied(
                {
                    "county": add_county(data[COUNTY]),
                    "cases": parse_number(data.get(CASES)),
                    "deaths": parse_number(data.get(DEATHS)),
                    "testedNegative": parse_number(data.get(TESTED_NEGATIVE)),
                }
            )
        )

    summed = sum_data(counties)
    counties.append(summed)

    cases_from_totals = parse_number(table.totals_row[indices[CASES]])
    assert_totals_are_reasonable(summed.get("cases"), cases_from_totals)

    logger.info(f"Scraped {len(counties) - 1} Oregon counties for {day.isoformat()}")
    return add_empty_regions(counties, ALL_COUNTIES, "county")


source = Source(
    key="us-or",
    country="iso1:US",
    state="iso2:US-OR",
    aggregate="county",
    priority=2,
    friendly=FriendlySource(
        name="Oregon Health Authority",
        url="https://www.oregon.gov/oha/PH",
    ),
    maintainers=["camjc"],
    scrapers=[
        Scraper(
            start_date=date(2020, 3, 13),
            crawl=[
                CrawlTarget(
                    name="table",
                    url=(
                        "https://www.oregon.gov/oha/PH/DISEASESCONDITIONS/"
                        "DISEASESAZ/Pages/emerging-respiratory-infections.aspx"
                    ),
                )
            ],
            scrape=scrape_county_table,
        )
    ],
)
