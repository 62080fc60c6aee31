"""Helpers shared by source scrapers."""

import re
from typing import Any, Iterable, Optional, Union

from ..config import settings
from ..mapping import ColumnIndexMap, SchemaProperty

Number = Union[int, float]

_NUMBER_CHARS = re.compile(r"[^\d.\-]")
_NON_WORD = re.compile(r"[^\w\s.'-]")
_WHITESPACE = re.compile(r"\s+")

# Fields that are never summed into totals.
_LOCATION_FIELDS = {SchemaProperty.COUNTY.value, SchemaProperty.STATE.value}


class TotalsMismatchError(ValueError):
    """Raised when computed totals disagree with a scraped totals row."""

    pass


class MissingColumnError(ValueError):
    """Raised when a table lacks a column the scraper cannot do without."""

    pass


def parse_number(text: Any) -> Optional[Number]:
    """
    Parse a scraped number.

    ``"1,234"`` gives ``1234``, ``"12.5%"`` gives ``12.5``; empty cells and
    dashes give None.

    Raises:
        ValueError: the text contains no digits
    """
    if text is None:
        return None
    if isinstance(text, (int, float)):
        return text
    stripped = str(text).strip()
    if stripped in ("", "-", "--", "—", "N/A", "n/a"):
        return None
    cleaned = _NUMBER_CHARS.sub("", stripped)
    if not re.search(r"\d", cleaned):
        raise ValueError(f"Not a number: {text!r}")
    if "." in cleaned:
        return float(cleaned)
    return int(cleaned)


def add_county(name: str) -> str:
    """Normalize a county name and make sure it ends with ``County``."""
    cleaned = _WHITESPACE.sub(" ", _NON_WORD.sub("", name)).strip()
    if not cleaned.lower().endswith(" county"):
        cleaned = f"{cleaned} County"
    return cleaned


def require_properties(indices: ColumnIndexMap, *props: SchemaProperty) -> None:
    """Fail when resolved indices lack properties a scraper needs."""
    missing = [p.value for p in props if p not in indices]
    if missing:
        raise MissingColumnError(f"Table has no column for: {', '.join(missing)}")


def tested_negative_applied(data: dict[str, Any]) -> dict[str, Any]:
    """Derive ``tested`` from ``cases`` + ``testedNegative`` when present."""
    result = dict(data)
    negative = result.pop(SchemaProperty.TESTED_NEGATIVE.value, None)
    if negative is not None:
        result[SchemaProperty.TESTED.value] = (result.get(SchemaProperty.CASES.value) or 0) + negative
    return result


def sum_data(rows: Iterable[dict[str, Any]]) -> dict[str, Number]:
    """Sum every numeric field across rows, skipping location fields."""
    totals: dict[str, Number] = {}
    for row in rows:
        for key, value in row.items():
            if key in _LOCATION_FIELDS or isinstance(value, bool):
                continue
            if isinstance(value, (int, float)):
                totals[key] = totals.get(key, 0) + value
    return totals


def assert_totals_are_reasonable(
    computed: Optional[Number],
    scraped: Optional[Number],
    tolerance: Optional[float] = None,
) -> None:
    """
    Cross-check a computed total against the scraped totals row.

    Raises:
        TotalsMismatchError: the two differ by more than ``tolerance`` of
            the scraped value
    """
    if tolerance is None:
        tolerance = settings.totals_tolerance
    if computed is None or scraped is None:
        raise TotalsMismatchError(f"Cannot compare totals: computed={computed}, scraped={scraped}")
    if abs(computed - scraped) > tolerance * abs(scraped):
        raise TotalsMismatchError(
            f"Computed total {computed} differs from scraped total {scraped} "
            f"by more than {tolerance:.0%}"
        )


def add_empty_regions(rows: list[dict[str, Any]], names: Iterable[str], key: str) -> list[dict[str, Any]]:
    """Append a bare ``{key: name}`` row for every region missing from rows."""
    present = {row.get(key) for row in rows}
    return rows + [{key: name} for name in names if name not in present]
