"""Projection of raw table rows into schema-keyed records."""

from typing import Any, Iterable, Sequence

from .models import ColumnIndexMap, IndexOutOfRangeError, Record


def create_record(indices: ColumnIndexMap, row: Sequence[Any]) -> Record:
    """
    Build a record from a row using resolved column indices.

    Cell values are returned as found; parsing is left to the caller.

    Raises:
        IndexOutOfRangeError: an index is negative or past the end of the row
    """
    record: Record = {}
    for prop, index in indices.items():
        if not 0 <= index < len(row):
            raise IndexOutOfRangeError(prop, index, list(row))
        record[prop] = row[index]
    return record


def create_records(indices: ColumnIndexMap, rows: Iterable[Sequence[Any]]) -> list[Record]:
    """Project every row with the same indices."""
    return [create_record(indices, row) for row in rows]
