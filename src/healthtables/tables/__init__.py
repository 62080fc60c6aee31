"""Extraction of HTML tables into string grids."""

from .html import normalize_table, find_table, table_to_rows
from .models import Table, TableNotFoundError

__all__ = [
    "normalize_table",
    "find_table",
    "table_to_rows",
    "Table",
    "TableNotFoundError",
]
