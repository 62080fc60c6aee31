"""Data models for extracted tables."""

from pydantic import BaseModel, Field


class TableNotFoundError(Exception):
    """Raised when a page has no table matching the requested criteria."""

    pass


class Table(BaseModel):
    """A table flattened into a grid of cell strings."""

    rows: list[list[str]] = Field(default_factory=list)

    @property
    def headings(self) -> list[str]:
        """The first row, which holds the column headings."""
        if not self.rows:
            raise TableNotFoundError("Table has no rows")
        return self.rows[0]

    @property
    def totals_row(self) -> list[str]:
        """The last row, where sources usually place their totals."""
        if len(self.rows) < 2:
            raise TableNotFoundError("Table has no totals row")
        return self.rows[-1]

    def body(self, skip_totals: bool = False) -> list[list[str]]:
        """Data rows without the heading row (and optionally the totals row)."""
        end = len(self.rows) - 1 if skip_totals else len(self.rows)
        return self.rows[1:end]
