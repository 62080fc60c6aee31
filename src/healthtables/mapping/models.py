"""Data models and errors for heading-to-schema mapping."""

from enum import Enum
from typing import Any, Optional


class SchemaProperty(str, Enum):
    """Epidemiological fields a table column can be mapped onto."""

    ACTIVE = "active"
    CASES = "cases"
    COUNTY = "county"
    DEATHS = "deaths"
    HOSPITALIZED = "hospitalized"
    ICU = "icu"
    RECOVERED = "recovered"
    STATE = "state"
    TESTED = "tested"
    # Not in the final schema; combined with cases to derive `tested`.
    TESTED_NEGATIVE = "testedNegative"


# Mapping key for headings that are recognized but ignored.
DISCARD = None

# Spelling of DISCARD in mappings authored as JSON.
DISCARD_KEY = "null"

ColumnIndexMap = dict[SchemaProperty, int]
Record = dict[SchemaProperty, Any]


def property_name(prop: Optional[SchemaProperty]) -> str:
    """Display name of a property, with DISCARD rendered as ``null``."""
    return DISCARD_KEY if prop is None else prop.value


class MappingError(Exception):
    """Base class for every mapping failure."""


class InvalidMappingKeyError(MappingError, ValueError):
    """Raised when a mapping names something outside the schema."""

    def __init__(self, keys: list[Any], label: str = "keys"):
        self.keys = keys
        super().__init__(f"Invalid {label} in mapping: {','.join(str(k) for k in keys)}")


class InvalidMatcherError(MappingError, TypeError):
    """Raised when a mapping value is neither a fragment nor a pattern."""

    def __init__(self, key: Any, matcher: Any):
        self.key = key
        self.matcher = matcher
        super().__init__(
            f"Invalid matcher for {key}: {matcher!r} "
            f"(expected a string fragment or a compiled pattern)"
        )


class UnmatchedHeadingError(MappingError):
    """Raised when no mapping entry matches a heading."""

    def __init__(self, heading: str, mapping: Any):
        self.heading = heading
        self.mapping = mapping
        super().__init__(f"No matches for {heading} in mapping {mapping}")


class AmbiguousHeadingError(MappingError):
    """Raised when a heading matches more than one real property."""

    def __init__(self, heading: str, properties: list[Optional[SchemaProperty]]):
        self.heading = heading
        self.properties = properties
        names = ", ".join(property_name(p) for p in properties)
        super().__init__(f"Multiple matches for {heading} in mapping: {names}")


class DuplicateColumnError(MappingError):
    """Raised when two columns resolve to the same property."""

    def __init__(self, prop: SchemaProperty, first_index: int, second_index: int):
        self.property = prop
        self.first_index = first_index
        self.second_index = second_index
        super().__init__(
            f"Duplicate mapping of {prop.value} to indices {first_index} and {second_index}"
        )


class IndexOutOfRangeError(MappingError, IndexError):
    """Raised when a row is too short for a resolved column index."""

    def __init__(self, prop: SchemaProperty, index: int, row: list[Any]):
        self.property = prop
        self.index = index
        self.row = row
        super().__init__(f"{prop.value} (index {index}) out of range for {row!r}")
