"""Heading-to-schema column resolution."""

from .models import (
    SchemaProperty,
    DISCARD,
    ColumnIndexMap,
    Record,
    MappingError,
    InvalidMappingKeyError,
    InvalidMatcherError,
    UnmatchedHeadingError,
    AmbiguousHeadingError,
    DuplicateColumnError,
    IndexOutOfRangeError,
)
from .matchers import Fragment, Pattern, Matcher, slugify
from .validator import SchemaMapping, validate_mapping_keys, ensure_mapping
from .resolver import (
    properties_for_heading,
    property_for_heading,
    property_column_indices,
    normalize_key,
)
from .projector import create_record, create_records
from .legacy import normalize_heading

__all__ = [
    "SchemaProperty",
    "DISCARD",
    "ColumnIndexMap",
    "Record",
    "MappingError",
    "InvalidMappingKeyError",
    "InvalidMatcherError",
    "UnmatchedHeadingError",
    "AmbiguousHeadingError",
    "DuplicateColumnError",
    "IndexOutOfRangeError",
    "Fragment",
    "Pattern",
    "Matcher",
    "slugify",
    "SchemaMapping",
    "validate_mapping_keys",
    "ensure_mapping",
    "properties_for_heading",
    "property_for_heading",
    "property_column_indices",
    "normalize_key",
    "create_record",
    "create_records",
    "normalize_heading",
]
