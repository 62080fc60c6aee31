"""Resolution of table headings to schema properties and column indices."""

import logging
from typing import Any, Mapping, Optional, Sequence, Union

from .matchers import any_match
from .models import (
    AmbiguousHeadingError,
    ColumnIndexMap,
    DISCARD,
    DuplicateColumnError,
    SchemaProperty,
    UnmatchedHeadingError,
)
from .validator import SchemaMapping, ensure_mapping

logger = logging.getLogger(__name__)

MappingLike = Union[SchemaMapping, Mapping[Any, Any]]


def properties_for_heading(heading: str, mapping: SchemaMapping) -> list[Optional[SchemaProperty]]:
    """Get every property (DISCARD included) whose matchers match a heading."""
    return [prop for prop, matchers in mapping.items() if any_match(matchers, heading)]


def property_for_heading(heading: str, mapping: SchemaMapping) -> Optional[SchemaProperty]:
    """
    Resolve a heading to a single property.

    DISCARD only wins when it is the sole match; a heading matching a real
    property and DISCARD resolves to the real property.

    Raises:
        UnmatchedHeadingError: nothing in the mapping matches the heading
        AmbiguousHeadingError: two or more real properties match
    """
    props = properties_for_heading(heading, mapping)
    if not props:
        raise UnmatchedHeadingError(heading, mapping)

    real_props = [p for p in props if p is not DISCARD]
    if not real_props:
        return DISCARD
    if len(real_props) > 1:
        raise AmbiguousHeadingError(heading, real_props)
    return real_props[0]


def property_column_indices(headings: Sequence[str], mapping: MappingLike) -> ColumnIndexMap:
    """
    Find the column index of each property in a table's headings.

    Example:

        headings = ["apples", "bats", "cats", "dogs"]
        mapping = {
            "cases": ["apples", "ants"],
            "deaths": [re.compile("^d"), "elephants"],
            None: ["bats", "cats"],
        }

    returns ``{cases: 0, deaths: 3}``. Columns resolving to DISCARD (key
    ``None`` or ``"null"``) are left out of the result, as are properties
    with no matching heading.

    Raises:
        InvalidMappingKeyError: the mapping names an unknown property
        UnmatchedHeadingError: a heading matches nothing
        AmbiguousHeadingError: a heading matches several properties
        DuplicateColumnError: two headings resolve to the same property
    """
    schema_mapping = ensure_mapping(mapping)
    result: ColumnIndexMap = {}
    for index, heading in enumerate(headings):
        prop = property_for_heading(heading, schema_mapping)
        if prop is DISCARD:
            continue
        if prop in result:
            raise DuplicateColumnError(prop, result[prop], index)
        result[prop] = index

    logger.debug(
        f"Resolved {len(headings)} headings to "
        f"{ {p.value: i for p, i in result.items()} }"
    )
    return result


def normalize_key(heading: str, mapping: MappingLike) -> Optional[SchemaProperty]:
    """Resolve a single heading (or row label) to its schema property."""
    return property_for_heading(heading, ensure_mapping(mapping))
