"""Fragment-keyed heading normalization.

Older source configurations map heading fragments to properties
(``{"positive": "cases", "other": None}``) instead of properties to
matchers. Here every distinct property reached by a matching fragment
counts, DISCARD included, and exactly one must remain.
"""

from typing import Any, Mapping, Optional

from .matchers import slugify
from .models import (
    AmbiguousHeadingError,
    InvalidMappingKeyError,
    SchemaProperty,
    UnmatchedHeadingError,
)
from .validator import invalid_keys, to_property


def validate_mapping_values(fragment_mapping: Mapping[str, Any]) -> None:
    bad = invalid_keys(list(fragment_mapping.values()))
    if bad:
        raise InvalidMappingKeyError(bad, label="values")


def normalize_heading(heading: str, fragment_mapping: Mapping[str, Any]) -> Optional[SchemaProperty]:
    """Resolve a heading through a fragment -> property mapping."""
    validate_mapping_values(fragment_mapping)

    slug_heading = slugify(heading)
    mapped: list[Optional[SchemaProperty]] = []
    for fragment, value in fragment_mapping.items():
        prop = to_property(value)
        if slugify(fragment) in slug_heading and prop not in mapped:
            mapped.append(prop)

    if not mapped:
        raise UnmatchedHeadingError(slug_heading, dict(fragment_mapping))
    if len(mapped) > 1:
        raise AmbiguousHeadingError(slug_heading, mapped)
    return mapped[0]
