"""Validation of authored schema mappings."""

from typing import Any, Iterator, Mapping, Optional, Union

from .matchers import Matcher, to_matchers
from .models import (
    DISCARD,
    DISCARD_KEY,
    InvalidMappingKeyError,
    SchemaProperty,
    property_name,
)

_VALID_NAMES = {p.value for p in SchemaProperty}


def is_discard_key(key: Any) -> bool:
    return key is DISCARD or key == DISCARD_KEY


def to_property(key: Any) -> Optional[SchemaProperty]:
    """Convert a mapping key into a SchemaProperty, or DISCARD."""
    if is_discard_key(key):
        return DISCARD
    if isinstance(key, SchemaProperty):
        return key
    return SchemaProperty(key)


def invalid_keys(keys: list[Any]) -> list[Any]:
    """Return the keys that are neither schema properties nor DISCARD."""
    return [
        k
        for k in keys
        if not is_discard_key(k)
        and not isinstance(k, SchemaProperty)
        and not (isinstance(k, str) and k in _VALID_NAMES)
    ]


def validate_mapping_keys(raw: Mapping[Any, Any]) -> None:
    """
    Check every key of an authored mapping.

    All offending keys are reported together in a single
    InvalidMappingKeyError.
    """
    bad = invalid_keys(list(raw.keys()))
    if bad:
        raise InvalidMappingKeyError(bad)


class SchemaMapping:
    """A validated, read-only association of properties to matchers."""

    def __init__(self, entries: dict[Optional[SchemaProperty], tuple[Matcher, ...]]):
        self._entries = dict(entries)

    @classmethod
    def from_dict(cls, raw: Union["SchemaMapping", Mapping[Any, Any]]) -> "SchemaMapping":
        """Validate an authored mapping and normalize its values."""
        if isinstance(raw, SchemaMapping):
            return raw
        validate_mapping_keys(raw)
        entries: dict[Optional[SchemaProperty], tuple[Matcher, ...]] = {}
        for key, value in raw.items():
            prop = to_property(key)
            # "null" and None are the same key; keep both sets of matchers.
            entries[prop] = entries.get(prop, ()) + to_matchers(value, key)
        return cls(entries)

    def items(self) -> Iterator[tuple[Optional[SchemaProperty], tuple[Matcher, ...]]]:
        return iter(self._entries.items())

    def properties(self) -> list[Optional[SchemaProperty]]:
        return list(self._entries)

    def matchers_for(self, prop: Optional[SchemaProperty]) -> tuple[Matcher, ...]:
        return self._entries.get(prop, ())

    def describe(self) -> str:
        parts = []
        for prop, matchers in self._entries.items():
            rendered = ", ".join(m.describe() for m in matchers)
            parts.append(f"{property_name(prop)}: [{rendered}]")
        return "{" + "; ".join(parts) + "}"

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SchemaMapping):
            return NotImplemented
        return self._entries == other._entries

    def __str__(self) -> str:
        return self.describe()

    def __repr__(self) -> str:
        return f"SchemaMapping({self.describe()})"


def ensure_mapping(raw: Union[SchemaMapping, Mapping[Any, Any]]) -> SchemaMapping:
    """Validation gate for every public entry point accepting a mapping."""
    return SchemaMapping.from_dict(raw)
