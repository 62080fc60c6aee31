"""Registry of known sources."""

from typing import Iterable, Optional

from . import us_or
from .models import Source, UnknownSourceError

_SOURCES: dict[str, Source] = {s.key: s for s in (us_or.source,)}


def get_sources(keys: Optional[Iterable[str]] = None) -> list[Source]:
    """Return the requested sources, or all of them when ``keys`` is empty."""
    if not keys:
        return list(_SOURCES.values())
    return [get_source(k) for k in keys]


def get_source(key: str) -> Source:
    try:
        return _SOURCES[key]
    except KeyError:
        raise UnknownSourceError(f"Unknown source: {key}") from None
