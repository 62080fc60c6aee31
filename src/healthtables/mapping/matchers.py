"""Heading matchers: slug fragments and regular expressions."""

import re
import unicodedata
from dataclasses import dataclass
from typing import Any, Iterable, Union

from .models import InvalidMatcherError

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """
    Canonical slug used for loose heading comparison.

    Folds accents to ASCII, lower-cases, collapses every run of
    non-alphanumeric characters to a single ``-`` and trims the ends.

        >>> slugify("  Number of CASES (total)*")
        'number-of-cases-total'
    """
    folded = unicodedata.normalize("NFKD", str(text)).encode("ascii", "ignore").decode("ascii")
    return _NON_ALNUM.sub("-", folded.lower()).strip("-")


@dataclass(frozen=True)
class Fragment:
    """Matches headings whose slug contains the slug of ``text``."""

    text: str

    @property
    def slug(self) -> str:
        return slugify(self.text)

    def matches(self, heading: str) -> bool:
        # Substring collisions ("cases" in "vases") are accepted behaviour.
        return self.slug in slugify(heading)

    def describe(self) -> str:
        return repr(self.text)


@dataclass(frozen=True)
class Pattern:
    """Matches headings where ``regex`` is found in the raw heading text."""

    regex: re.Pattern

    def matches(self, heading: str) -> bool:
        return self.regex.search(heading) is not None

    def describe(self) -> str:
        return f"/{self.regex.pattern}/"


Matcher = Union[Fragment, Pattern]


def to_matcher(value: Any, key: Any = None) -> Matcher:
    """Convert one authored matcher value into a Matcher."""
    if isinstance(value, (Fragment, Pattern)):
        return value
    if isinstance(value, str):
        return Fragment(value)
    if isinstance(value, re.Pattern):
        return Pattern(value)
    raise InvalidMatcherError(key, value)


def to_matchers(value: Any, key: Any = None) -> tuple[Matcher, ...]:
    """Normalize a single matcher or a list of matchers into a tuple."""
    if isinstance(value, (list, tuple)):
        return tuple(to_matcher(v, key) for v in value)
    return (to_matcher(value, key),)


def any_match(matchers: Iterable[Matcher], heading: str) -> bool:
    """True when at least one matcher matches the heading."""
    return any(m.matches(heading) for m in matchers)
