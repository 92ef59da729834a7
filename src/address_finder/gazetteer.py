"""Fixed vocabularies used to recognize US street addresses.

The extractor does not parse addresses into fields. It only needs to know
whether a piece of text mentions:
- a street suffix ("Street", "Ave", "Blvd", ...)
- a US state (abbreviation or full name, plus DC)

Both vocabularies are small and static, so we keep them as plain tuples and
compile them into regex alternations once at import time.

Order matters
-------------
The prose patterns use these alternations *without* word boundaries, and the
regex engine tries alternatives left to right. Street suffixes list the full
word before its abbreviation ("Street" before "St"), so a span ends on the
full word when both would match. States list abbreviations first; a trailing
full state name after a matched abbreviation is simply left outside the span.
"""

from __future__ import annotations

import re
from typing import Iterable

US_STATE_ABBREVIATIONS: tuple[str, ...] = (
    "AL", "AK", "AZ", "AR", "CA", "CO", "CT", "DE", "FL", "GA",
    "HI", "ID", "IL", "IN", "IA", "KS", "KY", "LA", "ME", "MD",
    "MA", "MI", "MN", "MS", "MO", "MT", "NE", "NV", "NH", "NJ",
    "NM", "NY", "NC", "ND", "OH", "OK", "OR", "PA", "RI", "SC",
    "SD", "TN", "TX", "UT", "VT", "VA", "WA", "WV", "WI", "WY",
    "DC",
)  # fmt: skip

US_STATE_NAMES: tuple[str, ...] = (
    "Alabama", "Alaska", "Arizona", "Arkansas", "California", "Colorado",
    "Connecticut", "Delaware", "Florida", "Georgia", "Hawaii", "Idaho",
    "Illinois", "Indiana", "Iowa", "Kansas", "Kentucky", "Louisiana",
    "Maine", "Maryland", "Massachusetts", "Michigan", "Minnesota",
    "Mississippi", "Missouri", "Montana", "Nebraska", "Nevada",
    "New Hampshire", "New Jersey", "New Mexico", "New York",
    "North Carolina", "North Dakota", "Ohio", "Oklahoma", "Oregon",
    "Pennsylvania", "Rhode Island", "South Carolina", "South Dakota",
    "Tennessee", "Texas", "Utah", "Vermont", "Virginia", "Washington",
    "West Virginia", "Wisconsin", "Wyoming",
)  # fmt: skip

# Abbreviations first, then full names.
US_STATES: tuple[str, ...] = US_STATE_ABBREVIATIONS + US_STATE_NAMES

STREET_SUFFIXES: tuple[str, ...] = (
    "Street", "St", "Avenue", "Ave", "Road", "Rd", "Boulevard", "Blvd",
    "Drive", "Dr", "Lane", "Ln", "Court", "Ct", "Circle", "Cir",
    "Place", "Pl", "Square", "Sq", "Trail", "Trl", "Parkway", "Pkwy",
    "Commons", "Highway", "Hwy", "Way", "Plaza", "Terrace", "Ter",
    "Loop", "Path", "Pike", "Run", "Point", "Pt", "Crossing", "Xing",
)  # fmt: skip

# The loose prose pattern only trusts the most common suffixes.
# Short words like "Run", "Path" or "Point" show up in ordinary prose too often.
SIMPLE_PATTERN_SUFFIXES: tuple[str, ...] = (
    "Street", "St", "Avenue", "Ave", "Road", "Rd", "Boulevard", "Blvd",
    "Drive", "Dr", "Lane", "Ln", "Court", "Ct", "Circle", "Highway",
    "Hwy", "Way", "Parkway", "Pkwy", "Plaza",
)  # fmt: skip


def alternation(words: Iterable[str]) -> str:
    """Build a regex alternation body (no surrounding group) from literal words."""
    return "|".join(re.escape(w) for w in words)


def _whole_word_re(words: Iterable[str]) -> re.Pattern[str]:
    return re.compile(
        r"\b(?:" + alternation(words) + r")\b", re.IGNORECASE | re.ASCII
    )


# Whole-word, case-insensitive matchers used by the line classifier.
STREET_SUFFIX_RE = _whole_word_re(STREET_SUFFIXES)
US_STATE_RE = _whole_word_re(US_STATES)


def has_street_suffix(text: str) -> bool:
    """Return True if `text` contains a street suffix as a whole word."""
    return STREET_SUFFIX_RE.search(text) is not None


def has_us_state(text: str) -> bool:
    """Return True if `text` mentions a US state (or DC) as a whole word."""
    return US_STATE_RE.search(text) is not None
