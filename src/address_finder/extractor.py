"""Core extraction logic (line classifier + prose patterns).

The extractor turns whatever the user pasted into a list of candidate address
strings for a distance lookup. It is designed to be:
- Pure: no I/O, no shared mutable state, safe to call from many threads
- Deterministic: same input yields same output
- Forgiving: it never raises for string input, the worst case is an empty list

High-level idea:
1) Split the text into trimmed, non-empty lines
2) Classify each line with a cheap heuristic (`looks_like_address`)
3) If most lines (>= 70% by default) look like addresses, the input is a
   simple list: return those lines as-is
4) Otherwise treat the input as prose and scan the raw text with two regex
   passes (a strict "street, city, state [zip]" pattern and a looser
   "number ... suffix ..." pattern), deduplicating exact strings
5) If both passes find nothing, fall back to the address-like lines

Backtracking
------------
Both prose patterns chain character-class runs that overlap (digits and
whitespace appear in several of them). Unbounded, a long run of "1 1 1 ..."
makes every start position scan to the end of the text, which is quadratic.
The street/city runs are capped at `MAX_WORDS_SPAN` characters and the
separator runs at `MAX_SEPARATOR_SPAN`, so each start position does bounded
work. Callers still cap the total text size (see `config.Settings`).

Patterns are compiled with `re.ASCII`: `\d` is 0-9 only and `\b` uses ASCII
word characters. Whitespace is matched with an explicit class (`_WS`) that
also covers NBSP and the Unicode space separators found in pasted web text.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from .gazetteer import (
    SIMPLE_PATTERN_SUFFIXES,
    STREET_SUFFIXES,
    US_STATES,
    alternation,
    has_street_suffix,
    has_us_state,
)
from .normalization import split_lines

log = logging.getLogger(__name__)

# Share of address-like lines needed to treat the input as a plain list.
LIST_THRESHOLD = 0.7

# Loose prose matches must be longer than this (after trimming).
# Filters fragments like "5 Main St"; the value itself is empirical.
MIN_SIMPLE_MATCH_LENGTH = 10

# Minimum line length for the line classifier.
MIN_LINE_LENGTH = 5

# Upper bounds for the variable-length runs in the prose patterns.
# A real street name or city fits well within these, and they keep the work
# per start position constant, so total matching cost grows linearly with
# the input instead of quadratically.
MAX_WORDS_SPAN = 60
MAX_SEPARATOR_SPAN = 10

# Whitespace as it appears in pasted web text: ASCII whitespace, NBSP, BOM and
# the Unicode space/line separators. The patterns use re.ASCII, so `\s` alone
# would miss NBSP.
_WS = "\t\n\v\f\r \u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"

_FLAGS = re.IGNORECASE | re.ASCII

_LEADING_NUMBER_RE = re.compile(r"^\d+", re.ASCII)

# <number> <street words> <suffix> <sep> <city> <sep> <state> [zip[-plus4]]
# The street-words class already covers whitespace, so one whitespace char
# after the number is enough and no extra whitespace run precedes the suffix.
_COMPREHENSIVE_RE = re.compile(
    rf"\d+[{_WS}][A-Za-z0-9{_WS}]{{1,{MAX_WORDS_SPAN}}}"
    r"(?:" + alternation(STREET_SUFFIXES) + r")"
    rf"[,{_WS}]{{1,{MAX_SEPARATOR_SPAN}}}"
    rf"[A-Za-z{_WS}]{{1,{MAX_WORDS_SPAN}}}"
    rf"[,{_WS}]{{1,{MAX_SEPARATOR_SPAN}}}"
    r"(?:" + alternation(US_STATES) + r")"
    rf"(?:[{_WS}]+\d{{5}}(?:-\d{{4}})?)?",
    _FLAGS,
)

# <number> <anything address-ish> <suffix> <anything address-ish>
_SIMPLE_RE = re.compile(
    rf"\d+[{_WS}][A-Za-z0-9{_WS},.'#-]{{1,{MAX_WORDS_SPAN}}}"
    r"(?:" + alternation(SIMPLE_PATTERN_SUFFIXES) + r")"
    rf"[A-Za-z0-9{_WS},.'#-]*",
    _FLAGS,
)

MODE_EMPTY = "empty"
MODE_LIST = "list"
MODE_PROSE = "prose"
MODE_FALLBACK = "fallback"


@dataclass(frozen=True)
class ExtractionResult:
    """Candidate addresses plus the strategy that produced them."""

    addresses: list[str]

    # empty|list|prose|fallback
    mode: str

    # Debugging counters: how many trimmed lines, and how many looked like addresses.
    line_count: int = 0
    address_like_count: int = 0


def looks_like_address(line: str) -> bool:
    """Heuristic: does a single line look like a standalone street address?

    A line qualifies when it is at least 5 characters long and either
    - starts with a number and contains a street suffix, or
    - contains a street suffix and a US state.

    Suffix and state checks are whole-word and case-insensitive, so
    "123 Main St" and "Suite 100 Main St, Austin, TX" both qualify, while
    "5 St" does not (too short) and "Stuart" never counts as "St".
    """
    line = line.strip()
    if len(line) < MIN_LINE_LENGTH:
        return False

    starts_with_number = _LEADING_NUMBER_RE.match(line) is not None
    suffix = has_street_suffix(line)
    state = has_us_state(line)

    return (starts_with_number and suffix) or (suffix and state)


def is_simple_list(
    lines: list[str],
    *,
    threshold: float = LIST_THRESHOLD,
) -> bool:
    """Return True if enough lines look like addresses to treat input as a list."""
    if not lines:
        return False
    matched = sum(1 for line in lines if looks_like_address(line))
    return matched / len(lines) >= threshold


class AddressExtractor:
    """Extracts candidate street addresses from pasted text."""

    def __init__(
        self,
        *,
        list_threshold: float = LIST_THRESHOLD,
        min_simple_match_length: int = MIN_SIMPLE_MATCH_LENGTH,
    ):
        """Create an AddressExtractor.

        Args:
            list_threshold: Share (0..1) of address-like lines at or above which
                the input is returned line by line instead of being scanned as prose.
            min_simple_match_length: Matches of the loose prose pattern are kept
                only if their trimmed length is strictly greater than this.
        """
        if list_threshold < 0 or list_threshold > 1:
            raise ValueError("list_threshold must be in range [0, 1]")
        if min_simple_match_length < 0:
            raise ValueError("min_simple_match_length must be >= 0")

        self.list_threshold = float(list_threshold)
        self.min_simple_match_length = int(min_simple_match_length)

    def extract(self, text: str) -> list[str]:
        """Extract candidate addresses from `text`.

        Args:
            text: Raw pasted text (a list, prose, or a mix). May be empty.

        Returns:
            A list of candidate address strings. List-mode output keeps the
            original line order and any duplicate lines; prose-mode output is
            deduplicated by exact string.
        """
        return self.extract_detailed(text).addresses

    def extract_detailed(self, text: str) -> ExtractionResult:
        """Like `extract`, but also reports which strategy produced the result."""
        if not text or not text.strip():
            return ExtractionResult(addresses=[], mode=MODE_EMPTY)

        lines = split_lines(text)
        address_like = [line for line in lines if looks_like_address(line)]
        ratio = len(address_like) / len(lines) if lines else 0.0

        log.debug(
            "address-like lines: %d/%d (ratio=%.2f, threshold=%.2f)",
            len(address_like),
            len(lines),
            ratio,
            self.list_threshold,
        )

        if ratio >= self.list_threshold:
            return ExtractionResult(
                addresses=address_like,
                mode=MODE_LIST,
                line_count=len(lines),
                address_like_count=len(address_like),
            )

        found = self._extract_from_prose(text)
        if not found and address_like:
            log.debug("no prose matches, falling back to %d lines", len(address_like))
            return ExtractionResult(
                addresses=address_like,
                mode=MODE_FALLBACK,
                line_count=len(lines),
                address_like_count=len(address_like),
            )

        return ExtractionResult(
            addresses=found,
            mode=MODE_PROSE,
            line_count=len(lines),
            address_like_count=len(address_like),
        )

    def _extract_from_prose(self, text: str) -> list[str]:
        """Run both prose patterns over the raw text and deduplicate matches."""
        seen: set[str] = set()
        out: list[str] = []

        # Strict pass first: street + city + state [+ zip].
        for m in _COMPREHENSIVE_RE.finditer(text):
            candidate = m.group(0).strip()
            if candidate not in seen:
                seen.add(candidate)
                out.append(candidate)

        # Loose pass: number + street words + suffix, no city/state required.
        for m in _SIMPLE_RE.finditer(text):
            candidate = m.group(0).strip()
            if len(candidate) <= self.min_simple_match_length:
                continue
            if candidate not in seen:
                seen.add(candidate)
                out.append(candidate)

        return out


_DEFAULT_EXTRACTOR = AddressExtractor()


def extract_addresses(text: str) -> list[str]:
    """Extract candidate addresses using the default extractor settings."""
    return _DEFAULT_EXTRACTOR.extract(text)
